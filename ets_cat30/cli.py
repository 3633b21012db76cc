"""Command line interface"""

import sys
from pathlib import Path

import click
import pytest
from lxml import etree

from ets_cat30 import __version__
from ets_cat30.errors import ETSError
from ets_cat30.validation import CSW_SCHEMA_URL, load_schema, validate

CONFORMANCE_DIR = Path(__file__).resolve().parent / "conformance"


def build_pytest_args(iut, bearer=None, csw_schema=None, junitxml=None,
                      keyword=None, markexpr=None, extra=()):
    """Translate run options into a pytest argument list."""
    args = [str(CONFORMANCE_DIR), "-p", "ets_cat30.plugin", "--iut", iut, "-rs"]
    if bearer:
        args += ["--bearer", bearer]
    if csw_schema:
        args += ["--csw-schema", csw_schema]
    if junitxml:
        args += [f"--junitxml={junitxml}"]
    if keyword:
        args += ["-k", keyword]
    if markexpr:
        args += ["-m", markexpr]
    args += list(extra)
    return args


@click.group()
@click.version_option(version=__version__)
def cli():
    pass


@cli.command(context_settings={"ignore_unknown_options": True})
@click.option("--iut", required=True, envvar="ETS_CAT30_IUT",
              help="Capabilities URL or service endpoint of the implementation under test")
@click.option("--bearer", envvar="ETS_CAT30_BEARER", help="Bearer token")
@click.option("--csw-schema", help="Location of cswAll.xsd (URL or local path)")
@click.option("--junitxml", type=click.Path(dir_okay=False), help="Write a JUnit XML report")
@click.option("-k", "keyword", help="Only run tests matching the keyword expression")
@click.option("-m", "markexpr", help="Only run tests matching the mark expression")
@click.argument("pytest_args", nargs=-1, type=click.UNPROCESSED)
def run(iut, bearer, csw_schema, junitxml, keyword, markexpr, pytest_args):
    """Run the conformance tests against an implementation under test"""
    args = build_pytest_args(iut, bearer, csw_schema, junitxml, keyword, markexpr, pytest_args)
    sys.exit(int(pytest.main(args)))


@cli.command(name="validate")
@click.option("--schema", "kind", type=click.Choice(["atom", "osd", "csw"]), required=True,
              help="Schema to validate against")
@click.option("--csw-schema", default=CSW_SCHEMA_URL, show_default=True,
              help="Location of cswAll.xsd (URL or local path)")
@click.argument("document", type=click.Path(exists=True, dir_okay=False))
def validate_document(kind, csw_schema, document):
    """Validate a local XML document"""
    try:
        schema = load_schema(kind, csw_schema)
        doc = etree.parse(document, etree.XMLParser(resolve_entities=False, no_network=True))
    except (ETSError, etree.XMLSyntaxError) as err:
        raise click.ClickException(str(err))
    handler = validate(schema, doc)
    if handler.errors_detected():
        click.echo(f"{handler.error_count} schema validation error(s) detected.")
        click.echo(str(handler))
        sys.exit(1)
    click.echo(f"{document} is valid")