"""
Command Line Interface Tests

Test Coverage:
- run: pytest arguments built from the command line options
- validate: local documents checked against the packaged grammars
"""
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from ets_cat30 import __version__
from ets_cat30.cli import CONFORMANCE_DIR, build_pytest_args, cli

from conftest import data_path


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


# ============================================================================
#  run
# ============================================================================

def test_build_pytest_args_minimal():
    args = build_pytest_args("http://localhost:8080/csw")

    assert args == [str(CONFORMANCE_DIR), "-p", "ets_cat30.plugin",
                    "--iut", "http://localhost:8080/csw", "-rs"]


def test_build_pytest_args_all_options():
    args = build_pytest_args("http://localhost:8080/csw", bearer="secret", csw_schema="/tmp/cswAll.xsd",
                             junitxml="report.xml", keyword="bounding_box", markexpr="geo",
                             extra=("-x",))

    assert args[6:] == [
        "--bearer", "secret",
        "--csw-schema", "/tmp/cswAll.xsd",
        "--junitxml=report.xml",
        "-k", "bounding_box",
        "-m", "geo",
        "-x",
    ]


def test_run_invokes_pytest(runner):
    with patch("pytest.main", return_value=1) as mock_main:
        result = runner.invoke(cli, ["run", "--iut", "http://localhost:8080/csw", "-m", "opensearch"])

    assert result.exit_code == 1, "The exit code of the test run is passed through"
    args = mock_main.call_args[0][0]
    assert "--iut" in args and "http://localhost:8080/csw" in args
    assert args[-2:] == ["-m", "opensearch"]


def test_run_requires_iut(runner):
    result = runner.invoke(cli, ["run"], env={"ETS_CAT30_IUT": None})

    assert result.exit_code == 2
    assert "--iut" in result.output


def test_version(runner):
    result = runner.invoke(cli, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


# ============================================================================
#  validate
# ============================================================================

def test_validate_valid_document(runner):
    document = str(data_path("opensearch/OpenSearchDescription-valid.xml"))

    result = runner.invoke(cli, ["validate", "--schema", "osd", document])

    assert result.exit_code == 0, result.output
    assert result.output.strip() == f"{document} is valid"


def test_validate_invalid_document(runner):
    document = str(data_path("rsp/feed-invalid.xml"))

    result = runner.invoke(cli, ["validate", "--schema", "atom", document])

    assert result.exit_code == 1
    assert "schema validation error(s) detected." in result.output
    assert "[line " in result.output


def test_validate_malformed_document(runner, tmp_path):
    document = tmp_path / "broken.xml"
    document.write_text("<feed>", encoding="utf-8")

    result = runner.invoke(cli, ["validate", "--schema", "atom", str(document)])

    assert result.exit_code == 1
    assert result.output.startswith("Error:")


def test_validate_unknown_schema(runner):
    result = runner.invoke(cli, ["validate", "--schema", "wsdl", str(data_path("rsp/feed-2.xml"))])

    assert result.exit_code == 2
