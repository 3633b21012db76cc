"""Conformance tests run against the implementation under test."""
