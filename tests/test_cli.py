"""
Tests for the `streamsend` CLI.

Commands run against the process-wide context installed by the
`default_context` fixture, so no real network is involved.
"""

from __future__ import annotations

from typer.testing import CliRunner

from streamsend.adapters.api import ApiContext
from streamsend.cli.main import app

from .conftest import PEOPLE_XML, FakeApi

runner = CliRunner()


class TestCli:
    """Smoke tests for the CLI commands."""

    def test_audiences(self, default_context: ApiContext) -> None:
        """Test that audiences are listed."""
        result = runner.invoke(app, ["audiences"])
        assert result.exit_code == 0
        assert "Audiences" in result.output

    def test_subscribers(self, api: FakeApi, default_context: ApiContext) -> None:
        """Test that subscribers of the current audience are listed."""
        api.add("GET", "/audiences/2/people.xml", body=PEOPLE_XML)
        result = runner.invoke(app, ["subscribers"])
        assert result.exit_code == 0
        assert "scott@gmail.com" in result.output

    def test_create_validation_errors(self, api: FakeApi, default_context: ApiContext) -> None:
        """Test that every validation message is printed."""
        body = "<errors><error>Email is invalid</error><error>Name is blank</error></errors>"
        api.add("POST", "/audiences/2/people.xml", status=422, body=body)
        result = runner.invoke(app, ["create", "nope"])
        assert result.exit_code == 1
        assert "Email is invalid" in result.output
        assert "Name is blank" in result.output

    def test_destroy(self, api: FakeApi, default_context: ApiContext) -> None:
        """Test that destroy reports success."""
        api.add("DELETE", "/audiences/1/people/2.xml")
        result = runner.invoke(app, ["destroy", "2", "--audience-id", "1"])
        assert result.exit_code == 0
        assert "Destroy OK" in result.output

    def test_show_not_found(self, default_context: ApiContext) -> None:
        """Test that a 404 exits with code 1."""
        result = runner.invoke(app, ["show", "99", "--audience-id", "1"])
        assert result.exit_code == 1
        assert "not_found" in result.output
