"""Tests for the kompl command line."""

import json

import pytest
from typer.testing import CliRunner

from kompl.main import cli


@pytest.fixture
def runner():
    return CliRunner()


class TestCompleteCommand:
    """Tests for ``kompl complete``."""

    def test_json_output(self, runner, search_tree):
        """Test machine-readable completions over an explicit search path."""
        args = ["complete", "pk.mo", "--json"]
        for root in search_tree.roots:
            args += ["--path", root]
        result = runner.invoke(cli, args)
        assert result.exit_code == 0, result.output
        assert "pkg.mod" in json.loads(result.output)

    def test_plain_output(self, runner, search_tree):
        """Test one completion per line."""
        result = runner.invoke(cli, ["complete", "isinst", "--path", str(search_tree.root)])
        assert result.exit_code == 0, result.output
        assert "isinstance" in result.output.splitlines()

    def test_scope_and_metadata(self, runner, search_tree, scope_module):
        """Test metadata output for names from an imported scope."""
        result = runner.invoke(
            cli,
            [
                "complete",
                "remove_m",
                "--scope",
                scope_module.__name__,
                "--meta",
                "doc,type",
                "--path",
                str(search_tree.root),
                "--json",
            ],
        )
        assert result.exit_code == 0, result.output
        payload = {item["candidate"]: item for item in json.loads(result.output)}
        assert payload["remove_method"]["doc"] is True
        assert payload["remove_method"]["type"] == "function"

    def test_invalid_policy(self, runner):
        """Test that an unknown policy is rejected."""
        result = runner.invoke(cli, ["complete", "x", "--policy", "z", "--path", "/nonexistent"])
        assert result.exit_code != 0


class TestDocCommand:
    """Tests for ``kompl doc``."""

    def test_builtin(self, runner):
        """Test printing documentation of a builtin."""
        result = runner.invoke(cli, ["doc", "len"])
        assert result.exit_code == 0, result.output
        assert result.output.startswith("len(")

    def test_unresolvable(self, runner):
        """Test that an unknown symbol prints nothing."""
        result = runner.invoke(cli, ["doc", "jus.t g:arbage"])
        assert result.exit_code == 0
        assert result.output == ""


class TestScanCommand:
    """Tests for ``kompl scan``."""

    def test_summary(self, runner, search_tree):
        """Test the index summary table."""
        result = runner.invoke(cli, ["scan", "--path", str(search_tree.root)])
        assert result.exit_code == 0, result.output
        assert "modules" in result.output
        assert "resources" in result.output
