"""
CLI Tests

Tests for the CLI commands including:
- Main CLI group
- Inspect command (JSON and text output, filters, error reporting)
"""

import json

import pytest
from click.testing import CliRunner

from dslschema.cli.main import cli, load_target
from dslschema.types.errors import ConfigurationError, ErrorCode


@pytest.fixture
def runner():
    """Create a CLI test runner."""
    return CliRunner()


MODEL_TARGETS = ["dsl_model:Container", "dsl_model:Item", "dsl_model:Settings", "dsl_model:Box"]


class TestCLIGroup:
    """Tests for main CLI group."""

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Declarative DSL schema extraction" in result.output

    def test_cli_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "dslschema v0.1.0" in result.output

    def test_cli_no_command(self, runner):
        result = runner.invoke(cli)
        assert result.exit_code == 0
        assert "Usage:" in result.output


class TestInspectCommand:
    """Tests for inspect command."""

    def test_json_output(self, runner):
        result = runner.invoke(
            cli, ["inspect", *MODEL_TARGETS, "--function", "dsl_model:make_item"]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert set(data["types"]) == {
            "dsl_model.Container",
            "dsl_model.Item",
            "dsl_model.Settings",
            "dsl_model.Box",
        }
        names = [f["name"] for f in data["types"]["dsl_model.Container"]["member_functions"]]
        assert "item" in names
        assert "untagged" not in names
        assert data["top_level_functions"][0]["name"] == "make_item"

    def test_all_public(self, runner):
        result = runner.invoke(cli, ["inspect", *MODEL_TARGETS, "--all-public"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        names = [f["name"] for f in data["types"]["dsl_model.Container"]["member_functions"]]
        assert "untagged" in names
        assert "debug_dump" not in names

    def test_text_output(self, runner):
        result = runner.invoke(cli, ["inspect", *MODEL_TARGETS, "--format", "text"])
        assert result.exit_code == 0, result.output
        assert "dsl_model.Container:" in result.stdout
        assert "  constructor dsl_model.Item(name: str, count: int = ...)" in result.stdout

    def test_scope_error_reported(self, runner):
        # Item is referenced by Container but not part of the schema.
        result = runner.invoke(cli, ["inspect", "dsl_model:Container", "dsl_model:Settings"])
        assert result.exit_code == 1
        assert "Code: 1001" in result.output

    def test_invalid_target(self, runner):
        result = runner.invoke(cli, ["inspect", "dsl_model.Container"])
        assert result.exit_code == 1
        assert "Code: 4002" in result.output

    def test_target_must_be_a_class(self, runner):
        result = runner.invoke(cli, ["inspect", "dsl_model:make_item"])
        assert result.exit_code == 1
        assert "is not a class" in result.output

    def test_requires_target(self, runner):
        result = runner.invoke(cli, ["inspect"])
        assert result.exit_code != 0


class TestLoadTarget:
    def test_loads_nested_attribute(self):
        assert load_target("dslschema.types.errors:ErrorCode.INVALID_TAG") is ErrorCode.INVALID_TAG

    def test_missing_module(self):
        with pytest.raises(ConfigurationError) as exc_info:
            load_target("no_such_module_here:Thing")
        assert isinstance(exc_info.value.original_error, ImportError)

    def test_missing_attribute(self):
        with pytest.raises(ConfigurationError):
            load_target("dsl_model:Nothing")
