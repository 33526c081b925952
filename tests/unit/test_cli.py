"""Unit tests for the click CLI."""

import json

import pytest
from click.testing import CliRunner

from token_bridge import __version__
from token_bridge.cli import cli


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner."""
    return CliRunner()


def invoke(runner: CliRunner, *args, **kwargs):
    """Invoke the CLI quietly so stdout holds only command output."""
    return runner.invoke(cli, ["--quiet", *map(str, args)], obj={}, **kwargs)


class TestGlobalOptions:
    """Tests for options on the command group."""

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_quiet_and_verbose_conflict(self, runner, tokens_file):
        result = runner.invoke(cli, ["--quiet", "--verbose", "validate", str(tokens_file)], obj={})
        assert result.exit_code == 1
        assert "mutually exclusive" in result.output

    def test_invalid_config_file(self, runner, tmp_path, tokens_file):
        config = tmp_path / "bridge.json"
        config.write_text('{"contrast_level": "B"}')
        result = runner.invoke(cli, ["--config", str(config), "validate", str(tokens_file)], obj={})
        assert result.exit_code == 1
        assert "Invalid configuration" in result.output

    def test_config_file_sets_defaults(self, runner, tmp_path, tokens_file):
        config = tmp_path / "bridge.json"
        config.write_text('{"contrast_level": "AAA"}')
        result = runner.invoke(
            cli, ["--quiet", "--config", str(config), "contrast", str(tokens_file)], obj={}
        )
        assert result.exit_code == 0
        assert "WCAG AAA: 0/1 pairs passing" in result.output

    def test_log_file(self, runner, tmp_path, css_file):
        """--log-file captures debug output even when the console is quiet."""
        log_file = tmp_path / "logs" / "bridge.log"
        result = runner.invoke(
            cli, ["--quiet", "--log-file", str(log_file), "extract", str(css_file)], obj={}
        )
        assert result.exit_code == 0
        assert "Extracted" in log_file.read_text()


class TestExtract:
    """Tests for the extract command."""

    def test_detects_tailwind(self, runner, tailwind_config_file):
        result = invoke(runner, "extract", tailwind_config_file)
        assert result.exit_code == 0
        tokens = json.loads(result.output)
        assert tokens["colors"]["primary"]["value"] == "#3B82F6"
        assert tokens["spacing"]["72"] == 288

    def test_detects_css(self, runner, css_file):
        result = invoke(runner, "extract", css_file)
        assert result.exit_code == 0
        assert json.loads(result.output)["radii"] == {"lg": 12}

    def test_explicit_format(self, runner, dtcg_file):
        result = invoke(runner, "extract", dtcg_file, "--format", "dtcg")
        assert result.exit_code == 0
        assert json.loads(result.output)["colors"]["accent"]["value"] == "#FF5500"

    def test_output_file(self, runner, css_file, tmp_path):
        out = tmp_path / "out" / "tokens.json"
        result = invoke(runner, "extract", css_file, "-o", out)
        assert result.exit_code == 0
        assert json.loads(out.read_text())["colors"]["primary"]["value"] == "#3B82F6"

    def test_undetectable_format(self, runner, tmp_path):
        source = tmp_path / "notes.txt"
        source.write_text("hello")
        result = invoke(runner, "extract", source)
        assert result.exit_code == 1
        assert "pass --format" in result.output

    def test_extraction_error(self, runner, tmp_path):
        source = tmp_path / "empty.css"
        source.write_text("body { margin: 0; }")
        result = invoke(runner, "extract", source)
        assert result.exit_code == 1
        assert "No CSS custom properties found" in result.output
        assert "format: css" in result.output


class TestGenerate:
    """Tests for the generate command."""

    def test_material3(self, runner, tokens_file):
        result = invoke(runner, "generate", "material3", tokens_file)
        assert result.exit_code == 0
        assert "val LightColorScheme = lightColorScheme(" in result.output

    def test_swiftui_liquid_glass(self, runner, tokens_file):
        result = invoke(runner, "generate", "swiftui", tokens_file, "--liquid-glass")
        assert result.exit_code == 0
        assert "struct GlassCard" in result.output

    def test_tailwind_cjs(self, runner, tokens_file):
        result = invoke(runner, "generate", "tailwind", tokens_file, "--format", "cjs")
        assert result.exit_code == 0
        assert "module.exports = {" in result.output

    def test_css_dark(self, runner, tokens_file, tmp_path):
        dark = tmp_path / "dark.json"
        dark.write_text(json.dumps({"colors": {"surface": {"value": "#1C1B1F"}}}))
        result = invoke(runner, "generate", "css", tokens_file, "--dark", dark)
        assert result.exit_code == 0
        assert "@media (prefers-color-scheme: dark)" in result.output

    def test_invalid_tokens_exit_2(self, runner, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"colors": {"primary": {"value": "red"}}}))
        result = invoke(runner, "generate", "material3", bad)
        assert result.exit_code == 2
        assert "Invalid tokens: 1 schema violation(s)" in result.output
        assert "colors.primary.value" in result.output

    def test_invalid_dark_tokens(self, runner, tokens_file, tmp_path):
        dark = tmp_path / "dark.json"
        dark.write_text("{}")
        result = invoke(runner, "generate", "css", tokens_file, "--dark", dark)
        assert result.exit_code == 2
        assert "Invalid dark tokens" in result.output

    def test_unknown_target(self, runner, tokens_file):
        result = invoke(runner, "generate", "flutter", tokens_file)
        assert result.exit_code == 2


class TestContrast:
    """Tests for the contrast command."""

    def test_summary(self, runner, tokens_file):
        result = invoke(runner, "contrast", tokens_file)
        assert result.exit_code == 0
        assert "WCAG AA: 1/1 pairs passing" in result.output
        assert "✅ on-primary on primary" in result.output

    def test_fail_on_error(self, runner, tokens_file):
        result = invoke(runner, "contrast", tokens_file, "--level", "AAA", "--fail-on-error")
        assert result.exit_code == 1
        assert "❌ on-primary on primary" in result.output

    def test_json_report(self, runner, tokens_file):
        result = invoke(runner, "contrast", tokens_file, "--json")
        assert result.exit_code == 0
        assert json.loads(result.output)["level"] == "AA"


class TestValidateAndTools:
    """Tests for the validate, tools and serve commands."""

    def test_valid(self, runner, tokens_file):
        result = invoke(runner, "validate", tokens_file)
        assert result.exit_code == 0
        assert "✅ Valid: 19 tokens" in result.output
        assert "spacing: 5" in result.output

    def test_valid_json_is_sanitized(self, runner, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text(json.dumps({"colors": {"brand": {"value": "#abc"}}}))
        result = invoke(runner, "validate", path, "--json")
        assert result.exit_code == 0
        assert json.loads(result.output) == {"colors": {"brand": {"value": "#AABBCC"}}}

    def test_invalid(self, runner, tmp_path):
        path = tmp_path / "tokens.json"
        path.write_text("{}")
        result = invoke(runner, "validate", path)
        assert result.exit_code == 2
        assert "(root): Token object must contain at least one token category" in result.output

    def test_tools(self, runner):
        result = invoke(runner, "tools")
        assert result.exit_code == 0
        assert len(json.loads(result.output)) == 9

    def test_serve(self, runner):
        lines = "\n".join(
            [
                json.dumps({"jsonrpc": "2.0", "id": 1, "method": "ping"}),
                json.dumps({"jsonrpc": "2.0", "id": 2, "method": "tools/list"}),
            ]
        )
        result = invoke(runner, "serve", input=lines + "\n")
        assert result.exit_code == 0
        responses = [json.loads(line) for line in result.output.splitlines()]
        assert responses[0] == {"jsonrpc": "2.0", "id": 1, "result": {}}
        assert len(responses[1]["result"]["tools"]) == 9
