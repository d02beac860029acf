"""CLI, configuration and project-wide smoke tests."""

import ast
import json
from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from profile_engine.app import DEFAULT_CONFIG, ProfileEngineApp
from profile_engine.cli import app

PROJECT_ROOT = Path(__file__).resolve().parent.parent
SETTINGS = PROJECT_ROOT / "config" / "settings.yaml"


def _json_from(output: str) -> dict:
    return json.loads(output[output.index("{"):])


# ===========================================================================
# 1. Settings YAML
# ===========================================================================
class TestSettingsYaml:
    """Configuration file should be loadable."""

    def test_settings_parseable(self):
        with open(SETTINGS, encoding="utf-8") as fh:
            config = yaml.safe_load(fh)
        assert isinstance(config, dict)
        for section in ("app", "fetcher", "output"):
            assert section in config, f"Missing config section: {section}"

    def test_missing_file_uses_defaults(self, tmp_path):
        engine = ProfileEngineApp(
            config_path=str(tmp_path / "absent.yaml"), env_path=str(tmp_path / ".env")
        )
        engine.initialize()
        assert engine.config == DEFAULT_CONFIG

    def test_partial_file_is_merged(self, tmp_path):
        cfg = tmp_path / "settings.yaml"
        cfg.write_text("fetcher:\n  timeout: 7\n", encoding="utf-8")
        engine = ProfileEngineApp(config_path=str(cfg), env_path=str(tmp_path / ".env"))
        engine.initialize()
        assert engine.config["fetcher"]["timeout"] == 7
        assert engine.config["fetcher"]["accept_language"] == "en-US,en;q=0.5"
        assert engine.config["output"]["json_indent"] == 2

    def test_environment_overrides(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PROFILE_ENGINE_TIMEOUT", "5")
        monkeypatch.setenv("PROFILE_ENGINE_USER_AGENT", "TestBot/2.0")
        engine = ProfileEngineApp(config_path=str(SETTINGS), env_path=str(tmp_path / ".env"))
        engine.initialize()
        assert engine._fetcher._timeout.total == 5.0
        assert engine._fetcher._headers["User-Agent"] == "TestBot/2.0"

    def test_analyze_html(self, tmp_path, local_business_url, local_business_html):
        engine = ProfileEngineApp(config_path=str(SETTINGS), env_path=str(tmp_path / ".env"))
        profile = engine.analyze_html(local_business_url, local_business_html)
        assert profile.detected_category.value == "healthcare"


# ===========================================================================
# 2. CLI commands (smoke test via CliRunner)
# ===========================================================================
class TestCLI:

    @pytest.fixture()
    def runner(self):
        return CliRunner()

    @pytest.fixture()
    def page_file(self, tmp_path, local_business_html):
        path = tmp_path / "page.html"
        path.write_text(local_business_html, encoding="utf-8")
        return path

    def test_help(self, runner):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "analyze-file" in result.output

    def test_analyze_file_json(self, runner, page_file, local_business_url):
        result = runner.invoke(app, [
            "analyze-file", str(page_file), "--url", local_business_url,
            "--json", "--config", str(SETTINGS),
        ])
        assert result.exit_code == 0, result.output
        data = _json_from(result.stdout)
        assert data["detectedCategory"] == "healthcare"
        assert data["technicalSeo"]["isHttps"] is True
        assert data["localSeoSignals"]["localSchemaType"] == "Dentist"

    def test_analyze_file_table(self, runner, page_file, local_business_url):
        result = runner.invoke(app, [
            "analyze-file", str(page_file), "--url", local_business_url,
            "--config", str(SETTINGS),
        ])
        assert result.exit_code == 0, result.output
        assert "Page Profile" in result.output

    def test_analyze_file_missing(self, runner, tmp_path):
        result = runner.invoke(app, [
            "analyze-file", str(tmp_path / "nope.html"), "--url", "example.com",
            "--config", str(SETTINGS),
        ])
        assert result.exit_code == 1

    def test_analyze_rejects_bad_scheme(self, runner):
        result = runner.invoke(app, ["analyze", "ftp://example.com", "--config", str(SETTINGS)])
        assert result.exit_code == 1
        assert "Invalid URL" in result.output


# ===========================================================================
# 3. Syntax validation
# ===========================================================================
class TestSyntaxValidation:
    """Every Python file in the project should parse."""

    @pytest.mark.parametrize(
        "path",
        sorted((PROJECT_ROOT / "profile_engine").rglob("*.py")),
        ids=lambda p: str(p.relative_to(PROJECT_ROOT)),
    )
    def test_parses(self, path):
        ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
