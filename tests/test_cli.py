"""Tests for the Typer CLI, run in dry-run mode or against a fake generator."""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from archcoach import cli
from archcoach.cli import app
from conftest import FakeGenerator

runner = CliRunner()


class UsageReportingGenerator(FakeGenerator):
    """Reports fixed token usage like the real client does."""

    async def generate_text(self, prompt: str, *, on_tokens=None, **kwargs) -> str:
        reply = await super().generate_text(prompt, **kwargs)
        if on_tokens:
            on_tokens(1200, 345)
        return reply


class TestValidate:
    def test_valid_config(self, tmp_config: Path) -> None:
        result = runner.invoke(app, ["validate", "--config", str(tmp_config)])
        assert result.exit_code == 0
        assert "Config is valid" in result.output
        assert "gpt-4o-mini" in result.output
        assert "Zachman" in result.output

    def test_missing_config(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["validate", "--config", str(tmp_path / "nope.yml")])
        assert result.exit_code == 1
        assert "Config validation failed" in result.output

    def test_invalid_config(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yml"
        path.write_text("framework: SAFe\n")
        result = runner.invoke(app, ["validate", "--config", str(path)])
        assert result.exit_code == 1


class TestAnalyze:
    def test_dry_run_writes_reports(self, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = runner.invoke(app, ["analyze", "Scale online ordering", "--dry-run", "-f", "iso42001", "-o", str(out)])

        assert result.exit_code == 0, result.output
        assert "DRY-RUN" in result.output
        markdown = (out / "analysis.md").read_text()
        assert markdown.startswith("# Dry-run Architecture Vision")
        data = json.loads((out / "analysis.json").read_text())
        assert data["framework"] == "ISO42001"
        assert data["source"] == "model"
        assert data["scenario"] == "Scale online ordering"
        assert "businessArchitecture" in data["analysis"]

    def test_unknown_framework(self) -> None:
        result = runner.invoke(app, ["analyze", "x", "--dry-run", "-f", "SAFe"])
        assert result.exit_code == 1
        assert "Unknown framework" in result.output

    def test_blank_scenario(self) -> None:
        result = runner.invoke(app, ["analyze", "   ", "--dry-run"])
        assert result.exit_code == 1


class TestAsk:
    def test_dry_run_answer(self) -> None:
        result = runner.invoke(app, ["ask", "Where do we start?", "--dry-run"])
        assert result.exit_code == 0
        assert "Dry-run answer" in result.output


class TestChat:
    def test_one_question_then_quit(self) -> None:
        result = runner.invoke(app, ["chat", "--dry-run", "-f", "togaf"], input="What first?\n\n")
        assert result.exit_code == 0, result.output
        assert "Strategy Coach" in result.output
        assert "Dry-run answer" in result.output


class TestCompliance:
    def test_prints_score_and_writes_report(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["compliance", "-f", "ISO42001", "-o", str(tmp_path)])
        assert result.exit_code == 0
        assert "63%" in result.output
        assert "AI Risk Assessment" in result.output
        assert (tmp_path / "compliance.md").read_text().startswith("# Compliance Radar: ISO42001")

    def test_default_framework_from_config(self, tmp_config: Path) -> None:
        result = runner.invoke(app, ["compliance", "--config", str(tmp_config)])
        assert result.exit_code == 0
        assert "Zachman" in result.output
        assert "70%" in result.output


class TestModelTextIsLiteral:
    def test_ask_prints_brackets_verbatim(self, monkeypatch) -> None:
        reply = "Route calls via [/api] gateway and [bold]keep[/bold] it simple"
        monkeypatch.setattr(cli, "_client", lambda dry_run: UsageReportingGenerator(reply=reply))

        result = runner.invoke(app, ["ask", "How do we route?"])

        assert result.exit_code == 0, result.output
        assert "[/api]" in result.output
        assert "[bold]keep[/bold]" in result.output
        assert "Tokens: 1,200 in / 345 out" in result.output

    def test_chat_prints_brackets_verbatim(self, monkeypatch) -> None:
        monkeypatch.setattr(cli, "_client", lambda dry_run: UsageReportingGenerator(reply="Use [/api] first"))
        result = runner.invoke(app, ["chat"], input="Where?\n\n")
        assert result.exit_code == 0, result.output
        assert "Use [/api] first" in result.output

    def test_analyze_with_markup_in_names(self, monkeypatch, sample_output: dict, tmp_path: Path) -> None:
        sample_output["visionTitle"] = "Vision [/x]"
        sample_output["visionDescription"] = "Cut over [red]fast[/red]"
        sample_output["applicationArchitecture"]["applications"] = ["Gateway [/api]"]
        monkeypatch.setattr(cli, "_client", lambda dry_run: UsageReportingGenerator(reply=json.dumps(sample_output)))

        result = runner.invoke(app, ["analyze", "Modernize finance", "-o", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert "Vision [/x]" in result.output
        assert "Cut over [red]fast[/red]" in result.output
        assert "Tokens: 1,200 in / 345 out" in result.output


class TestDefaultOutputDirectory:
    def test_analyze_writes_to_configured_directory(self, tmp_config: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["analyze", "Scale online ordering", "--dry-run", "--config", str(tmp_config)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "output" / "analysis.md").exists()
        assert (tmp_path / "output" / "analysis.json").exists()

    def test_compliance_writes_to_configured_directory(self, tmp_config: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["compliance", "--config", str(tmp_config)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "output" / "compliance.md").read_text().startswith("# Compliance Radar: Zachman")
