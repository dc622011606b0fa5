"""Typer CLI — ``archcoach analyze``, ``ask``, ``chat``, ``compliance`` and ``validate``."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.markup import escape
from rich.prompt import Prompt

from archcoach.config import load_config
from archcoach.schemas.architecture import COMPONENT_TYPES, Framework
from archcoach.schemas.config import CoachConfig
from archcoach.shared.progress import (
    AgentProgress,
    capabilities_table,
    components_table,
    console,
    print_phase,
)

# Load .env file from project root (if it exists)
load_dotenv()

app = typer.Typer(
    name="archcoach",
    help="Architecture Coach — framework-aware enterprise architecture analysis.",
    no_args_is_help=True,
)


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every HTTP request at INFO — noisy and unhelpful for users
    logging.getLogger("httpx").setLevel(logging.WARNING)


def _load(config: Path | None) -> CoachConfig:
    try:
        return load_config(config)
    except Exception as exc:
        console.print(f"[red]Config validation failed:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)


def _framework(value: str | None, cfg: CoachConfig) -> Framework:
    if value is None:
        return cfg.framework
    try:
        return Framework.parse(value)
    except ValueError as exc:
        console.print(f"[red]Error:[/] {escape(str(exc))}")
        raise typer.Exit(code=1)


def _client(dry_run: bool):
    if dry_run:
        from archcoach.shared.llm_client import DryRunClient
        return DryRunClient()
    from archcoach.shared.llm_client import LLMClient
    return LLMClient()


@app.command()
def validate(
    config: Path = typer.Option(..., "--config", "-c", help="Path to archcoach.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Validate a configuration file."""
    _setup_logging(verbose)
    cfg = _load(config)

    console.print("[green]Config is valid![/]\n")
    console.print(f"  Model:            {cfg.model}")
    console.print(f"  Framework:        {cfg.framework.value}")
    console.print(f"  Analysis tokens:  {cfg.analysis_max_tokens}")
    console.print(f"  Question tokens:  {cfg.question_max_tokens}")
    console.print(f"  Output dir:       {cfg.output_directory}")


@app.command()
def analyze(
    scenario: str = typer.Argument(..., help="Business scenario to analyze."),
    framework: str = typer.Option(None, "--framework", "-f", help="TOGAF, Zachman, ISO42001 or Custom."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to archcoach.yml"),
    output: Path = typer.Option(
        None, "--output", "-o", help="Directory for analysis.md and analysis.json (default: output_directory from config).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned model output (no API calls)."),
) -> None:
    """Analyze a scenario and print the resulting architecture vision."""
    _setup_logging(verbose)
    cfg = _load(config)
    fw = _framework(framework, cfg)

    if not scenario.strip():
        console.print("[red]Error:[/] scenario must not be empty.")
        raise typer.Exit(code=1)
    if dry_run:
        console.print("[yellow]DRY-RUN mode — no API calls will be made.[/]\n")

    asyncio.run(_run_analysis(scenario, fw, cfg, dry_run=dry_run, output=output))


async def _run_analysis(
    scenario: str,
    framework: Framework,
    cfg: CoachConfig,
    *,
    dry_run: bool = False,
    output: Path | None = None,
) -> None:
    from archcoach.agents.scenario_analyzer.agent import ScenarioAnalyzerAgent
    from archcoach.output.markdown import render_markdown_report
    from archcoach.store import ArchitectureStore

    store = ArchitectureStore()
    agent = ScenarioAnalyzerAgent(_client(dry_run), cfg)

    token = store.begin_request()
    with AgentProgress(agent.name) as progress:
        analysis = await agent.analyze(scenario, framework, on_tokens=progress.record_tokens)
    store.add_scenario(analysis, request_token=token)

    vision = store.current_vision
    print_phase(vision.title)
    if analysis.source == "fallback":
        console.print("[yellow]Model output unavailable — showing fallback analysis.[/]\n")
    console.print(escape(vision.description) + "\n")
    for layer in COMPONENT_TYPES:
        layer_components = store.get_components_by_type(layer)
        if layer_components:
            console.print(components_table(f"{layer.title()} layer", layer_components))
    if store.capabilities:
        console.print(capabilities_table(store.capabilities))

    if progress.summary():
        console.print(f"[dim]{progress.summary()}[/]")

    out_dir = output if output is not None else Path(cfg.output_directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "analysis.md").write_text(render_markdown_report(analysis))
    (out_dir / "analysis.json").write_text(analysis.model_dump_json(indent=2, by_alias=True))
    console.print(f"\n[green]Report written to:[/] {out_dir}")


@app.command()
def ask(
    question: str = typer.Argument(..., help="Question for the strategy coach."),
    framework: str = typer.Option(None, "--framework", "-f", help="TOGAF, Zachman, ISO42001 or Custom."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to archcoach.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use a canned answer (no API calls)."),
) -> None:
    """Ask the strategy coach a single question."""
    _setup_logging(verbose)
    cfg = _load(config)
    fw = _framework(framework, cfg)

    from archcoach.agents.strategy_coach.agent import StrategyCoachAgent

    agent = StrategyCoachAgent(_client(dry_run), cfg)

    async def _ask() -> tuple[str, str]:
        with AgentProgress(agent.name) as progress:
            answer = await agent.answer_question(question, fw, on_tokens=progress.record_tokens)
        return answer, progress.summary()

    answer, usage = asyncio.run(_ask())
    console.print(escape(answer))
    if usage:
        console.print(f"[dim]{usage}[/]")


@app.command()
def chat(
    framework: str = typer.Option(None, "--framework", "-f", help="TOGAF, Zachman, ISO42001 or Custom."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to archcoach.yml"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Use canned answers (no API calls)."),
) -> None:
    """Interactive strategy coach session. Enter an empty line to quit."""
    _setup_logging(verbose)
    cfg = _load(config)
    fw = _framework(framework, cfg)

    from archcoach.agents.strategy_coach.agent import ChatSession, StrategyCoachAgent
    from archcoach.agents.strategy_coach.prompts import SUGGESTED_QUESTIONS

    session = ChatSession(StrategyCoachAgent(_client(dry_run), cfg), fw)
    console.print(f"[magenta]Coach:[/] {escape(session.messages[0].content)}\n")
    console.print("[dim]Suggested questions:[/]")
    for q in SUGGESTED_QUESTIONS:
        console.print(f"  [dim]- {q}[/]")

    async def _loop() -> None:
        loop = asyncio.get_running_loop()
        while True:
            try:
                # Prompt in an executor so the event loop is not blocked on stdin
                question = await loop.run_in_executor(
                    None, lambda: Prompt.ask("\n[blue]You[/]", default="", show_default=False)
                )
            except EOFError:
                return
            if not question.strip():
                return
            with AgentProgress(session.agent.name) as progress:
                reply = await session.ask(question, on_tokens=progress.record_tokens)
            console.print(f"[magenta]Coach[/] [dim]({reply.confidence}% confidence)[/]: {escape(reply.content)}")

    asyncio.run(_loop())


@app.command()
def compliance(
    framework: str = typer.Option(None, "--framework", "-f", help="TOGAF, Zachman, ISO42001 or Custom."),
    config: Path = typer.Option(None, "--config", "-c", help="Path to archcoach.yml"),
    output: Path = typer.Option(
        None, "--output", "-o", help="Directory for compliance.md (default: output_directory from config).",
    ),
) -> None:
    """Show the (mocked) compliance checklist for a framework."""
    from archcoach.analysis.compliance import checks_for, overall_score, score_band
    from archcoach.output.markdown import render_compliance_report

    cfg = _load(config)
    fw = _framework(framework, cfg)
    checks = checks_for(fw)
    score = overall_score(checks)

    print_phase(f"Compliance Radar — {fw.value}")
    style = {"good": "green", "fair": "yellow", "poor": "red"}[score_band(score)]
    console.print(f"Overall score: [{style}]{score}%[/]\n")
    for check in checks:
        console.print(f"  \\[{check.status}] {check.category}: {check.requirement} — {check.score}%")
        if check.recommendation:
            console.print(f"      [dim]{check.recommendation}[/]")

    out_dir = output if output is not None else Path(cfg.output_directory)
    out_dir.mkdir(parents=True, exist_ok=True)
    (out_dir / "compliance.md").write_text(render_compliance_report(fw, checks))
    console.print(f"\n[green]Checklist written to:[/] {out_dir}")


if __name__ == "__main__":
    app()
