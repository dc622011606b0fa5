"""Rich console output and the in-progress indicator shown while the model works."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from archcoach.schemas.architecture import ArchitectureComponent, BusinessCapability

console = Console()


class AgentProgress:
    """Spinner marking one agent call as in progress.

    Used as a context manager around an awaited model call; there is no
    cancellation, the spinner simply stops when the block exits.
    """

    def __init__(self, agent_name: str) -> None:
        self._agent_name = agent_name
        self._progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self._task_id: int | None = None
        self.input_tokens = 0
        self.output_tokens = 0

    def __enter__(self) -> "AgentProgress":
        self._progress.__enter__()
        self._task_id = self._progress.add_task(f"[cyan]{self._agent_name}[/] — thinking…", total=None)
        return self

    def __exit__(self, *args: object) -> None:
        self._progress.__exit__(*args)

    def update(self, status: str) -> None:
        if self._task_id is not None:
            self._progress.update(self._task_id, description=f"[cyan]{self._agent_name}[/] — {status}")

    def record_tokens(self, input_tokens: int, output_tokens: int) -> None:
        """Token usage callback for ``generate_text``; accumulates and shows the totals."""
        self.input_tokens += input_tokens
        self.output_tokens += output_tokens
        self.update(f"{self.input_tokens} in / {self.output_tokens} out tokens")

    def summary(self) -> str:
        """One-line token usage, or ``""`` when no usage was reported."""
        if not (self.input_tokens or self.output_tokens):
            return ""
        return f"Tokens: {self.input_tokens:,} in / {self.output_tokens:,} out"


def print_phase(label: str) -> None:
    """Print a section header; ``label`` is shown literally."""
    console.print(Panel(f"[bold]{escape(label)}[/bold]", style="blue"))


def _score_style(score: int) -> str:
    if score >= 80:
        return "green"
    if score >= 60:
        return "yellow"
    return "red"


def components_table(title: str, components: Sequence[ArchitectureComponent]) -> Table:
    """Table of components with colour-coded maturity."""
    table = Table(title=title, show_lines=False)
    table.add_column("ID", style="dim")
    table.add_column("Name")
    table.add_column("Maturity", justify="right")
    table.add_column("Importance", justify="right")
    table.add_column("Dependencies")
    for c in components:
        style = _score_style(c.maturity)
        table.add_row(
            c.id,
            escape(c.name),
            f"[{style}]{c.maturity}%[/]",
            f"{c.importance}%",
            escape(", ".join(c.dependencies)) or "—",
        )
    return table


def capabilities_table(capabilities: Sequence[BusinessCapability]) -> Table:
    """Capability heatmap rendered as a table."""
    table = Table(title="Capability Heatmap")
    table.add_column("Capability")
    table.add_column("Maturity", justify="right")
    table.add_column("Importance", justify="right")
    table.add_column("Gaps")
    for cap in capabilities:
        style = _score_style(cap.maturity)
        table.add_row(
            escape(cap.name), f"[{style}]{cap.maturity}%[/]", f"{cap.importance}%", escape("; ".join(cap.gaps)) or "—",
        )
    return table
