"""Decoration reporter: instance registry -> rich formatted string."""

from __future__ import annotations

from dataclasses import dataclass
from io import StringIO
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from decoratable.application.registry import registry_of
from decoratable.domain.model.batch import instances_of

if TYPE_CHECKING:
    from types import SimpleNamespace

    from decoratable.application.registry import RegistryEntry
    from decoratable.domain.model.enums import Kind


@dataclass(frozen=True, slots=True)
class ReportConfig:
    """Configuration for the decoration reporter.

    Attributes:
        show_state: Show the slots decorators claimed in each chain's state.
        include_kinds: Kinds to include. None = all kinds.
        width: Console width in characters.
        color: Emit terminal color codes.
    """

    show_state: bool = True
    include_kinds: frozenset[Kind] | None = None
    width: int = 120
    color: bool = False

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if self.width < 40:
            raise ValueError(f"width must be >= 40, got {self.width}")


class DecorationReporter:
    """Renders the active decorations of instances as a table.

    Output is str, not print(). Caller decides destination.
    """

    def __init__(self, config: ReportConfig | None = None) -> None:
        """Initialize reporter.

        Args:
            config: Reporter configuration. Uses defaults if None.
        """
        self._config = config or ReportConfig()

    def report(self, receiver: object) -> str:
        """Format the decorations of an instance (or each instance of a Batch).

        Args:
            receiver: Instance or Batch of instances

        Returns:
            Formatted string, one table per instance
        """
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self._config.color,
            width=self._config.width,
            no_color=not self._config.color,
        )

        for instance in instances_of(receiver):
            self._render_instance(console, instance)

        return output.getvalue()

    def _entries(self, instance: object) -> tuple[RegistryEntry, ...]:
        """Entries of instance filtered by config."""
        registry = registry_of(instance)
        if registry is None:
            return ()
        kinds = self._config.include_kinds
        return tuple(e for e in registry.entries() if kinds is None or e.kind in kinds)

    def _render_instance(self, console: Console, instance: object) -> None:
        """Render header and table of one instance."""
        entries = self._entries(instance)
        console.print(f"[bold]{escape(type(instance).__name__)}[/bold] ({len(entries)} decorated)")

        if not entries:
            console.print("  [dim]no decorations[/dim]")
            console.print()
            return

        table = Table(show_header=True, header_style="bold", box=None)
        table.add_column("Kind", style="cyan")
        table.add_column("Member")
        table.add_column("Chain", style="green")
        if self._config.show_state:
            table.add_column("State", style="dim")

        for entry in entries:
            row = [entry.kind.value, entry.name, escape(" -> ".join(entry.labels))]
            if self._config.show_state:
                row.append(escape(_format_state(entry.state.slots)))
            table.add_row(*row)

        console.print(table)
        console.print()


def _format_state(slots: tuple[tuple[str, SimpleNamespace], ...]) -> str:
    """Format claimed slots as owner{field=value, ...}."""
    parts = []
    for owner, slot in slots:
        fields = ", ".join(f"{k}={v!r}" for k, v in vars(slot).items())
        parts.append(f"{owner}{{{fields}}}")
    return "; ".join(parts) or "-"
