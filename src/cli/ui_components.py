"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Implementa los colaboradores de presentación (`Navigator`, `Alert`) que
  consumen los presenters del Core.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Screen, ValidationResult, WorkflowOutcome


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("authflow", style="bold cyan")
    subtitle = Text("Login • Registro • Reset de contraseña", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


class ConsoleAlert:
    """Alerta: un panel destacado; el siguiente prompt la descarta."""

    def __init__(self, console: Console) -> None:
        self._console = console
        self.history: list[str] = []

    def show(self, message: str) -> None:
        self.history.append(message)
        self._console.print(Panel(Text(message), title="Alert", border_style="yellow"))


class TerminalNavigator:
    """Navegación de una sola vía: solo recuerda la pantalla actual."""

    def __init__(self, initial: Screen = Screen.LOGIN) -> None:
        self.current = initial

    def replace(self, screen: Screen) -> None:
        self.current = screen


def build_outcome_panel(outcome: WorkflowOutcome) -> Panel:
    """Panel para presentar el `WorkflowOutcome` de un envío."""

    body = Text()
    if outcome.identity is not None:
        body.append("Email: ", style="bold")
        body.append(outcome.identity.email + "\n")
        body.append("UID: ", style="bold")
        body.append(outcome.identity.uid, style="dim")
    if outcome.message:
        body.append(outcome.message)

    style = "green" if outcome.ok else "red"
    title = Text(outcome.kind.value.replace("_", " ").title(), style=f"bold {style}")
    return Panel(body, title=title, border_style=style)


def build_validation_table(email: str, result: ValidationResult) -> Table:
    table = Table(title="Email validation")
    table.add_column("Email", style="cyan", no_wrap=True)
    table.add_column("Valid", style="white")
    table.add_column("Failure", style="red")
    table.add_column("Detail", style="dim")
    table.add_row(
        email,
        "yes" if result.is_valid else "no",
        result.failure.value if result.failure else "",
        result.detail or "",
    )
    return table
