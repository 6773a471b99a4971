"""CLI principal (Typer).

Por qué la CLI es delgada:
- Toda la lógica vive en `core.services`; aquí solo se construyen los
  adaptadores, se piden datos al usuario y se pinta el resultado.
- El comando `app` reproduce la pareja de pantallas login/home sobre los
  presenters del Core.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

import typer
from rich.console import Console
from rich.logging import RichHandler

from adapters.email_validation import AbstractEmailValidator
from adapters.firebase_session import FirebaseSessionFacade
from adapters.memory_session import InMemorySessionFacade
from cli import doctor
from cli.ui_components import (
    ConsoleAlert,
    TerminalNavigator,
    build_outcome_panel,
    build_validation_table,
    print_banner,
)
from core.config import AppSettings
from core.domain.models import (
    Credential,
    PasswordResetRequest,
    Screen,
    SignInRequest,
    SignUpRequest,
    WorkflowRequest,
)
from core.interfaces.session import SessionFacade
from core.services.credential_workflow import CredentialWorkflow
from core.services.screens import HomePresenter, LoginPresenter
from core.services.session_observer import SessionObserver

app = typer.Typer(no_args_is_help=True, help="Email/password identity workflows.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


@dataclass
class Runtime:
    settings: AppSettings
    facade: SessionFacade
    workflow: CredentialWorkflow


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def build_runtime(settings: AppSettings, *, memory: bool = False) -> Runtime:
    facade: SessionFacade
    if memory or not settings.api_key:
        if not memory:
            logging.getLogger(__name__).warning("API_KEY not set: using in-memory session backend")
        facade = InMemorySessionFacade()
    else:
        facade = FirebaseSessionFacade(settings)
    validator = AbstractEmailValidator(settings)
    return Runtime(
        settings=settings,
        facade=facade,
        workflow=CredentialWorkflow(facade=facade, validator=validator),
    )


def _runtime(ctx: typer.Context) -> Runtime:
    runtime: Runtime = ctx.obj
    return runtime


@app.callback()
def main(
    ctx: typer.Context,
    memory: bool = typer.Option(False, "--memory", help="Use the in-memory session backend."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable INFO logging."),
) -> None:
    settings = AppSettings()
    configure_logging("INFO" if verbose else settings.log_level)
    ctx.obj = build_runtime(settings, memory=memory)


def _submit(ctx: typer.Context, request: WorkflowRequest) -> None:
    runtime = _runtime(ctx)
    outcome = asyncio.run(runtime.workflow.handle(request))
    _console.print(build_outcome_panel(outcome))
    if not outcome.ok:
        raise typer.Exit(code=1)


@app.command()
def validate(email: str = typer.Argument(..., help="Email address to check.")) -> None:
    """Check format and deliverability of an email address."""

    settings = AppSettings()
    result = asyncio.run(AbstractEmailValidator(settings).validate(email))
    _console.print(build_validation_table(email, result))
    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def signup(
    ctx: typer.Context,
    email: str = typer.Option("", "--email", "-e", prompt=True),
    password: str = typer.Option("", "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Create an account."""

    _submit(ctx, SignUpRequest(credential=Credential(email=email.strip(), password=password)))


@app.command()
def login(
    ctx: typer.Context,
    email: str = typer.Option("", "--email", "-e", prompt=True),
    password: str = typer.Option("", "--password", "-p", prompt=True, hide_input=True),
) -> None:
    """Sign in with email and password."""

    _submit(ctx, SignInRequest(credential=Credential(email=email.strip(), password=password)))


@app.command()
def reset(
    ctx: typer.Context,
    email: str = typer.Option("", "--email", "-e", prompt=True),
) -> None:
    """Send a password reset email."""

    _submit(ctx, PasswordResetRequest(email=email.strip()))


async def _screen_loop(runtime: Runtime) -> None:
    navigator = TerminalNavigator()
    alert = ConsoleAlert(_console)
    login_screen = LoginPresenter(
        workflow=runtime.workflow,
        observer=SessionObserver(runtime.facade),
        navigator=navigator,
        alert=alert,
    )
    home_screen = HomePresenter(
        workflow=runtime.workflow,
        facade=runtime.facade,
        navigator=navigator,
        alert=alert,
    )

    while True:
        if navigator.current is Screen.LOGIN:
            login_screen.mount()
            action = typer.prompt("[l]ogin, [r]egister, [f]orgot password, [q]uit", default="l")
            action = action.strip().lower()[:1]
            if action == "q":
                break
            email = typer.prompt("Email", default="", show_default=False).strip()
            if action == "f":
                await login_screen.forgot_password(email)
                continue
            password = typer.prompt("Password", default="", show_default=False, hide_input=True)
            if action == "r":
                await login_screen.register(email, password)
            else:
                await login_screen.login(email, password)
            if navigator.current is Screen.HOME:
                login_screen.unmount()
        else:
            _console.print(f"Email: [bold]{home_screen.email or ''}[/bold]")
            action = typer.prompt("[s]ign out, [q]uit", default="s").strip().lower()[:1]
            if action == "q":
                break
            await home_screen.sign_out()

    login_screen.unmount()


@app.command(name="app")
def interactive(ctx: typer.Context) -> None:
    """Interactive login/home screens."""

    print_banner(_console)
    asyncio.run(_screen_loop(_runtime(ctx)))


def run() -> None:
    app()
