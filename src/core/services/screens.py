"""Presenters de la pareja de pantallas login/home.

Por qué presenters:
- Sacan de la capa de terminal lo que pasa al pulsar cada botón.
- La CLI, los tests o cualquier otro front-end que implemente `Navigator` y
  `Alert` reutilizan el mismo comportamiento.
"""

from __future__ import annotations

from core.domain.models import (
    Credential,
    Identity,
    PasswordResetRequest,
    Screen,
    SignInRequest,
    SignUpRequest,
    WorkflowOutcome,
)
from core.interfaces.session import Alert, Navigator, SessionFacade, Unsubscribe
from core.services.credential_workflow import CredentialWorkflow
from core.services.session_observer import SessionObserver


class LoginPresenter:
    """Pantalla de login: observa la sesión y navega a Home al entrar."""

    def __init__(
        self,
        *,
        workflow: CredentialWorkflow,
        observer: SessionObserver,
        navigator: Navigator,
        alert: Alert,
    ) -> None:
        self._workflow = workflow
        self._observer = observer
        self._navigator = navigator
        self._alert = alert
        self._unsubscribe: Unsubscribe | None = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        if self._unsubscribe is None:
            self._unsubscribe = self._observer.observe(self._on_authenticated)

    def unmount(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def _on_authenticated(self, identity: Identity) -> None:
        self._navigator.replace(Screen.HOME)

    def _report(self, outcome: WorkflowOutcome) -> WorkflowOutcome:
        if outcome.message:
            self._alert.show(outcome.message)
        return outcome

    async def login(self, email: str, password: str) -> WorkflowOutcome:
        request = SignInRequest(credential=Credential(email=email, password=password))
        return self._report(await self._workflow.handle(request))

    async def register(self, email: str, password: str) -> WorkflowOutcome:
        request = SignUpRequest(credential=Credential(email=email, password=password))
        return self._report(await self._workflow.handle(request))

    async def forgot_password(self, email: str) -> WorkflowOutcome:
        return self._report(await self._workflow.handle(PasswordResetRequest(email=email)))


class HomePresenter:
    """Pantalla home: muestra el email de la sesión y permite cerrarla."""

    def __init__(
        self,
        *,
        workflow: CredentialWorkflow,
        facade: SessionFacade,
        navigator: Navigator,
        alert: Alert,
    ) -> None:
        self._workflow = workflow
        self._facade = facade
        self._navigator = navigator
        self._alert = alert

    @property
    def email(self) -> str | None:
        identity = self._facade.current_identity
        return identity.email if identity else None

    async def sign_out(self) -> WorkflowOutcome:
        outcome = await self._workflow.handle_sign_out()
        if outcome.ok:
            self._navigator.replace(Screen.LOGIN)
        elif outcome.message:
            self._alert.show(outcome.message)
        return outcome
