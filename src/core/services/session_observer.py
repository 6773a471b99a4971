"""Observador del estado de sesión.

Se suscribe una sola vez al stream push del proveedor y clasifica cada
notificación por presencia de identidad:

- ausente -> presente: `ENTERED`
- presente -> ausente: `LEFT`
- sin cambio de presencia (duplicados, refresh de token): `UNKNOWN`

`observe()` es el atajo que usa la pantalla de login: solo reacciona a
`ENTERED`, una vez por transición.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from core.domain.models import AuthTransition, Identity
from core.interfaces.session import SessionFacade, Unsubscribe

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[AuthTransition, Optional[Identity]], None]


def classify_transition(previous: Identity | None, current: Identity | None) -> AuthTransition:
    if previous is None and current is not None:
        return AuthTransition.ENTERED
    if previous is not None and current is None:
        return AuthTransition.LEFT
    return AuthTransition.UNKNOWN


class SessionObserver:
    def __init__(self, facade: SessionFacade) -> None:
        self._facade = facade

    def observe_transitions(self, on_transition: TransitionCallback) -> Unsubscribe:
        previous: Identity | None = None
        active = True

        def listener(identity: Identity | None) -> None:
            nonlocal previous
            if not active:
                return
            transition = classify_transition(previous, identity)
            previous = identity
            logger.debug("Auth state notification: %s", transition.value)
            on_transition(transition, identity)

        unsubscribe_facade = self._facade.on_auth_state_changed(listener)

        def unsubscribe() -> None:
            nonlocal active
            if not active:
                return
            active = False
            unsubscribe_facade()

        return unsubscribe

    def observe(self, on_authenticated: Callable[[Identity], None]) -> Unsubscribe:
        def on_transition(transition: AuthTransition, identity: Identity | None) -> None:
            if transition is AuthTransition.ENTERED and identity is not None:
                on_authenticated(identity)

        return self.observe_transitions(on_transition)
