"""Estado de sesión en memoria + difusión de cambios a listeners.

Compartido por los facades concretos: ambos mantienen la identidad actual
solo en memoria (sin token store) y notifican de forma push, igual que el
SDK del proveedor: al suscribirse se recibe de inmediato la identidad actual.
"""

from __future__ import annotations

import logging

from core.domain.models import Identity
from core.interfaces.session import AuthStateCallback, Unsubscribe

logger = logging.getLogger(__name__)


class AuthStateBroadcaster:
    def __init__(self) -> None:
        self._identity: Identity | None = None
        self._listeners: list[AuthStateCallback] = []

    @property
    def current_identity(self) -> Identity | None:
        return self._identity

    def set_identity(self, identity: Identity | None) -> None:
        self._identity = identity
        # Copia: un listener puede desuscribirse durante la notificación.
        for callback in list(self._listeners):
            callback(identity)

    def subscribe(self, callback: AuthStateCallback) -> Unsubscribe:
        self._listeners.append(callback)
        callback(self._identity)

        def unsubscribe() -> None:
            try:
                self._listeners.remove(callback)
            except ValueError:
                logger.debug("Auth state listener already removed")

        return unsubscribe

    @property
    def listener_count(self) -> int:
        return len(self._listeners)
