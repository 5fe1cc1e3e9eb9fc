"""
App lifecycle notification channel.

The platform layer publishes foreground/background transitions here and
the session state machine subscribes once at startup. Subscriptions are
explicit handles so unregistration on shutdown cannot be forgotten.
"""

import logging
from typing import Awaitable, Callable, Optional

from .models import AppState

logger = logging.getLogger(__name__)

AppStateListener = Callable[[AppState], Awaitable[None]]


class Subscription:
    """Handle returned by AppStateChannel.add_listener()."""

    def __init__(self, channel: "AppStateChannel", listener: AppStateListener):
        self._channel: Optional[AppStateChannel] = channel
        self._listener = listener

    @property
    def active(self) -> bool:
        return self._channel is not None

    def remove(self) -> None:
        """Unregister. Safe to call more than once."""
        if self._channel is not None:
            self._channel._remove(self._listener)
            self._channel = None


class AppStateChannel:
    """
    Publish/subscribe channel for app state changes.

    publish() awaits every listener in registration order, so when it
    returns all reactions to the change have completed. A failing listener
    is logged and does not stop the others.
    """

    def __init__(self, initial: AppState = AppState.ACTIVE):
        self._listeners: list[AppStateListener] = []
        self._current = initial

    @property
    def current(self) -> AppState:
        return self._current

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def add_listener(self, listener: AppStateListener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _remove(self, listener: AppStateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    async def publish(self, state: AppState) -> None:
        logger.debug(f"App state changed to: {state.value}")
        self._current = state
        for listener in list(self._listeners):
            try:
                await listener(state)
            except Exception as e:
                logger.error(f"App state listener failed: {e}")
