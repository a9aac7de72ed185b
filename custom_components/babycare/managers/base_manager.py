"""Base manager class for BabyCare managers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from homeassistant.helpers.dispatcher import (
    async_dispatcher_connect,
    async_dispatcher_send,
)

from .. import const
from ..helpers.entity_helpers import get_event_signal

if TYPE_CHECKING:
    from collections.abc import Callable

    from homeassistant.core import HomeAssistant

    from ..coordinator import BabyCareDataCoordinator


class BaseManager(ABC):
    """Base class for all BabyCare managers with scoped event support.

    Provides:
    - Instance-scoped event emitting (emit)
    - Instance-scoped event listening (listen)
    - Automatic cleanup via coordinator's config_entry.async_on_unload

    Data Persistence:
    - Use coordinator._persist_and_update() for user-visible record changes
    - Use coordinator._persist() alone for internal bookkeeping

    Subclasses must implement:
    - async_setup(): Subscribe to events, initialize state
    """

    def __init__(
        self, hass: HomeAssistant, coordinator: BabyCareDataCoordinator
    ) -> None:
        """Initialize manager.

        Args:
            hass: Home Assistant instance
            coordinator: Parent coordinator managing this integration instance
        """
        self.hass = hass
        self.coordinator = coordinator
        self.entry_id = coordinator.config_entry.entry_id

    def emit(self, suffix: str, **payload: Any) -> None:
        """Emit instance-scoped event to other managers.

        Args:
            suffix: Signal suffix constant (e.g., const.SIGNAL_SUFFIX_RECORDS_CHANGED)
            **payload: Event data dict passed to listeners (must be JSON-serializable)

        Example:
            self.emit(
                const.SIGNAL_SUFFIX_RECORDS_CHANGED,
                record_type=const.RECORD_TYPE_SLEEP,
                action=const.RECORD_ACTION_INSERT,
                record_id=record_id,
            )
        """
        signal = get_event_signal(self.entry_id, suffix)
        const.LOGGER.debug(
            "DEBUG: Emitting event '%s' for instance %s with payload keys: %s",
            suffix,
            self.entry_id,
            list(payload.keys()),
        )
        # Pass payload as single dict argument (dispatcher only supports *args)
        async_dispatcher_send(self.hass, signal, payload)

    def listen(self, suffix: str, callback: Callable[..., Any]) -> None:
        """Subscribe to instance-scoped event with automatic cleanup.

        The subscription is cleaned up when the config entry is unloaded.
        Callbacks decorated with `@callback` run synchronously inside
        `emit()`.

        Args:
            suffix: Signal suffix constant to listen for
            callback: Function called when event fires (receives payload dict as arg)
        """
        signal = get_event_signal(self.entry_id, suffix)
        unsub = async_dispatcher_connect(self.hass, signal, callback)
        self.coordinator.config_entry.async_on_unload(unsub)
        const.LOGGER.debug(
            "DEBUG: Manager %s listening to event '%s' for instance %s",
            self.__class__.__name__,
            suffix,
            self.entry_id,
        )

    @abstractmethod
    async def async_setup(self) -> None:
        """Set up the manager (subscribe to events, initialize state).

        Called once during coordinator initialization.
        """
