"""
The UI and flow code log ClientEvents here; analytics adapters and the
frequency-capping logic listen.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Callable, Optional

from api_messages import AnalyticsEvent, EventOriginator, FilterResult
from client_event import ClientEvent, ClientEventParams, validate_event

logger = logging.getLogger(__name__)

EventListener = Callable[[ClientEvent, Optional[ClientEventParams]], None]
EventFilterer = Callable[[ClientEvent], FilterResult]


class ClientEventManager:
    """
    Asynchronous pub/sub bus for client events.

    Nothing is delivered until the ready future supplied at construction has
    completed. If that future fails, events are dropped rather than delivered
    early. Filterers run before listeners, both in registration order, and a
    failing callback never stops the others.
    """

    def __init__(self, is_ready: asyncio.Future) -> None:
        self._is_ready = is_ready
        self._listeners: list[EventListener] = []
        self._filterers: list[EventFilterer] = []
        # Delivery task of the most recent log_event() call; await it in tests.
        self.last_action: Optional[asyncio.Task] = None

    @staticmethod
    def is_publisher_event(event: ClientEvent) -> bool:
        return event.event_originator in (
            EventOriginator.PROPENSITY_CLIENT,
            EventOriginator.PUBLISHER_CLIENT,
        )

    def register_event_listener(self, listener: EventListener) -> None:
        if not callable(listener):
            raise ValueError("Event manager listeners must be a function.")
        self._listeners.append(listener)

    def register_event_filterer(self, filterer: EventFilterer) -> None:
        # A filterer returning FilterResult.CANCEL_EVENT hides the event from listeners.
        if not callable(filterer):
            raise ValueError("Event manager filterers must be a function.")
        self._filterers.append(filterer)

    def log_event(
        self,
        event: ClientEvent,
        event_params: Optional[ClientEventParams] = None,
        event_time: Optional[int] = None,
    ) -> None:
        """
        Validates the event, stamps it and schedules delivery.

        Must be called with a running event loop. Invalid events raise
        ValueError here, before anything is scheduled.
        """
        validate_event(event)
        loop = asyncio.get_running_loop()
        event.timestamp = event_time if event_time is not None else int(time.time() * 1000)
        self.last_action = loop.create_task(self._handle_event(event, event_params))

    async def _handle_event(self, event: ClientEvent, event_params: Optional[ClientEventParams]) -> None:
        try:
            # Shielded: cancelling one delivery must not cancel the shared gate.
            await asyncio.shield(self._is_ready)
        except asyncio.CancelledError:
            if not self._is_ready.cancelled():
                raise
            logger.debug("Ready gate cancelled; dropping %s", event.event_type)
            return
        except Exception:
            logger.debug("Ready gate failed; dropping %s", event.event_type)
            return

        for filterer in list(self._filterers):
            try:
                if filterer(event) == FilterResult.CANCEL_EVENT:
                    return
            except Exception:
                logger.exception("Event filterer failed for %s", event.event_type)

        for listener in list(self._listeners):
            try:
                listener(event, event_params)
            except Exception:
                logger.exception("Event listener failed for %s", event.event_type)

    def log_swg_event(
        self,
        event_type: AnalyticsEvent,
        is_from_user_action: Optional[bool] = False,
        event_params: Optional[dict] = None,
        event_time: Optional[int] = None,
        configuration_id: Optional[str] = None,
    ) -> None:
        """Builds a SWG_CLIENT event from the arguments and logs it."""
        self.log_event(
            ClientEvent(
                event_type=event_type,
                event_originator=EventOriginator.SWG_CLIENT,
                is_from_user_action=is_from_user_action,
                additional_parameters=event_params,
                configuration_id=configuration_id,
            ),
            None,
            event_time,
        )

    def get_ready_future(self) -> asyncio.Future:
        return self._is_ready
