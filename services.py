"""
Service layer
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from api_messages import AnalyticsEvent
from client_event import ClientEvent, ClientEventParams
from client_event_manager import ClientEventManager
from frequency_capping import get_frequency_capped_orchestration, now_ms
from orchestration import Closability, FrequencyCapConfig, InterventionFunnel, InterventionOrchestration
from storage import TIMESTAMPS_STORAGE_KEY
from timestamps import (
    CTA_BUTTON_CLICK_EVENTS,
    COMPLETION_EVENTS_TO_ACTION_MAP,
    DISMISSAL_EVENTS_TO_ACTION_MAP,
    IMPRESSION_EVENTS_TO_ACTION_MAP,
    MONETIZATION_IMPRESSION_EVENTS,
    ActionsTimestamps,
    ActionTimestamps,
    parse_actions_timestamps,
    serialize_actions_timestamps,
)

logger = logging.getLogger(__name__)


class Storage(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class InterventionService:
    def __init__(
        self,
        event_manager: ClientEventManager,
        storage: Storage,
        multi_instance_cta_experiment: bool = False,
    ) -> None:
        # Service listens on the bus to keep the history current and reads it back for selection.
        self._events = event_manager
        self._storage = storage
        self._multi_instance_cta_experiment = multi_instance_cta_experiment
        # Prompts opened from a CTA button were asked for; their impressions are not recorded.
        self._prompt_is_from_cta_button = False
        # Events of a blocking (paygated) prompt do not count toward the caps.
        self._is_closable = True
        self._has_stored_monetization_impression = False
        self._events.register_event_listener(self.handle_client_event)

    def handle_client_event(self, event: ClientEvent, event_params: Optional[ClientEventParams] = None) -> None:
        """Records impressions, dismissals and completions of known prompts."""
        if event.event_type is None:
            return
        if event.event_type in CTA_BUTTON_CLICK_EVENTS:
            self._prompt_is_from_cta_button = True
            return
        if not self._is_closable:
            return

        if event.event_type in IMPRESSION_EVENTS_TO_ACTION_MAP:
            if self._prompt_is_from_cta_button:
                return
            if event.event_type in MONETIZATION_IMPRESSION_EVENTS:
                if self._has_stored_monetization_impression:
                    return
                self._has_stored_monetization_impression = True
            action, field_name = IMPRESSION_EVENTS_TO_ACTION_MAP[event.event_type], "impressions"
        elif event.event_type in DISMISSAL_EVENTS_TO_ACTION_MAP:
            action, field_name = DISMISSAL_EVENTS_TO_ACTION_MAP[event.event_type], "dismissals"
        elif event.event_type in COMPLETION_EVENTS_TO_ACTION_MAP:
            action, field_name = COMPLETION_EVENTS_TO_ACTION_MAP[event.event_type], "completions"
        else:
            return

        key = action.value
        if self._multi_instance_cta_experiment and event.configuration_id:
            key = event.configuration_id
        self._store(key, field_name, event.timestamp)

    def get_timestamps(self) -> ActionsTimestamps:
        """Reads the stored history; a corrupt history is reported and treated as empty."""
        try:
            return parse_actions_timestamps(self._storage.get(TIMESTAMPS_STORAGE_KEY))
        except ValueError as e:
            logger.warning("Discarding stored timestamps: %s", e)
            self._events.log_swg_event(AnalyticsEvent.EVENT_LOCAL_STORAGE_TIMESTAMPS_PARSING_ERROR)
            return {}

    def set_timestamps(self, timestamps: ActionsTimestamps) -> None:
        self._storage.set(TIMESTAMPS_STORAGE_KEY, serialize_actions_timestamps(timestamps))

    def store_impression(self, key: str, timestamp: Optional[int] = None) -> None:
        self._store(key, "impressions", timestamp)

    def store_dismissal(self, key: str, timestamp: Optional[int] = None) -> None:
        self._store(key, "dismissals", timestamp)

    def store_completion(self, key: str, timestamp: Optional[int] = None) -> None:
        self._store(key, "completions", timestamp)

    def _store(self, key: str, field_name: str, timestamp: Optional[int]) -> None:
        timestamps = self.get_timestamps()
        action_timestamps = timestamps.setdefault(key, ActionTimestamps())
        getattr(action_timestamps, field_name).append(timestamp if timestamp is not None else now_ms())
        self.set_timestamps(timestamps)

    def next_intervention(
        self,
        intervention_funnel: InterventionFunnel,
        frequency_cap_config: Optional[FrequencyCapConfig],
    ) -> Optional[InterventionOrchestration]:
        """
        Returns the funnel's next intervention allowed by the frequency caps, or None.

        Choosing an intervention starts a new prompt: its closability decides
        whether its events are recorded, and its first impression is recorded
        even after a CTA click or an earlier monetization impression.
        """
        chosen = get_frequency_capped_orchestration(
            self._events,
            intervention_funnel.interventions,
            self.get_timestamps(),
            self._multi_instance_cta_experiment,
            intervention_funnel,
            frequency_cap_config,
        )
        if chosen is not None:
            self._is_closable = chosen.closability == Closability.DISMISSIBLE
            self._prompt_is_from_cta_button = False
            self._has_stored_monetization_impression = False
        return chosen
