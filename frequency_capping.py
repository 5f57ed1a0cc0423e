"""
Frequency capping: decides which configured intervention, if any, may be
shown next.

Per-prompt caps are evaluated before the global cap so that "this reader is
not eligible for this prompt" and "this reader has used up their overall
exposure budget" are reported as different diagnostics.
"""

from __future__ import annotations

import logging
import time
from typing import Optional, Sequence

from api_messages import AnalyticsEvent
from client_event_manager import ClientEventManager
from orchestration import (
    Closability,
    Duration,
    FrequencyCapConfig,
    InterventionFunnel,
    InterventionOrchestration,
    InterventionType,
)
from timestamps import ActionsTimestamps

logger = logging.getLogger(__name__)

SECOND_IN_MILLIS = 1000
NANOS_IN_MILLI = 10**6


def now_ms() -> int:
    return int(time.time() * 1000)


def is_valid_frequency_cap_duration(duration: Optional[Duration]) -> bool:
    return duration is not None and bool(duration.seconds or duration.nanos)


def is_valid_frequency_cap(frequency_cap_config: Optional[FrequencyCapConfig]) -> bool:
    if frequency_cap_config is None:
        return False
    return is_valid_frequency_cap_duration(
        frequency_cap_config.global_duration
    ) or is_valid_frequency_cap_duration(frequency_cap_config.any_prompt_duration)


def duration_to_millis(duration: Duration) -> float:
    # Floor division matches rounding toward -inf for negative nanos.
    return (duration.seconds or 0) * SECOND_IN_MILLIS + (duration.nanos or 0) // NANOS_IN_MILLI


def is_frequency_capped(frequency_cap_duration: Duration, timestamps: Sequence[int]) -> bool:
    """
    True when the most recent timestamp is still inside the cap window.

    Older timestamps never matter once a newer one exists. A window that is
    zero or negative never caps.
    """
    if not timestamps:
        return False
    last_event = max(timestamps)
    return now_ms() - last_event < duration_to_millis(frequency_cap_duration)


def get_timestamps_for_prompt_frequency(
    timestamps: ActionsTimestamps,
    orchestration: InterventionOrchestration,
    multi_instance_cta_experiment: bool,
) -> list[int]:
    """
    Picks the part of an intervention's own history that counts toward its
    prompt cap.

    Dismissing a blocking prompt is not a real choice, so only completions
    count for it; dismissible prompts count dismissals and completions.
    """
    key = orchestration.config_id if multi_instance_cta_experiment else orchestration.type
    action_timestamps = timestamps.get(key)
    if action_timestamps is None:
        return []
    if orchestration.closability == Closability.BLOCKING:
        return list(action_timestamps.completions)
    return [*action_timestamps.dismissals, *action_timestamps.completions]


def _get_prompt_frequency_cap_duration(
    event_manager: ClientEventManager,
    frequency_cap_config: FrequencyCapConfig,
    orchestration: InterventionOrchestration,
) -> Optional[Duration]:
    duration = orchestration.prompt_duration
    if is_valid_frequency_cap_duration(duration):
        return duration
    logger.info("No prompt frequency cap for %s; using the any-prompt cap", orchestration.config_id)
    event_manager.log_swg_event(AnalyticsEvent.EVENT_PROMPT_FREQUENCY_CONFIG_NOT_FOUND)
    return frequency_cap_config.any_prompt_duration


def _get_global_frequency_cap_duration(
    frequency_cap_config: FrequencyCapConfig,
    intervention_funnel: Optional[InterventionFunnel],
) -> Optional[Duration]:
    # A funnel-level duration overrides the publisher default even when it is invalid.
    if intervention_funnel is not None and intervention_funnel.global_duration is not None:
        return intervention_funnel.global_duration
    return frequency_cap_config.global_duration


def _get_global_timestamps(
    actions_timestamps: ActionsTimestamps,
    selected: InterventionOrchestration,
    multi_instance_cta_experiment: bool,
) -> list[int]:
    known_types = InterventionType.values()
    global_timestamps: list[int] = []
    for key, action_timestamps in actions_timestamps.items():
        # Without the experiment, entries keyed by configId are not counted.
        if not multi_instance_cta_experiment and key not in known_types:
            continue
        # Only completing the selected intervention counts against it; any
        # impression of another one counts against the reader's budget.
        if multi_instance_cta_experiment and key == selected.config_id:
            global_timestamps.extend(action_timestamps.completions)
        elif key == selected.type:
            global_timestamps.extend(action_timestamps.completions)
        else:
            global_timestamps.extend(action_timestamps.impressions)
    return global_timestamps


def get_frequency_capped_orchestration(
    event_manager: ClientEventManager,
    intervention_orchestrations: Sequence[InterventionOrchestration],
    actions_timestamps: ActionsTimestamps,
    multi_instance_cta_experiment: bool,
    intervention_funnel: Optional[InterventionFunnel],
    frequency_cap_config: Optional[FrequencyCapConfig] = None,
) -> Optional[InterventionOrchestration]:
    """
    Returns the first intervention allowed by its prompt cap and the global
    cap, or None.

    Without any usable cap configuration the first intervention is returned
    unconditionally, so a misconfigured publisher keeps its prompts.

    Diagnostics go through event_manager.log_swg_event, so this must be called
    with a running event loop.
    """
    if not is_valid_frequency_cap(frequency_cap_config):
        logger.warning("Frequency cap config not found; falling back to the first intervention")
        event_manager.log_swg_event(AnalyticsEvent.EVENT_FREQUENCY_CAP_CONFIG_NOT_FOUND_ERROR)
        return intervention_orchestrations[0] if intervention_orchestrations else None

    next_orchestration: Optional[InterventionOrchestration] = None
    for orchestration in intervention_orchestrations:
        prompt_duration = _get_prompt_frequency_cap_duration(
            event_manager, frequency_cap_config, orchestration
        )
        if is_valid_frequency_cap_duration(prompt_duration):
            timestamps = get_timestamps_for_prompt_frequency(
                actions_timestamps, orchestration, multi_instance_cta_experiment
            )
            if is_frequency_capped(prompt_duration, timestamps):
                logger.info("Prompt frequency cap met for %s", orchestration.config_id)
                event_manager.log_swg_event(AnalyticsEvent.EVENT_PROMPT_FREQUENCY_CAP_MET)
                continue
        next_orchestration = orchestration
        break

    if next_orchestration is None:
        return None

    global_duration = _get_global_frequency_cap_duration(frequency_cap_config, intervention_funnel)
    if is_valid_frequency_cap_duration(global_duration):
        global_timestamps = _get_global_timestamps(
            actions_timestamps, next_orchestration, multi_instance_cta_experiment
        )
        if is_frequency_capped(global_duration, global_timestamps):
            logger.info("Global frequency cap met; suppressing %s", next_orchestration.config_id)
            event_manager.log_swg_event(AnalyticsEvent.EVENT_GLOBAL_FREQUENCY_CAP_MET)
            return None

    return next_orchestration
