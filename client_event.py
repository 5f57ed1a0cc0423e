"""
Client event domain model.

This file defines the event record that flows through the ClientEventManager
and the validation rules it must satisfy before any listener sees it.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Optional, Type

from api_messages import AnalyticsEvent, EventOriginator


@dataclass
class GoogleAnalyticsParameters:
    """Extra fields forwarded to Google Analytics listeners."""

    event_category: Optional[str] = None
    survey_question: Optional[str] = None
    survey_answer_category: Optional[str] = None
    event_label: Optional[str] = None


@dataclass
class ClientEventParams:
    """Per-call delivery hints, passed to listeners alongside the event."""

    google_analytics_parameters: Optional[GoogleAnalyticsParameters] = None


@dataclass
class ClientEvent:
    """
    Something that happened on the page and should be reported.

    Validation is deferred to validate_event() so that log_event() can reject
    a malformed event with a message naming the offending field.
    """

    event_type: Optional[AnalyticsEvent]
    event_originator: EventOriginator
    is_from_user_action: Optional[bool] = None
    additional_parameters: Optional[dict[str, Any]] = None
    # Epoch milliseconds; assigned by the event manager at log time.
    timestamp: Optional[int] = None
    configuration_id: Optional[str] = None


def _is_enum_value(enum_cls: Type[IntEnum], value: Any) -> bool:
    # bool is an int subclass, True would otherwise pass as value 1.
    if isinstance(value, bool):
        return False
    try:
        enum_cls(value)
    except (ValueError, TypeError):
        return False
    return True


def _error_message(field_name: str, value: Any) -> str:
    return f"Event has an invalid {field_name} ({value!r})"


def validate_event(event: ClientEvent) -> None:
    """Raises ValueError if the event is malformed."""
    if not isinstance(event, ClientEvent):
        raise ValueError("Event must be a valid object")

    if not _is_enum_value(AnalyticsEvent, event.event_type):
        raise ValueError(_error_message("event_type", event.event_type))

    if not _is_enum_value(EventOriginator, event.event_originator):
        raise ValueError(_error_message("event_originator", event.event_originator))

    if event.additional_parameters is not None and not isinstance(event.additional_parameters, dict):
        raise ValueError(_error_message("additional_parameters", event.additional_parameters))

    if event.is_from_user_action is not None and not isinstance(event.is_from_user_action, bool):
        raise ValueError(_error_message("is_from_user_action", event.is_from_user_action))
