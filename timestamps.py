"""
Action timestamp history.

The history is owned and persisted by the caller; this module only defines
its shape, how analytics events map onto it, and how the stored JSON is read
back and aged out.
"""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional

from api_messages import AnalyticsEvent
from orchestration import InterventionType

WEEK_IN_MILLIS = 604800000
TWO_WEEKS_IN_MILLIS = 2 * WEEK_IN_MILLIS

_ACTION_FIELDS = ("impressions", "dismissals", "completions")


@dataclass
class ActionTimestamps:
    """Epoch-ms history for one intervention type or configuration id."""

    impressions: list[int] = field(default_factory=list)
    dismissals: list[int] = field(default_factory=list)
    completions: list[int] = field(default_factory=list)

    def to_dict(self) -> dict[str, list[int]]:
        return {
            "impressions": list(self.impressions),
            "dismissals": list(self.dismissals),
            "completions": list(self.completions),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ActionTimestamps":
        return cls(
            impressions=list(data.get("impressions") or []),
            dismissals=list(data.get("dismissals") or []),
            completions=list(data.get("completions") or []),
        )


ActionsTimestamps = Dict[str, ActionTimestamps]


CTA_BUTTON_CLICK_EVENTS = frozenset(
    {
        AnalyticsEvent.ACTION_SWG_BUTTON_SHOW_OFFERS_CLICK,
        AnalyticsEvent.ACTION_SWG_BUTTON_SHOW_CONTRIBUTIONS_CLICK,
    }
)

# Mini prompt and full prompt impressions of one monetization prompt; only the first is recorded.
MONETIZATION_IMPRESSION_EVENTS = frozenset(
    {
        AnalyticsEvent.IMPRESSION_SWG_CONTRIBUTION_MINI_PROMPT,
        AnalyticsEvent.IMPRESSION_SWG_SUBSCRIPTION_MINI_PROMPT,
        AnalyticsEvent.IMPRESSION_OFFERS,
        AnalyticsEvent.IMPRESSION_CONTRIBUTION_OFFERS,
    }
)

IMPRESSION_EVENTS_TO_ACTION_MAP = {
    AnalyticsEvent.IMPRESSION_SWG_CONTRIBUTION_MINI_PROMPT: InterventionType.TYPE_CONTRIBUTION,
    AnalyticsEvent.IMPRESSION_CONTRIBUTION_OFFERS: InterventionType.TYPE_CONTRIBUTION,
    AnalyticsEvent.IMPRESSION_NEWSLETTER_OPT_IN: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.IMPRESSION_BYOP_NEWSLETTER_OPT_IN: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.IMPRESSION_REGWALL_OPT_IN: InterventionType.TYPE_REGISTRATION_WALL,
    AnalyticsEvent.IMPRESSION_SURVEY: InterventionType.TYPE_REWARDED_SURVEY,
    AnalyticsEvent.IMPRESSION_REWARDED_AD: InterventionType.TYPE_REWARDED_AD,
    AnalyticsEvent.IMPRESSION_BYO_CTA: InterventionType.TYPE_BYO_CTA,
    AnalyticsEvent.IMPRESSION_SWG_SUBSCRIPTION_MINI_PROMPT: InterventionType.TYPE_SUBSCRIPTION,
    AnalyticsEvent.IMPRESSION_OFFERS: InterventionType.TYPE_SUBSCRIPTION,
}

DISMISSAL_EVENTS_TO_ACTION_MAP = {
    AnalyticsEvent.ACTION_SWG_CONTRIBUTION_MINI_PROMPT_CLOSE: InterventionType.TYPE_CONTRIBUTION,
    AnalyticsEvent.ACTION_CONTRIBUTION_OFFERS_CLOSED: InterventionType.TYPE_CONTRIBUTION,
    AnalyticsEvent.ACTION_NEWSLETTER_OPT_IN_CLOSE: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.ACTION_BYOP_NEWSLETTER_OPT_IN_CLOSE: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.ACTION_REGWALL_OPT_IN_CLOSE: InterventionType.TYPE_REGISTRATION_WALL,
    AnalyticsEvent.ACTION_SURVEY_CLOSED: InterventionType.TYPE_REWARDED_SURVEY,
    AnalyticsEvent.ACTION_REWARDED_AD_CLOSE: InterventionType.TYPE_REWARDED_AD,
    AnalyticsEvent.ACTION_BYO_CTA_CLOSE: InterventionType.TYPE_BYO_CTA,
    AnalyticsEvent.ACTION_SWG_SUBSCRIPTION_MINI_PROMPT_CLOSE: InterventionType.TYPE_SUBSCRIPTION,
    AnalyticsEvent.ACTION_SUBSCRIPTION_OFFERS_CLOSED: InterventionType.TYPE_SUBSCRIPTION,
}

COMPLETION_EVENTS_TO_ACTION_MAP = {
    AnalyticsEvent.EVENT_CONTRIBUTION_PAYMENT_COMPLETE: InterventionType.TYPE_CONTRIBUTION,
    AnalyticsEvent.ACTION_NEWSLETTER_OPT_IN_BUTTON_CLICK: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.ACTION_BYOP_NEWSLETTER_OPT_IN_SUBMIT: InterventionType.TYPE_NEWSLETTER_SIGNUP,
    AnalyticsEvent.ACTION_REGWALL_OPT_IN_BUTTON_CLICK: InterventionType.TYPE_REGISTRATION_WALL,
    AnalyticsEvent.ACTION_SURVEY_SUBMIT_CLICK: InterventionType.TYPE_REWARDED_SURVEY,
    AnalyticsEvent.ACTION_REWARDED_AD_VIEW: InterventionType.TYPE_REWARDED_AD,
    AnalyticsEvent.ACTION_BYO_CTA_BUTTON_CLICK: InterventionType.TYPE_BYO_CTA,
    AnalyticsEvent.EVENT_SUBSCRIPTION_PAYMENT_COMPLETE: InterventionType.TYPE_SUBSCRIPTION,
}


def _is_number_list(value: Any) -> bool:
    return isinstance(value, list) and all(
        isinstance(n, (int, float)) and not isinstance(n, bool) for n in value
    )


def is_valid_actions_timestamps(raw: Any) -> bool:
    """True when raw looks like {key: {impressions, dismissals, completions}}."""
    if not isinstance(raw, dict):
        return False
    for entry in raw.values():
        if not isinstance(entry, dict) or set(entry.keys()) != set(_ACTION_FIELDS):
            return False
        if not all(_is_number_list(entry[name]) for name in _ACTION_FIELDS):
            return False
    return True


def prune_timestamps(
    timestamps: Iterable[int], max_age_ms: int = TWO_WEEKS_IN_MILLIS, now: Optional[int] = None
) -> list[int]:
    """Drops timestamps older than max_age_ms. Input need not be sorted."""
    if now is None:
        now = int(time.time() * 1000)
    return [t for t in timestamps if now - t <= max_age_ms]


def parse_actions_timestamps(raw_json: Optional[str], now: Optional[int] = None) -> ActionsTimestamps:
    """
    Reads a stored history back.

    Returns {} when nothing is stored. Raises ValueError when the stored
    value is not valid JSON or does not have the expected shape.
    """
    if not raw_json:
        return {}
    try:
        raw = json.loads(raw_json)
    except json.JSONDecodeError as e:
        raise ValueError(f"Stored timestamps are not valid JSON: {e}") from e
    if not is_valid_actions_timestamps(raw):
        raise ValueError("Stored timestamps do not have the expected shape.")

    return {
        key: ActionTimestamps(
            impressions=prune_timestamps(value["impressions"], now=now),
            dismissals=prune_timestamps(value["dismissals"], now=now),
            completions=prune_timestamps(value["completions"], now=now),
        )
        for key, value in raw.items()
    }


def serialize_actions_timestamps(timestamps: ActionsTimestamps) -> str:
    return json.dumps({key: value.to_dict() for key, value in timestamps.items()})
