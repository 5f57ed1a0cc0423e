"""
Intervention orchestration domain model.

These types describe the prompts a publisher configured and the rate limits
that apply to them. They arrive as JSON-shaped dicts from the remote
configuration; from_dict() converts them and rejects malformed input.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class InterventionType(str, Enum):
    TYPE_CONTRIBUTION = "TYPE_CONTRIBUTION"
    TYPE_SUBSCRIPTION = "TYPE_SUBSCRIPTION"
    TYPE_NEWSLETTER_SIGNUP = "TYPE_NEWSLETTER_SIGNUP"
    TYPE_REGISTRATION_WALL = "TYPE_REGISTRATION_WALL"
    TYPE_REWARDED_SURVEY = "TYPE_REWARDED_SURVEY"
    TYPE_REWARDED_AD = "TYPE_REWARDED_AD"
    TYPE_BYO_CTA = "TYPE_BYO_CTA"

    @classmethod
    def values(cls) -> frozenset[str]:
        return frozenset(member.value for member in cls)


class Closability(str, Enum):
    """Whether a prompt can be closed without acting on it."""

    DISMISSIBLE = "DISMISSIBLE"
    BLOCKING = "BLOCKING"


def _require_mapping(data: Any, what: str) -> dict:
    if not isinstance(data, dict):
        raise ValueError(f"{what} must be an object, got {data!r}.")
    return data


def _number(value: Any, what: str) -> float:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{what} must be a number, got {value!r}.")
    return value


@dataclass(frozen=True)
class Duration:
    """
    A cap window. nanos may be negative and is combined with seconds;
    a duration where both are zero is treated as absent.
    """

    seconds: float = 0
    nanos: float = 0

    @classmethod
    def from_dict(cls, data: Any) -> "Duration":
        data = _require_mapping(data, "Duration")
        return cls(
            seconds=_number(data.get("seconds"), "Duration.seconds"),
            nanos=_number(data.get("nanos"), "Duration.nanos"),
        )


@dataclass(frozen=True)
class FrequencyCap:
    duration: Optional[Duration] = None

    @classmethod
    def from_dict(cls, data: Any, duration_key: str = "duration") -> "FrequencyCap":
        # Orchestrations and funnels use "duration"; the publisher config uses "frequencyCapDuration".
        data = _require_mapping(data, "FrequencyCap")
        raw = data.get(duration_key)
        return cls(duration=Duration.from_dict(raw) if raw is not None else None)


@dataclass(frozen=True)
class FrequencyCapConfig:
    """Publisher-level fallback caps."""

    global_frequency_cap: Optional[FrequencyCap] = None
    any_prompt_frequency_cap: Optional[FrequencyCap] = None

    @property
    def global_duration(self) -> Optional[Duration]:
        return self.global_frequency_cap.duration if self.global_frequency_cap else None

    @property
    def any_prompt_duration(self) -> Optional[Duration]:
        return self.any_prompt_frequency_cap.duration if self.any_prompt_frequency_cap else None

    @classmethod
    def from_dict(cls, data: Any) -> "FrequencyCapConfig":
        if data is None:
            return cls()
        data = _require_mapping(data, "FrequencyCapConfig")
        caps = {}
        for key, attr in (
            ("globalFrequencyCap", "global_frequency_cap"),
            ("anyPromptFrequencyCap", "any_prompt_frequency_cap"),
        ):
            if data.get(key) is not None:
                caps[attr] = FrequencyCap.from_dict(data[key], duration_key="frequencyCapDuration")
        return cls(**caps)


@dataclass(frozen=True)
class InterventionOrchestration:
    """One configured prompt; its position in the funnel is its priority."""

    config_id: str
    type: str
    closability: Closability = Closability.DISMISSIBLE
    prompt_frequency_cap: Optional[FrequencyCap] = None

    def __post_init__(self) -> None:
        if not isinstance(self.config_id, str) or not self.config_id.strip():
            raise ValueError("Intervention configId must be a non-empty string.")
        if not isinstance(self.type, str) or not self.type.strip():
            raise ValueError("Intervention type must be a non-empty string.")
        # Normalise so that string values from JSON compare equal to the enum.
        object.__setattr__(self, "closability", Closability(self.closability))

    @property
    def prompt_duration(self) -> Optional[Duration]:
        return self.prompt_frequency_cap.duration if self.prompt_frequency_cap else None

    @classmethod
    def from_dict(cls, data: Any) -> "InterventionOrchestration":
        data = _require_mapping(data, "InterventionOrchestration")
        closability = data.get("closability") or Closability.DISMISSIBLE.value
        if closability not in {c.value for c in Closability}:
            raise ValueError(
                f"Invalid closability '{closability}'. Allowed: {', '.join(c.value for c in Closability)}"
            )
        cap = data.get("promptFrequencyCap")
        return cls(
            config_id=data.get("configId"),
            type=data.get("type"),
            closability=Closability(closability),
            prompt_frequency_cap=FrequencyCap.from_dict(cap) if cap is not None else None,
        )


@dataclass(frozen=True)
class InterventionFunnel:
    interventions: list[InterventionOrchestration] = field(default_factory=list)
    global_frequency_cap: Optional[FrequencyCap] = None

    @property
    def global_duration(self) -> Optional[Duration]:
        return self.global_frequency_cap.duration if self.global_frequency_cap else None

    @classmethod
    def from_dict(cls, data: Any) -> "InterventionFunnel":
        if data is None:
            return cls()
        data = _require_mapping(data, "InterventionFunnel")
        cap = data.get("globalFrequencyCap")
        return cls(
            interventions=[InterventionOrchestration.from_dict(i) for i in data.get("interventions") or []],
            global_frequency_cap=FrequencyCap.from_dict(cap) if cap is not None else None,
        )
