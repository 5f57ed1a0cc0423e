"""
Command-line interface (CLI) for trying out frequency capping.

Events typed in here go through the ClientEventManager exactly as page code
would log them, and the recorded history drives which intervention is picked.
"""

from __future__ import annotations

import asyncio
import json
import logging
import os
from typing import Any, Optional

from api_messages import AnalyticsEvent
from client_event import ClientEvent, ClientEventParams
from client_event_manager import ClientEventManager
from logger_config import setup_logger
from orchestration import FrequencyCapConfig, InterventionFunnel
from services import InterventionService
from storage import MemoryStorage

DIAGNOSTIC_EVENTS = frozenset(
    {
        AnalyticsEvent.EVENT_FREQUENCY_CAP_CONFIG_NOT_FOUND_ERROR,
        AnalyticsEvent.EVENT_PROMPT_FREQUENCY_CONFIG_NOT_FOUND,
        AnalyticsEvent.EVENT_PROMPT_FREQUENCY_CAP_MET,
        AnalyticsEvent.EVENT_GLOBAL_FREQUENCY_CAP_MET,
        AnalyticsEvent.EVENT_LOCAL_STORAGE_TIMESTAMPS_PARSING_ERROR,
    }
)


def load_config(config_path: str) -> dict[str, Any]:
    """Reads the remote-config JSON; a missing file means no configuration."""
    if not os.path.exists(config_path):
        return {}
    with open(config_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a JSON object.")
    return data


async def _read_line(prompt: str) -> str:
    # Blocking input() runs in the default executor while the loop keeps delivering events.
    return await asyncio.get_running_loop().run_in_executor(None, input, prompt)


async def _prompt_non_empty(prompt: str) -> str:
    # Keep prompting until user provides a non-empty string.
    while True:
        value = (await _read_line(prompt)).strip()
        if value:
            return value
        print("Input cannot be empty. Please try again.")


async def _prompt_int(prompt: str, *, min_value: Optional[int] = None) -> int:
    while True:
        raw = (await _read_line(prompt)).strip()
        try:
            value = int(raw)
        except ValueError:
            print("Please enter a valid whole number (integer).")
            continue

        if min_value is not None and value < min_value:
            print(f"Please enter a value >= {min_value}.")
            continue

        return value


def _handle_diagnostic(event: ClientEvent, event_params: Optional[ClientEventParams] = None) -> None:
    # Only frequency capping decisions are echoed; other events are recorded silently.
    if event.event_type in DIAGNOSTIC_EVENTS:
        print(f"[EVENT] {AnalyticsEvent(event.event_type).name}")


async def _run(config_path: str) -> None:
    config = load_config(config_path)
    funnel = InterventionFunnel.from_dict(config.get("interventionFunnel"))
    cap_config = FrequencyCapConfig.from_dict(config.get("frequencyCapConfig"))
    experiment = bool(config.get("multiInstanceCtaExperiment", False))

    ready = asyncio.get_running_loop().create_future()
    manager = ClientEventManager(ready)
    manager.register_event_listener(_handle_diagnostic)
    service = InterventionService(manager, MemoryStorage(), multi_instance_cta_experiment=experiment)
    # Setup is complete; let queued and future events through.
    ready.set_result(None)

    print(f"Loaded {len(funnel.interventions)} intervention(s) from {config_path}.")

    while True:
        print("\nMenu:")
        print(" 1) Log an analytics event")
        print(" 2) Show recorded timestamps")
        print(" 3) Pick next intervention")
        print(" 4) Exit")

        choice = await _prompt_int("Choose an option: ", min_value=1)

        if choice == 1:
            name = (await _prompt_non_empty("Event name (e.g. IMPRESSION_OFFERS): ")).upper()
            config_id = (await _read_line("Configuration id (optional): ")).strip() or None
            try:
                event_type = AnalyticsEvent[name]
            except KeyError:
                print(f"Error: unknown event '{name}'.")
                continue
            try:
                manager.log_swg_event(event_type, True, None, None, config_id)
            except ValueError as e:
                print(f"Error: {e}")
                continue
            await manager.last_action
            print(f"Logged {name}.")

        elif choice == 2:
            timestamps = service.get_timestamps()
            if not timestamps:
                print("No timestamps recorded.")
            for key, value in timestamps.items():
                print(
                    f"- {key} | impressions={len(value.impressions)} | "
                    f"dismissals={len(value.dismissals)} | completions={len(value.completions)}"
                )

        elif choice == 3:
            chosen = service.next_intervention(funnel, cap_config)
            # Let the diagnostics logged during selection print first.
            if manager.last_action is not None:
                await manager.last_action
            if chosen is None:
                print("No intervention may be shown right now.")
            else:
                print(f"Next intervention: {chosen.config_id} ({chosen.type}, {chosen.closability.value})")

        elif choice == 4:
            print("Goodbye.")
            return

        else:
            print("Invalid choice. Please try again.")


def run(config_path: str = "swg_config.json", log_level: int = logging.WARNING) -> None:
    setup_logger(level=log_level)
    try:
        asyncio.run(_run(config_path))
    except KeyboardInterrupt:
        print("\nExiting...")
    except ValueError as e:
        print(f"Fatal configuration error: {e}")


def main() -> None:
    run(os.environ.get("SWG_CONFIG_PATH", "swg_config.json"))


if __name__ == "__main__":
    main()
