import json
import unittest

from orchestration import (
    Closability,
    Duration,
    FrequencyCapConfig,
    InterventionFunnel,
    InterventionOrchestration,
)
from timestamps import (
    TWO_WEEKS_IN_MILLIS,
    ActionTimestamps,
    is_valid_actions_timestamps,
    parse_actions_timestamps,
    prune_timestamps,
    serialize_actions_timestamps,
)

NOW = 1_700_000_000_000


class ActionsTimestampsTests(unittest.TestCase):
    def test_shape_validation(self) -> None:
        good = {"TYPE_CONTRIBUTION": {"impressions": [1, 2.5], "dismissals": [], "completions": [3]}}
        self.assertTrue(is_valid_actions_timestamps(good))
        self.assertTrue(is_valid_actions_timestamps({}))

        self.assertFalse(is_valid_actions_timestamps([]))
        self.assertFalse(is_valid_actions_timestamps({"k": {"impressions": [], "dismissals": []}}))
        self.assertFalse(
            is_valid_actions_timestamps({"k": {"impressions": ["x"], "dismissals": [], "completions": []}})
        )
        self.assertFalse(
            is_valid_actions_timestamps(
                {"k": {"impressions": [], "dismissals": [], "completions": [], "extra": []}}
            )
        )

    def test_prune_drops_old_entries_in_any_order(self) -> None:
        old = NOW - TWO_WEEKS_IN_MILLIS - 1
        edge = NOW - TWO_WEEKS_IN_MILLIS
        self.assertEqual(prune_timestamps([NOW - 5, old, edge], now=NOW), [NOW - 5, edge])
        self.assertEqual(prune_timestamps([NOW - 2000, NOW - 500], max_age_ms=1000, now=NOW), [NOW - 500])

    def test_parse_empty(self) -> None:
        self.assertEqual(parse_actions_timestamps(None), {})
        self.assertEqual(parse_actions_timestamps(""), {})

    def test_parse_prunes_each_list(self) -> None:
        old = NOW - TWO_WEEKS_IN_MILLIS - 1
        raw = json.dumps(
            {"TYPE_SUBSCRIPTION": {"impressions": [old, NOW - 1], "dismissals": [old], "completions": [NOW - 2]}}
        )
        parsed = parse_actions_timestamps(raw, now=NOW)
        self.assertEqual(
            parsed["TYPE_SUBSCRIPTION"],
            ActionTimestamps(impressions=[NOW - 1], dismissals=[], completions=[NOW - 2]),
        )

    def test_parse_rejects_corrupt_values(self) -> None:
        with self.assertRaises(ValueError):
            parse_actions_timestamps("{not json")
        with self.assertRaises(ValueError):
            parse_actions_timestamps(json.dumps({"k": {"impressions": []}}))

    def test_serialize_is_readable_by_parse(self) -> None:
        timestamps = {"TYPE_SUBSCRIPTION": ActionTimestamps(impressions=[NOW], completions=[NOW - 1])}
        self.assertEqual(parse_actions_timestamps(serialize_actions_timestamps(timestamps), now=NOW), timestamps)


class RemoteConfigTests(unittest.TestCase):
    def test_funnel_from_dict(self) -> None:
        funnel = InterventionFunnel.from_dict(
            {
                "globalFrequencyCap": {"duration": {"seconds": 300}},
                "interventions": [
                    {
                        "configId": "c1",
                        "type": "TYPE_CONTRIBUTION",
                        "closability": "BLOCKING",
                        "promptFrequencyCap": {"duration": {"seconds": 10, "nanos": -5}},
                    },
                    {"configId": "c2", "type": "TYPE_REWARDED_SURVEY"},
                ],
            }
        )
        self.assertEqual(funnel.global_duration, Duration(seconds=300))
        first, second = funnel.interventions
        self.assertEqual(first.closability, Closability.BLOCKING)
        self.assertEqual(first.prompt_duration, Duration(seconds=10, nanos=-5))
        self.assertEqual(second.closability, Closability.DISMISSIBLE)
        self.assertIsNone(second.prompt_duration)

    def test_frequency_cap_config_from_dict(self) -> None:
        config = FrequencyCapConfig.from_dict(
            {"anyPromptFrequencyCap": {"frequencyCapDuration": {"nanos": 1000000}}}
        )
        self.assertIsNone(config.global_duration)
        self.assertEqual(config.any_prompt_duration, Duration(nanos=1000000))
        self.assertEqual(FrequencyCapConfig.from_dict(None), FrequencyCapConfig())
        self.assertEqual(InterventionFunnel.from_dict(None), InterventionFunnel())

    def test_malformed_config_rejected(self) -> None:
        with self.assertRaises(ValueError):
            InterventionOrchestration.from_dict({"configId": "c1", "type": "T", "closability": "SOMETIMES"})
        with self.assertRaises(ValueError):
            InterventionOrchestration.from_dict({"type": "TYPE_CONTRIBUTION"})
        with self.assertRaises(ValueError):
            Duration.from_dict({"seconds": "60"})
        with self.assertRaises(ValueError):
            FrequencyCapConfig.from_dict([])


if __name__ == "__main__":
    unittest.main(verbosity=2)
