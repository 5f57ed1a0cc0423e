import asyncio
import time
import unittest
from unittest import mock

from api_messages import AnalyticsEvent
from client_event_manager import ClientEventManager
from orchestration import Closability, Duration, FrequencyCap, FrequencyCapConfig, InterventionFunnel, InterventionOrchestration
from services import InterventionService
from storage import TIMESTAMPS_STORAGE_KEY, MemoryStorage

NOW = int(time.time() * 1000)


class InterventionServiceTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        ready = asyncio.get_running_loop().create_future()
        ready.set_result(None)
        self.manager = ClientEventManager(ready)
        self.storage = MemoryStorage()
        self.service = InterventionService(self.manager, self.storage)
        self.events = []
        self.manager.register_event_listener(lambda event, params: self.events.append(event.event_type))

        patcher = mock.patch("frequency_capping.now_ms", return_value=NOW)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.funnel = InterventionFunnel(
            interventions=[
                InterventionOrchestration(
                    config_id="contribution_config",
                    type="TYPE_CONTRIBUTION",
                    prompt_frequency_cap=FrequencyCap(Duration(seconds=3600)),
                ),
                InterventionOrchestration(
                    config_id="survey_config",
                    type="TYPE_REWARDED_SURVEY",
                    prompt_frequency_cap=FrequencyCap(Duration(seconds=3600)),
                ),
            ]
        )
        self.config = FrequencyCapConfig(global_frequency_cap=FrequencyCap(Duration(seconds=60)))

    async def _log(self, event_type, configuration_id=None, event_time=NOW - 1000) -> None:
        self.manager.log_swg_event(event_type, True, None, event_time, configuration_id)
        await self.manager.last_action

    async def test_records_impressions_dismissals_and_completions(self) -> None:
        await self._log(AnalyticsEvent.IMPRESSION_CONTRIBUTION_OFFERS)
        await self._log(AnalyticsEvent.ACTION_CONTRIBUTION_OFFERS_CLOSED, event_time=NOW - 900)
        await self._log(AnalyticsEvent.ACTION_SURVEY_SUBMIT_CLICK, event_time=NOW - 800)
        await self._log(AnalyticsEvent.IMPRESSION_PAYWALL)

        timestamps = self.service.get_timestamps()
        self.assertEqual(set(timestamps), {"TYPE_CONTRIBUTION", "TYPE_REWARDED_SURVEY"})
        self.assertEqual(timestamps["TYPE_CONTRIBUTION"].impressions, [NOW - 1000])
        self.assertEqual(timestamps["TYPE_CONTRIBUTION"].dismissals, [NOW - 900])
        self.assertEqual(timestamps["TYPE_REWARDED_SURVEY"].completions, [NOW - 800])

    async def test_cta_triggered_impressions_not_recorded(self) -> None:
        await self._log(AnalyticsEvent.ACTION_SWG_BUTTON_SHOW_OFFERS_CLICK)
        await self._log(AnalyticsEvent.IMPRESSION_OFFERS)
        await self._log(AnalyticsEvent.EVENT_SUBSCRIPTION_PAYMENT_COMPLETE)

        timestamps = self.service.get_timestamps()
        self.assertEqual(timestamps["TYPE_SUBSCRIPTION"].impressions, [])
        self.assertEqual(timestamps["TYPE_SUBSCRIPTION"].completions, [NOW - 1000])

    async def test_experiment_records_by_configuration_id(self) -> None:
        service = InterventionService(self.manager, MemoryStorage(), multi_instance_cta_experiment=True)
        await self._log(AnalyticsEvent.IMPRESSION_SURVEY, configuration_id="survey_config")
        await self._log(AnalyticsEvent.ACTION_SURVEY_CLOSED)

        timestamps = service.get_timestamps()
        self.assertEqual(timestamps["survey_config"].impressions, [NOW - 1000])
        self.assertEqual(timestamps["TYPE_REWARDED_SURVEY"].dismissals, [NOW - 1000])

    async def test_corrupt_history_reported_and_ignored(self) -> None:
        self.storage.set(TIMESTAMPS_STORAGE_KEY, "{broken")

        self.assertEqual(self.service.get_timestamps(), {})
        await self.manager.last_action
        self.assertEqual(self.events, [AnalyticsEvent.EVENT_LOCAL_STORAGE_TIMESTAMPS_PARSING_ERROR])

    async def test_store_helpers_append(self) -> None:
        self.service.store_impression("TYPE_REWARDED_AD", NOW - 3)
        self.service.store_dismissal("TYPE_REWARDED_AD", NOW - 2)
        self.service.store_completion("TYPE_REWARDED_AD", NOW - 1)
        self.service.store_completion("TYPE_REWARDED_AD", NOW)

        entry = self.service.get_timestamps()["TYPE_REWARDED_AD"]
        self.assertEqual(entry.impressions, [NOW - 3])
        self.assertEqual(entry.dismissals, [NOW - 2])
        self.assertEqual(entry.completions, [NOW - 1, NOW])

    async def test_next_intervention_follows_recorded_history(self) -> None:
        self.assertEqual(self.service.next_intervention(self.funnel, self.config).config_id, "contribution_config")

        # Dismissed long enough ago to clear the global cap, recently enough for the prompt cap.
        await self._log(AnalyticsEvent.ACTION_SWG_CONTRIBUTION_MINI_PROMPT_CLOSE, event_time=NOW - 120000)
        chosen = self.service.next_intervention(self.funnel, self.config)
        await self.manager.last_action

        self.assertEqual(chosen.config_id, "survey_config")
        self.assertIn(AnalyticsEvent.EVENT_PROMPT_FREQUENCY_CAP_MET, self.events)

    async def test_next_intervention_suppressed_by_global_cap(self) -> None:
        await self._log(AnalyticsEvent.IMPRESSION_NEWSLETTER_OPT_IN)

        self.assertIsNone(self.service.next_intervention(self.funnel, self.config))
        await self.manager.last_action
        self.assertEqual(self.events[-1], AnalyticsEvent.EVENT_GLOBAL_FREQUENCY_CAP_MET)

    async def test_next_intervention_without_config_fails_open(self) -> None:
        await self._log(AnalyticsEvent.ACTION_SWG_CONTRIBUTION_MINI_PROMPT_CLOSE)

        chosen = self.service.next_intervention(self.funnel, FrequencyCapConfig())
        await self.manager.last_action

        self.assertEqual(chosen.config_id, "contribution_config")
        self.assertEqual(
            self.events.count(AnalyticsEvent.EVENT_FREQUENCY_CAP_CONFIG_NOT_FOUND_ERROR), 1
        )

    async def test_cta_flag_cleared_when_intervention_chosen(self) -> None:
        await self._log(AnalyticsEvent.ACTION_SWG_BUTTON_SHOW_OFFERS_CLICK)
        await self._log(AnalyticsEvent.IMPRESSION_OFFERS)
        self.assertEqual(self.service.get_timestamps(), {})

        self.assertIsNotNone(self.service.next_intervention(self.funnel, self.config))
        await self._log(AnalyticsEvent.IMPRESSION_OFFERS, event_time=NOW - 500)

        timestamps = self.service.get_timestamps()
        self.assertIn("TYPE_SUBSCRIPTION", timestamps)
        self.assertEqual(timestamps["TYPE_SUBSCRIPTION"].impressions, [NOW - 500])

    async def test_mini_prompt_then_full_prompt_records_one_impression(self) -> None:
        await self._log(AnalyticsEvent.IMPRESSION_SWG_CONTRIBUTION_MINI_PROMPT)
        await self._log(AnalyticsEvent.IMPRESSION_CONTRIBUTION_OFFERS, event_time=NOW - 900)
        await self._log(AnalyticsEvent.IMPRESSION_SURVEY, event_time=NOW - 800)

        timestamps = self.service.get_timestamps()
        self.assertEqual(timestamps["TYPE_CONTRIBUTION"].impressions, [NOW - 1000])
        self.assertEqual(timestamps["TYPE_REWARDED_SURVEY"].impressions, [NOW - 800])

        # A newly chosen prompt gets its own impression.
        self.service.next_intervention(self.funnel, FrequencyCapConfig())
        await self._log(AnalyticsEvent.IMPRESSION_CONTRIBUTION_OFFERS, event_time=NOW - 700)
        self.assertEqual(
            self.service.get_timestamps()["TYPE_CONTRIBUTION"].impressions, [NOW - 1000, NOW - 700]
        )

    async def test_blocking_prompt_events_not_recorded(self) -> None:
        funnel = InterventionFunnel(
            interventions=[
                InterventionOrchestration(
                    config_id="regwall_config",
                    type="TYPE_REGISTRATION_WALL",
                    closability=Closability.BLOCKING,
                ),
            ]
        )
        chosen = self.service.next_intervention(funnel, FrequencyCapConfig())
        self.assertEqual(chosen.config_id, "regwall_config")

        await self._log(AnalyticsEvent.IMPRESSION_REGWALL_OPT_IN)
        await self._log(AnalyticsEvent.ACTION_REGWALL_OPT_IN_CLOSE)
        self.assertEqual(self.service.get_timestamps(), {})

        # Switching back to a dismissible prompt resumes recording.
        self.service.next_intervention(self.funnel, FrequencyCapConfig())
        await self._log(AnalyticsEvent.IMPRESSION_REGWALL_OPT_IN)
        self.assertEqual(self.service.get_timestamps()["TYPE_REGISTRATION_WALL"].impressions, [NOW - 1000])


if __name__ == "__main__":
    unittest.main(verbosity=2)
