import json
import random
from dataclasses import replace
from unittest.mock import MagicMock

from tornado.testing import AsyncHTTPTestCase

from slot_engine.application.use_cases.simulate_rtp_use_case import SimulateRtpUseCase
from slot_engine.application.use_cases.spin_use_case import SpinUseCase
from slot_engine.config.settings import EngineConfig
from slot_engine.infrastructure.audio.sound_cue_recorder import SoundCueRecorder
from slot_engine.infrastructure.persistence.in_memory_session_repository import InMemorySessionRepository
from slot_engine.infrastructure.persistence.in_memory_session_store import InMemorySessionStore
from slot_engine.main import make_app


class HandlerTestCase(AsyncHTTPTestCase):

    starting_balance = 100

    def get_app(self):
        config = EngineConfig()
        config = replace(config, game=replace(config.game, starting_balance=self.starting_balance))
        self.sound_cues = SoundCueRecorder()
        container = MagicMock()
        container.get_spin_use_case.return_value = SpinUseCase(
            config=config,
            session_repository=InMemorySessionRepository(),
            audio=self.sound_cues,
            session_store=InMemorySessionStore(),
            rng=random.Random(5)
        )
        container.get_simulate_use_case.return_value = SimulateRtpUseCase(config)
        container.get_sound_cues.return_value = self.sound_cues
        return make_app(container)

    def post_json(self, path, payload):
        body = payload if isinstance(payload, str) else json.dumps(payload)
        return self.fetch(path, method='POST', body=body)

    def json_body(self, response):
        return json.loads(response.body)


class TestSpinHandlers(HandlerTestCase):

    def test_health(self):
        response = self.fetch('/health')
        self.assertEqual(response.code, 200)
        self.assertEqual(self.json_body(response), {"status": "ok"})

    def test_spin(self):
        response = self.post_json('/spin', {"session_id": "s1", "bet_per_line": 1, "active_lines": [0, 1]})
        self.assertEqual(response.code, 200)
        body = self.json_body(response)
        self.assertEqual(len(body["grid"]), 3)
        self.assertEqual(body["total_bet"], 2)
        self.assertIn("winnings", body["win_result"])
        expected = 100 - 2 + body["win_result"]["winnings"] + body.get("pool_awarded", 0)
        self.assertAlmostEqual(body["updated_balance"], expected)

    def test_spin_camel_case_client(self):
        response = self.post_json('/spin', {"sessionId": "s2", "betPerLine": 2, "activeLines": [1]})
        self.assertEqual(response.code, 200)
        body = self.json_body(response)
        self.assertEqual(body["totalBet"], 2)
        self.assertIn("jackpotPool", body)

    def test_spin_with_bet_mode(self):
        response = self.post_json('/spin', {"sessionId": "s3", "betMode": "Standard Bet"})
        self.assertEqual(response.code, 200)
        self.assertEqual(self.json_body(response)["totalBet"], 15)

        response = self.post_json('/spin', {"session_id": "s3", "bet_mode": "Jackpot Only"})
        self.assertEqual(response.code, 422)
        self.assertEqual(self.json_body(response)["error_code"], "INVALID_BET")

    def test_spin_rejects_malformed_json(self):
        response = self.post_json('/spin', '{"session_id": ')
        self.assertEqual(response.code, 400)
        self.assertEqual(self.json_body(response)["error_code"], "INVALID_INPUT")

    def test_spin_rejects_bad_line(self):
        response = self.post_json('/spin', {"session_id": "s1", "bet_per_line": 1, "active_lines": [8]})
        self.assertEqual(response.code, 422)
        self.assertEqual(self.json_body(response)["error_code"], "INVALID_LINE_INDEX")

    def test_session_and_weights(self):
        self.post_json('/spin', {"session_id": "s1", "bet_per_line": 1})

        session = self.json_body(self.fetch('/session/s1'))
        self.assertEqual(session["session_id"], "s1")
        self.assertEqual(session["game_state"]["session_spins"], 1)
        self.assertFalse(session["is_spinning"])
        self.assertIn("realized_rtp", session)

        weights = self.json_body(self.fetch('/weights/s1'))["weights"]
        self.assertAlmostEqual(sum(weights.values()), 1.0)
        self.assertIn("FUEL", weights)

    def test_paytable(self):
        body = self.json_body(self.fetch('/paytable'))
        self.assertEqual(len(body["symbols"]), 6)
        self.assertEqual(len(body["paylines"]), 8)
        self.assertEqual(len(body["line_selections"]), 4)
        self.assertEqual(body["bet_modes"][0]["name"], "Safe Bet")

    def test_reset(self):
        self.post_json('/spin', {"session_id": "s1", "bet_per_line": 5, "active_lines": [0, 1, 2]})
        response = self.post_json('/reset', {"session_id": "s1"})
        self.assertEqual(response.code, 200)
        self.assertEqual(self.json_body(response)["balance"], 100)

        self.assertEqual(self.post_json('/reset', {}).code, 400)

    def test_intro_once(self):
        self.assertTrue(self.json_body(self.fetch('/intro/s1'))["show_intro"])
        self.assertFalse(self.json_body(self.fetch('/intro/s1'))["show_intro"])

    def test_sound_cues_drained(self):
        self.post_json('/spin', {"session_id": "s1", "bet_per_line": 1})
        cues = self.json_body(self.fetch('/sounds/s1'))["cues"]
        self.assertEqual(cues[0], "spin")
        self.assertEqual(self.json_body(self.fetch('/sounds/s1'))["cues"], [])

    def test_simulate(self):
        response = self.post_json('/simulate', {"spins": 300, "seed": 3})
        self.assertEqual(response.code, 200)
        body = self.json_body(response)
        self.assertEqual(body["spins"], 300)
        self.assertIn("rtp", body)

        self.assertEqual(self.post_json('/simulate', {"spins": 0}).code, 422)
        self.assertEqual(self.post_json('/simulate', {"spins": "many"}).code, 422)

    def test_metrics(self):
        self.post_json('/spin', {"session_id": "s1", "bet_per_line": 1})
        response = self.fetch('/metrics')
        self.assertEqual(response.code, 200)
        self.assertIn(b'slot_spins_total', response.body)


class TestInsufficientFunds(HandlerTestCase):

    starting_balance = 5

    def test_spin_over_balance(self):
        response = self.post_json('/spin', {"session_id": "s1", "bet_per_line": 10, "active_lines": [1]})
        self.assertEqual(response.code, 400)
        self.assertEqual(self.json_body(response)["error_code"], "INSUFFICIENT_FUNDS")
        self.assertEqual(self.json_body(self.fetch('/session/s1'))["balance"], 5)
