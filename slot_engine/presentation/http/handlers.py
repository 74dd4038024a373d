"""HTTP REST handlers for the slot engine"""
import json
import logging
import sentry_sdk
from tornado import web
from tornado.ioloop import IOLoop
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST

from slot_engine.application.dto.spin_request import SpinRequest
from slot_engine.application.dto.simulation_request import SimulationRequest
from slot_engine.application.use_cases.spin_use_case import SpinUseCase
from slot_engine.application.use_cases.simulate_rtp_use_case import SimulateRtpUseCase
from slot_engine.domain.exceptions import InvalidInputError, SlotEngineException
from slot_engine.infrastructure.audio.sound_cue_recorder import SoundCueRecorder

logger = logging.getLogger(__name__)


class HealthHandler(web.RequestHandler):
    """Health check endpoint"""

    def get(self):
        self.write({"status": "ok"})


class MetricsHandler(web.RequestHandler):
    """Prometheus metrics endpoint"""

    def get(self):
        self.set_header('Content-Type', CONTENT_TYPE_LATEST)
        self.write(generate_latest())


class JsonHandler(web.RequestHandler):
    """Shared JSON body parsing and error mapping"""

    def read_json(self) -> dict:
        try:
            data = json.loads(self.request.body or b'{}')
        except ValueError as e:
            raise InvalidInputError("Request body is not valid JSON", {"reason": str(e)}, status_code=400)
        if not isinstance(data, dict):
            raise InvalidInputError("Request body must be a JSON object", status_code=400)
        return data

    def write_exception(self, e: Exception):
        if isinstance(e, SlotEngineException):
            if e.status_code >= 500:
                sentry_sdk.capture_exception(e)
            self.set_status(e.status_code)
            self.write(e.to_dict())
            return
        logger.exception(f"Unhandled error in {self.request.method} {self.request.path}")
        sentry_sdk.capture_exception(e)
        self.set_status(500)
        self.write({"error": str(e)})


class SpinHandler(JsonHandler):
    """HTTP REST handler for spins"""

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    async def post(self):
        """POST /spin - Play one spin"""
        sentry_trace = self.request.headers.get("sentry-trace", "")
        baggage = self.request.headers.get("baggage", "")

        transaction = sentry_sdk.continue_trace({
            "sentry-trace": sentry_trace,
            "baggage": baggage
        }, op="game.spin", name="spin")

        with sentry_sdk.start_transaction(transaction):
            try:
                data = self.read_json()
                # Browser clients post camelCase and get camelCase back
                browser = 'sessionId' in data
                request = SpinRequest.from_dict(data) if browser else SpinRequest.from_snake_case(data)
                sentry_sdk.set_user({"id": request.session_id})

                current_span = sentry_sdk.get_current_span()
                trace_headers = {
                    'sentry-trace': current_span.to_traceparent() if current_span else '',
                    'baggage': sentry_sdk.get_baggage() or ''
                }

                response = await self.spin_use_case.execute_with_reveal(request, trace_headers=trace_headers)
                self.set_status(200)
                self.write(response.to_dict() if browser else response.to_snake_case())

            except Exception as e:
                self.write_exception(e)


class PaytableHandler(JsonHandler):

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    def get(self):
        """GET /paytable - Symbols, pay-lines and bet options"""
        self.write(self.spin_use_case.get_paytable())


class WeightsHandler(JsonHandler):

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    def get(self, session_id):
        """GET /weights/<session> - Live draw probabilities"""
        try:
            weights = self.spin_use_case.get_current_weights(session_id)
            self.write({
                "session_id": session_id,
                "weights": {symbol.name: weight for symbol, weight in weights.items()}
            })
        except Exception as e:
            self.write_exception(e)


class SessionHandler(JsonHandler):

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    def get(self, session_id):
        """GET /session/<session> - Balance, jackpot pool and adaptive state"""
        try:
            session = self.spin_use_case.get_session(session_id)
            self.write({**session.to_dict(), "realized_rtp": session.game_state.realized_rtp})
        except Exception as e:
            self.write_exception(e)


class ResetHandler(JsonHandler):

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    def post(self):
        """POST /reset - Restore starting balance and jackpot pool"""
        try:
            session_id = self.read_json().get('session_id')
            if not session_id:
                raise InvalidInputError("session_id is required", status_code=400)
            session = self.spin_use_case.reset(session_id)
            self.write({
                "session_id": session.session_id,
                "balance": session.balance,
                "jackpot_pool": session.jackpot_pool
            })
        except Exception as e:
            self.write_exception(e)


class IntroHandler(JsonHandler):

    def initialize(self, spin_use_case: SpinUseCase):
        self.spin_use_case = spin_use_case

    def get(self, session_id):
        """GET /intro/<session> - True only on the first call per session"""
        self.write({"show_intro": self.spin_use_case.consume_intro(session_id)})


class SoundCuesHandler(JsonHandler):

    def initialize(self, sound_cues: SoundCueRecorder):
        self.sound_cues = sound_cues

    def get(self, session_id):
        """GET /sounds/<session> - Drain queued sound cues"""
        self.write({"session_id": session_id, "cues": self.sound_cues.drain(session_id)})


class SimulateHandler(JsonHandler):

    def initialize(self, simulate_use_case: SimulateRtpUseCase):
        self.simulate_use_case = simulate_use_case

    async def post(self):
        """POST /simulate - Monte Carlo RTP measurement"""
        with sentry_sdk.start_transaction(op="game.simulate", name="simulate_rtp"):
            try:
                try:
                    request = SimulationRequest.from_snake_case(self.read_json())
                except (TypeError, ValueError) as e:
                    raise InvalidInputError("Invalid simulation parameters", {"reason": str(e)})
                result = await IOLoop.current().run_in_executor(None, self.simulate_use_case.execute, request)
                self.write(result.to_dict())
            except Exception as e:
                self.write_exception(e)
