"""Spin use case: the per-spin orchestration"""
import asyncio
import copy
import logging
import random
import time
from dataclasses import replace
from typing import Callable, Dict, List, Optional, Tuple

import sentry_sdk
from sentry_sdk import start_span

from slot_engine.application.dto.spin_request import SpinRequest
from slot_engine.application.dto.spin_response import SpinResponse
from slot_engine.application.ports.audio_port import AudioPort
from slot_engine.application.ports.message_publisher_port import MessagePublisherPort
from slot_engine.application.ports.session_repository_port import SessionRepositoryPort
from slot_engine.application.ports.session_store_port import SessionStorePort
from slot_engine.application.ports.spin_history_port import SpinHistoryPort
from slot_engine.config.settings import EngineConfig
from slot_engine.domain.entities.game_session import GameSession
from slot_engine.domain.entities.paylines import PAYLINES
from slot_engine.domain.entities.spin_record import SpinRecord
from slot_engine.domain.entities.symbols import Symbol, SymbolConfig
from slot_engine.domain.entities.win_result import WinResult
from slot_engine.domain.exceptions import (
    InsufficientFundsError,
    InvalidBetError,
    SpinInProgressError
)
from slot_engine.domain.services.spin_engine import SpinEngine
from slot_engine.metrics import BusinessMetrics

logger = logging.getLogger(__name__)

INTRO_FLAG = 'has_seen_intro'


class SpinUseCase:
    """Use case for playing slot spins"""

    def __init__(
        self,
        config: EngineConfig,
        session_repository: SessionRepositoryPort,
        spin_history: Optional[SpinHistoryPort] = None,
        message_publisher: Optional[MessagePublisherPort] = None,
        audio: Optional[AudioPort] = None,
        session_store: Optional[SessionStorePort] = None,
        rng: Optional[random.Random] = None,
        clock: Callable[[], float] = time.time
    ):
        self.config = config
        self.catalog = config.catalog
        self.session_repository = session_repository
        self.spin_history = spin_history
        self.message_publisher = message_publisher
        self.audio = audio
        self.session_store = session_store
        self.clock = clock
        self.engine = SpinEngine(config, rng=rng, clock=clock)

    def execute(self, request: SpinRequest, trace_headers: Optional[Dict[str, str]] = None) -> SpinResponse:
        """Play one spin; invalid requests raise before any state changes"""
        request, bonus_multiplier = self._resolve_bet_mode(request)
        session = self._begin_spin(request)
        try:
            return self._settle(session, request, bonus_multiplier, trace_headers)
        finally:
            self._end_spin(session)

    async def execute_with_reveal(
        self,
        request: SpinRequest,
        reveal_delay: Optional[float] = None,
        trace_headers: Optional[Dict[str, str]] = None
    ) -> SpinResponse:
        """Play a spin and hold the session until the reels have been revealed"""
        delay = self.config.game.reveal_delay_seconds if reveal_delay is None else reveal_delay
        request, bonus_multiplier = self._resolve_bet_mode(request)
        session = self._begin_spin(request)
        try:
            response = self._settle(session, request, bonus_multiplier, trace_headers)
            if delay > 0:
                await asyncio.sleep(delay)
            return response
        finally:
            self._end_spin(session)

    def get_session(self, session_id: str) -> GameSession:
        session = self.session_repository.find(session_id)
        if session is None:
            session = self._new_session(session_id)
            self.session_repository.save(session)
        return session

    def get_symbol_config(self, symbol) -> Optional[SymbolConfig]:
        """Paytable lookup; None for symbols the catalog does not know"""
        try:
            return self.catalog.get(Symbol.parse(symbol))
        except ValueError:
            return None

    def get_current_weights(self, session_id: str) -> Dict[Symbol, float]:
        return dict(self.get_session(session_id).game_state.current_weights)

    def get_paytable(self) -> dict:
        return {
            **self.catalog.to_dict(),
            "paylines": [line.to_dict() for line in PAYLINES],
            "line_selections": self.config.game.line_selections,
            "credit_multipliers": self.config.game.credit_multipliers,
            "bet_modes": self.config.game.bet_modes,
        }

    def reset(self, session_id: str) -> GameSession:
        """Restore the starting balance and jackpot pool"""
        session = self.get_session(session_id)
        self._check_spin_guard(session)
        session.is_spinning = False
        session.spin_started_at = None
        session.balance = self.config.game.starting_balance
        session.jackpot_pool = self.config.game.jackpot_pool_seed
        session.updated_at = self.clock()
        self.session_repository.save(session)
        logger.info(f"Session {session_id} reset to balance {session.balance}")
        return session

    def consume_intro(self, session_id: str) -> bool:
        """True exactly once per session: whether to show the intro"""
        if self.session_store is None:
            return False
        if self.session_store.get_flag(session_id, INTRO_FLAG):
            return False
        self.session_store.set_flag(session_id, INTRO_FLAG, True)
        return True

    def _new_session(self, session_id: str) -> GameSession:
        return GameSession(
            session_id=session_id,
            balance=self.config.game.starting_balance,
            jackpot_pool=self.config.game.jackpot_pool_seed,
            game_state=self.engine.new_state()
        )

    def _resolve_bet_mode(self, request: SpinRequest) -> Tuple[SpinRequest, float]:
        """Expand a bet-mode request into its bet and lines; returns the bonus multiplier too"""
        if request.bet_mode is None:
            return request, 1.0
        mode = None
        if isinstance(request.bet_mode, str):
            mode = self.config.game.find_bet_mode(request.bet_mode)
        if mode is None:
            raise InvalidBetError(
                f"Unknown bet mode: {request.bet_mode!r}",
                {"bet_modes": [m["name"] for m in self.config.game.bet_modes]}
            )
        resolved = replace(
            request,
            bet_per_line=mode["bet_per_line"],
            active_lines=list(mode["lines"]),
            bet_mode=mode["name"]
        )
        return resolved, mode.get("bonus_multiplier", 1.0)

    def _validate(self, request: SpinRequest) -> None:
        self.engine.evaluator.validate(request.active_lines, request.bet_per_line)
        # Bet modes carry their own configured stake
        if request.bet_mode is not None:
            return
        allowed = self.config.game.credit_multipliers
        if allowed and request.bet_per_line not in allowed:
            raise InvalidBetError(
                f"Bet per line must be one of {allowed}",
                {"bet_per_line": request.bet_per_line}
            )

    def _check_spin_guard(self, session: GameSession) -> None:
        if session.spin_in_progress(self.clock(), self.config.game.spin_timeout_seconds):
            raise SpinInProgressError(details={"session_id": session.session_id})
        if session.is_spinning:
            logger.warning(
                f"Releasing abandoned spin guard on session {session.session_id} "
                f"(started at {session.spin_started_at})"
            )

    def _begin_spin(self, request: SpinRequest) -> GameSession:
        self._validate(request)
        session = self.get_session(request.session_id)

        self._check_spin_guard(session)
        if not session.can_afford(request.total_bet):
            raise InsufficientFundsError(details={
                "balance": session.balance,
                "total_bet": request.total_bet
            })

        session.is_spinning = True
        session.spin_started_at = self.clock()
        self.session_repository.save(session)
        return session

    def _end_spin(self, session: GameSession) -> None:
        session.is_spinning = False
        session.spin_started_at = None
        session.updated_at = self.clock()
        self.session_repository.save(session)

    def _settle(self, session: GameSession, request: SpinRequest, bonus_multiplier: float,
                trace_headers: Optional[Dict[str, str]]) -> SpinResponse:
        """Run the spin; on failure the debit and controller updates are rolled back"""
        balance, jackpot_pool = session.balance, session.jackpot_pool
        game_state = copy.deepcopy(session.game_state)
        try:
            return self._play(session, request, bonus_multiplier, trace_headers)
        except Exception:
            session.balance = balance
            session.jackpot_pool = jackpot_pool
            session.game_state = game_state
            logger.error(f"Spin on session {session.session_id} failed, balance restored to {balance}")
            raise

    def _play(self, session: GameSession, request: SpinRequest, bonus_multiplier: float,
              trace_headers: Optional[Dict[str, str]]) -> SpinResponse:
        total_bet = request.total_bet
        session.balance -= total_bet
        session.jackpot_pool += total_bet * self.config.game.jackpot_contribution_rate

        with start_span(op="game.rng", name="Draw and evaluate grid") as span:
            outcome = self.engine.play_round(
                session.game_state, request.active_lines, request.bet_per_line, bonus_multiplier
            )
            span.set_data("near_miss_columns", outcome.near_miss_columns)
            span.set_data("winnings", outcome.win.winnings)

        win = outcome.win
        session.balance += win.winnings

        pool_awarded = 0
        if win.jackpot and self.config.game.award_pool_on_jackpot:
            pool_awarded = session.jackpot_pool
            session.balance += pool_awarded
            session.jackpot_pool = self.config.game.jackpot_pool_seed
            logger.info(f"Session {session.session_id} won the jackpot pool of {pool_awarded}")

        with start_span(op="db.save", name="Store session") as span:
            self.session_repository.save(session)
            span.set_data("balance", session.balance)

        # Settled: everything below is best effort
        self._play_sound(session.session_id, 'spin')
        self._play_win_sounds(session.session_id, win)

        record = SpinRecord(
            session_id=session.session_id,
            bet_per_line=request.bet_per_line,
            total_bet=total_bet,
            lines=list(request.active_lines),
            grid=outcome.grid.to_list(),
            winnings=win.winnings + pool_awarded,
            jackpot=win.jackpot,
            jackpot_payout=win.jackpot_payout,
            bet_mode=request.bet_mode
        )
        self._store_record(record)
        self._publish(record, trace_headers)
        self._track_metrics(session, record, win, len(outcome.near_miss_columns))

        sentry_sdk.set_tag("game.win", str(win.winnings > 0))

        return SpinResponse(
            grid=outcome.grid,
            win_result=win,
            total_bet=total_bet,
            updated_balance=session.balance,
            updated_jackpot_pool=session.jackpot_pool,
            pool_awarded=pool_awarded,
            near_miss_columns=outcome.near_miss_columns
        )

    def _store_record(self, record: SpinRecord) -> None:
        if not self.spin_history:
            return
        with start_span(op="db.insert", name="Store spin record") as span:
            span.set_data("db.system", "mongodb")
            span.set_data("db.collection", "spins")
            try:
                self.spin_history.save(record)
            except Exception as db_error:
                logger.error(f"Failed to store spin record: {db_error}")
                span.set_tag("db.error", str(db_error))
                sentry_sdk.capture_exception(db_error)

    def _publish(self, record: SpinRecord, trace_headers: Optional[Dict[str, str]]) -> None:
        if not self.message_publisher:
            return
        with start_span(op="mq.publish", name="Publish spin result") as mq_span:
            try:
                self.message_publisher.publish_spin_result(record.to_dict(), trace_headers or {})
                mq_span.set_tag("mq.published", "true")
            except Exception as mq_error:
                logger.error(f"Failed to publish spin result: {mq_error}")
                mq_span.set_tag("mq.published", "false")
                mq_span.set_tag("mq.error", str(mq_error))
                sentry_sdk.capture_exception(mq_error)

    def _play_sound(self, session_id: str, cue: str) -> None:
        if self.audio:
            self.audio.play(session_id, cue)

    def _play_win_sounds(self, session_id: str, win: WinResult) -> None:
        for cue in self._win_cues(win):
            self._play_sound(session_id, cue)

    def _win_cues(self, win: WinResult) -> List[str]:
        if win.jackpot:
            return ['winJackpot']
        if not win.lines:
            return []
        config = self.catalog.config_for(win.lines[0].symbol)
        return [config.sound or f"win{config.symbol.name.title()}"]

    def _track_metrics(self, session: GameSession, record: SpinRecord, win: WinResult,
                       near_miss_columns: int) -> None:
        with start_span(op="metrics.track", name="Track business metrics"):
            try:
                BusinessMetrics.track_spin(
                    record.total_bet, record.winnings, win.jackpot, win.jackpot_paid, near_miss_columns
                )
                BusinessMetrics.track_state(
                    session.game_state.current_rtp, session.jackpot_pool, session.game_state.jackpot_weight
                )
                if self.spin_history:
                    stats = self.spin_history.get_session_stats(session.session_id, hours=1)
                    if stats:
                        BusinessMetrics.track_rtp(stats['total_bets'], stats['total_payouts'], period="session")
            except Exception as metrics_error:
                logger.error(f"Failed to track spin metrics: {metrics_error}")
                sentry_sdk.capture_exception(metrics_error)
