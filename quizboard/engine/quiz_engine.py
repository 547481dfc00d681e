"""Quiz Engine - Fachada com as operacoes e consultas do quizboard."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from ..clock import Clock, SystemClock
from ..config import QuizConfig
from ..models.enums import QuizSortField
from ..models.errors import QuizResult, QuizStoreError
from ..models.schemas import (
    CreateQuizParams,
    QuizAttemptView,
    SubmitAnswersParams,
    UserAttemptView,
)
from ..models.state import LeaderboardEntry
from ..storage.quiz_store import QuizStore
from .catalog import QuizCatalog
from .event_log import EventCursor, EventLog
from .leaderboard import LeaderboardAggregator
from .scoring_engine import QuizScoringEngine
from .submission_engine import SubmissionEngine

logger = logging.getLogger(__name__)


def _entry_view(quiz_id: int, entry: LeaderboardEntry) -> UserAttemptView:
    return UserAttemptView(
        quiz_id=quiz_id,
        user=entry.user,
        score=entry.score,
        time_taken=entry.time_taken,
        completed_at=str(entry.completed_at),
    )


class QuizEngine:
    """Ponto de entrada do quizboard.

    Operacoes que alteram estado (``create_quiz`` e ``submit_answers``)
    rodam uma de cada vez sob um ``asyncio.Lock``. Consultas nao usam o lock
    e leem apenas o que ja foi gravado.

    Todas as operacoes retornam ``QuizResult``; erros nunca sao lancados.

    Example:
        >>> engine = QuizEngine(QuizStore(KVNamespace()))
        >>> result = await engine.create_quiz(params, caller="alice")
        >>> result.data
        1
    """

    def __init__(
        self,
        store: QuizStore,
        clock: Clock | None = None,
        config: QuizConfig | None = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.config = config or QuizConfig()

        self.events = EventLog(
            store,
            poll_interval=self.config.event_poll_interval,
            batch_size=self.config.event_batch_size,
        )
        self.scoring = QuizScoringEngine()
        self.leaderboard = LeaderboardAggregator()
        self.catalog = QuizCatalog(
            store, self.events, strict_correct_options=self.config.strict_correct_options
        )
        self.submissions = SubmissionEngine(
            store, self.events, scoring=self.scoring, leaderboard=self.leaderboard
        )
        self._lock = asyncio.Lock()

    # =========================================================================
    # OPERACOES
    # =========================================================================

    async def create_quiz(self, params: CreateQuizParams, caller: str | None) -> QuizResult:
        """Cria um quiz. Retorna o ID atribuido."""
        async with self._lock:
            result = await self.catalog.create_quiz(params, caller, self.clock.now_micros())
        if not result.ok:
            logger.info(f"Criacao de quiz rejeitada: {result.error.kind.value} - {result.error.message}")
        return result

    async def submit_answers(self, params: SubmitAnswersParams) -> QuizResult:
        """Envia as respostas de um usuario."""
        async with self._lock:
            result = await self.submissions.submit_answers(params, self.clock.now_micros())
        if not result.ok:
            logger.info(
                f"[Quiz {params.quiz_id}] Envio de {params.nick_name} rejeitado: "
                f"{result.error.kind.value} - {result.error.message}"
            )
        return result

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    async def get_quiz(self, quiz_id: int) -> QuizResult:
        try:
            quiz = await self.store.load_quiz(quiz_id)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)
        if quiz is None:
            return QuizResult.quiz_not_found(quiz_id)
        return QuizResult.success(quiz.to_view())

    async def list_quizzes(
        self,
        sort_by: QuizSortField = QuizSortField.ID,
        descending: bool = False,
        offset: int = 0,
        limit: int | None = None,
    ) -> QuizResult:
        """Lista quizzes com ordenacao e paginacao.

        Args:
            sort_by: Campo de ordenacao (id, title, created_at)
            descending: Ordem decrescente
            offset: Quantos quizzes pular
            limit: Tamanho da pagina (limitado por ``max_page_size``)
        """
        try:
            quizzes = await self.store.list_quizzes()
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        sort_keys: dict[QuizSortField, Any] = {
            QuizSortField.ID: lambda q: q.id,
            QuizSortField.TITLE: lambda q: (q.title.lower(), q.id),
            QuizSortField.CREATED_AT: lambda q: (q.created_at, q.id),
        }
        quizzes.sort(key=sort_keys[QuizSortField(sort_by)], reverse=descending)

        page_size = self.config.max_page_size if limit is None else min(limit, self.config.max_page_size)
        offset = max(offset, 0)
        page = quizzes[offset : offset + max(page_size, 0)]
        return QuizResult.success([q.to_view() for q in page])

    async def user_attempts(self, user: str) -> QuizResult:
        try:
            attempts = await self.store.list_attempts()
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        views = [
            QuizAttemptView(quiz_id=a.quiz_id, attempt=a.to_view())
            for a in sorted(attempts, key=lambda a: a.quiz_id)
            if a.user == user
        ]
        return QuizResult.success(views)

    async def quiz_leaderboard(self, quiz_id: int) -> QuizResult:
        """Leaderboard de um quiz recalculado a partir das tentativas."""
        try:
            attempts = await self.store.list_attempts(quiz_id)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        entries = self.leaderboard.rank_quiz([a for a in attempts if a.quiz_id == quiz_id])
        return QuizResult.success([_entry_view(quiz_id, e) for e in entries])

    async def cached_quiz_leaderboard(self, quiz_id: int) -> QuizResult:
        """Leaderboard incremental persistido (cache, nao e fonte de verdade)."""
        try:
            entries = await self.store.load_leaderboard(quiz_id)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)
        return QuizResult.success([e.to_view() for e in entries])

    async def global_leaderboard(self) -> QuizResult:
        """Ranking global: soma dos scores de todos os quizzes por usuario."""
        try:
            attempts = await self.store.list_attempts()
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        entries = self.leaderboard.rank_global(attempts)
        return QuizResult.success([_entry_view(0, e) for e in entries])

    async def user_participations(self, user: str) -> QuizResult:
        try:
            return QuizResult.success(await self.store.load_participations(user))
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

    async def user_created_quizzes(self, nick_name: str) -> QuizResult:
        try:
            quizzes = await self.store.list_quizzes()
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)
        return QuizResult.success([q.to_view() for q in quizzes if q.creator == nick_name])

    async def user_participated_quizzes(self, nick_name: str) -> QuizResult:
        """Quizzes respondidos pelo usuario, na ordem de participacao."""
        try:
            quiz_ids = await self.store.load_participations(nick_name)
            views = []
            for quiz_id in quiz_ids:
                quiz = await self.store.load_quiz(quiz_id)
                if quiz is not None:
                    views.append(quiz.to_view())
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)
        return QuizResult.success(views)

    # =========================================================================
    # EVENTOS
    # =========================================================================

    async def events_after(self, seq: int = 0, limit: int | None = None) -> QuizResult:
        """Eventos a partir de ``seq`` (inclusive)."""
        try:
            events = await self.events.read_from(seq, limit)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)
        return QuizResult.success([e.to_view() for e in events])

    def subscribe(self, from_seq: int = 0) -> EventCursor:
        """Cria um cursor para acompanhar o log de eventos."""
        return self.events.cursor(from_seq)
