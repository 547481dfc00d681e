"""Submission Engine - Admissao, correcao e registro de respostas."""

import logging

from ..models.enums import QuizEventKind
from ..models.errors import QuizResult, QuizStoreError
from ..models.schemas import SubmitAnswersParams
from ..models.state import Attempt
from ..storage.quiz_store import QuizStore, WriteBatch
from .event_log import EventLog
from .leaderboard import LeaderboardAggregator
from .scoring_engine import QuizScoringEngine

logger = logging.getLogger(__name__)


class SubmissionEngine:
    """Recebe o envio de respostas de um usuario para um quiz.

    Admissao (na ordem, primeiro erro vence):
        - quiz existe
        - ``start_time <= now <= end_time``
        - usuario ainda nao enviou respostas para o quiz
        - formato das respostas (quantidade, duplicatas, indices)

    Aceito o envio, grava em ordem: tentativa, evento, participacao do
    usuario e cache do leaderboard. Uma falha do store interrompe a
    sequencia e vira StorageError.
    """

    def __init__(
        self,
        store: QuizStore,
        events: EventLog,
        scoring: QuizScoringEngine | None = None,
        leaderboard: LeaderboardAggregator | None = None,
    ):
        self.store = store
        self.events = events
        self.scoring = scoring or QuizScoringEngine()
        self.leaderboard = leaderboard or LeaderboardAggregator()

    async def submit_answers(self, params: SubmitAnswersParams, now: int) -> QuizResult:
        """Valida, corrige e registra as respostas.

        Args:
            params: Respostas do usuario
            now: Momento atual em microssegundos

        Returns:
            QuizResult vazio em caso de sucesso, ou o erro de admissao
        """
        user = params.nick_name
        quiz_id = params.quiz_id

        try:
            quiz = await self.store.load_quiz(quiz_id)
            if quiz is None:
                return QuizResult.quiz_not_found(quiz_id)

            if now < quiz.start_time:
                return QuizResult.quiz_not_started(quiz_id)
            if now > quiz.end_time:
                return QuizResult.quiz_ended(quiz_id)

            if await self.store.load_attempt(quiz_id, user) is not None:
                logger.info(f"[Quiz {quiz_id}] Envio duplicado de {user}")
                return QuizResult.already_submitted(user, quiz_id)

            error = self.scoring.validate_answers(quiz.questions, params.answers)
            if error is not None:
                error.quiz_id = quiz_id
                return QuizResult.from_error(error)

            result = self.scoring.calculate_score(quiz.questions, params.answers)
            attempt = Attempt(
                quiz_id=quiz_id,
                user=user,
                answers=[list(a) for a in params.answers],
                score=result["score"],
                time_taken=params.time_taken,
                completed_at=now,
            )

            batch = WriteBatch()
            self.store.stage_attempt(batch, attempt)
            await self.events.stage_append(
                batch,
                QuizEventKind.SUBMISSION_ACCEPTED,
                quiz_id=quiz_id,
                created_at=now,
                user=user,
                score=attempt.score,
                time_taken=attempt.time_taken,
            )

            participations = await self.store.load_participations(user)
            if quiz_id not in participations:
                participations.append(quiz_id)
            self.store.stage_participations(batch, user, participations)

            entries = await self.store.load_leaderboard(quiz_id)
            entries = self.leaderboard.merge_entry(
                entries,
                user,
                attempt.score,
                time_taken=attempt.time_taken,
                completed_at=attempt.completed_at,
            )
            self.store.stage_leaderboard(batch, quiz_id, entries)

            await self.store.commit(batch)
        except QuizStoreError as e:
            return QuizResult.storage_error(e.message)

        logger.info(
            f"[Quiz {quiz_id}] Respostas de {user} aceitas: "
            f"{attempt.score}/{result['max_score']} pontos"
        )
        return QuizResult.success()
