"""Quiz Store - Abstracao sobre o KV store para persistencia do quiz."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from agentfs_sdk import AgentFS

from ..models.errors import QuizStoreError
from ..models.state import Attempt, LeaderboardEntry, Quiz, QuizEvent

logger = logging.getLogger(__name__)


@dataclass
class WriteBatch:
    """Escritas preparadas por uma operacao, aplicadas em ordem no commit.

    Nada e gravado ate ``QuizStore.commit``; uma operacao rejeitada
    simplesmente descarta o batch.
    """

    writes: list[tuple[str, Any, str]] = field(default_factory=list)

    def stage(self, key: str, value: Any, what: str) -> None:
        self.writes.append((key, value, what))

    def __len__(self) -> int:
        return len(self.writes)


class QuizStore:
    """Abstracao sobre o KV do AgentFS (ou InMemoryKV) para o quiz.

    Estrutura de chaves:
        - meta:next_quiz_id -> Proximo ID de quiz (comeca em 1)
        - meta:next_event_seq -> Proximo numero de sequencia do log
        - quiz:{quiz_id} -> Quiz
        - attempt:{quiz_id}:{user} -> Attempt
        - leaderboard:{quiz_id} -> Lista de LeaderboardEntry (cache)
        - participations:{user} -> Lista de quiz IDs
        - event:{seq:020d} -> QuizEvent

    Qualquer excecao do backend vira ``QuizStoreError``.

    Example:
        >>> store = QuizStore(KVNamespace())
        >>> await store.get_next_quiz_id()
        1
    """

    NEXT_QUIZ_ID_KEY = "meta:next_quiz_id"
    NEXT_EVENT_SEQ_KEY = "meta:next_event_seq"
    QUIZ_PREFIX = "quiz:"
    ATTEMPT_PREFIX = "attempt:"
    LEADERBOARD_PREFIX = "leaderboard:"
    PARTICIPATIONS_PREFIX = "participations:"
    EVENT_PREFIX = "event:"

    def __init__(self, backend: AgentFS):
        """Inicializa store com um backend que expoe ``.kv``.

        Args:
            backend: Instancia do AgentFS ou ``KVNamespace`` em memoria
        """
        self.backend = backend

    @property
    def kv(self):
        return self.backend.kv

    # -------------------------------------------------------------------------
    # Chaves
    # -------------------------------------------------------------------------

    def _quiz_key(self, quiz_id: int) -> str:
        return f"{self.QUIZ_PREFIX}{quiz_id}"

    def _attempt_key(self, quiz_id: int, user: str) -> str:
        return f"{self.ATTEMPT_PREFIX}{quiz_id}:{user}"

    def _attempt_prefix(self, quiz_id: int | None = None) -> str:
        if quiz_id is None:
            return self.ATTEMPT_PREFIX
        return f"{self.ATTEMPT_PREFIX}{quiz_id}:"

    def _leaderboard_key(self, quiz_id: int) -> str:
        return f"{self.LEADERBOARD_PREFIX}{quiz_id}"

    def _participations_key(self, user: str) -> str:
        return f"{self.PARTICIPATIONS_PREFIX}{user}"

    def _event_key(self, seq: int) -> str:
        return f"{self.EVENT_PREFIX}{seq:020d}"

    # -------------------------------------------------------------------------
    # Acesso ao backend
    # -------------------------------------------------------------------------

    async def _get(self, key: str, what: str) -> Any | None:
        try:
            return await self.kv.get(key)
        except Exception as e:
            logger.error(f"Falha ao ler {key}: {e}")
            raise QuizStoreError(f"Failed to {what}: {e}", key=key) from e

    async def _set(self, key: str, value: Any, what: str) -> None:
        try:
            await self.kv.set(key, value)
        except Exception as e:
            logger.error(f"Falha ao gravar {key}: {e}")
            raise QuizStoreError(f"Failed to {what}: {e}", key=key) from e

    async def _list_keys(self, prefix: str, what: str) -> list[str]:
        try:
            entries = await self.kv.list(prefix=prefix)
        except Exception as e:
            logger.error(f"Falha ao listar {prefix}: {e}")
            raise QuizStoreError(f"Failed to {what}: {e}", key=prefix) from e

        keys = []
        for entry in entries or []:
            key = entry.get("key", "") if isinstance(entry, dict) else str(entry)
            if key.startswith(prefix):
                keys.append(key)
        return keys

    async def commit(self, batch: WriteBatch) -> None:
        """Aplica as escritas do batch em ordem.

        Uma falha interrompe o commit; as escritas seguintes nao sao feitas.

        Args:
            batch: Escritas preparadas pela operacao
        """
        for key, value, what in batch.writes:
            await self._set(key, value, what)
        logger.debug(f"Batch aplicado: {len(batch)} escritas")

    # -------------------------------------------------------------------------
    # Contadores
    # -------------------------------------------------------------------------

    async def get_next_quiz_id(self) -> int:
        value = await self._get(self.NEXT_QUIZ_ID_KEY, "read quiz id counter")
        return int(value) if value else 1

    def stage_next_quiz_id(self, batch: WriteBatch, next_id: int) -> None:
        batch.stage(self.NEXT_QUIZ_ID_KEY, next_id, "update quiz id counter")

    async def get_next_event_seq(self) -> int:
        value = await self._get(self.NEXT_EVENT_SEQ_KEY, "read event sequence")
        return int(value) if value else 0

    def stage_next_event_seq(self, batch: WriteBatch, next_seq: int) -> None:
        batch.stage(self.NEXT_EVENT_SEQ_KEY, next_seq, "update event sequence")

    # -------------------------------------------------------------------------
    # Quizzes
    # -------------------------------------------------------------------------

    async def load_quiz(self, quiz_id: int) -> Quiz | None:
        """Carrega um quiz.

        Args:
            quiz_id: ID do quiz

        Returns:
            Quiz se encontrado, None caso contrario
        """
        data = await self._get(self._quiz_key(quiz_id), "retrieve quiz")
        if not data:
            logger.debug(f"Quiz nao encontrado: {quiz_id}")
            return None
        return Quiz.from_dict(data)

    def stage_quiz(self, batch: WriteBatch, quiz: Quiz) -> None:
        batch.stage(self._quiz_key(quiz.id), quiz.to_dict(), "store quiz")

    async def list_quizzes(self) -> list[Quiz]:
        """Lista todos os quizzes armazenados, ordenados por ID."""
        quizzes = []
        for key in await self._list_keys(self.QUIZ_PREFIX, "list quizzes"):
            data = await self._get(key, "retrieve quiz")
            if data:
                quizzes.append(Quiz.from_dict(data))
        return sorted(quizzes, key=lambda q: q.id)

    # -------------------------------------------------------------------------
    # Tentativas
    # -------------------------------------------------------------------------

    async def load_attempt(self, quiz_id: int, user: str) -> Attempt | None:
        data = await self._get(self._attempt_key(quiz_id, user), "check user attempt")
        if not data:
            return None
        return Attempt.from_dict(data)

    def stage_attempt(self, batch: WriteBatch, attempt: Attempt) -> None:
        batch.stage(
            self._attempt_key(attempt.quiz_id, attempt.user),
            attempt.to_dict(),
            "store user attempt",
        )

    async def list_attempts(self, quiz_id: int | None = None) -> list[Attempt]:
        """Lista tentativas de um quiz (ou de todos, se ``quiz_id`` for None)."""
        attempts = []
        prefix = self._attempt_prefix(quiz_id)
        for key in await self._list_keys(prefix, "list user attempts"):
            data = await self._get(key, "retrieve user attempt")
            if data:
                attempts.append(Attempt.from_dict(data))
        return attempts

    # -------------------------------------------------------------------------
    # Leaderboard (cache) e participacoes
    # -------------------------------------------------------------------------

    async def load_leaderboard(self, quiz_id: int) -> list[LeaderboardEntry]:
        data = await self._get(self._leaderboard_key(quiz_id), "get leaderboard")
        return [LeaderboardEntry.from_dict(e) for e in data or []]

    def stage_leaderboard(
        self, batch: WriteBatch, quiz_id: int, entries: list[LeaderboardEntry]
    ) -> None:
        batch.stage(
            self._leaderboard_key(quiz_id),
            [e.to_dict() for e in entries],
            "update leaderboard",
        )

    async def load_participations(self, user: str) -> list[int]:
        data = await self._get(self._participations_key(user), "get user participations")
        return [int(q) for q in data or []]

    def stage_participations(self, batch: WriteBatch, user: str, quiz_ids: list[int]) -> None:
        batch.stage(
            self._participations_key(user), list(quiz_ids), "update user participations"
        )

    # -------------------------------------------------------------------------
    # Eventos
    # -------------------------------------------------------------------------

    async def load_event(self, seq: int) -> QuizEvent | None:
        data = await self._get(self._event_key(seq), "read event")
        if not data:
            return None
        return QuizEvent.from_dict(data)

    def stage_event(self, batch: WriteBatch, event: QuizEvent) -> None:
        batch.stage(self._event_key(event.seq), event.to_dict(), "append event")
