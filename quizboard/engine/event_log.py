"""Event Log - Log append-only de eventos do quiz, lido por cursor."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import AsyncIterator

from ..models.enums import QuizEventKind
from ..models.state import QuizEvent
from ..storage.quiz_store import QuizStore, WriteBatch

logger = logging.getLogger(__name__)


class EventLog:
    """Log de eventos com numeros de sequencia crescentes (a partir de 0).

    Eventos so sao adicionados; entradas passadas nunca sao reescritas. O
    contador ``meta:next_event_seq`` e gravado depois do evento, entao um
    leitor limitado pelo contador nunca observa um evento pela metade.

    Example:
        >>> log = EventLog(store)
        >>> cursor = log.cursor()
        >>> events = await cursor.poll()
    """

    def __init__(self, store: QuizStore, poll_interval: float = 0.5, batch_size: int = 100):
        self.store = store
        self.poll_interval = poll_interval
        self.batch_size = batch_size

    async def stage_append(
        self,
        batch: WriteBatch,
        kind: QuizEventKind,
        quiz_id: int,
        created_at: int,
        user: str | None = None,
        score: int | None = None,
        time_taken: int | None = None,
    ) -> QuizEvent:
        """Prepara a adicao de um evento no batch da operacao.

        Returns:
            Evento com o numero de sequencia reservado
        """
        seq = await self.store.get_next_event_seq()
        event = QuizEvent(
            seq=seq,
            kind=kind,
            quiz_id=quiz_id,
            created_at=created_at,
            user=user,
            score=score,
            time_taken=time_taken,
        )
        self.store.stage_event(batch, event)
        self.store.stage_next_event_seq(batch, seq + 1)
        return event

    async def read_from(self, seq: int, limit: int | None = None) -> list[QuizEvent]:
        """Le eventos a partir de ``seq`` (inclusive), em ordem.

        Args:
            seq: Primeiro numero de sequencia desejado
            limit: Maximo de eventos (padrao: batch_size)

        Returns:
            Lista de eventos (vazia se nao ha nada novo)
        """
        limit = self.batch_size if limit is None else limit
        seq = max(seq, 0)
        end = min(await self.store.get_next_event_seq(), seq + limit)

        events = []
        for current in range(seq, end):
            event = await self.store.load_event(current)
            if event is None:
                break
            events.append(event)
        return events

    def cursor(self, from_seq: int = 0) -> EventCursor:
        return EventCursor(self, from_seq)


class EventCursor:
    """Cursor de leitura do log; guarda a posicao do proximo evento."""

    def __init__(self, log: EventLog, position: int = 0):
        self.log = log
        self.position = max(position, 0)

    async def poll(self) -> list[QuizEvent]:
        """Le os eventos novos e avanca a posicao."""
        events = await self.log.read_from(self.position)
        if events:
            self.position = events[-1].seq + 1
            logger.debug(f"Cursor avancou para {self.position} ({len(events)} eventos)")
        return events

    async def wait(self, timeout: float | None = None) -> list[QuizEvent]:
        """Aguarda ate existirem eventos novos (ou ate o timeout).

        Args:
            timeout: Tempo maximo em segundos (None = sem limite)

        Returns:
            Eventos novos, ou lista vazia se o timeout expirar
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            events = await self.poll()
            if events:
                return events
            if deadline is not None and time.monotonic() >= deadline:
                return []
            await asyncio.sleep(self.log.poll_interval)

    async def __aiter__(self) -> AsyncIterator[QuizEvent]:
        while True:
            for event in await self.wait():
                yield event
