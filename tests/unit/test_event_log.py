# =============================================================================
# TESTES - Event Log
# =============================================================================
# Testes unitarios para o log append-only e cursores de leitura
# =============================================================================

import pytest


async def _append(log, store, count, quiz_id=1):
    from quizboard.models.enums import QuizEventKind
    from quizboard.storage.quiz_store import WriteBatch

    for i in range(count):
        batch = WriteBatch()
        await log.stage_append(batch, QuizEventKind.QUIZ_CREATED, quiz_id=quiz_id + i, created_at=i)
        await store.commit(batch)


class TestEventLogAppend:
    """Testes para adicao de eventos."""

    @pytest.mark.asyncio
    async def test_sequence_starts_at_zero(self, store):
        """Verifica numeros de sequencia 0, 1, 2."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store)
        await _append(log, store, 3)

        events = await log.read_from(0)
        assert [e.seq for e in events] == [0, 1, 2]
        assert [e.quiz_id for e in events] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_staged_event_not_visible(self, store):
        """Verifica que evento so aparece depois do commit."""
        from quizboard.engine.event_log import EventLog
        from quizboard.models.enums import QuizEventKind
        from quizboard.storage.quiz_store import WriteBatch

        log = EventLog(store)
        batch = WriteBatch()
        event = await log.stage_append(batch, QuizEventKind.QUIZ_CREATED, quiz_id=1, created_at=0)

        assert event.seq == 0
        assert await log.read_from(0) == []

        await store.commit(batch)
        assert len(await log.read_from(0)) == 1


class TestEventLogRead:
    """Testes para leitura por posicao."""

    @pytest.mark.asyncio
    async def test_read_from_middle(self, store):
        """Verifica leitura a partir de uma posicao."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store)
        await _append(log, store, 5)

        events = await log.read_from(3)
        assert [e.seq for e in events] == [3, 4]

    @pytest.mark.asyncio
    async def test_read_limit(self, store):
        """Verifica limite de eventos por leitura."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store, batch_size=2)
        await _append(log, store, 5)

        assert [e.seq for e in await log.read_from(0)] == [0, 1]
        assert [e.seq for e in await log.read_from(1, limit=3)] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_read_past_end(self, store):
        """Verifica leitura alem do fim."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store)
        await _append(log, store, 2)

        assert await log.read_from(10) == []


class TestEventCursor:
    """Testes para cursores."""

    @pytest.mark.asyncio
    async def test_poll_advances(self, store):
        """Verifica que poll avanca a posicao."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store)
        cursor = log.cursor()
        await _append(log, store, 2)

        assert [e.seq for e in await cursor.poll()] == [0, 1]
        assert cursor.position == 2
        assert await cursor.poll() == []

        await _append(log, store, 1, quiz_id=9)
        assert [e.quiz_id for e in await cursor.poll()] == [9]

    @pytest.mark.asyncio
    async def test_wait_timeout(self, store):
        """Verifica que wait retorna vazio quando o timeout expira."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store, poll_interval=0.01)

        assert await log.cursor().wait(timeout=0.05) == []

    @pytest.mark.asyncio
    async def test_wait_sees_new_event(self, store):
        """Verifica que wait devolve evento adicionado durante a espera."""
        import asyncio

        from quizboard.engine.event_log import EventLog

        log = EventLog(store, poll_interval=0.01)
        cursor = log.cursor()

        async def append_later():
            await asyncio.sleep(0.03)
            await _append(log, store, 1)

        task = asyncio.create_task(append_later())
        events = await cursor.wait(timeout=2)
        await task

        assert [e.seq for e in events] == [0]

    @pytest.mark.asyncio
    async def test_async_iteration(self, store):
        """Verifica iteracao assincrona na ordem de commit."""
        from quizboard.engine.event_log import EventLog

        log = EventLog(store, poll_interval=0.01)
        await _append(log, store, 3)

        seen = []
        async for event in log.cursor(1):
            seen.append(event.seq)
            if len(seen) == 2:
                break

        assert seen == [1, 2]


class TestQuizEventRecord:
    """Testes para o registro persistido do evento."""

    def test_persisted_fields_match_view(self):
        """Verifica que o registro persistido so tem campos expostos na visao."""
        from quizboard.models.enums import QuizEventKind
        from quizboard.models.state import QuizEvent

        event = QuizEvent(
            seq=3, kind=QuizEventKind.SUBMISSION_ACCEPTED, quiz_id=1, created_at=10, user="bob", score=5
        )

        data = event.to_dict()

        assert data["kind"] == "submission_accepted"
        assert set(data) == set(event.to_view().model_dump())
        assert QuizEvent.from_dict(data) == event
