# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza relogio, store em memoria, engine e dados de exemplo
# =============================================================================

import os
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

# 2023-11-14 22:13:20 UTC
NOW_MS = 1_700_000_000_000
NOW = NOW_MS * 1000


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "QUIZ_STORAGE_BACKEND": "memory",
        "LOG_LEVEL": "ERROR",  # Reduzir logs em testes
    }
    with patch.dict(os.environ, env_vars):
        yield


# =============================================================================
# FIXTURES DE TEMPO E STORE
# =============================================================================


@pytest.fixture
def clock():
    """Relogio manual parado em NOW."""
    from quizboard.clock import ManualClock

    return ManualClock(NOW)


@pytest.fixture
def kv_backend():
    """Backend KV em memoria."""
    from quizboard.storage.memory_kv import KVNamespace

    return KVNamespace()


@pytest.fixture
def store(kv_backend):
    """QuizStore sobre KV em memoria."""
    from quizboard.storage.quiz_store import QuizStore

    return QuizStore(kv_backend)


@pytest.fixture
def engine(store, clock):
    """QuizEngine com store em memoria e relogio manual."""
    from quizboard.engine.quiz_engine import QuizEngine

    return QuizEngine(store, clock=clock)


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS com KV vazio."""
    mock = MagicMock()

    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def failing_agentfs():
    """Mock do AgentFS cujo KV falha em todas as escritas."""
    mock = MagicMock()
    _storage = {}

    async def mock_get(key):
        return _storage.get(key)

    async def mock_set(key, value):
        raise RuntimeError("disk full")

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix or "")]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.list = mock_list
    mock._storage = _storage

    return mock


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def sample_questions():
    """Duas questoes: Q1 correta {0} (5 pts), Q2 correta {1, 2} (10 pts)."""
    from quizboard.models.schemas import QuestionParams

    return [
        QuestionParams(
            text="Qual e a capital da Franca?",
            options=["Paris", "Lyon", "Marselha"],
            correct_options=[0],
            points=5,
        ),
        QuestionParams(
            text="Quais sao numeros primos?",
            options=["1", "2", "3", "4"],
            correct_options=[1, 2],
            points=10,
        ),
    ]


@pytest.fixture
def make_quiz_params(sample_questions):
    """Factory de CreateQuizParams com janela relativa a NOW (em ms)."""
    from quizboard.models.schemas import CreateQuizParams

    def _make(
        start_offset_ms: int = 1_000,
        end_offset_ms: int = 10_000,
        questions=None,
        nick_name: str = "alice",
        title: str = "Quiz de teste",
        **overrides,
    ):
        data = {
            "title": title,
            "description": "Quiz usado nos testes",
            "questions": sample_questions if questions is None else questions,
            "time_limit": 60,
            "start_time": str(NOW_MS + start_offset_ms),
            "end_time": str(NOW_MS + end_offset_ms),
            "nick_name": nick_name,
        }
        data.update(overrides)
        return CreateQuizParams(**data)

    return _make


@pytest.fixture
def make_submission():
    """Factory de SubmitAnswersParams."""
    from quizboard.models.schemas import SubmitAnswersParams

    def _make(quiz_id: int = 1, answers=None, nick_name: str = "bob", time_taken: int = 5_000):
        return SubmitAnswersParams(
            quiz_id=quiz_id,
            answers=[[0], [1, 2]] if answers is None else answers,
            time_taken=time_taken,
            nick_name=nick_name,
        )

    return _make


@pytest.fixture
def open_quiz(engine, clock, make_quiz_params):
    """Cria um quiz e avanca o relogio para dentro da janela.

    Uso: ``quiz_id = await open_quiz()``
    """

    async def _open(**kwargs):
        result = await engine.create_quiz(make_quiz_params(**kwargs), caller="signer-alice")
        assert result.ok, result.error
        clock.set(NOW + 2_000_000)  # 2s depois de NOW, dentro de [NOW+1s, NOW+10s]
        return result.data

    return _open


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para verificacao em testes."""
    import logging

    caplog.set_level(logging.DEBUG, logger="quizboard")
    return caplog
