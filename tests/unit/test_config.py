# =============================================================================
# TESTES - Config Module
# =============================================================================
# Testes unitarios para configuracao via variaveis de ambiente
# =============================================================================

import os
from unittest.mock import patch


class TestQuizConfigDefaults:
    """Testes para valores padrao."""

    def test_defaults(self):
        """Verifica valores padrao sem variaveis de ambiente."""
        from quizboard.config import QuizConfig

        with patch.dict(os.environ, {}, clear=True):
            config = QuizConfig.from_env()

        assert config.storage_backend == "memory"
        assert config.agentfs_id == "quizboard"
        assert config.strict_correct_options is False
        assert config.event_poll_interval == 0.5
        assert config.event_batch_size == 100
        assert config.max_page_size == 100
        assert config.log_level == "INFO"


class TestQuizConfigFromEnv:
    """Testes para leitura do ambiente."""

    def test_reads_values(self):
        """Verifica leitura de todas as variaveis."""
        from quizboard.config import QuizConfig

        env = {
            "QUIZ_STORAGE_BACKEND": "AgentFS",
            "QUIZ_AGENTFS_ID": "quiz-prod",
            "QUIZ_STRICT_CORRECT_OPTIONS": "true",
            "QUIZ_EVENT_POLL_INTERVAL": "0.1",
            "QUIZ_EVENT_BATCH_SIZE": "25",
            "QUIZ_MAX_PAGE_SIZE": "10",
            "LOG_LEVEL": "debug",
        }
        with patch.dict(os.environ, env, clear=True):
            config = QuizConfig.from_env()

        assert config.storage_backend == "agentfs"
        assert config.agentfs_id == "quiz-prod"
        assert config.strict_correct_options is True
        assert config.event_poll_interval == 0.1
        assert config.event_batch_size == 25
        assert config.max_page_size == 10
        assert config.log_level == "DEBUG"

    def test_invalid_values_fall_back(self):
        """Verifica fallback para valores invalidos."""
        from quizboard.config import QuizConfig

        env = {
            "QUIZ_STORAGE_BACKEND": "redis",
            "QUIZ_EVENT_POLL_INTERVAL": "-1",
            "QUIZ_EVENT_BATCH_SIZE": "many",
            "QUIZ_MAX_PAGE_SIZE": "0",
            "LOG_LEVEL": "LOUD",
        }
        with patch.dict(os.environ, env, clear=True):
            config = QuizConfig.from_env()

        assert config.storage_backend == "memory"
        assert config.event_poll_interval == 0.5
        assert config.event_batch_size == 100
        assert config.max_page_size == 100
        assert config.log_level == "INFO"


class TestOpenBackend:
    """Testes para selecao do backend."""

    def test_memory_backend(self):
        """Verifica backend em memoria por padrao."""
        import asyncio

        from quizboard.config import QuizConfig
        from quizboard.storage.backends import open_backend
        from quizboard.storage.memory_kv import KVNamespace

        backend = asyncio.run(open_backend(QuizConfig()))

        assert isinstance(backend, KVNamespace)

    def test_agentfs_backend(self):
        """Verifica abertura do AgentFS com o ID configurado."""
        import asyncio
        import sys
        from unittest.mock import AsyncMock, MagicMock

        from quizboard.config import QuizConfig
        from quizboard.storage.backends import open_backend

        sdk = MagicMock()
        sdk.AgentFS.open = AsyncMock(return_value="agentfs-instance")

        with patch.dict(sys.modules, {"agentfs_sdk": sdk}):
            backend = asyncio.run(
                open_backend(QuizConfig(storage_backend="agentfs", agentfs_id="quiz-test"))
            )

        assert backend == "agentfs-instance"
        sdk.AgentFSOptions.assert_called_once_with(id="quiz-test")


class TestConfigureLogging:
    """Testes para configuracao de logging."""

    def test_sets_package_level(self):
        """Verifica nivel do logger do pacote."""
        import logging

        from quizboard.logging_config import configure_logging

        logger = configure_logging("WARNING")

        assert logger.name == "quizboard"
        assert logger.level == logging.WARNING
