# =============================================================================
# CONFIGURACAO - quizboard
# =============================================================================
# Configuracao centralizada carregada de variaveis de ambiente
# =============================================================================

import logging
import os
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("memory", "agentfs")


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int, minimum: int = 0) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = int(value)
    except ValueError:
        logger.warning(f"{name} invalido ({value!r}), usando {default}")
        return default
    if parsed < minimum:
        logger.warning(f"{name} abaixo do minimo ({parsed}), usando {default}")
        return default
    return parsed


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        parsed = float(value)
    except ValueError:
        logger.warning(f"{name} invalido ({value!r}), usando {default}")
        return default
    if parsed <= 0:
        logger.warning(f"{name} deve ser positivo ({parsed}), usando {default}")
        return default
    return parsed


@dataclass
class QuizConfig:
    """Configuracao do quizboard.

    Attributes:
        storage_backend: "memory" (padrao) ou "agentfs"
        agentfs_id: ID do AgentFS quando o backend e "agentfs"
        strict_correct_options: Valida indices corretos ja na criacao do quiz
        event_poll_interval: Espera (s) entre leituras vazias do log de eventos
        event_batch_size: Maximo de eventos por leitura
        max_page_size: Maximo de quizzes por pagina na listagem
        log_level: Nivel de log
    """

    storage_backend: str = "memory"
    agentfs_id: str = "quizboard"
    strict_correct_options: bool = False
    event_poll_interval: float = 0.5
    event_batch_size: int = 100
    max_page_size: int = 100
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "QuizConfig":
        """Carrega configuracao das variaveis de ambiente."""
        backend = os.getenv("QUIZ_STORAGE_BACKEND", "memory").strip().lower()
        if backend not in STORAGE_BACKENDS:
            logger.warning(f"QUIZ_STORAGE_BACKEND desconhecido ({backend!r}), usando memory")
            backend = "memory"

        log_level = os.getenv("LOG_LEVEL", "INFO").strip().upper()
        if log_level not in logging.getLevelNamesMapping():
            logger.warning(f"LOG_LEVEL desconhecido ({log_level!r}), usando INFO")
            log_level = "INFO"

        return cls(
            storage_backend=backend,
            agentfs_id=os.getenv("QUIZ_AGENTFS_ID", "quizboard"),
            strict_correct_options=_env_bool("QUIZ_STRICT_CORRECT_OPTIONS", False),
            event_poll_interval=_env_float("QUIZ_EVENT_POLL_INTERVAL", 0.5),
            event_batch_size=_env_int("QUIZ_EVENT_BATCH_SIZE", 100, minimum=1),
            max_page_size=_env_int("QUIZ_MAX_PAGE_SIZE", 100, minimum=1),
            log_level=log_level,
        )


@lru_cache
def get_config() -> QuizConfig:
    """Retorna a configuracao global (carregada uma vez)."""
    return QuizConfig.from_env()
