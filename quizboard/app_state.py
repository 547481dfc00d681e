"""Shared state - engine global e backend de persistencia."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import get_config
from .engine.quiz_engine import QuizEngine
from .storage import QuizStore, open_backend

logger = logging.getLogger(__name__)

# Instancias globais (criadas sob demanda)
engine: Optional[QuizEngine] = None
backend: Optional[Any] = None


async def get_engine() -> QuizEngine:
    """Get QuizEngine instance (abre o backend configurado na primeira chamada)."""
    global engine, backend

    if engine is None:
        config = get_config()
        backend = await open_backend(config)
        engine = QuizEngine(QuizStore(backend), config=config)
        logger.info(f"QuizEngine iniciado (backend: {config.storage_backend})")

    return engine


def set_engine(new_engine: QuizEngine) -> None:
    """Substitui o engine global (testes e execucao embutida)."""
    global engine
    engine = new_engine


async def close_engine() -> None:
    """Fecha o backend e descarta o engine atual."""
    global engine, backend

    if backend is not None:
        try:
            await backend.close()
        except Exception as e:
            logger.warning(f"Erro ao fechar backend: {e}")
        backend = None

    engine = None
