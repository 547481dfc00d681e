"""Storage backends - Abertura do KV configurado."""

from __future__ import annotations

import logging
from typing import Any

from ..config import QuizConfig
from .memory_kv import KVNamespace

logger = logging.getLogger(__name__)


async def open_backend(config: QuizConfig) -> Any:
    """Abre o backend de persistencia definido na configuracao.

    Args:
        config: Configuracao ativa

    Returns:
        Objeto com atributo ``kv`` (AgentFS ou ``KVNamespace``)
    """
    if config.storage_backend == "agentfs":
        from agentfs_sdk import AgentFS, AgentFSOptions

        backend = await AgentFS.open(AgentFSOptions(id=config.agentfs_id))
        logger.info(f"AgentFS aberto: {config.agentfs_id}")
        return backend

    logger.info("Usando KV em memoria")
    return KVNamespace()
