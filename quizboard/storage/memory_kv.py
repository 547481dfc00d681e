"""In-memory KV - Backend local com a mesma interface do KV do AgentFS."""

from __future__ import annotations

import copy
from typing import Any


class InMemoryKV:
    """KV store em memoria (fallback quando AgentFS nao esta disponivel).

    Valores sao copiados na escrita e na leitura, de modo que quem le
    nunca observa um objeto alterado depois de gravado.
    """

    def __init__(self):
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any | None:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    async def delete(self, key: str) -> None:
        self._data.pop(key, None)

    async def list(self, prefix: str | None = None) -> list[dict[str, str]]:
        keys = sorted(self._data)
        if prefix:
            keys = [k for k in keys if k.startswith(prefix)]
        return [{"key": k} for k in keys]

    def __len__(self) -> int:
        return len(self._data)


class KVNamespace:
    """Adapta o ``InMemoryKV`` ao formato ``backend.kv`` usado pelo AgentFS."""

    def __init__(self, kv: InMemoryKV | None = None):
        self.kv = kv or InMemoryKV()

    async def close(self) -> None:
        return None
