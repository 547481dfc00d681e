"""Quiz Storage - Persistencia sobre KV (AgentFS ou memoria)."""

from .backends import open_backend
from .memory_kv import InMemoryKV, KVNamespace
from .quiz_store import QuizStore, WriteBatch

__all__ = ["InMemoryKV", "KVNamespace", "QuizStore", "WriteBatch", "open_backend"]
