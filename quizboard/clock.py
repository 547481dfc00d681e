"""Clock - Fonte de tempo injetada nas operacoes (microssegundos)."""

import time
from typing import Protocol


class Clock(Protocol):
    def now_micros(self) -> int: ...


class SystemClock:
    """Relogio do sistema em microssegundos desde a epoch."""

    def now_micros(self) -> int:
        return time.time_ns() // 1000


class ManualClock:
    """Relogio controlado manualmente (testes e simulacoes)."""

    def __init__(self, now: int = 0):
        self._now = now

    def now_micros(self) -> int:
        return self._now

    def set(self, now: int) -> None:
        self._now = now

    def advance(self, micros: int) -> None:
        self._now += micros
