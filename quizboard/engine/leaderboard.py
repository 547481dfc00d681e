"""Leaderboard Aggregator - Ranking por quiz e ranking global."""

from ..models.schemas import U32_MAX
from ..models.state import Attempt, LeaderboardEntry


class LeaderboardAggregator:
    """Agrega tentativas em leaderboards ordenados.

    Duas estrategias coexistem:
        - ``merge_entry``: atualizacao incremental do cache persistido por quiz
          (sobrescreve o score de quem ja existe, ordena so por score)
        - ``rank_quiz`` / ``rank_global``: recalculo a partir das tentativas,
          usado como fonte de verdade nas consultas

    Ordenacao do recalculo: score decrescente, tempo crescente, usuario.
    """

    def merge_entry(
        self,
        entries: list[LeaderboardEntry],
        user: str,
        score: int,
        time_taken: int = 0,
        completed_at: int = 0,
    ) -> list[LeaderboardEntry]:
        """Mescla um resultado no cache de leaderboard de um quiz.

        Se ``user`` ja tem entrada, apenas o score e sobrescrito (tempo e
        conclusao anteriores sao mantidos). Caso contrario uma nova entrada e
        adicionada. O resultado e reordenado por score decrescente de forma
        estavel.

        Args:
            entries: Entradas atuais do cache
            user: Usuario
            score: Novo score
            time_taken: Tempo da tentativa (usado so em entradas novas)
            completed_at: Conclusao da tentativa (usado so em entradas novas)

        Returns:
            Nova lista ordenada
        """
        merged = [
            LeaderboardEntry(e.user, e.score, e.time_taken, e.completed_at) for e in entries
        ]

        existing = next((e for e in merged if e.user == user), None)
        if existing is not None:
            existing.score = score
        else:
            merged.append(
                LeaderboardEntry(
                    user=user, score=score, time_taken=time_taken, completed_at=completed_at
                )
            )

        return sorted(merged, key=lambda e: -e.score)

    def rank_quiz(self, attempts: list[Attempt]) -> list[LeaderboardEntry]:
        """Recalcula o leaderboard de um quiz a partir das tentativas.

        Para cada usuario vale a melhor tentativa (maior score; em empate,
        menor tempo).
        """
        best: dict[str, LeaderboardEntry] = {}
        for attempt in attempts:
            current = best.get(attempt.user)
            if (
                current is None
                or attempt.score > current.score
                or (attempt.score == current.score and attempt.time_taken < current.time_taken)
            ):
                best[attempt.user] = LeaderboardEntry(
                    user=attempt.user,
                    score=attempt.score,
                    time_taken=attempt.time_taken,
                    completed_at=attempt.completed_at,
                )

        return self._sorted(best.values())

    def rank_global(self, attempts: list[Attempt]) -> list[LeaderboardEntry]:
        """Agrega tentativas de todos os quizzes por usuario.

        Score e a soma (saturada em 2**32 - 1), tempo e o menor observado e
        ``completed_at`` e a conclusao mais recente.
        """
        totals: dict[str, LeaderboardEntry] = {}
        for attempt in attempts:
            entry = totals.get(attempt.user)
            if entry is None:
                totals[attempt.user] = LeaderboardEntry(
                    user=attempt.user,
                    score=min(attempt.score, U32_MAX),
                    time_taken=attempt.time_taken,
                    completed_at=attempt.completed_at,
                )
                continue

            entry.score = min(entry.score + attempt.score, U32_MAX)
            entry.time_taken = min(entry.time_taken, attempt.time_taken)
            entry.completed_at = max(entry.completed_at, attempt.completed_at)

        return self._sorted(totals.values())

    @staticmethod
    def _sorted(entries) -> list[LeaderboardEntry]:
        return sorted(entries, key=lambda e: (-e.score, e.time_taken, e.user))
