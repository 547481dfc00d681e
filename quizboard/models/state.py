"""Quiz State - Registros persistidos do quiz."""

from dataclasses import asdict, dataclass
from typing import Any

from .enums import QuizEventKind
from .schemas import (
    LeaderboardEntryView,
    QuestionView,
    QuizEventView,
    QuizSetView,
    UserAttemptView,
)


@dataclass
class Question:
    """Questao materializada de um quiz.

    Attributes:
        id: Posicao da questao no quiz (zero-based)
        text: Enunciado
        options: Alternativas na ordem original
        correct_options: Indices das alternativas corretas
        points: Pontos concedidos quando a resposta bate exatamente
    """

    id: int
    text: str
    options: list[str]
    correct_options: list[int]
    points: int

    def to_view(self) -> QuestionView:
        return QuestionView(id=self.id, text=self.text, options=list(self.options), points=self.points)


@dataclass
class Quiz:
    """Quiz publicado. Timestamps em microssegundos.

    Attributes:
        id: ID sequencial (a partir de 1)
        title: Titulo
        description: Descricao
        creator: Apelido informado na criacao
        questions: Questoes em ordem
        time_limit: Tempo sugerido em segundos (nao aplicado no servidor)
        start_time: Inicio da janela de envio
        end_time: Fim da janela de envio
        created_at: Momento da criacao
    """

    id: int
    title: str
    description: str
    creator: str
    questions: list[Question]
    time_limit: int
    start_time: int
    end_time: int
    created_at: int

    @property
    def max_score(self) -> int:
        return sum(q.points for q in self.questions)

    def to_view(self) -> QuizSetView:
        return QuizSetView(
            id=self.id,
            title=self.title,
            description=self.description,
            creator=self.creator,
            questions=[q.to_view() for q in self.questions],
            time_limit=self.time_limit,
            start_time=str(self.start_time),
            end_time=str(self.end_time),
            created_at=str(self.created_at),
        )

    def to_dict(self) -> dict[str, Any]:
        """Converte para dicionario (para persistencia)."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Quiz":
        """Cria instancia a partir de dicionario."""
        return cls(
            id=data["id"],
            title=data["title"],
            description=data.get("description", ""),
            creator=data["creator"],
            questions=[Question(**q) for q in data.get("questions", [])],
            time_limit=data.get("time_limit", 0),
            start_time=data["start_time"],
            end_time=data["end_time"],
            created_at=data["created_at"],
        )


@dataclass
class Attempt:
    """Tentativa unica de um usuario em um quiz."""

    quiz_id: int
    user: str
    answers: list[list[int]]
    score: int
    time_taken: int
    completed_at: int

    def to_view(self) -> UserAttemptView:
        return UserAttemptView(
            quiz_id=self.quiz_id,
            user=self.user,
            answers=[list(a) for a in self.answers],
            score=self.score,
            time_taken=self.time_taken,
            completed_at=str(self.completed_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Attempt":
        return cls(
            quiz_id=data["quiz_id"],
            user=data["user"],
            answers=[list(a) for a in data.get("answers", [])],
            score=data.get("score", 0),
            time_taken=data.get("time_taken", 0),
            completed_at=data.get("completed_at", 0),
        )


@dataclass
class LeaderboardEntry:
    """Linha do leaderboard (derivada das tentativas)."""

    user: str
    score: int
    time_taken: int = 0
    completed_at: int = 0

    def to_view(self) -> LeaderboardEntryView:
        return LeaderboardEntryView(
            user=self.user,
            score=self.score,
            time_taken=self.time_taken,
            completed_at=str(self.completed_at),
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LeaderboardEntry":
        return cls(
            user=data["user"],
            score=data.get("score", 0),
            time_taken=data.get("time_taken", 0),
            completed_at=data.get("completed_at", 0),
        )


@dataclass
class QuizEvent:
    """Evento do log append-only."""

    seq: int
    kind: QuizEventKind
    quiz_id: int
    created_at: int
    user: str | None = None
    score: int | None = None
    time_taken: int | None = None

    def to_view(self) -> QuizEventView:
        return QuizEventView(
            seq=self.seq,
            kind=self.kind,
            quiz_id=self.quiz_id,
            user=self.user,
            score=self.score,
            time_taken=self.time_taken,
            created_at=str(self.created_at),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "QuizEvent":
        return cls(
            seq=data["seq"],
            kind=QuizEventKind(data["kind"]),
            quiz_id=data["quiz_id"],
            created_at=data.get("created_at", 0),
            user=data.get("user"),
            score=data.get("score"),
            time_taken=data.get("time_taken"),
        )
