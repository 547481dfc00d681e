"""Quiz Schemas - Modelos Pydantic para request/response."""

from pydantic import BaseModel, Field, NonNegativeInt

from .enums import QuizEventKind

# Limites herdados dos tipos inteiros sem sinal do formato persistido
U32_MAX = 2**32 - 1
U64_MAX = 2**64 - 1


class QuestionParams(BaseModel):
    """Questao enviada na criacao do quiz."""

    text: str = Field(..., description="Enunciado da questao")
    options: list[str] = Field(..., description="Alternativas (minimo 2)")
    correct_options: list[NonNegativeInt] = Field(
        ..., description="Indices das alternativas corretas (zero-based)"
    )
    points: int = Field(..., ge=0, le=U32_MAX, description="Pontos da questao")


class CreateQuizParams(BaseModel):
    """Request para criacao de quiz."""

    title: str = Field(..., description="Titulo do quiz")
    description: str = Field(default="", description="Descricao do conteudo")
    questions: list[QuestionParams] = Field(..., description="Lista de questoes")
    time_limit: int = Field(
        default=0, ge=0, le=U64_MAX, description="Tempo sugerido em segundos (apenas informativo)"
    )
    start_time: str = Field(..., description="Inicio da janela (timestamp em ms, string)")
    end_time: str = Field(..., description="Fim da janela (timestamp em ms, string)")
    nick_name: str = Field(..., description="Apelido do criador")


class SubmitAnswersParams(BaseModel):
    """Request para envio de respostas."""

    quiz_id: int = Field(..., ge=0, le=U64_MAX, description="ID do quiz")
    answers: list[list[NonNegativeInt]] = Field(
        ..., description="Indices escolhidos para cada questao (multipla escolha)"
    )
    time_taken: int = Field(default=0, ge=0, le=U64_MAX, description="Tempo gasto em ms")
    nick_name: str = Field(..., description="Apelido do participante")


class QuestionView(BaseModel):
    """Questao exposta para leitura (sem as respostas corretas)."""

    id: int
    text: str
    options: list[str]
    points: int


class QuizSetView(BaseModel):
    """Quiz exposto para leitura. Timestamps em microssegundos (string)."""

    id: int
    title: str
    description: str
    creator: str
    questions: list[QuestionView]
    time_limit: int
    start_time: str
    end_time: str
    created_at: str


class UserAttemptView(BaseModel):
    """Tentativa de um usuario ou linha de leaderboard."""

    quiz_id: int
    user: str
    answers: list[list[int]] = Field(default_factory=list)
    score: int
    time_taken: int
    completed_at: str


class QuizAttemptView(BaseModel):
    """Tentativa associada ao quiz respondido."""

    quiz_id: int
    attempt: UserAttemptView


class LeaderboardEntryView(BaseModel):
    """Entrada do leaderboard em cache."""

    user: str
    score: int
    time_taken: int
    completed_at: str


class QuizEventView(BaseModel):
    """Evento do log exposto aos assinantes."""

    seq: int
    kind: QuizEventKind
    quiz_id: int
    user: str | None = None
    score: int | None = None
    time_taken: int | None = None
    created_at: str
