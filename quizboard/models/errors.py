"""Quiz Errors - Erros tipados e envelope de resultado."""

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

from .enums import QuizErrorKind

T = TypeVar("T")


class QuizError(BaseModel):
    """Erro tipado de uma operacao do quiz.

    O campo ``kind`` identifica a variante; ``quiz_id`` e ``user`` sao
    preenchidos quando o erro se refere a uma chave especifica.
    """

    kind: QuizErrorKind = Field(..., description="Tipo do erro")
    message: str = Field(..., description="Mensagem legivel")
    quiz_id: int | None = Field(default=None, description="Quiz relacionado")
    user: str | None = Field(default=None, description="Usuario relacionado")


class QuizResult(BaseModel, Generic[T]):
    """Envelope de resposta: ``data`` em caso de sucesso, ``error`` caso contrario.

    Example:
        >>> result = QuizResult.quiz_not_found(7)
        >>> result.ok
        False
        >>> result.error.kind
        <QuizErrorKind.QUIZ_NOT_FOUND: 'QuizNotFound'>
    """

    data: T | None = None
    error: QuizError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any = None) -> "QuizResult":
        return cls(data=data)

    @classmethod
    def from_error(cls, error: QuizError) -> "QuizResult":
        return cls(error=error)

    @classmethod
    def quiz_not_found(cls, quiz_id: int) -> "QuizResult":
        return cls.from_error(
            QuizError(
                kind=QuizErrorKind.QUIZ_NOT_FOUND,
                message=f"Quiz {quiz_id} not found",
                quiz_id=quiz_id,
            )
        )

    @classmethod
    def quiz_not_started(cls, quiz_id: int) -> "QuizResult":
        return cls.from_error(
            QuizError(
                kind=QuizErrorKind.QUIZ_NOT_STARTED,
                message=f"Quiz {quiz_id} has not started yet",
                quiz_id=quiz_id,
            )
        )

    @classmethod
    def quiz_ended(cls, quiz_id: int) -> "QuizResult":
        return cls.from_error(
            QuizError(
                kind=QuizErrorKind.QUIZ_ENDED,
                message=f"Quiz {quiz_id} has already ended",
                quiz_id=quiz_id,
            )
        )

    @classmethod
    def already_submitted(cls, user: str, quiz_id: int) -> "QuizResult":
        return cls.from_error(
            QuizError(
                kind=QuizErrorKind.ALREADY_SUBMITTED,
                message=f"User {user} already submitted quiz {quiz_id}",
                quiz_id=quiz_id,
                user=user,
            )
        )

    @classmethod
    def unauthorized(cls) -> "QuizResult":
        return cls.from_error(
            QuizError(kind=QuizErrorKind.UNAUTHORIZED, message="User is not authenticated")
        )

    @classmethod
    def invalid_input(cls, message: str) -> "QuizResult":
        return cls.from_error(QuizError(kind=QuizErrorKind.INVALID_INPUT, message=message))

    @classmethod
    def invalid_answer_format(cls, message: str, quiz_id: int | None = None) -> "QuizResult":
        return cls.from_error(
            QuizError(
                kind=QuizErrorKind.INVALID_ANSWER_FORMAT,
                message=message,
                quiz_id=quiz_id,
            )
        )

    @classmethod
    def invalid_timestamp_format(cls, message: str) -> "QuizResult":
        return cls.from_error(
            QuizError(kind=QuizErrorKind.INVALID_TIMESTAMP_FORMAT, message=message)
        )

    @classmethod
    def invalid_time_range(cls, message: str) -> "QuizResult":
        return cls.from_error(QuizError(kind=QuizErrorKind.INVALID_TIME_RANGE, message=message))

    @classmethod
    def storage_error(cls, message: str) -> "QuizResult":
        return cls.from_error(QuizError(kind=QuizErrorKind.STORAGE_ERROR, message=message))

    @classmethod
    def other_error(cls, message: str) -> "QuizResult":
        return cls.from_error(QuizError(kind=QuizErrorKind.OTHER, message=message))


class QuizStoreError(Exception):
    """Falha do backend de persistencia, propagada pelo QuizStore."""

    def __init__(self, message: str, key: str | None = None):
        super().__init__(message)
        self.message = message
        self.key = key
