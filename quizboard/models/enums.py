"""Quiz Enums - Tipos de erro, eventos e ordenacao."""

from enum import Enum


class QuizErrorKind(str, Enum):
    """Tipos de erro retornados pelas operacoes do quiz."""

    QUIZ_NOT_FOUND = "QuizNotFound"
    QUIZ_NOT_STARTED = "QuizNotStarted"
    QUIZ_ENDED = "QuizEnded"
    ALREADY_SUBMITTED = "AlreadySubmitted"
    UNAUTHORIZED = "Unauthorized"
    INVALID_INPUT = "InvalidInput"
    INVALID_ANSWER_FORMAT = "InvalidAnswerFormat"
    INVALID_TIMESTAMP_FORMAT = "InvalidTimestampFormat"
    INVALID_TIME_RANGE = "InvalidTimeRange"
    STORAGE_ERROR = "StorageError"
    OTHER = "Other"


class QuizEventKind(str, Enum):
    """Tipos de evento registrados no log."""

    QUIZ_CREATED = "quiz_created"
    SUBMISSION_ACCEPTED = "submission_accepted"


class QuizSortField(str, Enum):
    """Campos aceitos para ordenar a listagem de quizzes."""

    ID = "id"
    TITLE = "title"
    CREATED_AT = "created_at"
