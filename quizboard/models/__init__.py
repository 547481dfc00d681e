"""Quiz Models - Enums, Erros, Schemas e State."""

from .enums import QuizErrorKind, QuizEventKind, QuizSortField
from .errors import QuizError, QuizResult, QuizStoreError
from .schemas import (
    U32_MAX,
    U64_MAX,
    CreateQuizParams,
    LeaderboardEntryView,
    QuestionParams,
    QuestionView,
    QuizAttemptView,
    QuizEventView,
    QuizSetView,
    SubmitAnswersParams,
    UserAttemptView,
)
from .state import Attempt, LeaderboardEntry, Question, Quiz, QuizEvent

__all__ = [
    # Enums
    "QuizErrorKind",
    "QuizEventKind",
    "QuizSortField",
    # Errors
    "QuizError",
    "QuizResult",
    "QuizStoreError",
    # Schemas
    "U32_MAX",
    "U64_MAX",
    "CreateQuizParams",
    "QuestionParams",
    "SubmitAnswersParams",
    "QuestionView",
    "QuizSetView",
    "UserAttemptView",
    "QuizAttemptView",
    "LeaderboardEntryView",
    "QuizEventView",
    # State
    "Question",
    "Quiz",
    "Attempt",
    "LeaderboardEntry",
    "QuizEvent",
]
