"""quizboard - Quizzes com janela de tempo, correcao e leaderboards.

Arquitetura:
- models/: Enums, Erros tipados, Schemas Pydantic, State
- engine/: QuizCatalog, SubmissionEngine, QuizScoringEngine,
  LeaderboardAggregator, EventLog, QuizEngine (fachada)
- storage/: QuizStore sobre KV (AgentFS ou memoria)
- router.py: Endpoints FastAPI
"""

from .clock import ManualClock, SystemClock
from .config import QuizConfig, get_config
from .engine import (
    EventCursor,
    EventLog,
    LeaderboardAggregator,
    QuizCatalog,
    QuizEngine,
    QuizScoringEngine,
    SubmissionEngine,
)
from .models import (
    CreateQuizParams,
    QuestionParams,
    QuizError,
    QuizErrorKind,
    QuizResult,
    SubmitAnswersParams,
)
from .storage import InMemoryKV, KVNamespace, QuizStore

__all__ = [
    # Config
    "QuizConfig",
    "get_config",
    "SystemClock",
    "ManualClock",
    # Models
    "CreateQuizParams",
    "QuestionParams",
    "SubmitAnswersParams",
    "QuizError",
    "QuizErrorKind",
    "QuizResult",
    # Engines
    "QuizEngine",
    "QuizCatalog",
    "SubmissionEngine",
    "QuizScoringEngine",
    "LeaderboardAggregator",
    "EventLog",
    "EventCursor",
    # Storage
    "QuizStore",
    "InMemoryKV",
    "KVNamespace",
]
