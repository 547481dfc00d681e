"""Quiz Engines - Logica de negocios."""

from .catalog import QuizCatalog
from .event_log import EventCursor, EventLog
from .leaderboard import LeaderboardAggregator
from .quiz_engine import QuizEngine
from .scoring_engine import QuizScoringEngine
from .submission_engine import SubmissionEngine

__all__ = [
    "QuizCatalog",
    "SubmissionEngine",
    "QuizScoringEngine",
    "LeaderboardAggregator",
    "EventLog",
    "EventCursor",
    "QuizEngine",
]
