"""
Practice Engine
Deterministic, resumable quiz-practice sessions with per-topic analytics

This package provides:
1. Practice session service - Session state machine (start, answer, navigate, complete)
2. Question pool service - Filtered pools, count previews and topic lists
3. Summary service - Scores, per-topic performance and weakest topics
4. Collaborator protocols - Question source, attempt recorder, missed-question supplier
"""

# Models
from practice_engine.models.question import (
    AnswerOption,
    Difficulty,
    LessonRef,
    Question,
    QuestionAttemptCreate
)
from practice_engine.models.practice_session import (
    AnswerResult,
    PracticeFilters,
    PracticeSessionConfig,
    PracticeSessionState,
    SessionAnswer,
    SessionStatus
)
from practice_engine.models.summary import PracticeSessionSummary, TopicPerformance

# Services
from practice_engine.services.errors import PracticeEngineError, QuestionPoolError
from practice_engine.services.practice_session_service import PracticeSessionService
from practice_engine.services.question_pool_service import QuestionPoolService
from practice_engine.services.shuffler import shuffle_questions
from practice_engine.services.summary_service import build_session_summary

__all__ = [
    "AnswerOption",
    "AnswerResult",
    "Difficulty",
    "LessonRef",
    "PracticeEngineError",
    "PracticeFilters",
    "PracticeSessionConfig",
    "PracticeSessionService",
    "PracticeSessionState",
    "PracticeSessionSummary",
    "Question",
    "QuestionAttemptCreate",
    "QuestionPoolError",
    "QuestionPoolService",
    "SessionAnswer",
    "SessionStatus",
    "TopicPerformance",
    "build_session_summary",
    "shuffle_questions",
]
