"""
Collaborator contracts consumed by the practice engine

Storage, visibility rules and authentication live behind these protocols;
the engine only awaits them.
"""
from typing import Any, List, Optional, Protocol, Set, runtime_checkable

from practice_engine.models.practice_session import PracticeFilters
from practice_engine.models.question import LessonRef, Question, QuestionAttemptCreate


@runtime_checkable
class QuestionSource(Protocol):
    """Supplies published, permission-checked questions for a course"""

    async def fetch_questions(
        self,
        course_id: str,
        filters: PracticeFilters
    ) -> List[Question]:
        ...


@runtime_checkable
class AttemptRecorder(Protocol):
    """Durably records a single answer attempt"""

    async def record_attempt(self, attempt: QuestionAttemptCreate) -> Any:
        ...


@runtime_checkable
class MissedQuestionSupplier(Protocol):
    """Lists IDs of questions the learner has answered incorrectly in a course"""

    async def list_incorrect_question_ids(self, course_id: str) -> Set[str]:
        ...


@runtime_checkable
class LessonSource(Protocol):
    """Resolves lesson references for related-lesson links"""

    async def get_lesson(self, lesson_id: str) -> Optional[LessonRef]:
        ...
