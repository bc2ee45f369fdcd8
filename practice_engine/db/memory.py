"""
In-memory question bank
Implements every practice engine collaborator over plain Python collections
FILE: practice_engine/db/memory.py
"""
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Set

from pydantic import BaseModel, Field

from practice_engine.models.practice_session import PracticeFilters
from practice_engine.models.question import LessonRef, Question, QuestionAttemptCreate

logger = logging.getLogger(__name__)


class QuestionAttempt(QuestionAttemptCreate):
    """Recorded attempt with generated fields"""
    id: str = Field(default_factory=lambda: f"attempt_{uuid.uuid4().hex[:12]}")
    attempted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class _StoredQuestion(BaseModel):
    question: Question
    is_published: bool = True


class InMemoryQuestionBank:
    """
    Question source, attempt recorder, missed-question supplier and lesson
    source backed by dictionaries

    Only published questions are ever returned by ``fetch_questions``.
    """

    def __init__(
        self,
        questions: Optional[Iterable[Question]] = None,
        lessons: Optional[Iterable[LessonRef]] = None
    ):
        self._questions: Dict[str, _StoredQuestion] = {}
        self._lessons: Dict[str, LessonRef] = {}
        self.attempts: List[QuestionAttempt] = []

        for question in questions or []:
            self.add_question(question)
        for lesson in lessons or []:
            self.add_lesson(lesson)

    def add_question(self, question: Question, is_published: bool = True) -> None:
        """Add or replace a question"""
        self._questions[question.id] = _StoredQuestion(
            question=question,
            is_published=is_published
        )

    def add_lesson(self, lesson: LessonRef) -> None:
        self._lessons[lesson.id] = lesson

    async def fetch_questions(
        self,
        course_id: str,
        filters: Optional[PracticeFilters] = None
    ) -> List[Question]:
        """Get all published questions for a course with optional filters"""
        filters = filters or PracticeFilters()
        questions = [
            stored.question for stored in self._questions.values()
            if stored.is_published and stored.question.course_id == course_id
        ]

        if filters.topic:
            questions = [q for q in questions if q.topic == filters.topic]
        if filters.difficulty:
            questions = [q for q in questions if q.difficulty == filters.difficulty]
        if filters.related_lesson_id:
            questions = [q for q in questions if q.related_lesson_id == filters.related_lesson_id]

        return questions

    async def record_attempt(self, attempt: QuestionAttemptCreate) -> str:
        """
        Record a new attempt

        Returns:
            The new attempt ID
        """
        record = QuestionAttempt(**attempt.model_dump())
        self.attempts.append(record)
        logger.debug(
            f"✓ Stored attempt {record.id} - Question: {record.question_id}, "
            f"Correct: {record.is_correct}"
        )
        return record.id

    async def list_incorrect_question_ids(self, course_id: str) -> Set[str]:
        """
        Question IDs with at least one incorrect attempt in the course

        A later correct attempt does not remove a question from this set.
        """
        return {
            attempt.question_id for attempt in self.attempts
            if attempt.course_id == course_id and not attempt.is_correct
        }

    async def get_lesson(self, lesson_id: str) -> Optional[LessonRef]:
        return self._lessons.get(lesson_id)
