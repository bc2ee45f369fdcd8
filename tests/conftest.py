"""Shared fixtures for the practice engine test suite."""

from __future__ import annotations

import random

import pytest

from practice_engine.core.config import Settings
from practice_engine.db.memory import InMemoryQuestionBank
from practice_engine.models.practice_session import PracticeFilters, PracticeSessionConfig
from practice_engine.models.question import AnswerOption, LessonRef, Question
from practice_engine.services.practice_session_service import PracticeSessionService

COURSE_ID = "course_algorithms"


def make_question(
    question_id: str,
    topic: str = "Searching",
    difficulty: str = "medium",
    course_id: str = COURSE_ID,
    correct_option_id: str = "b",
    related_lesson_id: str | None = None,
) -> Question:
    """Build a four-option question whose correct option is ``correct_option_id``."""
    return Question(
        id=question_id,
        course_id=course_id,
        subject="Algorithms",
        topic=topic,
        difficulty=difficulty,
        question_text=f"Question {question_id}?",
        options=[AnswerOption(id=letter, text=f"Option {letter}") for letter in "abcd"],
        correct_option_id=correct_option_id,
        explanation="Because.",
        related_lesson_id=related_lesson_id,
    )


class FailingRecorder:
    """Attempt recorder that always raises."""

    def __init__(self) -> None:
        self.calls = 0

    async def record_attempt(self, attempt):
        self.calls += 1
        raise RuntimeError("database unavailable")


class FailingSource:
    """Question source that always raises."""

    async def fetch_questions(self, course_id, filters):
        raise ConnectionError("connection refused")


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def question_factory():
    """The ``make_question`` builder, for tests that need custom pools."""
    return make_question


@pytest.fixture
def failing_recorder() -> FailingRecorder:
    return FailingRecorder()


@pytest.fixture
def failing_source() -> FailingSource:
    return FailingSource()


@pytest.fixture
def five_questions() -> list[Question]:
    """Five questions across topics A (2), B (2) and C (1)."""
    return [
        make_question("q1", topic="A", difficulty="easy"),
        make_question("q2", topic="A", difficulty="hard"),
        make_question("q3", topic="B", difficulty="easy", related_lesson_id="lesson_b"),
        make_question("q4", topic="B", difficulty="medium"),
        make_question("q5", topic="C", difficulty="medium"),
    ]


@pytest.fixture
def bank(five_questions) -> InMemoryQuestionBank:
    return InMemoryQuestionBank(
        questions=five_questions,
        lessons=[LessonRef(id="lesson_b", title="Topic B in depth")],
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(weakest_topics_limit=3, topics_cache_enabled=True)


@pytest.fixture
def service(bank, settings) -> PracticeSessionService:
    return PracticeSessionService(
        question_source=bank,
        attempt_recorder=bank,
        missed_question_supplier=bank,
        lesson_source=bank,
        rng=random.Random(42),
        settings=settings,
    )


@pytest.fixture
def config() -> PracticeSessionConfig:
    return PracticeSessionConfig(course_id=COURSE_ID, filters=PracticeFilters())
