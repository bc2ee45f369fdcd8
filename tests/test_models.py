"""Tests for question and session models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from practice_engine.models.practice_session import (
    PracticeFilters,
    PracticeSessionConfig,
    PracticeSessionState,
)
from practice_engine.models.question import AnswerOption, Question


def _question_doc(**overrides) -> dict:
    doc = {
        "id": "q_binary_search",
        "courseId": "course_algorithms",
        "subject": "Algorithms",
        "topic": "Searching",
        "difficulty": "medium",
        "questionText": "What is the time complexity of binary search?",
        "options": [{"id": "a", "text": "O(n)"}, {"id": "b", "text": "O(log n)"}],
        "correctOptionId": "b",
        "explanation": "The search space halves on every step.",
    }
    doc.update(overrides)
    return doc


class TestQuestion:
    def test_validates_camel_case_document(self) -> None:
        question = Question.model_validate(_question_doc(relatedLessonId="lesson_1"))
        assert question.course_id == "course_algorithms"
        assert question.correct_option_id == "b"
        assert question.related_lesson_id == "lesson_1"
        assert question.has_option("a")
        assert not question.has_option("z")

    def test_correct_option_must_exist(self) -> None:
        with pytest.raises(ValidationError):
            Question.model_validate(_question_doc(correctOptionId="z"))

    def test_option_ids_must_be_unique(self) -> None:
        options = [{"id": "a", "text": "x"}, {"id": "a", "text": "y"}]
        with pytest.raises(ValidationError):
            Question.model_validate(_question_doc(options=options, correctOptionId="a"))

    def test_requires_options(self) -> None:
        with pytest.raises(ValidationError):
            Question.model_validate(_question_doc(options=[]))

    def test_rejects_unknown_difficulty(self) -> None:
        with pytest.raises(ValidationError):
            Question.model_validate(_question_doc(difficulty="impossible"))

    def test_is_immutable(self) -> None:
        question = Question.model_validate(_question_doc())
        with pytest.raises(ValidationError):
            question.topic = "Sorting"

    def test_accepts_field_names(self) -> None:
        question = Question(
            id="q1",
            course_id="c1",
            topic="T",
            difficulty="easy",
            question_text="?",
            options=[AnswerOption(id="a", text="yes")],
            correct_option_id="a",
        )
        assert question.subject == ""
        assert question.related_lesson_id is None


class TestPracticeSessionConfig:
    def test_lesson_id_becomes_lesson_filter(self) -> None:
        config = PracticeSessionConfig(course_id="c1", lesson_id="lesson_1")
        assert config.effective_filters().related_lesson_id == "lesson_1"
        assert config.filters.related_lesson_id is None

    def test_explicit_lesson_filter_wins(self) -> None:
        config = PracticeSessionConfig(
            course_id="c1",
            lesson_id="lesson_1",
            filters=PracticeFilters(related_lesson_id="lesson_2"),
        )
        assert config.effective_filters().related_lesson_id == "lesson_2"

    def test_question_count_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            PracticeSessionConfig(course_id="c1", question_count=0)

    def test_accepts_camel_case(self) -> None:
        config = PracticeSessionConfig.model_validate(
            {"courseId": "c1", "filters": {"onlyMistakes": True}, "questionCount": 5}
        )
        assert config.filters.only_mistakes is True
        assert config.question_count == 5


class TestPracticeSessionState:
    def test_requires_questions(self) -> None:
        with pytest.raises(ValidationError):
            PracticeSessionState(config=PracticeSessionConfig(course_id="c1"), questions=[])

    def test_current_question(self, five_questions) -> None:
        state = PracticeSessionState(
            config=PracticeSessionConfig(course_id="c1"),
            questions=five_questions,
            current_index=4,
        )
        assert state.current_question.id == "q5"
