"""
Practice Session Models
Configuration, filters and in-memory state of a single practice session
"""
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from practice_engine.models.question import Difficulty, Question


class SessionStatus(str, Enum):
    """Lifecycle state of the engine's session"""
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETE = "complete"


class PracticeFilters(BaseModel):
    """Filters used to select the question pool"""
    topic: Optional[str] = Field(None, description="Restrict to a single topic")
    difficulty: Optional[Difficulty] = Field(None, description="Restrict to a difficulty")
    only_mistakes: bool = Field(
        default=False,
        description="Restrict to questions the learner previously answered incorrectly"
    )
    related_lesson_id: Optional[str] = Field(None, description="Restrict to one lesson")

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True


class PracticeSessionConfig(BaseModel):
    """Input for starting a practice session"""
    course_id: str = Field(..., min_length=1, description="Course to practice")
    lesson_id: Optional[str] = Field(
        None,
        description="Scopes the session to one lesson"
    )
    filters: PracticeFilters = Field(default_factory=PracticeFilters)
    question_count: Optional[int] = Field(
        None,
        ge=1,
        description="Maximum number of questions (all matching when omitted)"
    )

    def effective_filters(self) -> PracticeFilters:
        """Filters with the lesson scope applied unless set explicitly"""
        if self.lesson_id and not self.filters.related_lesson_id:
            return self.filters.model_copy(update={"related_lesson_id": self.lesson_id})
        return self.filters

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "courseId": "course_algorithms",
                "lessonId": None,
                "filters": {
                    "topic": "Searching",
                    "difficulty": "medium",
                    "onlyMistakes": False
                },
                "questionCount": 10
            }
        }


class SessionAnswer(BaseModel):
    """Submitted answer for one question of the session"""
    selected_option_id: str
    is_correct: bool


class AnswerResult(BaseModel):
    """Verdict for the current question once it has been answered"""
    is_correct: bool
    correct_option_id: str


class PracticeSessionState(BaseModel):
    """
    Mutable state of the active session

    The engine owns this object exclusively; callers only ever see copies.
    """
    config: PracticeSessionConfig
    questions: List[Question] = Field(..., min_length=1)
    current_index: int = 0
    answers: Dict[str, SessionAnswer] = Field(default_factory=dict)
    is_complete: bool = False

    @property
    def current_question(self) -> Optional[Question]:
        if 0 <= self.current_index < len(self.questions):
            return self.questions[self.current_index]
        return None
