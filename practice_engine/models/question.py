"""
Question Models
Question records and answer attempts as stored in the course document database
FILE: practice_engine/models/question.py
"""
from typing import List, Literal, Optional

from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


Difficulty = Literal["easy", "medium", "hard"]


class AnswerOption(BaseModel):
    """Single answer option of a question"""
    id: str = Field(..., min_length=1, description="Option identifier")
    text: str = Field(..., description="Option text shown to the learner")

    class Config:
        frozen = True


class Question(BaseModel):
    """
    Question document, immutable for the lifetime of a session

    Fields accept camelCase aliases so raw documents validate directly:
        Question.model_validate({"courseId": ..., "correctOptionId": ...})
    """
    id: str = Field(..., min_length=1, description="Unique question identifier")
    course_id: str = Field(..., description="Owning course ID")
    subject: str = Field(default="", description="Subject the question belongs to")
    topic: str = Field(..., description="Topic used for per-topic analytics")
    difficulty: Difficulty = Field(..., description="Question difficulty")
    question_text: str = Field(..., description="Prompt text")
    options: List[AnswerOption] = Field(..., min_length=1, description="Ordered answer options")
    correct_option_id: str = Field(..., description="ID of the single correct option")
    explanation: str = Field(default="", description="Explanation shown after answering")
    related_lesson_id: Optional[str] = Field(None, description="Lesson covering this question")

    @model_validator(mode="after")
    def validate_options(self):
        """Option IDs must be unique and the correct option must be one of them"""
        option_ids = [option.id for option in self.options]
        if len(set(option_ids)) != len(option_ids):
            raise ValueError(f"Duplicate option IDs in question {self.id}: {option_ids}")
        if self.correct_option_id not in option_ids:
            raise ValueError(
                f"correctOptionId '{self.correct_option_id}' does not reference "
                f"any option of question {self.id}"
            )
        return self

    def has_option(self, option_id: str) -> bool:
        return any(option.id == option_id for option in self.options)

    class Config:
        frozen = True
        alias_generator = to_camel
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "id": "q_binary_search",
                "courseId": "course_algorithms",
                "subject": "Algorithms",
                "topic": "Searching",
                "difficulty": "medium",
                "questionText": "What is the time complexity of binary search?",
                "options": [
                    {"id": "a", "text": "O(n)"},
                    {"id": "b", "text": "O(log n)"},
                    {"id": "c", "text": "O(n^2)"},
                    {"id": "d", "text": "O(1)"}
                ],
                "correctOptionId": "b",
                "explanation": "The search space halves on every step.",
                "relatedLessonId": "lesson_searching"
            }
        }


class QuestionAttemptCreate(BaseModel):
    """Data for recording a new attempt (without auto-generated fields)"""
    question_id: str = Field(..., description="Answered question ID")
    course_id: str = Field(..., description="Course the session belongs to")
    selected_option_id: str = Field(..., description="Option the learner submitted")
    is_correct: bool = Field(..., description="Whether the submitted option was correct")

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class LessonRef(BaseModel):
    """Minimal lesson reference used for 'study this lesson' links"""
    id: str
    title: str
