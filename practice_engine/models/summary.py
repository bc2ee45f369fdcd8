"""
Session Summary Models
Derived results shown at the end of a practice session
"""
from typing import List

from pydantic import BaseModel, Field


class TopicPerformance(BaseModel):
    """Per-topic score within one session"""
    topic: str = Field(..., description="Topic name")
    total: int = Field(..., ge=0, description="Questions of this topic in the session")
    correct: int = Field(..., ge=0, description="Correctly answered questions of this topic")
    percentage: int = Field(..., ge=0, le=100, description="Rounded percentage (0-100)")


class PracticeSessionSummary(BaseModel):
    """Final score of a practice session"""
    total_questions: int = Field(..., ge=0, description="Questions in the session")
    correct_count: int = Field(..., ge=0, description="Number of correct answers")
    percentage: int = Field(..., ge=0, le=100, description="Rounded percentage (0-100)")
    topic_performance: List[TopicPerformance] = Field(
        default_factory=list,
        description="Performance for every topic, sorted by topic name"
    )
    weakest_topics: List[TopicPerformance] = Field(
        default_factory=list,
        description="Lowest scoring topics below 100%"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "total_questions": 5,
                "correct_count": 4,
                "percentage": 80,
                "topic_performance": [
                    {"topic": "A", "total": 2, "correct": 2, "percentage": 100},
                    {"topic": "B", "total": 2, "correct": 1, "percentage": 50},
                    {"topic": "C", "total": 1, "correct": 1, "percentage": 100}
                ],
                "weakest_topics": [
                    {"topic": "B", "total": 2, "correct": 1, "percentage": 50}
                ]
            }
        }
