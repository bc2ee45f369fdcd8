"""
Question Pool Service
Builds filtered question pools and previews their size before a session starts
"""
import logging
from typing import Dict, List, Optional

from practice_engine.models.practice_session import PracticeFilters
from practice_engine.models.question import Question
from practice_engine.services.collaborators import MissedQuestionSupplier, QuestionSource
from practice_engine.services.errors import QuestionPoolError

logger = logging.getLogger(__name__)


class QuestionPoolService:
    """
    Service for assembling question pools

    This service handles:
    1. Fetching filtered questions from the question source
    2. Intersecting with previously missed questions ("only mistakes")
    3. Counting matches for filter previews
    4. Listing (and caching) the topics of a course
    """

    def __init__(
        self,
        question_source: QuestionSource,
        missed_question_supplier: Optional[MissedQuestionSupplier] = None,
        cache_topics: bool = True
    ):
        """
        Initialize question pool service

        Args:
            question_source: Supplies published questions for a course
            missed_question_supplier: Supplies incorrectly answered question IDs
            cache_topics: Whether to cache topic lists per course
        """
        self.question_source = question_source
        self.missed_question_supplier = missed_question_supplier
        self.cache_topics = cache_topics
        self._topics_cache: Dict[str, List[str]] = {}

    async def load_pool(self, course_id: str, filters: PracticeFilters) -> List[Question]:
        """
        Load the questions matching the filters

        Args:
            course_id: Course to load questions for
            filters: Topic/difficulty/lesson/only-mistakes filters

        Returns:
            Matching questions in source order (may be empty)

        Raises:
            QuestionPoolError: If a collaborator fails or only-mistakes
                is requested without a missed-question supplier
        """
        try:
            questions = list(await self.question_source.fetch_questions(course_id, filters))
        except Exception as e:
            logger.error(f"❌ Failed to fetch questions for course {course_id}: {e}")
            raise QuestionPoolError(f"Failed to fetch questions: {str(e)}") from e

        if not filters.only_mistakes:
            logger.debug(f"📊 Course {course_id} pool: {len(questions)} questions")
            return questions

        missed_ids = await self._get_missed_question_ids(course_id)
        pool = [question for question in questions if question.id in missed_ids]

        logger.debug(
            f"📊 Course {course_id} pool: {len(pool)} of {len(questions)} questions "
            f"previously missed"
        )
        return pool

    async def count_questions(self, course_id: str, filters: PracticeFilters) -> int:
        """
        Count questions a session with these filters would draw from

        Never touches session state, so it is safe to call on every filter change.

        Raises:
            QuestionPoolError: If the pool cannot be loaded
        """
        pool = await self.load_pool(course_id, filters)
        return len(pool)

    async def get_topics(self, course_id: str) -> List[str]:
        """
        Get all unique topics for a course (with caching)

        Failed fetches are not cached.
        """
        if self.cache_topics and course_id in self._topics_cache:
            return list(self._topics_cache[course_id])

        questions = await self.load_pool(course_id, PracticeFilters())
        topics = sorted({question.topic for question in questions})

        if self.cache_topics:
            self._topics_cache[course_id] = topics
        logger.debug(f"📊 Course {course_id} topics: {topics}")
        return list(topics)

    def clear_topics_cache(self, course_id: Optional[str] = None) -> None:
        """Drop cached topics for one course, or for all courses"""
        if course_id is None:
            self._topics_cache.clear()
        else:
            self._topics_cache.pop(course_id, None)

    async def _get_missed_question_ids(self, course_id: str) -> set:
        if self.missed_question_supplier is None:
            logger.error("❌ Only-mistakes filter requested without a missed-question supplier")
            raise QuestionPoolError("No missed-question supplier configured")

        try:
            return set(await self.missed_question_supplier.list_incorrect_question_ids(course_id))
        except Exception as e:
            logger.error(f"❌ Failed to list missed questions for course {course_id}: {e}")
            raise QuestionPoolError(f"Failed to list missed questions: {str(e)}") from e
