"""
Practice Session Service
State machine for a single quiz-practice session: start, answer, navigate,
complete and summarize
"""
import asyncio
import logging
import random
from typing import Callable, List, Optional, Set

from practice_engine.core.config import Settings, settings as default_settings
from practice_engine.models.practice_session import (
    AnswerResult,
    PracticeFilters,
    PracticeSessionConfig,
    PracticeSessionState,
    SessionAnswer,
    SessionStatus
)
from practice_engine.models.question import LessonRef, Question, QuestionAttemptCreate
from practice_engine.models.summary import PracticeSessionSummary
from practice_engine.services.collaborators import (
    AttemptRecorder,
    LessonSource,
    MissedQuestionSupplier,
    QuestionSource
)
from practice_engine.services.errors import QuestionPoolError
from practice_engine.services.question_pool_service import QuestionPoolService
from practice_engine.services.shuffler import shuffle_questions
from practice_engine.services.summary_service import build_session_summary, percent

logger = logging.getLogger(__name__)

SessionListener = Callable[["PracticeSessionService"], None]


class PracticeSessionService:
    """
    Service owning the lifecycle of one practice session

    States: IDLE (no session) -> ACTIVE -> COMPLETE. Starting a new session
    discards the previous one. All state changes run synchronously on the
    caller's event loop; only the question fetch is awaited and attempt
    recording runs as a detached task.

    Usage::

        service = PracticeSessionService(bank, bank, missed_question_supplier=bank)
        if await service.start_session(config):
            service.select_answer("b")
            await service.submit_answer()
            service.next_question()
    """

    def __init__(
        self,
        question_source: QuestionSource,
        attempt_recorder: AttemptRecorder,
        missed_question_supplier: Optional[MissedQuestionSupplier] = None,
        lesson_source: Optional[LessonSource] = None,
        rng: Optional[random.Random] = None,
        settings: Optional[Settings] = None
    ):
        """
        Initialize practice session service

        Args:
            question_source: Supplies questions for a course
            attempt_recorder: Persists answer attempts
            missed_question_supplier: Supplies previously missed question IDs
            lesson_source: Resolves related lessons
            rng: Random source for shuffling (global random when omitted)
            settings: Engine settings (module-level settings when omitted)
        """
        self.settings = settings or default_settings
        self.attempt_recorder = attempt_recorder
        self.lesson_source = lesson_source
        self.rng = rng
        self.pool_service = QuestionPoolService(
            question_source,
            missed_question_supplier,
            cache_topics=self.settings.topics_cache_enabled
        )

        self._state: Optional[PracticeSessionState] = None
        self._selected_answer: Optional[str] = None
        self._generation = 0
        self._pending_attempts: Set[asyncio.Task] = set()
        self._listeners: List[SessionListener] = []

    # ============================================================================
    # CHANGE NOTIFICATION
    # ============================================================================

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        """
        Register a listener called with this service after every state change

        Returns:
            Callable that removes the listener
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception(f"Error in session listener {listener!r}")

    # ============================================================================
    # DERIVED STATE
    # ============================================================================

    @property
    def status(self) -> SessionStatus:
        if self._state is None:
            return SessionStatus.IDLE
        if self._state.is_complete:
            return SessionStatus.COMPLETE
        return SessionStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == SessionStatus.ACTIVE

    @property
    def is_complete(self) -> bool:
        return self._state is not None and self._state.is_complete

    @property
    def current_question(self) -> Optional[Question]:
        if self._state is None:
            return None
        return self._state.current_question

    @property
    def current_question_number(self) -> int:
        """Current question index, 1-based for display"""
        if self._state is None or not self._state.questions:
            return 0
        return self._state.current_index + 1

    @property
    def total_questions(self) -> int:
        return len(self._state.questions) if self._state else 0

    @property
    def progress_percent(self) -> int:
        """Percentage of session questions that have been answered"""
        if self._state is None:
            return 0
        return percent(len(self._state.answers), len(self._state.questions))

    @property
    def selected_answer(self) -> Optional[str]:
        return self._selected_answer

    @property
    def has_answered(self) -> bool:
        question = self.current_question
        return question is not None and question.id in self._state.answers

    @property
    def is_last_question(self) -> bool:
        if self._state is None:
            return False
        return self._state.current_index >= len(self._state.questions) - 1

    @property
    def current_answer_result(self) -> Optional[AnswerResult]:
        question = self.current_question
        if question is None:
            return None

        answer = self._state.answers.get(question.id)
        if answer is None:
            return None

        return AnswerResult(
            is_correct=answer.is_correct,
            correct_option_id=question.correct_option_id
        )

    @property
    def course_id(self) -> str:
        return self._state.config.course_id if self._state else ""

    @property
    def lesson_id(self) -> str:
        if self._state is None:
            return ""
        return self._state.config.lesson_id or ""

    def snapshot(self) -> Optional[PracticeSessionState]:
        """Deep copy of the current session state (None when idle)"""
        if self._state is None:
            return None
        return self._state.model_copy(deep=True)

    def get_summary(self) -> Optional[PracticeSessionSummary]:
        """
        Get session summary

        Returns:
            PracticeSessionSummary, or None when no session exists
        """
        if self._state is None:
            return None
        return build_session_summary(
            self._state,
            weakest_limit=self.settings.weakest_topics_limit
        )

    # ============================================================================
    # FILTER PREVIEW
    # ============================================================================

    async def get_question_count(self, course_id: str, filters: PracticeFilters) -> int:
        """Question count preview for filters (does not touch the session)"""
        return await self.pool_service.count_questions(course_id, filters)

    async def get_topics(self, course_id: str) -> List[str]:
        """Available topics for a course"""
        return await self.pool_service.get_topics(course_id)

    # ============================================================================
    # LIFECYCLE
    # ============================================================================

    async def start_session(self, config: PracticeSessionConfig) -> bool:
        """
        Start a new practice session

        Any previous session is discarded. Questions are fetched with the
        config's filters, shuffled and truncated to ``question_count``.

        Args:
            config: Session configuration

        Returns:
            True if the session started; False if no questions matched, the
            fetch failed, or the start was superseded by a reset or newer start
        """
        self.reset_session()
        generation = self._generation

        logger.info(
            f"🎬 Starting practice session - Course: {config.course_id}, "
            f"Lesson: {config.lesson_id}, Filters: {config.filters.model_dump(exclude_none=True)}"
        )

        try:
            questions = await self.pool_service.load_pool(
                config.course_id,
                config.effective_filters()
            )
        except QuestionPoolError as e:
            logger.error(f"❌ Failed to start session for course {config.course_id}: {e}")
            return False

        if generation != self._generation:
            logger.info(f"⚠️ Discarding superseded session start for course {config.course_id}")
            return False

        if not questions:
            logger.info(f"⚠️ No questions match filters for course {config.course_id}")
            return False

        shuffled = shuffle_questions(questions, self.rng)
        if config.question_count:
            shuffled = shuffled[:config.question_count]

        self._state = PracticeSessionState(
            config=config.model_copy(deep=True),
            questions=shuffled
        )
        self._selected_answer = None

        logger.info(
            f"✅ Started practice session - Course: {config.course_id}, "
            f"Questions: {len(shuffled)} of {len(questions)} matching"
        )
        self._notify()
        return True

    def select_answer(self, option_id: str) -> None:
        """
        Select an answer for the current question (before submitting)

        Ignored when the question is already answered or the session is not
        active. Option IDs that do not belong to the current question are
        also ignored (with a warning) instead of being held as the selection.
        """
        question = self.current_question
        if not self.is_active or question is None or self.has_answered:
            return

        if not question.has_option(option_id):
            logger.warning(f"⚠️ Option {option_id} is not part of question {question.id}")
            return

        self._selected_answer = option_id
        self._notify()

    async def submit_answer(self) -> Optional[bool]:
        """
        Submit and check the selected answer for the current question

        The attempt is recorded in the background; a recording failure is
        logged and never affects the session.

        Returns:
            Whether the answer was correct, or None if there is nothing
            to submit
        """
        question = self.current_question
        selected = self._selected_answer

        if self._state is None or question is None or selected is None:
            return None

        existing = self._state.answers.get(question.id)
        if existing is not None:
            return existing.is_correct

        if not self.is_active:
            return None

        is_correct = selected == question.correct_option_id
        self._state.answers[question.id] = SessionAnswer(
            selected_option_id=selected,
            is_correct=is_correct
        )

        logger.info(
            f"✅ Evaluated answer - Question: {question.id}, Selected: {selected}, "
            f"Correct: {question.correct_option_id}, Result: {'✓' if is_correct else '✗'}"
        )

        self._record_attempt_in_background(
            QuestionAttemptCreate(
                question_id=question.id,
                course_id=self._state.config.course_id,
                selected_option_id=selected,
                is_correct=is_correct
            )
        )
        self._notify()
        return is_correct

    def next_question(self) -> None:
        """Advance to the next question, completing the session after the last"""
        if not self.is_active:
            return

        if self._state.current_index + 1 >= len(self._state.questions):
            self._state.is_complete = True
            logger.info(f"🏁 Practice session complete - Course: {self._state.config.course_id}")
        else:
            self._state.current_index += 1
            self._selected_answer = None
        self._notify()

    def previous_question(self) -> None:
        """Go back to the previous question for review (never re-answering)"""
        if not self.is_active or self._state.current_index <= 0:
            return

        self._state.current_index -= 1
        previous = self._state.questions[self._state.current_index]
        answer = self._state.answers.get(previous.id)
        self._selected_answer = answer.selected_option_id if answer else None
        self._notify()

    def complete_session(self) -> None:
        """Mark the session as finished regardless of the cursor position"""
        if not self.is_active:
            return

        self._state.is_complete = True
        logger.info(
            f"🏁 Practice session ended early - Course: {self._state.config.course_id}, "
            f"Answered: {len(self._state.answers)}/{len(self._state.questions)}"
        )
        self._notify()

    def reset_session(self) -> None:
        """Reset session state back to idle"""
        # Invalidates any start_session still awaiting its fetch
        self._generation += 1

        if self._state is None:
            return

        self._state = None
        self._selected_answer = None
        logger.debug("Practice session reset")
        self._notify()

    # ============================================================================
    # RELATED LESSONS
    # ============================================================================

    async def get_related_lesson(self, question_id: str) -> Optional[LessonRef]:
        """
        Get the related lesson for a question of the current session

        Returns:
            LessonRef, or None if unavailable
        """
        if self._state is None or self.lesson_source is None:
            return None

        question = next((q for q in self._state.questions if q.id == question_id), None)
        if question is None or not question.related_lesson_id:
            return None

        try:
            return await self.lesson_source.get_lesson(question.related_lesson_id)
        except Exception as e:
            logger.warning(
                f"⚠️ Failed to load related lesson {question.related_lesson_id} "
                f"for question {question_id}: {e}"
            )
            return None

    # ============================================================================
    # ATTEMPT RECORDING
    # ============================================================================

    async def wait_for_pending_attempts(self) -> None:
        """Wait until all background attempt recordings have finished"""
        while self._pending_attempts:
            await asyncio.gather(*list(self._pending_attempts))

    def _record_attempt_in_background(self, attempt: QuestionAttemptCreate) -> None:
        task = asyncio.get_running_loop().create_task(self._record_attempt(attempt))
        self._pending_attempts.add(task)
        task.add_done_callback(self._pending_attempts.discard)

    async def _record_attempt(self, attempt: QuestionAttemptCreate) -> None:
        try:
            await self.attempt_recorder.record_attempt(attempt)
            logger.debug(f"✓ Recorded attempt for question {attempt.question_id}")
        except Exception as e:
            logger.error(f"❌ Error recording attempt for question {attempt.question_id}: {e}")
