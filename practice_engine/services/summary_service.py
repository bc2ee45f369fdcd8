"""
Session scoring and per-topic analytics
"""
import logging
import math
import unicodedata
from typing import Dict, List

from practice_engine.models.practice_session import PracticeSessionState
from practice_engine.models.summary import PracticeSessionSummary, TopicPerformance

logger = logging.getLogger(__name__)

WEAKEST_TOPICS_LIMIT = 3


def percent(part: int, whole: int) -> int:
    """Integer percentage rounded half up; 0 when whole is 0"""
    if whole <= 0:
        return 0
    return int(math.floor(part / whole * 100 + 0.5))


def topic_sort_key(topic: str):
    """Host-independent ordering: NFKD case-folded name, then the raw name"""
    return (unicodedata.normalize("NFKD", topic).casefold(), topic)


def calculate_topic_performance(state: PracticeSessionState) -> List[TopicPerformance]:
    """
    Calculate performance per topic

    Every session question counts towards its topic's total, answered or not.

    Args:
        state: Session state to aggregate

    Returns:
        One entry per topic, sorted by topic name
    """
    topic_stats: Dict[str, Dict[str, int]] = {}

    for question in state.questions:
        stats = topic_stats.setdefault(question.topic, {"total": 0, "correct": 0})
        stats["total"] += 1

        answer = state.answers.get(question.id)
        if answer is not None and answer.is_correct:
            stats["correct"] += 1

    performance = [
        TopicPerformance(
            topic=topic,
            total=stats["total"],
            correct=stats["correct"],
            percentage=percent(stats["correct"], stats["total"])
        )
        for topic, stats in topic_stats.items()
    ]
    return sorted(performance, key=lambda t: topic_sort_key(t.topic))


def build_session_summary(
    state: PracticeSessionState,
    weakest_limit: int = WEAKEST_TOPICS_LIMIT
) -> PracticeSessionSummary:
    """
    Build the end-of-session summary

    Weakest topics are those below 100%, lowest first, capped at
    ``weakest_limit``. A perfect topic never appears there.

    Args:
        state: Active or completed session state
        weakest_limit: Maximum number of weakest topics

    Returns:
        PracticeSessionSummary for the session
    """
    total_questions = len(state.questions)
    correct_count = sum(1 for answer in state.answers.values() if answer.is_correct)

    topic_performance = calculate_topic_performance(state)

    # sorted() is stable, so ties keep topic-name order
    weakest_topics = [
        topic for topic in sorted(topic_performance, key=lambda t: t.percentage)
        if topic.percentage < 100
    ][:weakest_limit]

    summary = PracticeSessionSummary(
        total_questions=total_questions,
        correct_count=correct_count,
        percentage=percent(correct_count, total_questions),
        topic_performance=topic_performance,
        weakest_topics=weakest_topics
    )

    logger.debug(
        f"📊 Summary: {correct_count}/{total_questions} ({summary.percentage}%), "
        f"weakest: {[t.topic for t in weakest_topics]}"
    )
    return summary
