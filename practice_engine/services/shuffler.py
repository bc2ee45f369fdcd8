"""
Question shuffling
"""
import random
from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_questions(questions: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """
    Return a uniformly random permutation using the Fisher-Yates algorithm

    The input sequence is never mutated.

    Args:
        questions: Questions (or any items) to shuffle
        rng: Random source exposing ``randint``; the global ``random`` module
            is used when omitted

    Returns:
        New list with the same elements in shuffled order
    """
    source = rng or random
    shuffled = list(questions)
    for i in range(len(shuffled) - 1, 0, -1):
        j = source.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
