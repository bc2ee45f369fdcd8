"""
Practice engine exceptions
"""


class PracticeEngineError(Exception):
    """Base exception for practice engine errors"""
    pass


class QuestionPoolError(PracticeEngineError):
    """Raised when the question pool cannot be loaded from its collaborators"""
    pass
