"""Exception hierarchy shared by the attempt engine, API client and UI."""

from __future__ import annotations


class QuizClientError(Exception):
    """Base class for every error raised by the participant client."""


class NoContentError(QuizClientError):
    """Raised when a quiz has no questions to present."""


class AttemptStateError(QuizClientError):
    """Raised when an attempt operation is not allowed in the current state."""


class IncompleteAttemptError(QuizClientError):
    """Raised when finishing is requested while questions are still unanswered."""

    def __init__(self, unanswered_positions: list[int], total: int) -> None:
        self.unanswered_positions = list(unanswered_positions)
        self.total = total
        answered = total - len(self.unanswered_positions)
        super().__init__(
            f"Please answer every question before finishing. "
            f"You have answered {answered}/{total} questions."
        )


class SubmissionError(QuizClientError):
    """Raised when the completed attempt could not be delivered for grading."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code
