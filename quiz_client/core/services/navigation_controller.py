"""Service stepping a participant through the ordered question sequence."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum, auto

from quiz_client.core.errors import AttemptStateError, IncompleteAttemptError, NoContentError
from quiz_client.core.models import Question
from quiz_client.core.services.selection_store import AnswerSelectionStore

logger = logging.getLogger(__name__)


class NavigationState(Enum):
    VIEWING = auto()
    COMPLETED = auto()


class NavigationController:
    """Cursor over the question sequence with a guarded advance.

    The controller is the only writer of the selection store: participant
    input for the question on screen goes through :meth:`choose`.
    """

    def __init__(self, questions: Sequence[Question], store: AnswerSelectionStore) -> None:
        if not questions:
            raise NoContentError("This quiz has no questions available.")
        self._questions: list[Question] = sorted(questions, key=lambda q: q.position)
        self._store = store
        self._index: int = 0
        self._state = NavigationState.VIEWING

    @property
    def state(self) -> NavigationState:
        return self._state

    @property
    def index(self) -> int:
        return self._index

    @property
    def position(self) -> int:
        """1-based number of the question on screen."""
        return self._index + 1

    @property
    def total(self) -> int:
        return len(self._questions)

    @property
    def current_question(self) -> Question:
        return self._questions[self._index]

    @property
    def progress(self) -> float:
        return (self._index + 1) / len(self._questions) * 100

    @property
    def is_first(self) -> bool:
        return self._index == 0

    @property
    def is_last(self) -> bool:
        return self._index == len(self._questions) - 1

    @property
    def is_completed(self) -> bool:
        return self._state is NavigationState.COMPLETED

    def choose(self, option_id: int) -> None:
        """Apply a click on an option of the current question."""
        if self.is_completed:
            logger.debug("Ignoring input after the attempt was completed")
            return
        question = self.current_question
        if question.is_multiple:
            self._store.toggle(question.id, option_id)
        else:
            self._store.select(question.id, option_id)

    def current_is_answered(self) -> bool:
        return self._store.is_answered(self.current_question.id)

    def next(self) -> bool:
        """Move to the next question. Returns False when the move is refused."""
        if self.is_completed or self.is_last:
            return False
        if not self.current_is_answered():
            return False
        self._index += 1
        return True

    def previous(self) -> bool:
        if self.is_completed or self.is_first:
            return False
        self._index -= 1
        return True

    def can_finish(self) -> bool:
        return not self.is_completed and self.is_last and self._store.is_complete()

    def finish(self) -> None:
        """Complete the attempt. Raises when the finishing action is not allowed."""
        if self.is_completed:
            raise AttemptStateError("The attempt has already been completed.")
        if not self.is_last:
            raise AttemptStateError("Finishing is only possible from the last question.")
        unanswered = self._store.unanswered_questions()
        if unanswered:
            positions = [self._questions.index(q) + 1 for q in unanswered]
            raise IncompleteAttemptError(positions, self.total)
        self._state = NavigationState.COMPLETED
        logger.info("Attempt completed with %d answered questions", self.total)
