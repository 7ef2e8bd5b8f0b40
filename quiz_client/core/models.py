"""Domain models for the quiz participant client."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto


class SelectMode(Enum):
    """How many options a question expects the participant to pick."""

    SINGLE = auto()
    MULTIPLE = auto()


@dataclass(frozen=True, slots=True)
class AnswerOption:
    """One selectable answer belonging to a question."""

    id: int
    text: str
    position: int
    is_correct: bool | None = None  # None when the server withholds it


@dataclass(frozen=True, slots=True)
class Question:
    """Question with its ordered answer options. Immutable during an attempt."""

    id: int
    position: int
    text: str
    options: tuple[AnswerOption, ...]
    select_mode: SelectMode = SelectMode.SINGLE

    @property
    def is_multiple(self) -> bool:
        return self.select_mode is SelectMode.MULTIPLE

    def option_by_id(self, option_id: int) -> AnswerOption | None:
        return next((option for option in self.options if option.id == option_id), None)

    def has_option(self, option_id: int) -> bool:
        return self.option_by_id(option_id) is not None

    def correct_options(self) -> tuple[AnswerOption, ...]:
        """Options locally flagged as correct, in display order."""
        return tuple(option for option in self.options if option.is_correct is True)


@dataclass(frozen=True, slots=True)
class SingleSelection:
    """Chosen option of a single-select question."""

    option_id: int

    @property
    def option_ids(self) -> frozenset[int]:
        return frozenset({self.option_id})


@dataclass(frozen=True, slots=True)
class MultiSelection:
    """Chosen options of a multi-select question."""

    option_ids: frozenset[int] = field(default_factory=frozenset)


Selection = SingleSelection | MultiSelection


@dataclass(frozen=True, slots=True)
class QuizInfo:
    """Quiz metadata returned by the access-code lookup."""

    id: int
    title: str
    access_code: str = ""
    description: str | None = None
    is_active: bool = True
    is_started: bool = True
    passing_score: float | None = None


@dataclass(frozen=True, slots=True)
class Participant:
    """Name fields the participant entered before starting."""

    first_name: str
    last_name: str

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True, slots=True)
class Credential:
    """Opaque bearer credential issued by the session collaborator."""

    token: str

    def authorization_header(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"}

    def __repr__(self) -> str:
        return "Credential(token='***')"


@dataclass(frozen=True, slots=True)
class AttemptSubmission:
    """Everything the grading authority needs to grade one attempt."""

    quiz_id: int
    participant: Participant
    answers: tuple[tuple[int, int | tuple[int, ...]], ...]

    def answers_payload(self) -> list[dict[str, object]]:
        return [
            {
                "questionId": question_id,
                "answerId": list(answer) if isinstance(answer, tuple) else answer,
            }
            for question_id, answer in self.answers
        ]


# --- Grading data from the authority ---


@dataclass(frozen=True, slots=True)
class GradedAnswer:
    """An answer option as echoed back by the grading authority."""

    text: str
    id: int | None = None
    is_correct: bool | None = None


@dataclass(frozen=True, slots=True)
class GradingRecord:
    """Authority verdict for a single question."""

    question_id: int
    question_text: str
    chosen: tuple[GradedAnswer, ...]
    correct: tuple[GradedAnswer, ...]
    is_correct: bool


@dataclass(frozen=True, slots=True)
class GradingAggregate:
    """Score numbers computed by the authority.

    Each field is None when the authority left it out; the reconciler
    completes the missing ones.
    """

    score: int | None = None
    total_questions: int | None = None
    percentage: float | None = None

    @property
    def is_empty(self) -> bool:
        return self.score is None and self.total_questions is None and self.percentage is None


@dataclass(frozen=True, slots=True)
class FullGrading:
    """Response carrying per-question grading records."""

    records: tuple[GradingRecord, ...]
    aggregate: GradingAggregate | None = None


@dataclass(frozen=True, slots=True)
class AggregateOnlyGrading:
    """Response carrying score numbers but no per-question detail."""

    aggregate: GradingAggregate


@dataclass(frozen=True, slots=True)
class NoGrading:
    """Submission accepted without any grading data."""


GradingResponse = FullGrading | AggregateOnlyGrading | NoGrading


# --- Reconciled output consumed by presentation ---


class ResultSource(Enum):
    """Where the per-question breakdown came from."""

    AUTHORITY = auto()
    LOCAL = auto()


@dataclass(frozen=True, slots=True)
class AnswerDetail:
    """Display-ready outcome of one question."""

    question_id: int
    question_text: str
    participant_answers: tuple[str, ...]
    correct_answers: tuple[str, ...]
    is_correct: bool

    @property
    def participant_answer_text(self) -> str:
        return ", ".join(self.participant_answers)

    @property
    def correct_answer_text(self) -> str:
        return ", ".join(self.correct_answers)


@dataclass(frozen=True, slots=True)
class ReconciledResult:
    """Final score and per-question breakdown of a submitted attempt."""

    score: int
    total_questions: int
    percentage: float
    details: tuple[AnswerDetail, ...]
    source: ResultSource
    passing_score: float | None = None

    @property
    def passed(self) -> bool | None:
        if self.passing_score is None:
            return None
        return self.percentage >= self.passing_score
