"""Wire schemas for the quiz REST API and their conversion to domain models."""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from quiz_client.core.models import (
    AggregateOnlyGrading,
    AnswerOption,
    FullGrading,
    GradedAnswer,
    GradingAggregate,
    GradingRecord,
    GradingResponse,
    NoGrading,
    Question,
    QuizInfo,
)
from quiz_client.core.services.question_set import decide_select_mode


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class QuizInfoPayload(ApiModel):
    id: int
    title: str
    description: str | None = None
    access_code: str = ""
    is_active: bool = True
    is_started: bool = True
    passing_score: float | None = Field(
        default=None,
        validation_alias=AliasChoices("passingScore", "scorePassage", "passing_score"),
    )

    def to_domain(self) -> QuizInfo:
        return QuizInfo(
            id=self.id,
            title=self.title,
            access_code=self.access_code,
            description=self.description,
            is_active=self.is_active,
            is_started=self.is_started,
            passing_score=self.passing_score,
        )


class AnswerOptionPayload(ApiModel):
    id: int
    text: str
    order_number: int = 0
    is_correct: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("isCorrect", "correct", "is_correct"),
    )

    def to_domain(self) -> AnswerOption:
        return AnswerOption(
            id=self.id,
            text=self.text,
            position=self.order_number,
            is_correct=self.is_correct,
        )


class QuestionPayload(ApiModel):
    id: int
    text: str
    order_number: int = 0
    answers: list[AnswerOptionPayload] = Field(default_factory=list)
    multiple: bool | None = None

    def to_domain(self) -> Question:
        options = tuple(answer.to_domain() for answer in self.answers)
        return Question(
            id=self.id,
            position=self.order_number,
            text=self.text,
            options=options,
            select_mode=decide_select_mode(options, self.multiple),
        )


class QuizContentPayload(ApiModel):
    id: int
    title: str = ""
    questions: list[QuestionPayload] = Field(default_factory=list)

    def to_questions(self) -> list[Question]:
        return [question.to_domain() for question in self.questions]


class AttemptCreatedPayload(ApiModel):
    id: int


class GradedAnswerPayload(ApiModel):
    id: int | None = None
    text: str = ""
    is_correct: bool | None = Field(
        default=None,
        validation_alias=AliasChoices("isCorrect", "correct", "is_correct"),
    )

    def to_domain(self) -> GradedAnswer:
        return GradedAnswer(text=self.text, id=self.id, is_correct=self.is_correct)


def _as_answers(value: GradedAnswerPayload | list[GradedAnswerPayload] | None) -> tuple[GradedAnswer, ...]:
    if value is None:
        return ()
    if isinstance(value, list):
        return tuple(item.to_domain() for item in value)
    return (value.to_domain(),)


class ResponseDetailPayload(ApiModel):
    question_id: int
    question_text: str = ""
    user_answer: GradedAnswerPayload | list[GradedAnswerPayload] | None = None
    correct_answer: GradedAnswerPayload | list[GradedAnswerPayload] | None = None
    is_correct: bool = False

    def to_domain(self) -> GradingRecord:
        return GradingRecord(
            question_id=self.question_id,
            question_text=self.question_text,
            chosen=_as_answers(self.user_answer),
            correct=_as_answers(self.correct_answer),
            is_correct=self.is_correct,
        )


class GradingResponsePayload(ApiModel):
    score: int | None = None
    total_questions: int | None = None
    percentage: float | None = None
    response_details: list[ResponseDetailPayload] | None = None

    def aggregate(self) -> GradingAggregate | None:
        """Score numbers as supplied; missing ones are completed during reconciliation."""
        aggregate = GradingAggregate(
            score=self.score,
            total_questions=self.total_questions,
            percentage=self.percentage,
        )
        return None if aggregate.is_empty else aggregate

    def to_domain(self) -> GradingResponse:
        aggregate = self.aggregate()
        if self.response_details:
            records = tuple(detail.to_domain() for detail in self.response_details)
            return FullGrading(records=records, aggregate=aggregate)
        if aggregate is not None:
            return AggregateOnlyGrading(aggregate=aggregate)
        return NoGrading()
