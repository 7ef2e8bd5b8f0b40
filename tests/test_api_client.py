from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from quiz_client.api.quiz_api_client import QuizApiClient, QuizApiError, QuizLoadError
from quiz_client.api.submission_client import HttpSubmissionClient
from quiz_client.core.attempt_loader import start_online_attempt
from quiz_client.core.errors import NoContentError, SubmissionError
from quiz_client.core.models import (
    AggregateOnlyGrading,
    AttemptSubmission,
    Credential,
    FullGrading,
    NoGrading,
    SelectMode,
)

BASE_URL = "http://quiz.test"
TOKEN = Credential("secret-token")

QUIZ_INFO = {
    "id": 7,
    "title": "Arithmetic",
    "description": "Warm-up",
    "accessCode": "ABC123",
    "isActive": True,
    "passingScore": 50,
}

QUIZ_CONTENT = {
    "id": 7,
    "title": "Arithmetic",
    "questions": [
        {
            "id": 2,
            "text": "Pick the even numbers",
            "orderNumber": 2,
            "answers": [
                {"id": 21, "text": "2", "orderNumber": 1, "isCorrect": True},
                {"id": 22, "text": "3", "orderNumber": 2, "isCorrect": False},
                {"id": 23, "text": "4", "orderNumber": 3, "isCorrect": True},
            ],
        },
        {
            "id": 1,
            "text": "What is 1 + 1?",
            "orderNumber": 1,
            "multiple": False,
            "answers": [
                {"id": 11, "text": "2", "orderNumber": 1, "correct": True},
                {"id": 12, "text": "3", "orderNumber": 2},
            ],
        },
    ],
}


class Recorder:
    """MockTransport handler answering from a route table and recording requests."""

    def __init__(self, routes):
        self.routes = routes
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes[(request.method, request.url.path)]
        if callable(route):
            return route(request)
        return route

    def count(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)


def _client(recorder, **kwargs) -> QuizApiClient:
    kwargs.setdefault("retry_backoff_seconds", 0)
    return QuizApiClient(BASE_URL, transport=httpx.MockTransport(recorder), **kwargs)


# --- Loading ---


def test_find_quiz_by_code_parses_quiz_info():
    recorder = Recorder({("GET", "/api/public/quizzes/by-code/ABC123"): httpx.Response(200, json=QUIZ_INFO)})

    quiz = asyncio.run(_client(recorder).find_quiz_by_code(" ABC123 "))

    assert quiz.id == 7
    assert quiz.access_code == "ABC123"
    assert quiz.passing_score == 50.0
    assert quiz.is_active is True


def test_find_quiz_by_code_fills_missing_access_code():
    payload = {"id": 3, "title": "No code echoed", "scorePassage": 70}
    recorder = Recorder({("GET", "/api/public/quizzes/by-code/XYZ999"): httpx.Response(200, json=payload)})

    quiz = asyncio.run(_client(recorder).find_quiz_by_code("XYZ999"))

    assert quiz.access_code == "XYZ999"
    assert quiz.passing_score == 70.0


def test_empty_code_is_rejected_without_request():
    recorder = Recorder({})

    with pytest.raises(QuizLoadError):
        asyncio.run(_client(recorder).find_quiz_by_code("   "))
    assert recorder.requests == []


def test_load_questions_sends_bearer_token_and_orders_content():
    recorder = Recorder({("GET", "/api/public/quizzes/7"): httpx.Response(200, json=QUIZ_CONTENT)})

    questions = asyncio.run(_client(recorder).load_questions(7, TOKEN))

    assert recorder.requests[0].headers["Authorization"] == "Bearer secret-token"
    by_id = {q.id: q for q in questions}
    assert by_id[2].select_mode is SelectMode.MULTIPLE
    assert by_id[1].select_mode is SelectMode.SINGLE
    assert [o.is_correct for o in by_id[1].options] == [True, None]


def test_missing_quiz_raises_load_error():
    recorder = Recorder({("GET", "/api/public/quizzes/9"): httpx.Response(404, json={"detail": "nope"})})

    with pytest.raises(QuizLoadError) as excinfo:
        asyncio.run(_client(recorder).load_questions(9))

    assert excinfo.value.status_code == 404
    assert str(excinfo.value) == "Quiz not found."


def test_unauthorized_load_is_flagged():
    recorder = Recorder(
        {("GET", "/api/public/quizzes/7"): httpx.Response(401, json={"message": "Token expired"})}
    )

    with pytest.raises(QuizLoadError) as excinfo:
        asyncio.run(_client(recorder).load_questions(7, TOKEN))

    assert excinfo.value.is_unauthorized
    assert str(excinfo.value) == "Token expired"
    assert recorder.count("GET", "/api/public/quizzes/7") == 1


def test_connection_errors_are_retried_then_reported():
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    recorder = Recorder({("GET", "/api/public/quizzes/7"): unreachable})

    with pytest.raises(QuizLoadError) as excinfo:
        asyncio.run(_client(recorder, max_attempts=3).load_questions(7))

    assert excinfo.value.is_connection_problem
    assert recorder.count("GET", "/api/public/quizzes/7") == 3


@pytest.mark.parametrize("max_attempts", [0, 1])
def test_single_attempt_reports_first_connection_error(max_attempts):
    def unreachable(request):
        raise httpx.ConnectError("connection refused", request=request)

    recorder = Recorder({("GET", "/api/public/quizzes/7"): unreachable})

    with pytest.raises(QuizLoadError) as excinfo:
        asyncio.run(_client(recorder, max_attempts=max_attempts).load_questions(7))

    assert excinfo.value.status_code == 0
    assert recorder.count("GET", "/api/public/quizzes/7") == 1


def test_transient_connection_error_recovers():
    outcomes = [None, httpx.Response(200, json=QUIZ_CONTENT)]

    def flaky(request):
        outcome = outcomes.pop(0)
        if outcome is None:
            raise httpx.ReadTimeout("slow", request=request)
        return outcome

    recorder = Recorder({("GET", "/api/public/quizzes/7"): flaky})

    questions = asyncio.run(_client(recorder, max_attempts=2).load_questions(7))

    assert len(questions) == 2


def test_malformed_payload_is_a_load_error():
    recorder = Recorder({("GET", "/api/public/quizzes/7"): httpx.Response(200, text="<html>oops</html>")})

    with pytest.raises(QuizLoadError):
        asyncio.run(_client(recorder).load_questions(7))


# --- Submission ---


def _submission(participant) -> AttemptSubmission:
    return AttemptSubmission(quiz_id=7, participant=participant, answers=((1, 11), (2, (21, 23))))


def test_create_attempt_and_submit_full_grading(participant):
    grading_body = {
        "score": 1,
        "totalQuestions": 2,
        "percentage": 50.0,
        "responseDetails": [
            {
                "questionId": 1,
                "questionText": "What is 1 + 1?",
                "userAnswer": {"id": 11, "text": "2", "isCorrect": True},
                "correctAnswer": {"id": 11, "text": "2"},
                "isCorrect": True,
            },
            {
                "questionId": 2,
                "questionText": "Pick the even numbers",
                "userAnswer": [{"id": 21, "text": "2"}],
                "correctAnswer": [{"id": 21, "text": "2"}, {"id": 23, "text": "4"}],
                "isCorrect": False,
            },
        ],
    }
    recorder = Recorder(
        {
            ("POST", "/api/quiz_attempts"): httpx.Response(201, json={"id": 41}),
            ("POST", "/api/public/quizzes/7/submit"): httpx.Response(200, json=grading_body),
        }
    )
    api = _client(recorder)

    attempt_id = asyncio.run(api.create_attempt(7, participant, TOKEN))
    grading = asyncio.run(api.submit_answers(attempt_id, _submission(participant), TOKEN))

    created_body = json.loads(recorder.requests[0].content)
    assert created_body == {
        "quiz": "/api/quizzes/7",
        "participantFirstName": "Ada",
        "participantLastName": "Lovelace",
    }
    submit_body = json.loads(recorder.requests[1].content)
    assert submit_body["attemptId"] == 41
    assert submit_body["answers"] == [
        {"questionId": 1, "answerId": 11},
        {"questionId": 2, "answerId": [21, 23]},
    ]

    assert isinstance(grading, FullGrading)
    assert grading.aggregate.percentage == 50.0
    assert [r.is_correct for r in grading.records] == [True, False]
    assert [a.text for a in grading.records[1].correct] == ["2", "4"]


@pytest.mark.parametrize(
    ("response", "expected_type"),
    [
        (httpx.Response(204), NoGrading),
        (httpx.Response(200, text=""), NoGrading),
        (httpx.Response(200, json={}), NoGrading),
        (httpx.Response(200, json={"score": 3, "totalQuestions": 4}), AggregateOnlyGrading),
        (httpx.Response(200, json={"score": 1, "percentage": 33.3}), AggregateOnlyGrading),
        (httpx.Response(200, json={"score": 3, "totalQuestions": 4, "responseDetails": []}), AggregateOnlyGrading),
    ],
)
def test_grading_response_variants(participant, response, expected_type):
    recorder = Recorder({("POST", "/api/public/quizzes/7/submit"): response})

    grading = asyncio.run(_client(recorder).submit_answers(41, _submission(participant)))

    assert isinstance(grading, expected_type)


def test_partial_aggregate_keeps_only_supplied_numbers(participant):
    recorder = Recorder(
        {("POST", "/api/public/quizzes/7/submit"): httpx.Response(200, json={"score": 1, "percentage": 33.3})}
    )

    grading = asyncio.run(_client(recorder).submit_answers(41, _submission(participant)))

    assert isinstance(grading, AggregateOnlyGrading)
    assert grading.aggregate.score == 1
    assert grading.aggregate.percentage == 33.3
    assert grading.aggregate.total_questions is None


def test_submit_error_status_raises_api_error(participant):
    recorder = Recorder(
        {("POST", "/api/public/quizzes/7/submit"): httpx.Response(500, json={"error": "Database down"})}
    )

    with pytest.raises(QuizApiError) as excinfo:
        asyncio.run(_client(recorder).submit_answers(41, _submission(participant)))

    assert excinfo.value.status_code == 500
    assert str(excinfo.value) == "Database down"


def test_http_submission_client_reuses_attempt_on_retry(participant):
    submit_responses = [httpx.Response(502), httpx.Response(200, json={"score": 2, "totalQuestions": 2})]
    recorder = Recorder(
        {
            ("POST", "/api/quiz_attempts"): httpx.Response(201, json={"id": 41}),
            ("POST", "/api/public/quizzes/7/submit"): lambda request: submit_responses.pop(0),
        }
    )
    client = HttpSubmissionClient(_client(recorder))

    with pytest.raises(SubmissionError) as excinfo:
        asyncio.run(client.submit(_submission(participant), TOKEN))
    assert excinfo.value.status_code == 502

    grading = asyncio.run(client.submit(_submission(participant), TOKEN))

    assert isinstance(grading, AggregateOnlyGrading)
    assert recorder.count("POST", "/api/quiz_attempts") == 1
    assert recorder.count("POST", "/api/public/quizzes/7/submit") == 2


# --- Starting an attempt ---


def test_start_online_attempt_normalizes_code_and_loads(participant):
    recorder = Recorder(
        {
            ("GET", "/api/public/quizzes/by-code/ABC123"): httpx.Response(200, json=QUIZ_INFO),
            ("GET", "/api/public/quizzes/7"): httpx.Response(200, json=QUIZ_CONTENT),
        }
    )

    attempt = asyncio.run(start_online_attempt(_client(recorder), " abc123 ", participant, TOKEN))

    assert attempt.quiz.title == "Arithmetic"
    assert [q.id for q in attempt.questions] == [1, 2]
    assert attempt.current_question.id == 1


def test_inactive_quiz_is_not_started(participant):
    recorder = Recorder(
        {("GET", "/api/public/quizzes/by-code/ABC123"): httpx.Response(200, json={**QUIZ_INFO, "isActive": False})}
    )

    with pytest.raises(QuizLoadError, match="not active"):
        asyncio.run(start_online_attempt(_client(recorder), "ABC123", participant))
    assert recorder.count("GET", "/api/public/quizzes/7") == 0


def test_quiz_without_questions_has_no_attempt(participant):
    recorder = Recorder(
        {
            ("GET", "/api/public/quizzes/by-code/ABC123"): httpx.Response(200, json=QUIZ_INFO),
            ("GET", "/api/public/quizzes/7"): httpx.Response(200, json={"id": 7, "questions": []}),
        }
    )

    with pytest.raises(NoContentError):
        asyncio.run(start_online_attempt(_client(recorder), "ABC123", participant))
