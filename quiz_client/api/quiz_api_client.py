"""Async HTTP client for the quiz REST API used by participants."""

from __future__ import annotations

import asyncio
from dataclasses import replace
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError

from quiz_client.api.schemas import (
    AttemptCreatedPayload,
    GradingResponsePayload,
    QuizContentPayload,
    QuizInfoPayload,
)
from quiz_client.core.config import settings
from quiz_client.core.errors import QuizClientError
from quiz_client.core.models import (
    AttemptSubmission,
    Credential,
    GradingResponse,
    NoGrading,
    Participant,
    Question,
    QuizInfo,
)

logger = logging.getLogger(__name__)

CONNECTION_PROBLEM_MESSAGE = "Could not reach the quiz server."


class QuizApiError(QuizClientError):
    """Raised when a request to the quiz API fails."""

    def __init__(self, message: str, status_code: int = 0) -> None:
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_unauthorized(self) -> bool:
        return self.status_code in (401, 403)

    @property
    def is_connection_problem(self) -> bool:
        return self.status_code == 0


class QuizLoadError(QuizApiError):
    """Raised when quiz metadata or questions cannot be loaded."""


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict):
        for key in ("detail", "message", "error"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return fallback


class QuizApiClient:
    """Thin wrapper around ``httpx.AsyncClient`` speaking the quiz API.

    A fresh ``AsyncClient`` is opened per call so the client can be used from
    any event loop, including short-lived loops on worker threads.
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout: httpx.Timeout | None = None,
        max_attempts: int | None = None,
        retry_backoff_seconds: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self._timeout = timeout or httpx.Timeout(
            connect=settings.http_timeout_connect,
            read=settings.http_timeout_read,
            write=settings.http_timeout_read,
            pool=settings.http_timeout_connect,
        )
        self._max_attempts = max(1, max_attempts if max_attempts is not None else settings.load_max_attempts)
        self._retry_backoff = (
            retry_backoff_seconds if retry_backoff_seconds is not None else settings.load_retry_backoff_seconds
        )
        self._transport = transport

    # --- Loading ---

    async def find_quiz_by_code(self, access_code: str) -> QuizInfo:
        code = access_code.strip()
        if not code:
            raise QuizLoadError("Please enter a quiz code.", 400)
        payload = await self._get_model(
            f"/api/public/quizzes/by-code/{code}",
            QuizInfoPayload,
            not_found="No quiz matches this code.",
            fallback="Could not find the quiz.",
        )
        quiz = payload.to_domain()
        if not quiz.access_code:
            quiz = replace(quiz, access_code=code)
        return quiz

    async def load_questions(self, quiz_id: int, credential: Credential | None = None) -> list[Question]:
        payload = await self._get_model(
            f"/api/public/quizzes/{quiz_id}",
            QuizContentPayload,
            credential=credential,
            not_found="Quiz not found.",
            fallback="Could not load the quiz questions.",
        )
        questions = payload.to_questions()
        logger.info("Loaded %d questions for quiz %s", len(questions), quiz_id)
        return questions

    # --- Submission ---

    async def create_attempt(
        self,
        quiz_id: int,
        participant: Participant,
        credential: Credential | None = None,
    ) -> int:
        body = {
            "quiz": f"/api/quizzes/{quiz_id}",
            "participantFirstName": participant.first_name,
            "participantLastName": participant.last_name,
        }
        response = await self._send("POST", "/api/quiz_attempts", credential=credential, json=body)
        self._raise_for_status(response, "Could not create the quiz attempt.")
        created = self._parse(response, AttemptCreatedPayload)
        logger.info("Created attempt %s for quiz %s", created.id, quiz_id)
        return created.id

    async def submit_answers(
        self,
        attempt_id: int,
        submission: AttemptSubmission,
        credential: Credential | None = None,
    ) -> GradingResponse:
        body = {
            "attemptId": attempt_id,
            "participantFirstName": submission.participant.first_name,
            "participantLastName": submission.participant.last_name,
            "answers": submission.answers_payload(),
        }
        response = await self._send(
            "POST",
            f"/api/public/quizzes/{submission.quiz_id}/submit",
            credential=credential,
            json=body,
        )
        self._raise_for_status(response, "Could not submit the answers.")
        if response.status_code == 204 or not response.content.strip():
            return NoGrading()
        grading = self._parse(response, GradingResponsePayload).to_domain()
        logger.info("Attempt %s graded: %s", attempt_id, type(grading).__name__)
        return grading

    # --- Helpers ---

    async def _get_model(
        self,
        path: str,
        model: type[BaseModel],
        *,
        credential: Credential | None = None,
        not_found: str,
        fallback: str,
    ) -> Any:
        try:
            response = await self._get_with_retries(path, credential)
        except QuizApiError as exc:
            raise QuizLoadError(str(exc), exc.status_code) from exc
        if response.status_code == 404:
            raise QuizLoadError(not_found, 404)
        if response.is_error:
            raise QuizLoadError(_error_message(response, fallback), response.status_code)
        try:
            return self._parse(response, model)
        except QuizApiError as exc:
            raise QuizLoadError(str(exc), exc.status_code) from exc

    async def _get_with_retries(self, path: str, credential: Credential | None) -> httpx.Response:
        attempt = 1
        while True:
            try:
                return await self._send("GET", path, credential=credential)
            except QuizApiError as exc:
                logger.warning("GET %s failed (attempt %d/%d): %s", path, attempt, self._max_attempts, exc)
                if attempt >= self._max_attempts:
                    raise
            await asyncio.sleep(self._retry_backoff * attempt)
            attempt += 1

    async def _send(
        self,
        method: str,
        path: str,
        *,
        credential: Credential | None = None,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        headers = {"Accept": "application/json"}
        if credential is not None:
            headers.update(credential.authorization_header())
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                return await client.request(method, path, headers=headers, json=json)
        except httpx.HTTPError as exc:
            raise QuizApiError(CONNECTION_PROBLEM_MESSAGE, 0) from exc

    @staticmethod
    def _raise_for_status(response: httpx.Response, fallback: str) -> None:
        if response.is_error:
            raise QuizApiError(_error_message(response, fallback), response.status_code)

    @staticmethod
    def _parse(response: httpx.Response, model: type[BaseModel]) -> Any:
        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise QuizApiError("The quiz server sent an unexpected response.", response.status_code) from exc
