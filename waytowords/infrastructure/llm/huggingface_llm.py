from __future__ import annotations

import logging
import time
from typing import Any

import httpx

from waytowords.application.exceptions import LLMContractError, LLMUpstreamError
from waytowords.application.ports.llm import LLMPort
from waytowords.application.utils.response_parser import parse_evaluation_response
from waytowords.core.config import settings
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage
from waytowords.domain.entities.evaluation import LevelAssessment
from waytowords.infrastructure.llm.prompts import build_chat_prompt, build_evaluation_prompt


class HuggingFaceLLM(LLMPort):
    """HuggingFace Inference API adapter (text-generation task)."""

    name = "huggingface"

    def __init__(
        self,
        token: str | None = None,
        api_url: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self._token = token if token is not None else settings.HF_TOKEN
        self._api_url = api_url or settings.HF_API_URL
        self._client = client or httpx.Client(timeout=settings.EVALUATION_TIMEOUT_SECONDS)
        self._logger = logging.getLogger(__name__)

    def evaluate_answer(self, answer: str) -> LevelAssessment:
        return parse_evaluation_response(self._generate(build_evaluation_prompt(answer)))

    def chat_reply(
        self,
        message: str,
        topic: str | None,
        cefr_level: CefrLevel | None,
        history: list[ChatMessage],
    ) -> str:
        return self._generate(build_chat_prompt(message, topic, cefr_level, history))

    def _generate(self, prompt: str) -> str:
        if not self._token:
            raise LLMUpstreamError("HF_TOKEN is not configured")

        payload = {
            "inputs": prompt,
            "parameters": {
                "max_new_tokens": settings.HF_MAX_NEW_TOKENS,
                "temperature": settings.HF_TEMPERATURE,
                "top_p": settings.HF_TOP_P,
                "return_full_text": False,
            },
        }
        headers = {"Authorization": f"Bearer {self._token}"}

        started = time.monotonic()
        try:
            resp = self._client.post(self._api_url, headers=headers, json=payload)
        except httpx.TimeoutException as e:
            self._log_failure("timeout", started)
            raise LLMUpstreamError("HuggingFace request timed out") from e
        except httpx.RequestError as e:
            self._log_failure(str(e), started)
            raise LLMUpstreamError(f"HuggingFace transport error: {e}") from e

        if resp.status_code == 503:
            self._log_failure("model loading", started, status=503)
            raise LLMUpstreamError("Model is loading. Please try again in a few seconds.")
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("error")
            except Exception:
                detail = None
            self._log_failure(detail or resp.text[:200], started, status=resp.status_code)
            raise LLMUpstreamError(detail or f"HF API error: {resp.status_code} {resp.reason_phrase}")

        try:
            data = resp.json()
        except ValueError as e:
            raise LLMContractError("Unexpected response format from HF API") from e

        text = _generated_text(data)
        if text is None:
            raise LLMContractError("Unexpected response format from HF API")
        if not text.strip():
            raise LLMContractError("Empty response from HF API")

        self._logger.info(
            "HF call succeeded",
            extra={"provider": self.name, "elapsed_ms": _elapsed_ms(started), "response_length": len(text)},
        )
        return text

    def _log_failure(self, reason: str, started: float, status: int | None = None) -> None:
        self._logger.error(
            "HF call failed",
            extra={"provider": self.name, "reason": reason, "status": status, "elapsed_ms": _elapsed_ms(started)},
        )


def _generated_text(data: Any) -> str | None:
    if isinstance(data, list) and data:
        first = data[0] if isinstance(data[0], dict) else {}
        text = first.get("generated_text") or first.get("summary_text") or ""
    elif isinstance(data, dict) and "generated_text" in data:
        text = data["generated_text"] or ""
    elif isinstance(data, str):
        return data
    else:
        return None
    if not isinstance(text, str):
        raise LLMContractError(f"HF API returned non-text generated_text: {type(text).__name__}")
    return text


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
