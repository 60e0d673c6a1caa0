from __future__ import annotations

import logging
import time

from openai import OpenAI

from waytowords.application.exceptions import LLMContractError, LLMUpstreamError
from waytowords.application.ports.llm import LLMPort
from waytowords.application.utils.response_parser import parse_evaluation_response
from waytowords.core.config import settings
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage
from waytowords.domain.entities.evaluation import LevelAssessment
from waytowords.infrastructure.llm.prompts import build_chat_prompt, build_evaluation_prompt


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Contract guarantees:
    - evaluate_answer returns a LevelAssessment with a valid CEFR level
    - chat_reply returns the raw reply text
    - Raises:
        LLMUpstreamError: networking/provider failures and timeouts
        LLMContractError: invalid JSON, missing fields or unknown level
    """

    name = "openai"

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            timeout=settings.EVALUATION_TIMEOUT_SECONDS,
            max_retries=0,
        )
        self._logger = logging.getLogger(__name__)

    def evaluate_answer(self, answer: str) -> LevelAssessment:
        text = self._call_text(
            model=settings.OPENAI_MODEL_EVALUATE,
            system="You are an English examiner. Return only valid JSON. Do not include markdown or extra text.",
            prompt=build_evaluation_prompt(answer),
            temperature=settings.OPENAI_TEMPERATURE_EVALUATE,
            use_json_mode=True,
        )
        return parse_evaluation_response(text)

    def chat_reply(
        self,
        message: str,
        topic: str | None,
        cefr_level: CefrLevel | None,
        history: list[ChatMessage],
    ) -> str:
        return self._call_text(
            model=settings.OPENAI_MODEL_CHAT,
            system="You are a friendly English tutor. Reply with the tutor's next message only.",
            prompt=build_chat_prompt(message, topic, cefr_level, history),
            temperature=settings.OPENAI_TEMPERATURE_CHAT,
        )

    def _call_text(self, model: str, system: str, prompt: str, temperature: float, use_json_mode: bool = False) -> str:
        started = time.monotonic()
        try:
            kwargs = {
                "model": model,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
                "temperature": temperature,
                "max_tokens": 400,
            }
            if use_json_mode:
                kwargs["response_format"] = {"type": "json_object"}

            resp = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            self._logger.error("OpenAI call failed", extra={"provider": self.name, "reason": str(e), "elapsed_ms": _elapsed_ms(started)})
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        self._logger.info("OpenAI call succeeded", extra={"provider": self.name, "elapsed_ms": _elapsed_ms(started)})
        return content


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)
