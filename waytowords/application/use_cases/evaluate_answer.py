from __future__ import annotations

import logging

from waytowords.application.ports.llm import LLMPort
from waytowords.domain.entities.evaluation import LevelAssessment


class EvaluateAnswerUseCase:
    def __init__(self, llm: LLMPort) -> None:
        self._llm = llm
        self._logger = logging.getLogger(__name__)

    def execute(self, answer: str) -> LevelAssessment:
        text = (answer or "").strip()
        if not text:
            raise ValueError("Answer is required and must be a non-empty string.")

        self._logger.info("Evaluate request received", extra={"answer_length": len(text), "provider": self._llm.name})
        assessment = self._llm.evaluate_answer(text)
        self._logger.info("Answer evaluated", extra={"level": assessment.level.value})
        return assessment
