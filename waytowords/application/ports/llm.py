from abc import ABC, abstractmethod

from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage
from waytowords.domain.entities.evaluation import LevelAssessment


class LLMPort(ABC):
    name: str = "llm"

    @abstractmethod
    def evaluate_answer(self, answer: str) -> LevelAssessment:
        """
        Rate a free-text answer on the CEFR scale.

        Requirements:
        - `answer` is non-empty; the use case validates this before calling
        - Must return within the adapter's configured timeout
        - Returned level is always one of the six CEFR symbols

        Raises:
            LLMUpstreamError: timeout, transport or provider failure
            LLMContractError: malformed response or level outside A1..C2
        """
        raise NotImplementedError

    @abstractmethod
    def chat_reply(
        self,
        message: str,
        topic: str | None,
        cefr_level: CefrLevel | None,
        history: list[ChatMessage],
    ) -> str:
        """
        Produce the tutor's next reply.

        Returns the raw reply text (may be empty; the use case handles fallback).

        Raises:
            LLMUpstreamError: timeout, transport or provider failure
        """
        raise NotImplementedError
