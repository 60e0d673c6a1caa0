from __future__ import annotations

import logging

from waytowords.application.exceptions import LLMContractError, LLMUpstreamError
from waytowords.application.ports.chat_history import ChatHistoryPort
from waytowords.application.ports.llm import LLMPort
from waytowords.application.utils.response_parser import extract_tutor_reply
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage, ChatReply

FALLBACK_REPLY = "Sorry, I am unavailable."


class ChatReplyUseCase:
    def __init__(self, llm: LLMPort, history_store: ChatHistoryPort, history_window: int = 5) -> None:
        self._llm = llm
        self._history = history_store
        self._history_window = max(0, history_window)
        self._logger = logging.getLogger(__name__)

    def execute(
        self,
        user_id: str,
        message: str,
        topic: str | None = None,
        cefr_level: CefrLevel | None = None,
        history: list[ChatMessage] | None = None,
    ) -> ChatReply:
        text = (message or "").strip()
        if not text:
            raise ValueError("Message is required and must be a non-empty string.")

        if history is None:
            history = self._history.load(user_id, topic)
        recent = history[-self._history_window:] if self._history_window else []

        self._logger.info(
            "Chat request received",
            extra={"topic": topic or "none", "level": cefr_level.value if cefr_level else "none", "history": len(history)},
        )

        try:
            raw = self._llm.chat_reply(message=text, topic=topic, cefr_level=cefr_level, history=recent)
            reply = extract_tutor_reply(raw)
            if not reply:
                raise LLMContractError("Empty response from LLM")
            result = ChatReply(text=reply)
        except (LLMUpstreamError, LLMContractError) as e:
            self._logger.error("Chat reply failed", extra={"reason": str(e), "provider": self._llm.name})
            result = ChatReply(text=FALLBACK_REPLY, fallback=True)

        self._history.append(
            user_id,
            topic,
            [ChatMessage.create("user", text), ChatMessage.create("bot", result.text)],
        )
        return result
