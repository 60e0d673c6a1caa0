from abc import ABC, abstractmethod

from waytowords.domain.entities.chat import ChatMessage

DEFAULT_TOPIC = "general"


def topic_key(topic: str | None) -> str:
    return topic or DEFAULT_TOPIC


class ChatHistoryPort(ABC):
    """Chat history kept per user and topic; user ids are compared exactly."""

    @abstractmethod
    def load(self, user_id: str, topic: str | None) -> list[ChatMessage]:
        raise NotImplementedError

    @abstractmethod
    def append(self, user_id: str, topic: str | None, messages: list[ChatMessage]) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear(self, user_id: str, topic: str | None) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_all(self, user_id: str) -> None:
        raise NotImplementedError
