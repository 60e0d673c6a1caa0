from __future__ import annotations

import threading
import uuid

from waytowords.application.ports.chat_history import ChatHistoryPort, topic_key
from waytowords.application.ports.session_store import LevelTestStorePort
from waytowords.domain.entities.chat import ChatMessage
from waytowords.domain.entities.evaluation import QuestionEvaluation


class MemoryLevelTestStore(LevelTestStorePort):
    def __init__(self, max_sessions: int = 1000) -> None:
        # session_id -> question_id -> evaluation; dict order is answer order
        self._sessions: dict[str, dict[str, QuestionEvaluation]] = {}
        self._max_sessions = max(1, max_sessions)
        self._lock = threading.Lock()

    def get_or_create(self, session_id: str | None) -> str:
        with self._lock:
            if session_id and session_id in self._sessions:
                return session_id
            new_id = session_id or uuid.uuid4().hex
            # oldest open sessions are evicted first
            while len(self._sessions) >= self._max_sessions:
                del self._sessions[next(iter(self._sessions))]
            self._sessions[new_id] = {}
            return new_id

    def exists(self, session_id: str) -> bool:
        return session_id in self._sessions

    def put_evaluation(self, session_id: str, evaluation: QuestionEvaluation) -> None:
        with self._lock:
            answers = self._sessions.setdefault(session_id, {})
            answers.pop(evaluation.question_id, None)
            answers[evaluation.question_id] = evaluation

    def get_evaluations(self, session_id: str) -> list[QuestionEvaluation]:
        return list(self._sessions.get(session_id, {}).values())

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)


class MemoryChatHistoryStore(ChatHistoryPort):
    def __init__(self, history_limit: int = 100) -> None:
        # user_id -> topic -> messages
        self._users: dict[str, dict[str, list[ChatMessage]]] = {}
        self._history_limit = history_limit
        self._lock = threading.Lock()

    def load(self, user_id: str, topic: str | None) -> list[ChatMessage]:
        return list(self._users.get(user_id, {}).get(topic_key(topic), []))

    def append(self, user_id: str, topic: str | None, messages: list[ChatMessage]) -> None:
        key = topic_key(topic)
        with self._lock:
            topics = self._users.setdefault(user_id, {})
            thread = topics.setdefault(key, [])
            thread.extend(messages)
            if len(thread) > self._history_limit:
                topics[key] = thread[-self._history_limit :]

    def clear(self, user_id: str, topic: str | None) -> None:
        with self._lock:
            topics = self._users.get(user_id)
            if topics is not None:
                topics.pop(topic_key(topic), None)

    def clear_all(self, user_id: str) -> None:
        with self._lock:
            self._users.pop(user_id, None)
