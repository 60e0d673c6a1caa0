from __future__ import annotations

import json
import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import quote

from waytowords.application.ports.chat_history import ChatHistoryPort, topic_key
from waytowords.domain.entities.chat import ChatMessage


def _encode_name(raw: str) -> str:
    # percent-encoding is injective; dots are encoded too so "." and ".." stay inside data_dir
    return quote(raw, safe="").replace(".", "%2E")


class JsonChatHistoryStore(ChatHistoryPort):
    """One directory per user, one JSON file per topic, written atomically."""

    def __init__(self, data_dir: str = "./data/chats", history_limit: int = 100) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._history_limit = history_limit
        self._locks: dict[str, threading.Lock] = {}
        self._lock_lock = threading.Lock()  # Lock for managing locks dict
        self._logger = logging.getLogger(__name__)

    def _get_lock(self, user_id: str) -> threading.Lock:
        with self._lock_lock:
            if user_id not in self._locks:
                self._locks[user_id] = threading.Lock()
            return self._locks[user_id]

    def _get_user_dir(self, user_id: str) -> Path:
        return self._data_dir / f"u-{_encode_name(user_id)}"

    def _get_file_path(self, user_id: str, topic: str | None) -> Path:
        return self._get_user_dir(user_id) / f"{_encode_name(topic_key(topic))}.json"

    def _load_data(self, user_id: str, topic: str | None) -> dict[str, Any]:
        """Load chat data from JSON file, return default if missing or corrupted."""
        file_path = self._get_file_path(user_id, topic)
        default = {"user_id": user_id, "messages": [], "topic": topic, "savedAt": None}
        if not file_path.exists():
            return default

        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            self._logger.warning("Failed to load chat history", extra={"reason": str(e), "key": file_path.name})
            return default

        if not isinstance(data, dict) or not isinstance(data.get("messages"), list):
            return default
        return data

    def _save_data(self, file_path: Path, data: dict[str, Any]) -> None:
        """Save chat data to JSON file atomically."""
        file_path.parent.mkdir(parents=True, exist_ok=True)
        temp_path = file_path.with_suffix(".json.tmp")

        try:
            with open(temp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            temp_path.replace(file_path)
        except Exception:
            if temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise

    def load(self, user_id: str, topic: str | None) -> list[ChatMessage]:
        with self._get_lock(user_id):
            data = self._load_data(user_id, topic)
        return [ChatMessage.from_dict(m) for m in data["messages"] if isinstance(m, dict)]

    def append(self, user_id: str, topic: str | None, messages: list[ChatMessage]) -> None:
        with self._get_lock(user_id):
            data = self._load_data(user_id, topic)
            stored = data["messages"] + [m.to_dict() for m in messages]
            self._save_data(
                self._get_file_path(user_id, topic),
                {
                    "user_id": user_id,
                    "messages": stored[-self._history_limit :],
                    "topic": topic,
                    "savedAt": datetime.now(timezone.utc).isoformat(),
                },
            )

    def clear(self, user_id: str, topic: str | None) -> None:
        with self._get_lock(user_id):
            self._get_file_path(user_id, topic).unlink(missing_ok=True)

    def clear_all(self, user_id: str) -> None:
        user_dir = self._get_user_dir(user_id)
        with self._get_lock(user_id):
            if not user_dir.is_dir():
                return
            for file_path in user_dir.glob("*.json"):
                file_path.unlink(missing_ok=True)
            try:
                user_dir.rmdir()
            except OSError:
                self._logger.warning("Chat history directory not empty", extra={"key": user_dir.name})
