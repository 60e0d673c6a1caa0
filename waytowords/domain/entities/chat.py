from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Any

AUTHORS = ("user", "bot")


@dataclass(frozen=True)
class ChatMessage:
    id: str
    author: str  # "user" | "bot"
    text: str
    time: str

    @staticmethod
    def create(author: str, text: str, now: datetime | None = None) -> "ChatMessage":
        if author not in AUTHORS:
            raise ValueError(f"Unknown message author: {author!r}")
        ts = now or datetime.now()
        return ChatMessage(
            id=f"{int(ts.timestamp() * 1000)}-{uuid.uuid4().hex[:9]}",
            author=author,
            text=text,
            time=ts.strftime("%I:%M %p"),
        )

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "author": self.author, "text": self.text, "time": self.time}

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ChatMessage":
        return ChatMessage(
            id=str(data.get("id") or ""),
            author=str(data.get("author") or "user"),
            text=str(data.get("text") or ""),
            time=str(data.get("time") or ""),
        )


@dataclass(frozen=True)
class ChatReply:
    text: str
    fallback: bool = False
