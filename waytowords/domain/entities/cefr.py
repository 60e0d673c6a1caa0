from __future__ import annotations

from enum import Enum


class CefrLevel(str, Enum):
    A1 = "A1"
    A2 = "A2"
    B1 = "B1"
    B2 = "B2"
    C1 = "C1"
    C2 = "C2"

    @property
    def rank(self) -> int:
        return _RANKS[self]

    @staticmethod
    def from_rank(rank: int) -> "CefrLevel | None":
        for level, value in _RANKS.items():
            if value == rank:
                return level
        return None

    @staticmethod
    def parse(raw: object) -> "CefrLevel":
        if isinstance(raw, CefrLevel):
            return raw
        label = str(raw or "").strip().upper()
        try:
            return CefrLevel(label)
        except ValueError:
            raise ValueError(f"Invalid CEFR level: {raw!r}") from None


_RANKS: dict[CefrLevel, int] = {
    CefrLevel.A1: 1,
    CefrLevel.A2: 2,
    CefrLevel.B1: 3,
    CefrLevel.B2: 4,
    CefrLevel.C1: 5,
    CefrLevel.C2: 6,
}

# Canonical scan order, lowest to highest.
CEFR_LEVELS: tuple[CefrLevel, ...] = tuple(_RANKS)

DEFAULT_LEVEL = CefrLevel.B1
