from __future__ import annotations

import json
import re
from typing import Any

from waytowords.application.exceptions import LLMContractError
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.evaluation import LevelAssessment

JSON_MARKER = "JSON response:"
TUTOR_MARKER = "Tutor:"

_LEVEL_AND_EXPLANATION = re.compile(r"\{[\s\S]*?\"level\"[\s\S]*?\"explanation\"[\s\S]*?\}")
_ANY_OBJECT = re.compile(r"\{[\s\S]*?\}")


def parse_evaluation_response(text: str) -> LevelAssessment:
    """
    Extract {level, explanation} from raw model output.

    Tries, in order: the whole text as JSON, the first object mentioning both
    keys, the first object of any shape. The level must be one of the six CEFR
    symbols.
    """
    cleaned = (text or "").strip()
    if JSON_MARKER in cleaned:
        cleaned = cleaned.split(JSON_MARKER)[-1].strip()
    if not cleaned:
        raise LLMContractError("Evaluate: empty response text.")

    data = _first_complete(cleaned)
    if data is None:
        snippet = cleaned[:200].replace("\n", " ")
        raise LLMContractError(f"Evaluate: no JSON object with level and explanation. Snippet: {snippet!r}")

    try:
        level = CefrLevel.parse(data["level"])
    except ValueError as e:
        raise LLMContractError(f"Evaluate: {e}") from e

    return LevelAssessment(level=level, explanation=str(data["explanation"]).strip())


def extract_tutor_reply(text: str) -> str:
    reply = (text or "").strip()
    if TUTOR_MARKER in reply:
        reply = reply.split(TUTOR_MARKER)[-1].strip()
    return reply


def _first_complete(text: str) -> dict[str, Any] | None:
    candidates = [text]
    for pattern in (_LEVEL_AND_EXPLANATION, _ANY_OBJECT):
        match = pattern.search(text)
        if match:
            candidates.append(match.group(0))

    for candidate in candidates:
        try:
            data = json.loads(candidate)
        except ValueError:
            continue
        if isinstance(data, dict) and data.get("level") and data.get("explanation"):
            return data
    return None
