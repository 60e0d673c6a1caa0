from waytowords.application.ports.llm import LLMPort
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage
from waytowords.domain.entities.evaluation import LevelAssessment

# (minimum word count, level), checked from the top
_WORD_COUNT_BANDS: tuple[tuple[int, CefrLevel], ...] = (
    (120, CefrLevel.C2),
    (80, CefrLevel.C1),
    (50, CefrLevel.B2),
    (25, CefrLevel.B1),
    (10, CefrLevel.A2),
    (0, CefrLevel.A1),
)


class MockLLM(LLMPort):
    name = "mock"

    def evaluate_answer(self, answer: str) -> LevelAssessment:
        words = len(answer.split())
        level = next(lvl for threshold, lvl in _WORD_COUNT_BANDS if words >= threshold)
        return LevelAssessment(level=level, explanation=f"Mock evaluation for a {words}-word answer.")

    def chat_reply(
        self,
        message: str,
        topic: str | None,
        cefr_level: CefrLevel | None,
        history: list[ChatMessage],
    ) -> str:
        level = f", CEFR: {cefr_level.value}" if cefr_level else ""
        return f"You said: \"{message}\" (Topic: {topic or 'general conversation'}{level})"
