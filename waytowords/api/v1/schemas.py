from datetime import datetime, timezone
from pydantic import BaseModel, Field

from waytowords.domain.entities.cefr import CefrLevel


def _now() -> datetime:
    return datetime.now(timezone.utc)


class EvaluateRequestSchema(BaseModel):
    answer: str


class EvaluateResponseSchema(BaseModel):
    level: CefrLevel
    explanation: str
    timestamp: datetime = Field(default_factory=_now)


class QuestionSchema(BaseModel):
    id: str
    text: str


class QuestionsResponseSchema(BaseModel):
    questions: list[QuestionSchema]


class QuestionEvaluationSchema(BaseModel):
    question_id: str
    level: CefrLevel
    explanation: str


class SubmitRequestSchema(BaseModel):
    answers: dict[str, str] = Field(default_factory=dict)


class LevelTestResultSchema(BaseModel):
    level: CefrLevel
    explanation: str
    evaluations: list[QuestionEvaluationSchema]
    skipped: list[str] = Field(default_factory=list)


class SessionCreateRequestSchema(BaseModel):
    session_id: str | None = None


class SessionResponseSchema(BaseModel):
    session_id: str


class AnswerRequestSchema(BaseModel):
    question_id: str
    answer: str


class ChatMessageSchema(BaseModel):
    id: str = ""
    author: str = Field(pattern="^(user|bot)$")
    text: str
    time: str = ""


class ChatRequestSchema(BaseModel):
    user_id: str = "anonymous"
    message: str
    topic: str | None = None
    cefr_level: CefrLevel | None = None
    history: list[ChatMessageSchema] | None = None


class ChatResponseSchema(BaseModel):
    reply: str
    fallback: bool = False
    timestamp: datetime = Field(default_factory=_now)


class ChatHistoryResponseSchema(BaseModel):
    messages: list[ChatMessageSchema]
