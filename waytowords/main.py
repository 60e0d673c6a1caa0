import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from waytowords.api.v1.chat import router as chat_router
from waytowords.api.v1.level_test import router as level_test_router
from waytowords.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "session_id",
            "question_id",
            "level",
            "provider",
            "topic",
            "status",
            "elapsed_ms",
            "answered",
            "skipped",
            "reason",
            "key",
            "answer_length",
            "response_length",
            "history",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Way to Words API", version="1.0.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(level_test_router, prefix="/api/v1", tags=["level-test"])
app.include_router(chat_router, prefix="/api/v1", tags=["chat"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "llm_provider": settings.LLM_PROVIDER}
