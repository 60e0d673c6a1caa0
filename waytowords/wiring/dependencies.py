from functools import lru_cache
import logging

from waytowords.application.ports.chat_history import ChatHistoryPort
from waytowords.application.ports.llm import LLMPort
from waytowords.application.ports.session_store import LevelTestStorePort
from waytowords.application.use_cases.chat_reply import ChatReplyUseCase
from waytowords.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from waytowords.application.use_cases.level_test import LevelTestUseCase
from waytowords.core.config import settings
from waytowords.infrastructure.llm.huggingface_llm import HuggingFaceLLM
from waytowords.infrastructure.llm.mock_llm import MockLLM
from waytowords.infrastructure.llm.openai_llm import OpenAILLM
from waytowords.infrastructure.store.json_store import JsonChatHistoryStore
from waytowords.infrastructure.store.memory_store import MemoryChatHistoryStore, MemoryLevelTestStore

logger = logging.getLogger(__name__)


@lru_cache
def get_llm() -> LLMPort:
    provider = settings.LLM_PROVIDER.strip().lower()
    has_openai = bool(settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip())
    has_hf = bool(settings.HF_TOKEN and settings.HF_TOKEN.strip())

    if provider == "auto":
        provider = "openai" if has_openai else "huggingface" if has_hf else "mock"

    if provider == "openai":
        if not has_openai:
            raise ValueError("OPENAI_API_KEY is required when LLM_PROVIDER=openai.")
        llm: LLMPort = OpenAILLM()
    elif provider == "huggingface":
        if not has_hf:
            raise ValueError("HF_TOKEN is required when LLM_PROVIDER=huggingface.")
        llm = HuggingFaceLLM()
    elif provider == "mock":
        llm = MockLLM()
    else:
        raise ValueError(f"Unknown LLM_PROVIDER: {settings.LLM_PROVIDER!r}")

    logger.info("Using LLM provider", extra={"provider": llm.name})
    return llm


@lru_cache
def get_level_test_store() -> LevelTestStorePort:
    return MemoryLevelTestStore(max_sessions=settings.LEVEL_TEST_MAX_SESSIONS)


@lru_cache
def get_chat_history_store() -> ChatHistoryPort:
    if settings.ENV.lower() in {"dev", "local"}:
        return JsonChatHistoryStore(data_dir=settings.CHAT_DATA_DIR, history_limit=settings.CHAT_HISTORY_LIMIT)
    return MemoryChatHistoryStore(history_limit=settings.CHAT_HISTORY_LIMIT)


def get_evaluate_use_case() -> EvaluateAnswerUseCase:
    return EvaluateAnswerUseCase(llm=get_llm())


def get_level_test_use_case() -> LevelTestUseCase:
    return LevelTestUseCase(llm=get_llm(), store=get_level_test_store())


def get_chat_use_case() -> ChatReplyUseCase:
    return ChatReplyUseCase(
        llm=get_llm(),
        history_store=get_chat_history_store(),
        history_window=settings.CHAT_HISTORY_WINDOW,
    )
