from __future__ import annotations

import pytest

from fakes import ScriptedLLM
from waytowords.application.exceptions import LLMUpstreamError
from waytowords.application.use_cases.chat_reply import FALLBACK_REPLY, ChatReplyUseCase
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage
from waytowords.infrastructure.llm.prompts import build_chat_prompt
from waytowords.infrastructure.store.memory_store import MemoryChatHistoryStore


def test_reply_is_extracted_and_stored():
    llm = ScriptedLLM(reply="Student: hi\nTutor: Hello! How are you today?")
    store = MemoryChatHistoryStore()
    uc = ChatReplyUseCase(llm=llm, history_store=store)

    reply = uc.execute("u1", "hi", topic="travel", cefr_level=CefrLevel.B1)

    assert reply.text == "Hello! How are you today?"
    assert reply.fallback is False
    stored = store.load("u1", "travel")
    assert [(m.author, m.text) for m in stored] == [("user", "hi"), ("bot", "Hello! How are you today?")]
    assert store.load("u1", None) == []


def test_stored_history_is_used_when_none_given():
    llm = ScriptedLLM()
    store = MemoryChatHistoryStore()
    uc = ChatReplyUseCase(llm=llm, history_store=store, history_window=3)

    for i in range(3):
        uc.execute("u1", f"message {i}", topic="food")

    last_history = llm.chat_calls[-1]["history"]
    assert len(last_history) == 3
    assert last_history[-1].author == "bot"
    assert last_history[0].text == "Great job!"


def test_explicit_history_overrides_store():
    llm = ScriptedLLM()
    store = MemoryChatHistoryStore()
    store.append("u1", None, [ChatMessage.create("user", "stored")])
    uc = ChatReplyUseCase(llm=llm, history_store=store)

    uc.execute("u1", "next", history=[])
    assert llm.chat_calls[0]["history"] == []


@pytest.mark.parametrize("failure", [LLMUpstreamError("down"), ""])
def test_fallback_reply_on_failure(failure):
    llm = ScriptedLLM(reply=failure)
    store = MemoryChatHistoryStore()
    uc = ChatReplyUseCase(llm=llm, history_store=store)

    reply = uc.execute("u1", "hello")

    assert reply.text == FALLBACK_REPLY
    assert reply.fallback is True
    assert store.load("u1", None)[-1].text == FALLBACK_REPLY


def test_blank_message_rejected():
    uc = ChatReplyUseCase(llm=ScriptedLLM(), history_store=MemoryChatHistoryStore())
    with pytest.raises(ValueError):
        uc.execute("u1", "  ")


def test_chat_prompt_uses_level_topic_and_history():
    history = [ChatMessage.create("user", "I like pizza"), ChatMessage.create("bot", "Me too!")]
    prompt = build_chat_prompt("What about you?", "food", CefrLevel.B2, history)

    assert prompt.startswith("You are an English tutor for CEFR B2 level students. Topic: food.")
    assert "Recent conversation:\nStudent: I like pizza\nTutor: Me too!\n" in prompt
    assert prompt.endswith("Student: What about you?\nTutor:")


def test_chat_prompt_defaults():
    prompt = build_chat_prompt("Hi", None, None, [])
    assert "CEFR A1 level" in prompt
    assert "Topic: general conversation." in prompt
    assert "Recent conversation" not in prompt
