"""
Tests for the level test flow: per-question evaluation, skipping failures,
and aggregation of the collected evaluations.
"""

from __future__ import annotations

import pytest

from fakes import ScriptedLLM
from waytowords.application.exceptions import LLMUpstreamError, NoAnswersError, SessionNotFoundError
from waytowords.application.use_cases.evaluate_answer import EvaluateAnswerUseCase
from waytowords.application.use_cases.level_test import LevelTestUseCase
from waytowords.domain.entities.cefr import CefrLevel
from waytowords.infrastructure.store.memory_store import MemoryLevelTestStore


def make_use_case(levels: dict[str, str]) -> tuple[LevelTestUseCase, ScriptedLLM]:
    llm = ScriptedLLM(levels)
    return LevelTestUseCase(llm=llm, store=MemoryLevelTestStore()), llm


def test_submit_aggregates_all_answers():
    uc, llm = make_use_case({"a": "B1", "b": "B1", "c": "B2", "d": "A2"})
    outcome = uc.submit({"1": "a", "2": "b", "3": "c", "4": "d"})

    assert outcome.result.level is CefrLevel.B1
    assert [e.question_id for e in outcome.evaluations] == ["1", "2", "3", "4"]
    assert outcome.skipped == []
    assert llm.evaluated == ["a", "b", "c", "d"]


def test_submit_drops_blank_answers_before_evaluating():
    uc, llm = make_use_case({"a": "C1"})
    outcome = uc.submit({"1": "  a  ", "2": "", "3": "   "})

    assert llm.evaluated == ["a"]
    assert outcome.result.level is CefrLevel.C1
    assert [e.question_id for e in outcome.evaluations] == ["1"]


def test_submit_without_answers_is_a_validation_error():
    uc, llm = make_use_case({})
    with pytest.raises(NoAnswersError):
        uc.submit({"1": "", "2": "  "})
    with pytest.raises(ValueError):
        uc.submit({})
    assert llm.evaluated == []


def test_submit_skips_failed_evaluations():
    uc, _ = make_use_case({"a": "A1", "b": "C2"})
    outcome = uc.submit({"1": "a", "2": "timeout", "3": "b", "4": "garbage"})

    assert outcome.skipped == ["2", "4"]
    assert [e.question_id for e in outcome.evaluations] == ["1", "3"]
    # A1 and C2 tie: (1 + 6) / 2 = 3.5 -> B2
    assert outcome.result.level is CefrLevel.B2


def test_submit_fails_when_every_evaluation_fails():
    uc, _ = make_use_case({})
    with pytest.raises(LLMUpstreamError):
        uc.submit({"1": "timeout", "2": "garbage"})


def test_session_flow_replaces_reevaluated_question():
    uc, _ = make_use_case({"first": "A1", "second": "C1", "other": "C1"})
    session_id = uc.start()

    uc.record_answer(session_id, "1", "first")
    uc.record_answer(session_id, "2", "other")
    uc.record_answer(session_id, "1", "second")

    outcome = uc.finalize(session_id)
    assert len(outcome.evaluations) == 2
    assert {e.question_id: e.level for e in outcome.evaluations} == {"1": CefrLevel.C1, "2": CefrLevel.C1}
    assert outcome.result.level is CefrLevel.C1


def test_finalize_releases_the_session():
    uc, _ = make_use_case({"good": "B2"})
    session_id = uc.start()
    uc.record_answer(session_id, "1", "good")

    assert uc.finalize(session_id).result.level is CefrLevel.B2
    assert not uc.store.exists(session_id)
    with pytest.raises(SessionNotFoundError):
        uc.finalize(session_id)
    with pytest.raises(SessionNotFoundError):
        uc.record_answer(session_id, "2", "good")


def test_start_reuses_known_session():
    uc, _ = make_use_case({})
    session_id = uc.start()
    assert uc.start(session_id) == session_id
    assert uc.start("custom-id") == "custom-id"


def test_record_answer_rejects_blank_answer():
    uc, llm = make_use_case({})
    session_id = uc.start()
    with pytest.raises(ValueError):
        uc.record_answer(session_id, "1", "   ")
    assert llm.evaluated == []


def test_record_answer_propagates_evaluation_failure():
    uc, _ = make_use_case({})
    session_id = uc.start()
    with pytest.raises(LLMUpstreamError):
        uc.record_answer(session_id, "1", "timeout")
    with pytest.raises(NoAnswersError):
        uc.finalize(session_id)


def test_unknown_session():
    uc, _ = make_use_case({})
    with pytest.raises(SessionNotFoundError):
        uc.record_answer("missing", "1", "text")
    with pytest.raises(SessionNotFoundError):
        uc.finalize("missing")


def test_evaluate_answer_use_case():
    llm = ScriptedLLM({"I like reading books.": "A2"})
    uc = EvaluateAnswerUseCase(llm=llm)

    assessment = uc.execute("  I like reading books. ")
    assert assessment.level is CefrLevel.A2
    assert llm.evaluated == ["I like reading books."]

    with pytest.raises(ValueError):
        uc.execute("   ")
