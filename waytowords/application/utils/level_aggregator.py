from __future__ import annotations

from collections.abc import Iterable

from waytowords.domain.entities.cefr import CEFR_LEVELS, DEFAULT_LEVEL, CefrLevel
from waytowords.domain.entities.evaluation import AggregateResult, QuestionEvaluation

LEVEL_DESCRIPTIONS: dict[CefrLevel, str] = {
    CefrLevel.A1: "Based on your responses, you demonstrate basic English skills across multiple areas.",
    CefrLevel.A2: "Your answers show elementary English proficiency with consistent performance.",
    CefrLevel.B1: "You have intermediate English skills with good understanding of various topics.",
    CefrLevel.B2: "You demonstrate upper-intermediate proficiency with strong language abilities.",
    CefrLevel.C1: "You show advanced English skills with excellent command of the language.",
    CefrLevel.C2: "You have mastery-level English proficiency with near-native capabilities.",
}


def aggregate(evaluations: Iterable[QuestionEvaluation]) -> CefrLevel:
    """
    Reduce per-question evaluations to one CEFR level.

    Majority vote over the six levels. When several levels share the highest
    count, the ranks of exactly those tied levels are averaged and rounded
    half up (B1+B2 -> 3.5 -> B2). No evaluations -> B1.

    Duplicates are counted as given; callers keep one evaluation per question.
    """
    counts = {level: 0 for level in CEFR_LEVELS}
    for evaluation in evaluations:
        counts[evaluation.level] += 1

    if not any(counts.values()):
        return DEFAULT_LEVEL

    max_count = 0
    dominant = DEFAULT_LEVEL
    for level in CEFR_LEVELS:
        if counts[level] > max_count:
            max_count = counts[level]
            dominant = level

    tied = [level for level in CEFR_LEVELS if counts[level] == max_count]
    if len(tied) == 1:
        return dominant

    total = sum(level.rank for level in tied)
    # integer round-half-up of total / len(tied)
    rounded = (2 * total + len(tied)) // (2 * len(tied))
    return CefrLevel.from_rank(rounded) or dominant


def describe_level(level: CefrLevel) -> str:
    return LEVEL_DESCRIPTIONS[level]


def build_aggregate_result(evaluations: list[QuestionEvaluation]) -> AggregateResult:
    level = aggregate(evaluations)
    count = len(evaluations)
    basis = f" (based on {count} answer{'s' if count != 1 else ''})" if count else ""
    return AggregateResult(level=level, explanation=f"{describe_level(level)}{basis}")
