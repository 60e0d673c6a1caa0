from dataclasses import dataclass

from waytowords.domain.entities.cefr import CefrLevel


@dataclass(frozen=True)
class LevelAssessment:
    level: CefrLevel
    explanation: str


@dataclass(frozen=True)
class QuestionEvaluation:
    question_id: str
    level: CefrLevel
    explanation: str

    @staticmethod
    def from_assessment(question_id: str, assessment: LevelAssessment) -> "QuestionEvaluation":
        return QuestionEvaluation(
            question_id=str(question_id),
            level=assessment.level,
            explanation=assessment.explanation,
        )


@dataclass(frozen=True)
class AggregateResult:
    level: CefrLevel
    explanation: str
