from abc import ABC, abstractmethod

from waytowords.domain.entities.evaluation import QuestionEvaluation


class LevelTestStorePort(ABC):
    @abstractmethod
    def get_or_create(self, session_id: str | None) -> str:
        raise NotImplementedError

    @abstractmethod
    def exists(self, session_id: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def put_evaluation(self, session_id: str, evaluation: QuestionEvaluation) -> None:
        """Store an evaluation, replacing any earlier one for the same question."""
        raise NotImplementedError

    @abstractmethod
    def get_evaluations(self, session_id: str) -> list[QuestionEvaluation]:
        raise NotImplementedError

    @abstractmethod
    def discard(self, session_id: str) -> None:
        raise NotImplementedError
