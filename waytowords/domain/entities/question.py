from dataclasses import dataclass


@dataclass(frozen=True)
class LevelTestQuestion:
    id: str
    text: str


DEFAULT_QUESTIONS: tuple[LevelTestQuestion, ...] = (
    LevelTestQuestion(id="1", text="Tell me about yourself. What are your hobbies and interests?"),
    LevelTestQuestion(id="2", text="Describe your typical day. What do you usually do from morning to evening?"),
    LevelTestQuestion(id="3", text="What is your favorite book or movie? Why do you like it?"),
    LevelTestQuestion(id="4", text="If you could travel anywhere in the world, where would you go and why?"),
    LevelTestQuestion(id="5", text="What are your goals for learning English? How do you plan to achieve them?"),
)
