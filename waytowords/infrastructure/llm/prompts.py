from waytowords.domain.entities.cefr import CefrLevel
from waytowords.domain.entities.chat import ChatMessage


def build_evaluation_prompt(answer: str) -> str:
    return (
        "You are an English examiner. Rate the following answer on CEFR A1–C2 and explain briefly. "
        "Return STRICT JSON: { \"level\": \"A1\"|\"A2\"|\"B1\"|\"B2\"|\"C1\"|\"C2\", \"explanation\": \"string\" }.\n"
        "\n"
        "Answer to evaluate:\n"
        f"{answer}\n"
        "\n"
        "JSON response:"
    )


def build_chat_prompt(
    message: str,
    topic: str | None,
    cefr_level: CefrLevel | None,
    history: list[ChatMessage],
) -> str:
    level = cefr_level.value if cefr_level else CefrLevel.A1.value
    topic_text = topic or "general conversation"

    prompt = (
        f"You are an English tutor for CEFR {level} level students. Topic: {topic_text}. "
        "Answer in simple English and correct errors gently.\n\n"
    )

    if history:
        prompt += "Recent conversation:\n"
        for msg in history:
            role = "Student" if msg.author == "user" else "Tutor"
            prompt += f"{role}: {msg.text}\n"
        prompt += "\n"

    prompt += f"Student: {message}\nTutor:"
    return prompt
