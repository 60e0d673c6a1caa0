from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # "auto" picks openai when a key is set, then huggingface, else mock
    LLM_PROVIDER: str = "auto"

    OPENAI_API_KEY: str | None = None
    OPENAI_MODEL_EVALUATE: str = "gpt-4o-mini"
    OPENAI_MODEL_CHAT: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_EVALUATE: float = 0.0
    OPENAI_TEMPERATURE_CHAT: float = 0.7

    HF_TOKEN: str | None = None
    HF_API_URL: str = "https://api-inference.huggingface.co/models/meta-llama/Llama-3.1-8B-Instruct"
    HF_MAX_NEW_TOKENS: int = 250
    HF_TEMPERATURE: float = 0.7
    HF_TOP_P: float = 0.9

    EVALUATION_TIMEOUT_SECONDS: float = 30.0

    LEVEL_TEST_MAX_SESSIONS: int = 1000

    CHAT_HISTORY_WINDOW: int = 5
    CHAT_HISTORY_LIMIT: int = 100
    CHAT_DATA_DIR: str = "./data/chats"

    CORS_ORIGINS: list[str] = ["http://localhost:5173"]


settings = Settings()
