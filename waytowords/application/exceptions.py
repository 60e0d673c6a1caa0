class LLMUpstreamError(RuntimeError):
    """Raised when LLM provider fails (timeouts, network errors, service unavailable)."""
    pass


class LLMContractError(RuntimeError):
    """Raised when LLM adapter violates contract (bad format, missing fields or unknown CEFR level)."""
    pass


class NoAnswersError(ValueError):
    """Raised when a level test is submitted without a single non-blank answer."""
    pass


class SessionNotFoundError(KeyError):
    pass
