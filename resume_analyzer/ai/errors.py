class AIExtractionError(RuntimeError):
    """AI-assisted extraction or ranking could not produce a result."""


class AIConfigurationError(AIExtractionError):
    """No usable API key / client for the structured-extraction service."""


class AIResponseError(AIExtractionError):
    """The service replied with something that is not the expected JSON."""
