"""Error types raised by the playground core."""
from __future__ import annotations


class PlaygroundError(Exception):
    """Base class for every error the core raises."""


class ConfigError(PlaygroundError):
    """Configuration file or values could not be loaded."""


class EmptyTemplateError(PlaygroundError, ValueError):
    """A template was empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__("Template cannot be empty")


class TemplateNotFoundError(PlaygroundError, LookupError):
    def __init__(self, index: int) -> None:
        super().__init__(f"No template at index {index}")
        self.index = index


class NotInitializedError(PlaygroundError):
    def __init__(self, component: str = "LLM Interface") -> None:
        super().__init__(f"{component} not initialized")


class MissingCredentialError(PlaygroundError):
    def __init__(self) -> None:
        super().__init__("API key not set")


class TransportError(PlaygroundError):
    """The request never produced an HTTP response (connect, read, timeout)."""


class HttpStatusError(PlaygroundError):
    def __init__(self, status_code: int, detail: str = "") -> None:
        msg = f"Completion endpoint returned HTTP {status_code}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.status_code = status_code


class MalformedResponseError(PlaygroundError):
    """The response body is not JSON or lacks a string message.content."""
