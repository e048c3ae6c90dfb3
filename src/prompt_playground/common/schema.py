"""Pydantic models and dataclasses for request/response types."""
from __future__ import annotations
from dataclasses import dataclass

from pydantic import BaseModel

DEFAULT_MODEL = "llama3.2"
DEFAULT_ENDPOINT = "http://localhost:11434/api/chat"
DEFAULT_TEMPERATURE = 0.7
DEFAULT_TIMEOUT = 120.0

@dataclass(frozen=True)
class ModelConfig:
    """Model name and connection parameters for the completion endpoint."""
    model: str = DEFAULT_MODEL
    max_tokens: int | None = None
    temperature: float | None = DEFAULT_TEMPERATURE
    endpoint: str = DEFAULT_ENDPOINT
    timeout: float = DEFAULT_TIMEOUT
    require_api_key: bool = False

class ChatMessage(BaseModel):
    role: str
    content: str

class ChatOptions(BaseModel):
    temperature: float | None = None
    num_predict: int | None = None

class ChatRequest(BaseModel):
    model: str
    messages: list[ChatMessage]
    stream: bool = False
    options: ChatOptions | None = None

    @classmethod
    def single_user_message(cls, config: ModelConfig, prompt: str) -> "ChatRequest":
        """Build a one-message chat request carrying the sampling options that are set."""
        options = None
        if config.temperature is not None or config.max_tokens is not None:
            options = ChatOptions(temperature=config.temperature, num_predict=config.max_tokens)
        return cls(
            model=config.model,
            messages=[ChatMessage(role="user", content=prompt)],
            stream=False,
            options=options,
        )

    def to_payload(self) -> dict:
        return self.model_dump(exclude_none=True)

class ReplyMessage(BaseModel):
    role: str | None = None
    content: str

class ChatResponse(BaseModel):
    """Reply from the chat endpoint; fields other than `message` are ignored."""
    message: ReplyMessage
