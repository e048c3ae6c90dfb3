"""Client for a local model server's chat API (Ollama `/api/chat` shape).

Sends one user message per call and returns the reply text:

    POST {endpoint}  {"model": ..., "messages": [{"role": "user", "content": ...}],
                      "stream": false, "options": {"temperature": ...}}
"""
from __future__ import annotations
import dataclasses
import logging
import time
from types import TracebackType

import httpx
from pydantic import ValidationError

from prompt_playground.common.errors import (
    HttpStatusError,
    MalformedResponseError,
    MissingCredentialError,
    NotInitializedError,
    TransportError,
)
from prompt_playground.common.schema import ChatRequest, ChatResponse, ModelConfig

LOGGER = logging.getLogger("prompt_playground.client")


class CompletionClient:
    """Chat-completion adapter. Call `initialize()` before `generate_response()`."""

    name = "LLM Interface"
    description = "Interface for Large Language Models"

    def __init__(
        self,
        config: ModelConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._config = config or ModelConfig()
        self._transport = transport
        self._api_key: str | None = None
        self._http: httpx.Client | None = None

    @property
    def config(self) -> ModelConfig:
        return self._config

    @property
    def model_name(self) -> str:
        return self._config.model

    @property
    def is_connected(self) -> bool:
        return self._http is not None

    @property
    def has_api_key(self) -> bool:
        return bool(self._api_key)

    def initialize(self) -> None:
        LOGGER.info("Initializing LLM Interface for model: %s", self._config.model)
        if self._http is not None:
            self._http.close()
        self._http = httpx.Client(timeout=self._config.timeout, transport=self._transport)
        LOGGER.info("LLM Interface initialized (endpoint %s)", self._config.endpoint)

    def close(self) -> None:
        if self._http is not None:
            self._http.close()
            self._http = None

    def __enter__(self) -> "CompletionClient":
        self.initialize()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def set_api_key(self, key: str) -> None:
        self._api_key = key
        LOGGER.info("API key set for model: %s", self._config.model)

    def set_model(self, model: str) -> None:
        self._config = dataclasses.replace(self._config, model=model)
        LOGGER.info("Model set to: %s", model)

    def process(self) -> None:
        if self._http is None:
            LOGGER.warning("LLM Interface not connected. Please initialize first.")
            raise NotInitializedError()
        LOGGER.info("Processing with LLM model: %s", self._config.model)

    def _headers(self) -> dict[str, str]:
        if self._api_key:
            return {"Authorization": f"Bearer {self._api_key}"}
        return {}

    def generate_response(self, prompt: str) -> str:
        """
        Send `prompt` as a single user message and return the reply content.

        Raises:
            NotInitializedError: `initialize()` has not been called.
            MissingCredentialError: the endpoint requires a key and none is set.
            TransportError: no HTTP response was received.
            HttpStatusError: the endpoint answered with a non-2xx status.
            MalformedResponseError: the body lacks a string `message.content`.
        """
        if self._http is None:
            raise NotInitializedError()
        config = self._config
        if config.require_api_key and not self._api_key:
            raise MissingCredentialError()

        payload = ChatRequest.single_user_message(config, prompt).to_payload()
        LOGGER.debug("Generating response for prompt: %s", prompt)

        start = time.time()
        try:
            r = self._http.post(config.endpoint, headers=self._headers(), json=payload)
        except (httpx.RequestError, httpx.InvalidURL) as e:
            LOGGER.error("Completion request failed: %s", e)
            raise TransportError(f"Request to {config.endpoint} failed: {e}") from e

        if not r.is_success:
            LOGGER.error("Completion endpoint returned HTTP %s", r.status_code)
            raise HttpStatusError(r.status_code, r.text[:200])

        try:
            data = ChatResponse.model_validate(r.json())
        except (ValueError, ValidationError) as e:
            LOGGER.error("Malformed response: %s", e)
            raise MalformedResponseError("Response lacks a string message.content") from e

        latency = int((time.time() - start) * 1000)
        LOGGER.info("Completion from %s in %sms", config.model, latency)
        return data.message.content
