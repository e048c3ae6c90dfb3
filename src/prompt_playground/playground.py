"""Playground orchestrator: a template store and a completion client side by side."""
from __future__ import annotations
import logging

from prompt_playground.client.ollama_chat import CompletionClient
from prompt_playground.common.errors import TemplateNotFoundError
from prompt_playground.common.templates import TemplateStore

LOGGER = logging.getLogger("prompt_playground.playground")


class Playground:
    def __init__(
        self,
        templates: TemplateStore | None = None,
        client: CompletionClient | None = None,
    ) -> None:
        self.templates = templates if templates is not None else TemplateStore()
        self.client = client if client is not None else CompletionClient()

    def components(self) -> tuple[CompletionClient, TemplateStore]:
        return (self.client, self.templates)

    def initialize(self) -> None:
        """Initialize the client, then the store. The first failure propagates."""
        LOGGER.info("=== AI Playground Initialization ===")
        self.client.initialize()
        self.templates.initialize()
        LOGGER.info("Initialization complete!")

    def render_and_send(self, index: int) -> str:
        prompt = self.templates.render_by_index(index)
        if prompt is None:
            raise TemplateNotFoundError(index)
        LOGGER.info("Sending template %d: %s", index, prompt)
        return self.client.generate_response(prompt)

    def close(self) -> None:
        self.client.close()
