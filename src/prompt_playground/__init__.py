"""
Prompt Playground package.

Provides:
- TemplateStore: prompt templates with {name} placeholder rendering
- CompletionClient: httpx adapter for a local model server's chat API
- Playground: composes the two; driven by the interactive console in `cli`
"""
from prompt_playground.client.ollama_chat import CompletionClient
from prompt_playground.common.schema import ModelConfig
from prompt_playground.common.templates import TemplateStore
from prompt_playground.playground import Playground

__all__ = ["CompletionClient", "ModelConfig", "Playground", "TemplateStore"]
