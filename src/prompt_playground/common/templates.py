"""Prompt templating helpers.

Templates are plain strings with ``{name}`` placeholders. Rendering swaps in
the values of known variables and leaves unknown placeholders untouched.
"""
from __future__ import annotations
import logging
import re
from typing import Iterable

from prompt_playground.common.errors import EmptyTemplateError, PlaygroundError

LOGGER = logging.getLogger("prompt_playground.templates")

PLACEHOLDER_RE = re.compile(r"\{([^{}]+)\}")

DEFAULT_TEMPLATES: tuple[str, ...] = (
    "Explain {topic} in simple terms",
    "Write a {style} story about {subject}",
    "Analyze the following: {content}",
    "Generate code for {language} to {task}",
    "Summarize the key points of {text}",
    "Translate {text} to {language}",
    "Create a {type} plan for {goal}",
    "Debug this {language} code: {code}",
)


def placeholders(template: str) -> list[str]:
    """
    List placeholder names in order of first appearance.

    Args:
        template: Template content containing {name} tokens.
    """
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_RE.finditer(template):
        seen.setdefault(match.group(1), None)
    return list(seen)


def render_prompt(template: str, variables: dict[str, str]) -> str:
    """
    Render variables into the template.

    Args:
        template: Template content containing {name} tokens.
        variables: Values keyed by placeholder name.

    Returns:
        Rendered prompt. Placeholders without a value are kept verbatim.
    """
    def _sub(match: re.Match[str]) -> str:
        return variables.get(match.group(1), match.group(0))

    return PLACEHOLDER_RE.sub(_sub, template)


class TemplateStore:
    """Ordered template list plus the variables used to render them."""

    name = "Prompt Manager"
    description = "Manages and templates prompts"

    def __init__(self, templates: Iterable[str] | None = None) -> None:
        self._templates: list[str] = list(DEFAULT_TEMPLATES if templates is None else templates)
        self._variables: dict[str, str] = {}
        self._current_prompt: str | None = None

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def count(self) -> int:
        return len(self._templates)

    def initialize(self) -> None:
        LOGGER.info("Initializing Prompt Manager with %d templates", len(self._templates))

    def add(self, template: str) -> None:
        if not template.strip():
            LOGGER.warning("Cannot add empty template")
            raise EmptyTemplateError()
        self._templates.append(template)
        LOGGER.info("Added template: %s", template)

    def get(self, index: int) -> str | None:
        if 0 <= index < len(self._templates):
            return self._templates[index]
        return None

    def all(self) -> list[str]:
        return list(self._templates)

    def set_variable(self, key: str, value: str) -> None:
        self._variables[key] = value

    def variables(self) -> dict[str, str]:
        return dict(self._variables)

    def render(self, template: str) -> str:
        return render_prompt(template, self._variables)

    def render_by_index(self, index: int) -> str | None:
        template = self.get(index)
        if template is None:
            return None
        return self.render(template)

    @property
    def current_prompt(self) -> str | None:
        return self._current_prompt

    def set_prompt(self, prompt: str) -> None:
        self._current_prompt = prompt

    def process(self) -> None:
        """Log the current prompt; raise if none has been set."""
        if self._current_prompt is None:
            LOGGER.warning("No current prompt set")
            raise PlaygroundError("No current prompt")
        LOGGER.info("Current prompt: %s", self._current_prompt)
