"""Interactive console for the playground.

Menu entries map to handler methods through a `Command` dispatcher; handlers
only call the public Playground API, so the loop runs headless with injected
input/output functions.
"""
from __future__ import annotations
import argparse
import enum
import logging
from dataclasses import replace
from typing import Callable

from prompt_playground.client.ollama_chat import CompletionClient
from prompt_playground.common.config import load_config
from prompt_playground.common.errors import PlaygroundError
from prompt_playground.common.logging_setup import setup_logging
from prompt_playground.common.schema import ModelConfig
from prompt_playground.common.templates import placeholders
from prompt_playground.playground import Playground

LOGGER = logging.getLogger("prompt_playground.cli")

DEMO_PROMPT = "Hello, how are you?"


class Command(enum.Enum):
    INITIALIZE = "1"
    RUN_DEMO = "2"
    SET_API_KEY = "3"
    ADD_TEMPLATE = "4"
    LIST_TEMPLATES = "5"
    TEST_COMPLETION = "6"
    EXIT = "7"
    SET_VARIABLE = "8"
    SEND_TEMPLATE = "9"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    Command.INITIALIZE: "Initialize components",
    Command.RUN_DEMO: "Run demo",
    Command.SET_API_KEY: "Set API key",
    Command.ADD_TEMPLATE: "Add prompt template",
    Command.LIST_TEMPLATES: "List all templates",
    Command.TEST_COMPLETION: "Test LLM response",
    Command.EXIT: "Exit",
    Command.SET_VARIABLE: "Set template variable",
    Command.SEND_TEMPLATE: "Send template to model",
}


class ConsoleApp:
    def __init__(
        self,
        playground: Playground,
        input_fn: Callable[[str], str] | None = None,
        output_fn: Callable[[str], None] | None = None,
    ) -> None:
        self.playground = playground
        self._input = input_fn or input
        self._out = output_fn or print
        self.handlers: dict[Command, Callable[[], None]] = {
            Command.INITIALIZE: self.handle_initialize,
            Command.RUN_DEMO: self.handle_demo,
            Command.SET_API_KEY: self.handle_set_api_key,
            Command.ADD_TEMPLATE: self.handle_add_template,
            Command.LIST_TEMPLATES: self.handle_list_templates,
            Command.TEST_COMPLETION: self.handle_test_completion,
            Command.SET_VARIABLE: self.handle_set_variable,
            Command.SEND_TEMPLATE: self.handle_send_template,
        }

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def show_menu(self) -> None:
        self._out("\n=== AI Playground Menu ===")
        # Exit keeps its original key but is listed last.
        for command in sorted(Command, key=lambda c: c is Command.EXIT):
            self._out(f"{command.value}. {command.label}")

    def dispatch(self, choice: str) -> bool:
        """Run the handler for `choice`. Returns False once the user exits."""
        try:
            command = Command(choice)
        except ValueError:
            self._out("Invalid option. Please try again.")
            return True
        if command is Command.EXIT:
            self._out("Goodbye!")
            return False
        try:
            self.handlers[command]()
        except PlaygroundError as e:
            LOGGER.error("%s failed: %s", command.label, e)
            self._out(f"Error: {e}")
        return True

    def run(self) -> None:
        self._out("Welcome to AI Playground!")
        self._out("A Python project for experimenting with AI and LLM APIs")
        while True:
            self.show_menu()
            try:
                choice = self.ask("Choose an option: ")
            except EOFError:
                self._out("Goodbye!")
                return
            if not self.dispatch(choice):
                return

    def handle_initialize(self) -> None:
        self.playground.initialize()
        self._out("Initialization complete!")

    def handle_demo(self) -> None:
        pg = self.playground
        self._out("\n=== AI Playground Demo ===")
        self._out("\n1. Prompt Management Demo:")
        for i in range(3):
            template = pg.templates.get(i)
            if template is not None:
                self._out(f"Template {i}: {template}")

        self._out("\n2. LLM Interaction Demo:")
        self._out(f"Sending prompt: {DEMO_PROMPT}")
        try:
            self._out(f"Response: {pg.client.generate_response(DEMO_PROMPT)}")
        except PlaygroundError as e:
            self._out(f"Error: {e}")

        self._out("\n3. Component Information:")
        for component in pg.components():
            self._out(f"- {component.name}: {component.description}")
        self._out("\nDemo complete!")

    def handle_set_api_key(self) -> None:
        self.playground.client.set_api_key(self.ask("Enter API key: "))
        self._out("API key set.")

    def handle_add_template(self) -> None:
        self.playground.templates.add(self._input("Enter new prompt template: "))
        self._out(f"Template added at index {len(self.playground.templates) - 1}.")

    def handle_list_templates(self) -> None:
        store = self.playground.templates
        self._out("\nAll available templates:")
        for i, template in enumerate(store.all()):
            self._out(f"{i}: {template}")
        variables = store.variables()
        if variables:
            self._out("\nVariables:")
            for key, value in sorted(variables.items()):
                self._out(f"  {key} = {value}")

    def handle_test_completion(self) -> None:
        prompt = self.ask("Enter a test prompt: ")
        self._out(f"Response: {self.playground.client.generate_response(prompt)}")

    def handle_set_variable(self) -> None:
        key = self.ask("Variable name: ")
        if not key:
            self._out("Variable name cannot be empty.")
            return
        self.playground.templates.set_variable(key, self.ask(f"Value for {key}: "))

    def handle_send_template(self) -> None:
        raw = self.ask("Template index: ")
        try:
            index = int(raw)
        except ValueError:
            self._out(f"Not a number: {raw!r}")
            return
        store = self.playground.templates
        template = store.get(index)
        if template is not None:
            missing = [p for p in placeholders(template) if p not in store.variables()]
            for name in missing:
                store.set_variable(name, self.ask(f"Value for {name}: "))
        self._out(f"Response: {self.playground.render_and_send(index)}")


def build_config(args: argparse.Namespace) -> ModelConfig:
    config = load_config(args.config) if args.config else ModelConfig()
    overrides = {
        "model": args.model,
        "endpoint": args.endpoint,
        "temperature": args.temperature,
        "max_tokens": args.max_tokens,
        "timeout": args.timeout,
    }
    return replace(config, **{k: v for k, v in overrides.items() if v is not None})


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Interactive prompt template playground")
    ap.add_argument("--config", help="YAML config path")
    ap.add_argument("--model", help="Model name")
    ap.add_argument("--endpoint", help="Chat endpoint URL")
    ap.add_argument("--temperature", type=float)
    ap.add_argument("--max-tokens", type=int)
    ap.add_argument("--timeout", type=float, help="Request timeout in seconds")
    ap.add_argument("--log-level", default="INFO")
    ap.add_argument("--init", action="store_true", help="Initialize components before showing the menu")
    args = ap.parse_args(argv)

    setup_logging(args.log_level)
    try:
        config = build_config(args)
    except PlaygroundError as e:
        LOGGER.error("Configuration error: %s", e)
        return 1

    playground = Playground(client=CompletionClient(config))
    if args.init:
        try:
            playground.initialize()
        except PlaygroundError as e:
            LOGGER.error("Initialization failed: %s", e)
            return 1

    try:
        ConsoleApp(playground).run()
    except KeyboardInterrupt:
        print()
    finally:
        playground.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
