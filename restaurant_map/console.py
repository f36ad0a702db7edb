"""
Line-based operator prompts: numbered menus, yes/no questions and free text.
"""
from typing import Callable

INVALID_CHOICE = "Invalid choice. Please try again."


class OperatorConsole:
    """
    Thin wrapper around input/print so the lookup loop can be driven by a
    human at a terminal or by scripted answers in tests.
    """

    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        output_fn: Callable[[str], None] = print,
    ):
        self._input = input_fn
        self._output = output_fn

    def say(self, message: str = "") -> None:
        self._output(message)

    def ask(self, prompt: str) -> str:
        return self._input(prompt).strip()

    def confirm(self, prompt: str, default: bool = True) -> bool:
        """Ask a yes/no question; blank input returns `default`."""
        while True:
            answer = self.ask(prompt).lower()
            if not answer:
                return default
            if answer.startswith("y"):
                return True
            if answer.startswith("n"):
                return False
            self.say(INVALID_CHOICE)

    def choose(self, prompt: str, count: int) -> int:
        """
        Re-prompt until the operator enters an integer in 1..count.

        Returns:
            int: The chosen option number (1-based).
        """
        if count < 1:
            raise ValueError("choose() needs at least one option")
        while True:
            answer = self.ask(prompt)
            try:
                choice = int(answer)
            except ValueError:
                choice = None
            if choice is not None and 1 <= choice <= count:
                return choice
            self.say(INVALID_CHOICE)
