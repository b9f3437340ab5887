"""Test runners execute project code, so they are never auto-approved."""

from .base import Classifier


class RunnersClassifier(Classifier):
    priority = 60
    tools = ("pytest", "vitest", "playwright")

    @property
    def name(self) -> str:
        return "runners"

    def is_read_only(self, tool: str, args: list[str]) -> bool:
        return False
