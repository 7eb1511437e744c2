"""
mvcgen Prompts - Prompter implementations

RichPrompter asks on the terminal and re-prompts on rejection.
PresetPrompter answers from a mapping (usually a YAML answers file).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from rich.console import Console
from rich.prompt import Prompt

from mvcgen.questions import Answers, QuestionKind, QuestionSpec
from mvcgen.resolver import AnswerError, Prompter

logger = logging.getLogger(__name__)


class RichPrompter:
    """Terminal prompter built on rich.prompt."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def ask(self, question: QuestionSpec, answers: Answers) -> str:
        default = question.default_for(answers)

        if question.kind == QuestionKind.CHOICE:
            for choice in question.choices:
                self.console.print(f"  [cyan]{choice.value}[/cyan]  {choice.label}")

        while True:
            value = Prompt.ask(
                f"[bold]{question.prompt}[/bold]",
                console=self.console,
                password=question.kind == QuestionKind.SECRET,
                choices=question.choice_values or None,
                default=default if default else ...,
                show_default=question.kind != QuestionKind.SECRET,
            )
            value = "" if value is None else value
            reason = question.check(value)
            if reason is None:
                return value
            self.console.print(f"[red]>> {reason}[/red]")


class PresetPrompter:
    """
    Answers questions from a preset mapping.

    Preset values are validated; a rejected value raises AnswerError since
    there is no operator to re-prompt. Questions without a preset go to the
    fallback prompter, or take their default when there is none.
    """

    def __init__(
        self,
        answers: Mapping[str, Any] | None = None,
        fallback: Prompter | None = None,
    ):
        self.answers = dict(answers or {})
        self.fallback = fallback

    def ask(self, question: QuestionSpec, answers: Answers) -> str:
        if question.key in self.answers:
            raw = self.answers[question.key]
            value = "" if raw is None else str(raw)
            source = "preset"
        elif self.fallback is not None:
            return self.fallback.ask(question, answers)
        else:
            value = question.default_for(answers)
            source = "default"

        reason = question.check(value)
        if reason is not None:
            raise AnswerError(question.key, value, reason)
        logger.debug("Answered %s from %s", question.key, source)
        return value


def load_answers(path: str | Path) -> dict[str, Any]:
    """Load a YAML answers file into a ``{question_key: value}`` mapping."""
    content = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(content)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Answers file {path} must contain a mapping")
    return {str(key): value for key, value in data.items()}
