"""
mvcgen Resolver - drives the question graph through a Prompter

Questions are asked strictly in declared order. Inapplicable questions are
skipped without touching the Prompter and leave no entry in the answer set.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

from mvcgen.config import ResolvedConfig
from mvcgen.questions import QUESTIONS, Answers, QuestionSpec, snapshot

logger = logging.getLogger(__name__)


class AnswerError(ValueError):
    """An answer that cannot be re-prompted failed validation."""

    def __init__(self, key: str, value: Any, reason: str):
        self.key = key
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid answer for {key!r}: {reason}")


class Prompter(Protocol):
    """Collects one answer; must re-prompt until ``question.check`` accepts."""

    def ask(self, question: QuestionSpec, answers: Answers) -> str: ...


class ConfigResolver:
    """
    Resolves a ResolvedConfig from operator answers.

    Externally supplied answers (e.g. the project name given on the command
    line) short-circuit their questions but are still validated.
    """

    def __init__(
        self,
        prompter: Prompter,
        questions: tuple[QuestionSpec, ...] = QUESTIONS,
    ):
        self.prompter = prompter
        self.questions = questions

    def collect(self, **external: Any) -> dict[str, Any]:
        """Walk the graph and return the raw answer set."""
        answers: dict[str, Any] = {}
        for question in self.questions:
            supplied = external.get(question.key)
            prior = snapshot(answers)
            if not question.applies(prior):
                if supplied is not None:
                    logger.debug("Ignoring supplied answer for inapplicable %s", question.key)
                else:
                    logger.debug("Skipping %s", question.key)
                continue

            if supplied is not None:
                reason = question.check(supplied)
                if reason is not None:
                    raise AnswerError(question.key, supplied, reason)
                logger.debug("Using supplied answer for %s", question.key)
                answers[question.key] = supplied
                continue

            answers[question.key] = self.prompter.ask(question, prior)
        return answers

    def resolve(self, project_name: str | None = None, **external: Any) -> ResolvedConfig:
        """Ask every applicable question and derive the final config."""
        answers = self.collect(project_name=project_name, **external)
        config = ResolvedConfig.from_answers(answers)
        logger.debug(
            "Resolved %s (%s, %s)",
            config.project_name,
            config.db_mode.value,
            config.view_engine.value,
        )
        return config
