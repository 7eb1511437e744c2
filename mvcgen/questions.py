"""
mvcgen Questions - the declarative question graph

Each QuestionSpec reads only answers collected before it: its ``when``
predicate decides whether it is asked, and its ``default`` may be a function
of those answers, evaluated when the question is asked.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Mapping, Union

from mvcgen.config import DatabaseMode, ViewEngine
from mvcgen.validators import (
    Check,
    accept,
    all_of,
    matches,
    one_of,
    required,
    starts_with,
)

Answers = Mapping[str, Any]
Default = Union[str, Callable[[Answers], str], None]


class QuestionKind(str, Enum):
    TEXT = "text"
    SECRET = "secret"  # Entered without echo
    CHOICE = "choice"


@dataclass(frozen=True)
class Choice:
    value: str
    label: str


def _always(answers: Answers) -> bool:
    return True


@dataclass(frozen=True)
class QuestionSpec:
    """One configurable choice: when it applies and how it defaults."""

    key: str
    prompt: str
    kind: QuestionKind = QuestionKind.TEXT
    default: Default = None
    when: Callable[[Answers], bool] = _always
    check: Check = accept
    choices: tuple[Choice, ...] = ()

    def applies(self, answers: Answers) -> bool:
        return bool(self.when(answers))

    def default_for(self, answers: Answers) -> str:
        """Evaluate the default against the answers collected so far."""
        default = self.default
        if callable(default):
            default = default(answers)
        return "" if default is None else str(default)

    @property
    def choice_values(self) -> list[str]:
        return [choice.value for choice in self.choices]


def snapshot(answers: Mapping[str, Any]) -> Answers:
    """Read-only copy of the answers, handed to predicates and defaults."""
    return MappingProxyType(dict(answers))


# ═══════════════════════════════════════════════════════════════════════════
# PREDICATES & DEFAULTS
# ═══════════════════════════════════════════════════════════════════════════


def _mode(answers: Answers) -> str:
    return str(answers.get("db_mode") or "")


def _is_custom(answers: Answers) -> bool:
    return _mode(answers) == DatabaseMode.CUSTOM.value


def _not_custom(answers: Answers) -> bool:
    return not _is_custom(answers)


def _is_local(answers: Answers) -> bool:
    return _mode(answers) == DatabaseMode.LOCAL.value


def _has_username(answers: Answers) -> bool:
    return _not_custom(answers) and bool(answers.get("db_username"))


def _default_host(answers: Answers) -> str:
    return "localhost" if _is_local(answers) else ""


def _default_port(answers: Answers) -> str:
    return "27017" if _is_local(answers) else ""


# ═══════════════════════════════════════════════════════════════════════════
# THE GRAPH
# ═══════════════════════════════════════════════════════════════════════════


DATABASE_MODES: tuple[Choice, ...] = (
    Choice(DatabaseMode.LOCAL.value, "Local MongoDB (mongodb://localhost)"),
    Choice(DatabaseMode.ATLAS.value, "MongoDB Atlas (Cloud)"),
    Choice(DatabaseMode.CUSTOM.value, "Custom MongoDB URL"),
)

VIEW_ENGINES: tuple[Choice, ...] = tuple(
    Choice(engine.value, engine.value) for engine in ViewEngine
)

QUESTIONS: tuple[QuestionSpec, ...] = (
    QuestionSpec(
        key="project_name",
        prompt="What is your project name?",
        default="my-mvc-app",
        check=all_of(
            required("Project name is required"),
            matches(
                r"(?!\.\.?$)[A-Za-z0-9._-]+",
                "Project name may only contain letters, digits, '.', '_' and '-'",
            ),
        ),
    ),
    QuestionSpec(
        key="db_name",
        prompt="Enter your database name (this will be created if it doesn't exist):",
        default="mvc-app",
        check=required("Database name is required"),
    ),
    QuestionSpec(
        key="db_mode",
        prompt="Choose your MongoDB setup:",
        kind=QuestionKind.CHOICE,
        default=DatabaseMode.LOCAL.value,
        choices=DATABASE_MODES,
        check=one_of(choice.value for choice in DATABASE_MODES),
    ),
    QuestionSpec(
        key="mongo_uri",
        prompt="Enter your MongoDB connection URI:",
        when=_is_custom,
        check=starts_with(
            "mongodb", "Must be a valid MongoDB URI starting with mongodb://"
        ),
    ),
    QuestionSpec(
        key="db_host",
        prompt="Enter MongoDB host (e.g., localhost or cluster0.xxxxx.mongodb.net):",
        default=_default_host,
        when=_not_custom,
        check=required("MongoDB host is required"),
    ),
    QuestionSpec(
        key="db_port",
        prompt="Enter MongoDB port (default: 27017 for local):",
        default=_default_port,
        when=_is_local,
        check=matches(r"\d{1,5}", "Port must be a number"),
    ),
    QuestionSpec(
        key="db_username",
        prompt="Enter MongoDB username (leave empty for local without auth):",
        when=_not_custom,
    ),
    QuestionSpec(
        key="db_password",
        prompt="Enter MongoDB password:",
        kind=QuestionKind.SECRET,
        when=_has_username,
    ),
    QuestionSpec(
        key="view_engine",
        prompt="Choose your view engine:",
        kind=QuestionKind.CHOICE,
        default=VIEW_ENGINES[0].value,
        choices=VIEW_ENGINES,
        check=one_of(choice.value for choice in VIEW_ENGINES),
    ),
)


def question_keys(questions: tuple[QuestionSpec, ...] = QUESTIONS) -> list[str]:
    return [question.key for question in questions]


def get_question(key: str, questions: tuple[QuestionSpec, ...] = QUESTIONS) -> QuestionSpec:
    """Get a question by key"""
    for question in questions:
        if question.key == key:
            return question
    raise KeyError(key)


def check_graph(questions: tuple[QuestionSpec, ...]) -> None:
    """Reject graphs with duplicate keys."""
    seen: set[str] = set()
    for question in questions:
        if question.key in seen:
            raise ValueError(f"Duplicate question key: {question.key}")
        seen.add(question.key)


check_graph(QUESTIONS)
