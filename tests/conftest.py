"""Shared pytest fixtures for the mvcgen test suite.

Provides:
- A scripted Prompter that records which questions were asked
- Ready-made resolved configs for each database mode
"""

from __future__ import annotations

from typing import Any

import pytest

from mvcgen.config import DatabaseMode, ResolvedConfig, ViewEngine
from mvcgen.questions import Answers, QuestionSpec


# ---------------------------------------------------------------------------
# Prompters
# ---------------------------------------------------------------------------


class ScriptedPrompter:
    """Answers from a dict, falling back to the question default.

    Each value may be a list, consumed one item per ask, to simulate the
    operator retrying after a rejection. Rejected values are recorded.
    """

    def __init__(self, script: dict[str, Any] | None = None):
        self.script = {
            key: list(value) if isinstance(value, list) else [value]
            for key, value in (script or {}).items()
        }
        self.asked: list[str] = []
        self.rejections: list[tuple[str, str]] = []
        self.seen_answers: dict[str, dict[str, Any]] = {}

    def ask(self, question: QuestionSpec, answers: Answers) -> str:
        self.asked.append(question.key)
        self.seen_answers[question.key] = dict(answers)
        queue = self.script.get(question.key)
        while True:
            value = queue.pop(0) if queue else question.default_for(answers)
            reason = question.check(value)
            if reason is None:
                return value
            self.rejections.append((question.key, reason))
            if not queue:
                raise AssertionError(f"No acceptable answer scripted for {question.key}")


@pytest.fixture
def scripted():
    """Factory for ScriptedPrompter instances."""
    return ScriptedPrompter


# ---------------------------------------------------------------------------
# Configs
# ---------------------------------------------------------------------------


@pytest.fixture
def local_config() -> ResolvedConfig:
    return ResolvedConfig(
        project_name="blog",
        db_name="mvc-app",
        db_mode=DatabaseMode.LOCAL,
        view_engine=ViewEngine.EJS,
        mongo_uri="mongodb://localhost:27017/mvc-app",
    )


@pytest.fixture
def atlas_config() -> ResolvedConfig:
    return ResolvedConfig(
        project_name="shop",
        db_name="shop",
        db_mode=DatabaseMode.ATLAS,
        view_engine=ViewEngine.PUG,
        mongo_uri=(
            "mongodb+srv://u:p@cluster0.example.mongodb.net/shop"
            "?retryWrites=true&w=majority"
        ),
    )
