"""Tests for the single-answer validation rules."""

from __future__ import annotations

import pytest

from mvcgen.validators import (
    accept,
    all_of,
    matches,
    min_length,
    one_of,
    required,
    starts_with,
    validate,
)


class TestRequired:
    def test_accepts_text(self) -> None:
        assert required()("mvc-app") is None

    @pytest.mark.parametrize("value", ["", "   ", None])
    def test_rejects_blank(self, value) -> None:
        assert required("Database name is required")(value) == "Database name is required"


class TestStartsWith:
    def test_mongodb_prefix_accepted(self) -> None:
        check = starts_with("mongodb")
        assert check("mongodb://x:y@h:1/z") is None
        assert check("mongodb+srv://cluster/db") is None

    def test_other_scheme_rejected(self) -> None:
        reason = starts_with("mongodb")("postgres://bad")
        assert reason is not None
        assert "mongodb" in reason

    def test_custom_message(self) -> None:
        assert starts_with("mongodb", "nope")("") == "nope"


class TestMinLength:
    def test_boundary(self) -> None:
        check = min_length(3)
        assert check("abc") is None
        assert check("ab") == "Must be at least 3 characters"


class TestOneOf:
    def test_membership(self) -> None:
        check = one_of(["ejs", "pug"])
        assert check("pug") is None
        assert check("jade") == "Must be one of: ejs, pug"

    def test_accepts_generator_options(self) -> None:
        check = one_of(option for option in ("a", "b"))
        assert check("b") is None
        assert check("a") is None


class TestMatches:
    def test_full_match_required(self) -> None:
        check = matches(r"\d{1,5}", "Port must be a number")
        assert check("27017") is None
        assert check("27017x") == "Port must be a number"
        assert check(27017) is None


class TestCombinators:
    def test_all_of_first_rejection_wins(self) -> None:
        check = all_of(required("empty"), min_length(5, "short"))
        assert check("") == "empty"
        assert check("abc") == "short"
        assert check("abcdef") is None

    def test_accept(self) -> None:
        assert accept(None) is None

    def test_validate_pair(self) -> None:
        assert validate("x", required()) == (True, None)
        assert validate("", required("missing")) == (False, "missing")

    def test_checks_never_raise_on_odd_input(self) -> None:
        for check in (required(), starts_with("m"), min_length(1), one_of(["a"])):
            check(object())
