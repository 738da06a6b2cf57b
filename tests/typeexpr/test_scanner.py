"""Tests for depth-aware type scanning helpers."""

from __future__ import annotations

from dtsgen.typeexpr.scanner import (
    clean_return_text,
    find_matching,
    is_fully_enclosed,
    leading_type,
    split_top_level,
)


def test_split_top_level_respects_nesting() -> None:
    assert split_top_level("table<string, number>, fun(a, b): c", ",") == [
        "table<string, number>",
        "fun(a, b): c",
    ]
    assert split_top_level("fun(x: a|b): c | nil", "|") == ["fun(x: a|b): c", "nil"]


def test_split_top_level_drops_empty_parts() -> None:
    assert split_top_level("boolean,", ",") == ["boolean"]


def test_find_matching_and_full_enclosure() -> None:
    assert find_matching("fun(a: (b)): c", 3) == 10
    assert find_matching("fun(a", 3) is None
    assert is_fully_enclosed("(a, (b))") is True
    assert is_fully_enclosed("(a), (b)") is False


def test_clean_return_text_keeps_type_keywords() -> None:
    assert clean_return_text("number | nil") == "number | nil"
    assert clean_return_text("boolean, string") == "boolean, string"
    assert clean_return_text("table<string, number>") == "table<string, number>"


def test_clean_return_text_truncates_tuple_before_description() -> None:
    text = "(boolean, CCFlagMask, Milliseconds, boolean, boolean) Whether the unit is CC'd"
    assert clean_return_text(text) == "(boolean, CCFlagMask,"


def test_clean_return_text_drops_comments_and_bare_words() -> None:
    assert clean_return_text("vec3 -- world position") == "vec3"
    assert clean_return_text("game_object|nil target") == "game_object|nil"


def test_leading_type_keeps_unions_and_function_types() -> None:
    assert leading_type("string | nil The label") == ("string | nil", "The label")
    assert leading_type("fun(a: number): boolean callback") == (
        "fun(a: number): boolean",
        "callback",
    )
    assert leading_type("number") == ("number", "")


def test_clean_return_text_cuts_any_trailing_lowercase_word() -> None:
    assert clean_return_text("boolean, vec3") == "boolean,"
    assert clean_return_text("string | myclass") == "string |"
    assert clean_return_text("number count") == "number"
