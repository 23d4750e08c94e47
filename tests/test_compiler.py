"""Tests for trot.routing.compiler — pattern compilation and path helpers."""

import pytest

from trot.errors import ConfigurationError
from trot.routing.compiler import append_separator, clean, compile_pattern, split
from trot.routing.route import Segment, SegmentType


def _shape(pattern: str) -> list[tuple[SegmentType, str]]:
    return [(s.type, s.value) for s in compile_pattern(pattern)]


class TestClean:
    def test_root_unchanged(self) -> None:
        assert clean("/") == "/"

    def test_strips_leading_and_trailing(self) -> None:
        assert clean("///users/42//") == "users/42"

    def test_empty_becomes_separator(self) -> None:
        assert clean("") == "/"
        assert clean("////") == "/"


class TestSplit:
    def test_root(self) -> None:
        assert split("/") == ["/"]

    def test_pieces(self) -> None:
        assert split("/api/v2/users/") == ["api", "v2", "users"]

    def test_adjacent_separators_leave_empty_piece(self) -> None:
        assert split("/a//b") == ["a", "", "b"]


class TestAppendSeparator:
    def test_adds_missing_slash(self) -> None:
        assert append_separator("admin") == "/admin"

    def test_keeps_existing_slash(self) -> None:
        assert append_separator("/admin") == "/admin"


class TestCompilePattern:
    def test_root(self) -> None:
        segments = compile_pattern("/")
        assert segments == (Segment("/", SegmentType.STATIC, "/"),)

    def test_empty_pattern_is_root(self) -> None:
        assert _shape("") == [(SegmentType.STATIC, "/")]

    def test_static(self) -> None:
        assert _shape("/api/v2/users") == [
            (SegmentType.STATIC, "api"),
            (SegmentType.STATIC, "v2"),
            (SegmentType.STATIC, "users"),
        ]

    def test_parameter(self) -> None:
        assert _shape("/users/:id") == [
            (SegmentType.STATIC, "users"),
            (SegmentType.PARAMETER, "id"),
        ]

    def test_optional(self) -> None:
        assert _shape("/users/:id?") == [
            (SegmentType.STATIC, "users"),
            (SegmentType.OPTIONAL, "id"),
        ]

    def test_wildcard(self) -> None:
        assert _shape("/files/*") == [
            (SegmentType.STATIC, "files"),
            (SegmentType.ANY, "*"),
        ]

    def test_wildcard_keeps_trailing_text(self) -> None:
        assert _shape("/files/*rest") == [
            (SegmentType.STATIC, "files"),
            (SegmentType.ANY, "*rest"),
        ]

    def test_multiple_parameters(self) -> None:
        assert _shape("/users/:user_id/posts/:post_id") == [
            (SegmentType.STATIC, "users"),
            (SegmentType.PARAMETER, "user_id"),
            (SegmentType.STATIC, "posts"),
            (SegmentType.PARAMETER, "post_id"),
        ]

    def test_colon_inside_static_piece_is_literal(self) -> None:
        assert _shape("/time/12:30") == [
            (SegmentType.STATIC, "time"),
            (SegmentType.STATIC, "12:30"),
        ]

    def test_leading_slash_optional(self) -> None:
        assert compile_pattern("users/:id") == tuple(
            Segment("users/:id", s.type, s.value) for s in compile_pattern("/users/:id")
        )

    def test_original_is_recorded_on_every_segment(self) -> None:
        segments = compile_pattern("/users/:id/")
        assert {s.original for s in segments} == {"/users/:id/"}

    def test_no_value_contains_separator(self) -> None:
        for pattern in ("/a/b/c", "/a/:b/:c?", "/x/*"):
            assert all("/" not in s.value for s in compile_pattern(pattern))

    def test_wildcard_must_be_last(self) -> None:
        with pytest.raises(ConfigurationError, match="final segment"):
            compile_pattern("/files/*/meta")

    def test_parameter_needs_name(self) -> None:
        with pytest.raises(ConfigurationError, match="without a name"):
            compile_pattern("/users/:")

    def test_optional_needs_name(self) -> None:
        with pytest.raises(ConfigurationError):
            compile_pattern("/users/:?")
