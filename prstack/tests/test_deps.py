"""Unit tests for dependency extraction from PR descriptions."""

import pytest

from prstack.deps import ExplicitStack, extract_dependencies, extract_explicit_stack


class TestExtractDependencies:
    """Tests for the phrase pass."""

    @pytest.mark.parametrize("text,expected", [
        ("Depends on #12", [12]),
        ("based on #3", [3]),
        ("STACKED ON #45", [45]),
        ("builds on #7", [7]),
        ("build on #7", [7]),
        ("requires #8", [8]),
        ("require #8", [8]),
        ("follows #9", [9]),
        ("follow #9", [9]),
        ("depends\n  on   #10", [10]),
    ])
    def test_single_phrase(self, text: str, expected: list) -> None:
        assert extract_dependencies(text) == expected

    def test_pattern_order_then_position(self) -> None:
        """Matches come out pattern by pattern, left to right within one."""
        text = "Requires #9. Depends on #2 and depends on #1. Follows #4."
        assert extract_dependencies(text) == [2, 1, 9, 4]

    def test_duplicates_are_kept(self) -> None:
        assert extract_dependencies("depends on #5, stacked on #5") == [5, 5]

    def test_no_references(self) -> None:
        assert extract_dependencies("Fixes #12, see #13") == []
        assert extract_dependencies("depends on 12") == []

    def test_empty_text(self) -> None:
        assert extract_dependencies("") == []
        assert extract_dependencies(None) == []

    def test_idempotent(self) -> None:
        text = "Builds on #3\nrequires #4\nfollows #3"
        first = extract_dependencies(text)
        assert extract_dependencies(text) == first
        assert extract_dependencies(text) == extract_dependencies(text)


class TestExtractExplicitStack:
    """Tests for the "stack:" block pass."""

    def test_basic_block_with_current_marker(self) -> None:
        text = "Some change.\n\nstack:\n- #10\n- #11 <-\n- #12\n"
        stack = extract_explicit_stack(text)
        assert stack == ExplicitStack((10, 11, 12), 1)
        assert stack is not None
        assert len(stack) == 3
        assert 12 in stack

    def test_no_current_marker(self) -> None:
        stack = extract_explicit_stack("Stack:\n- #1\n- #2")
        assert stack is not None
        assert stack.numbers == (1, 2)
        assert stack.current_index == -1

    def test_markdown_header_and_arrow_marker(self) -> None:
        """Bodies written by spr-style tools use **Stack**: and titles before the number."""
        text = "Body\n\n---\n\n**Stack**:\n- Add parser #22 ⬅\n- #21\n\n⚠️ *Part of a stack*"
        stack = extract_explicit_stack(text)
        assert stack == ExplicitStack((22, 21), 0)

    def test_other_list_markers(self) -> None:
        stack = extract_explicit_stack("stack:\n* #3\n+ #4 <-\n")
        assert stack == ExplicitStack((3, 4), 1)

    def test_marker_without_space(self) -> None:
        stack = extract_explicit_stack("stack:\n-#10\n-#11 <-\n*#12\n")
        assert stack == ExplicitStack((10, 11, 12), 1)

    def test_blank_lines_between_items(self) -> None:
        stack = extract_explicit_stack("stack:\n\n- #1\n\n- #2\n")
        assert stack is not None
        assert stack.numbers == (1, 2)

    def test_block_ends_at_first_other_line(self) -> None:
        stack = extract_explicit_stack("stack:\n- #1\n- #2\nThanks!\n- #3\n")
        assert stack is not None
        assert stack.numbers == (1, 2)

    def test_header_without_items_is_skipped(self) -> None:
        text = "Our stack:\nnothing yet\n\nstack:\n- #5\n- #6 <-"
        assert extract_explicit_stack(text) == ExplicitStack((5, 6), 1)

    def test_no_block(self) -> None:
        assert extract_explicit_stack("Depends on #3") is None
        assert extract_explicit_stack("stack: #1 #2") is None
        assert extract_explicit_stack("") is None
        assert extract_explicit_stack(None) is None

    def test_single_entry_block(self) -> None:
        stack = extract_explicit_stack("stack:\n- #7 <-")
        assert stack == ExplicitStack((7,), 0)

    def test_first_reference_on_line_wins(self) -> None:
        stack = extract_explicit_stack("stack:\n- #4 (replaces #2)\n- #5")
        assert stack is not None
        assert stack.numbers == (4, 5)

    def test_deterministic(self) -> None:
        text = "stack:\n- #10\n- #11 <-\n- #12"
        assert extract_explicit_stack(text) == extract_explicit_stack(text)
