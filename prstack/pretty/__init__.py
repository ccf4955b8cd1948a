"""Pretty formatting utilities for CLI output."""

import sys
from typing import IO, List, Optional, Sequence

from ..stack import StackEntry

CURRENT_MARKER = " <-"
SEPARATOR = "--------"
HEADER = "stack:"


def _marker(entry: StackEntry) -> str:
    return CURRENT_MARKER if entry.is_current else ""


def format_annotated(entries: Sequence[StackEntry]) -> List[str]:
    """One '- #N (state): title' line per PR."""
    return [f"- #{e.record.number} ({e.record.state}): {e.record.title}{_marker(e)}" for e in entries]


def format_minimal(entries: Sequence[StackEntry]) -> List[str]:
    """One '- #N' line per PR, ready to paste into a description."""
    return [f"- #{e.record.number}{_marker(e)}" for e in entries]


def format_stack(entries: Sequence[StackEntry]) -> str:
    """Annotated block, separator, minimal block."""
    lines = format_annotated(entries)
    lines.append(SEPARATOR)
    lines.extend(format_minimal(entries))
    return "\n".join(lines)


def print_stack(entries: Sequence[StackEntry], file: Optional[IO[str]] = None) -> None:
    """Print the stack to file (default stdout)."""
    if file is None:
        file = sys.stdout
    print(f"\n{HEADER}", file=file)
    print(format_stack(entries), file=file)
