"""Dependency extraction from pull request descriptions.

Two independent passes over a PR body:

- the phrase pass finds references such as "depends on #12" or
  "stacked on #12";
- the explicit-stack pass finds a "stack:" block listing every PR of a
  stack, one "- #N" item per line, with the current PR marked "<-".

Both are pure functions of the text.
"""

import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

# Order matters: matches are reported pattern by pattern
DEPENDENCY_PATTERNS = [
    re.compile(r'depends\s+on\s+#(\d+)', re.IGNORECASE),
    re.compile(r'based\s+on\s+#(\d+)', re.IGNORECASE),
    re.compile(r'stacked\s+on\s+#(\d+)', re.IGNORECASE),
    re.compile(r'builds?\s+on\s+#(\d+)', re.IGNORECASE),
    re.compile(r'requires?\s+#(\d+)', re.IGNORECASE),
    re.compile(r'follows?\s+#(\d+)', re.IGNORECASE),
]

# "stack:" at the end of a line; "**Stack**:" as written by spr-style tools too
STACK_HEADER = re.compile(r'stack\**:\s*$', re.IGNORECASE)
STACK_ITEM = re.compile(r'^\s*[-*+]\s*.*?#(\d+)')
CURRENT_MARKERS = ("<-", "⬅")


@dataclass(frozen=True)
class ExplicitStack:
    """An ordered PR list parsed from a "stack:" block."""
    numbers: Tuple[int, ...]
    current_index: int = -1

    def __contains__(self, number: object) -> bool:
        return number in self.numbers

    def __len__(self) -> int:
        return len(self.numbers)


def extract_dependencies(text: Optional[str]) -> List[int]:
    """Extract PR numbers referenced by dependency phrases.

    Duplicates are kept; callers de-duplicate while traversing.
    """
    if not text:
        return []
    deps: List[int] = []
    for pattern in DEPENDENCY_PATTERNS:
        for match in pattern.finditer(text):
            deps.append(int(match.group(1)))
    return deps


def _parse_items(lines: List[str]) -> ExplicitStack:
    """Parse the item lines following a stack header."""
    numbers: List[int] = []
    current_index = -1
    for line in lines:
        if not line.strip():
            continue
        match = STACK_ITEM.match(line)
        if not match:
            break
        if current_index < 0 and any(marker in line for marker in CURRENT_MARKERS):
            current_index = len(numbers)
        numbers.append(int(match.group(1)))
    return ExplicitStack(tuple(numbers), current_index)


def extract_explicit_stack(text: Optional[str]) -> Optional[ExplicitStack]:
    """Find the first "stack:" block with at least one item.

    Returns None when the text has no such block.
    """
    if not text:
        return None
    lines = text.splitlines()
    for i, line in enumerate(lines):
        if not STACK_HEADER.search(line):
            continue
        stack = _parse_items(lines[i + 1:])
        if stack.numbers:
            return stack
    return None
