"""Common types used across the codebase."""

from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from .github import PullRequestRecord

class RecordSource(Protocol):
    """Protocol for what the stack assembler expects from a record store."""

    def fetch(self, number: int) -> 'PullRequestRecord':
        """Return the record for a PR number, raising FetchError on failure."""
        ...

    def list_open_numbers(self) -> List[int]:
        """Return open PR numbers, raising ListingError on failure."""
        ...
