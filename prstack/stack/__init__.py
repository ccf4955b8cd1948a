"""Stack discovery: relationship finders and the stack assembler.

The assembler tries four strategies in order and the first one with a
result wins:

1. own_explicit_stack: the anchor PR's own "stack:" block.
2. foreign_explicit_stack: a "stack:" block on another open PR that
   lists the anchor.
3. branch_ancestry: open PRs chained to the anchor through base/head
   branches.
4. text_dependencies: "depends on #N" style references, followed both
   toward the base and toward the tip.
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional, Sequence, Set

from ..deps import extract_explicit_stack
from ..github import FetchError, PullRequestRecord
from ..typing import RecordSource

logger = logging.getLogger(__name__)

DEFAULT_BRANCH = "main"


@dataclass
class StackEntry:
    """A record at its position in the output."""
    record: PullRequestRecord
    is_current: bool


@dataclass
class AssembledStack:
    """Result of assembling a stack."""
    anchor: int
    records: List[PullRequestRecord]
    strategy: str

    @property
    def numbers(self) -> List[int]:
        return [r.number for r in self.records]

    def entries(self) -> List[StackEntry]:
        """Records flagged with whether they are the anchor."""
        return [StackEntry(r, r.number == self.anchor) for r in self.records]


def find_dependents(store: RecordSource, target: int, candidates: Iterable[int]) -> List[int]:
    """Candidates whose description names target as a dependency.

    Candidates that cannot be fetched are left out.
    """
    dependents: List[int] = []
    for number in candidates:
        if number == target:
            continue
        try:
            pr = store.fetch(number)
        except FetchError as e:
            logger.debug(f"Skipping candidate: {e}")
            continue
        if target in pr.dependencies:
            dependents.append(number)
    return dependents


def find_branch_adjacent(store: RecordSource, target: PullRequestRecord,
                         candidates: Iterable[int]) -> List[int]:
    """Candidates stacked directly on, or directly under, target by branch.

    A candidate is adjacent when its base is target's head, or its head is
    target's base. Candidates that cannot be fetched are left out.
    """
    related: List[int] = []
    for number in candidates:
        if number == target.number:
            continue
        try:
            pr = store.fetch(number)
        except FetchError as e:
            logger.debug(f"Skipping candidate: {e}")
            continue
        if ((pr.base_ref and pr.base_ref == target.head_ref) or
                (pr.head_ref and pr.head_ref == target.base_ref)):
            related.append(number)
    return related


@dataclass
class AssemblyRun:
    """State shared by the strategies during one assemble() call."""
    store: RecordSource
    anchor: PullRequestRecord
    default_branch: str = DEFAULT_BRANCH
    _open_numbers: Optional[List[int]] = field(default=None, repr=False)
    _warned: Set[int] = field(default_factory=set, repr=False)

    def open_numbers(self) -> List[int]:
        """Open PR numbers, listed on first use only.

        ListingError propagates: strategies that need the listing cannot run without it.
        """
        if self._open_numbers is None:
            self._open_numbers = self.store.list_open_numbers()
        return self._open_numbers

    def try_fetch(self, number: int) -> Optional[PullRequestRecord]:
        """Fetch a PR while expanding a stack; warn once and return None on failure."""
        try:
            return self.store.fetch(number)
        except FetchError as e:
            if number not in self._warned:
                self._warned.add(number)
                logger.warning(f"{e}")
            return None

    def fetch_all(self, numbers: Sequence[int]) -> List[PullRequestRecord]:
        """Fetch numbers in order, skipping repeats and failures."""
        records: List[PullRequestRecord] = []
        seen: Set[int] = set()
        for number in numbers:
            if number in seen:
                continue
            seen.add(number)
            pr = self.try_fetch(number)
            if pr is not None:
                records.append(pr)
        return records

    def traverse(self, neighbours: Callable[[PullRequestRecord], List[int]]) -> List[PullRequestRecord]:
        """Depth-first traversal from the anchor, in pre-order.

        Each number is expanded at most once, so cycles terminate. PRs that
        cannot be fetched are skipped along with everything only reachable
        through them.
        """
        visited: List[PullRequestRecord] = []
        seen: Set[int] = set()
        worklist: List[int] = [self.anchor.number]
        while worklist:
            number = worklist.pop()
            if number in seen:
                continue
            seen.add(number)
            pr = self.try_fetch(number)
            if pr is None:
                continue
            visited.append(pr)
            # Reversed so the first neighbour is expanded first, as recursion would
            for next_number in reversed(neighbours(pr)):
                if next_number not in seen:
                    worklist.append(next_number)
        return visited


Strategy = Callable[[AssemblyRun], Optional[List[PullRequestRecord]]]


def _with_anchor(run: AssemblyRun, records: List[PullRequestRecord]) -> List[PullRequestRecord]:
    if any(r.number == run.anchor.number for r in records):
        return records
    logger.debug(f"PR #{run.anchor.number} is not in its own stack list, appending it")
    return records + [run.anchor]


def own_explicit_stack(run: AssemblyRun) -> Optional[List[PullRequestRecord]]:
    """Use the "stack:" block in the anchor's own description."""
    stack = extract_explicit_stack(run.anchor.body)
    if stack is None or len(stack) < 2:
        return None
    logger.info(f"Found stack list in PR #{run.anchor.number}: {list(stack.numbers)}")
    return _with_anchor(run, run.fetch_all(stack.numbers))


def foreign_explicit_stack(run: AssemblyRun) -> Optional[List[PullRequestRecord]]:
    """Use the first "stack:" block on another open PR that lists the anchor."""
    anchor = run.anchor.number
    for number in run.open_numbers():
        if number == anchor:
            continue
        try:
            pr = run.store.fetch(number)
        except FetchError as e:
            logger.debug(f"Skipping candidate: {e}")
            continue
        stack = extract_explicit_stack(pr.body)
        if stack is not None and len(stack) >= 2 and anchor in stack:
            logger.info(f"Found PR #{anchor} in stack list of PR #{number}: {list(stack.numbers)}")
            return run.fetch_all(stack.numbers)
    return None


def branch_ancestry(run: AssemblyRun) -> Optional[List[PullRequestRecord]]:
    """Follow base/head branch links from the anchor through open PRs."""
    open_numbers = run.open_numbers()
    if not find_branch_adjacent(run.store, run.anchor, open_numbers):
        return None

    stack = run.traverse(lambda pr: find_branch_adjacent(run.store, pr, open_numbers))
    if len(stack) <= 1:
        return None
    logger.info(f"Found {len(stack)} PRs by branch ancestry")
    # PRs targeting the default branch are the bottom of the stack
    return sorted(stack, key=lambda pr: (pr.base_ref != run.default_branch, pr.number))


def text_dependencies(run: AssemblyRun) -> Optional[List[PullRequestRecord]]:
    """Follow dependency phrases down to dependencies and up to dependents."""
    open_numbers = run.open_numbers()

    def neighbours(pr: PullRequestRecord) -> List[int]:
        return list(pr.dependencies) + find_dependents(run.store, pr.number, open_numbers)

    stack = run.traverse(neighbours)
    logger.info(f"Found {len(stack)} PRs by dependency references")
    # Best effort: fewer recorded dependencies is taken to mean closer to the base.
    # sorted() is stable, so ties keep traversal order.
    return sorted(stack, key=lambda pr: len(set(pr.dependencies)))


DEFAULT_STRATEGIES: Sequence[Strategy] = (
    own_explicit_stack,
    foreign_explicit_stack,
    branch_ancestry,
    text_dependencies,
)


class StackAssembler:
    """Builds the ordered stack around an anchor PR."""

    def __init__(self, store: RecordSource, default_branch: str = DEFAULT_BRANCH,
                 strategies: Sequence[Strategy] = DEFAULT_STRATEGIES):
        """Initialize with a record store, the default branch and the strategy chain."""
        self.store = store
        self.default_branch = default_branch
        self.strategies = strategies

    def assemble(self, anchor: int) -> AssembledStack:
        """Assemble the stack containing anchor.

        Raises:
            FetchError: If the anchor itself cannot be fetched.
            ListingError: If open PRs cannot be listed and a strategy needs them.
        """
        anchor_pr = self.store.fetch(anchor)
        run = AssemblyRun(self.store, anchor_pr, self.default_branch)

        for strategy in self.strategies:
            records = strategy(run)
            if records is not None:
                logger.debug(f"Strategy {strategy.__name__} found {[r.number for r in records]}")
                return AssembledStack(anchor, records, strategy.__name__)
            logger.debug(f"Strategy {strategy.__name__} found nothing")

        # Only reachable with a custom chain that has no catch-all strategy
        return AssembledStack(anchor, [anchor_pr], "anchor_only")
