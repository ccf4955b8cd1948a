"""Type definitions for GitHub API responses."""

from typing import Dict, List, Literal, Optional, Sequence
from pydantic import BaseModel

class RefPayload(BaseModel):
    """Base or head reference of a pull request."""
    ref: Optional[str] = ""

class PullRequestPayload(BaseModel):
    """The fields of a REST pull request object that prstack reads."""
    number: int
    title: str
    body: Optional[str] = None
    state: Literal['open', 'closed']
    draft: Optional[bool] = False
    base: Optional[RefPayload] = None
    head: Optional[RefPayload] = None

    @property
    def display_state(self) -> str:
        """State with drafts split out of 'open'."""
        if self.state == 'open' and self.draft:
            return 'draft'
        return self.state

    @property
    def base_ref(self) -> str:
        return (self.base.ref or "") if self.base else ""

    @property
    def head_ref(self) -> str:
        return (self.head.ref or "") if self.head else ""

class PullRequestListItem(BaseModel):
    """An entry of the open pull request listing."""
    number: int

def parse_pull_request(data: Dict[str, object]) -> PullRequestPayload:
    """Parse a pull request object into a Pydantic model.

    Raises pydantic.ValidationError for malformed payloads.
    """
    return PullRequestPayload.model_validate(data)

def parse_pull_request_list(items: Sequence[object]) -> List[int]:
    """Extract PR numbers from listing page objects, keeping API order."""
    return [PullRequestListItem.model_validate(item, from_attributes=True).number for item in items]
