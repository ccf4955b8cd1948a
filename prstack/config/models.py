"""Pydantic models for config types."""

from typing import Optional
from pydantic import BaseModel, Field

class RepoConfig(BaseModel):
    """Repository configuration."""
    github_host: str = "github.com"
    github_repo_owner: Optional[str] = None
    github_repo_name: Optional[str] = None
    # Stacks rooted on this branch sort first in branch ancestry order
    default_branch: str = "main"

    class Config:
        """Pydantic config."""
        extra = "allow"

class ToolConfig(BaseModel):
    """Tool configuration."""
    api_timeout: int = 30
    page_size: int = 100

    class Config:
        """Pydantic config."""
        extra = "allow"

class PrstackConfig(BaseModel):
    """Full prstack configuration."""
    repo: RepoConfig = Field(default_factory=RepoConfig)
    tool: ToolConfig = Field(default_factory=ToolConfig)

    class Config:
        """Pydantic config."""
        extra = "allow"
