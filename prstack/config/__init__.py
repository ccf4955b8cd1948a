"""Config module."""

from typing import Dict, Any
from .models import RepoConfig, ToolConfig, PrstackConfig

class Config(PrstackConfig):
    """Config object holding repository and tool config.

    Built from a nested dict with optional 'repo' and 'tool' sections.
    """
    def __init__(self, config: Dict[str, Dict[str, Any]]):
        """Initialize with a config dict."""
        super().__init__(
            repo=RepoConfig.model_validate(config.get('repo', {})),
            tool=ToolConfig.model_validate(config.get('tool', {})),
        )

    @property
    def api_base_url(self) -> str:
        """REST API root for the configured host."""
        host = self.repo.github_host
        if host == "github.com":
            return "https://api.github.com"
        # GitHub Enterprise Server
        return f"https://{host}/api/v3"

    @property
    def full_repo_name(self) -> str:
        """owner/name of the configured repository."""
        return f"{self.repo.github_repo_owner}/{self.repo.github_repo_name}"

def default_config() -> Config:
    """Get default config."""
    return Config({
        'repo': {
            'github_host': 'github.com',
            'default_branch': 'main',
        },
        'tool': {
            'api_timeout': 30,
            'page_size': 100,
        }
    })
