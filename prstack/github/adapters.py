"""Adapter classes to wrap PyGithub objects with our protocol interfaces."""

from typing import Dict, List

from github import Github
from github.Repository import Repository
from github.PullRequest import PullRequest as PyGithubPullRequest

from . import (
    PyGithubProtocol,
    GitHubRepoProtocol,
    GitHubPullRequestProtocol,
)


class PyGithubPullRequestAdapter(GitHubPullRequestProtocol):
    """Adapter for PyGithub PullRequest objects."""

    def __init__(self, pr: PyGithubPullRequest) -> None:
        self._pr = pr

    @property
    def number(self) -> int:
        return self._pr.number

    @property
    def raw_data(self) -> Dict[str, object]:
        # Complete for objects from get_pull. Listing page objects are not,
        # so only their number is read
        return self._pr.raw_data


class PyGithubRepoAdapter(GitHubRepoProtocol):
    """Adapter for PyGithub Repository objects."""

    def __init__(self, repo: Repository) -> None:
        self._repo = repo

    def get_pull(self, number: int) -> GitHubPullRequestProtocol:
        """Get a pull request by number."""
        return PyGithubPullRequestAdapter(self._repo.get_pull(number))

    def get_pulls(self, state: str = "open") -> List[GitHubPullRequestProtocol]:
        """Get the first page of pull requests; the page size is set on the client."""
        page = self._repo.get_pulls(state=state).get_page(0)
        return [PyGithubPullRequestAdapter(pr) for pr in page]


class PyGithubAdapter(PyGithubProtocol):
    """Adapter for the main PyGithub object."""

    def __init__(self, github: Github) -> None:
        self._github = github

    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name; a lazy client does not fetch it."""
        return PyGithubRepoAdapter(self._github.get_repo(full_name_or_id))
