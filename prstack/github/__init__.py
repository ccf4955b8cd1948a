"""GitHub interfaces and the pull request record store."""

import logging
import re
import subprocess
from dataclasses import dataclass
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

import requests
from github import GithubException
from pydantic import ValidationError

from ..deps import extract_dependencies
from .types import PullRequestPayload, parse_pull_request, parse_pull_request_list

# Get module logger
logger = logging.getLogger(__name__)

PR_URL_PATTERN = re.compile(
    r'^(?:https?://)?(?P<host>[^/\s]+)/(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+)/pull/(?P<number>\d+)(?:[/?#].*)?$'
)

GH_TOKEN_TIMEOUT = 10


class FetchError(Exception):
    """A pull request could not be fetched or parsed."""

    def __init__(self, number: int, reason: str):
        super().__init__(f"failed to fetch PR #{number}: {reason}")
        self.number = number
        self.reason = reason


class ListingError(Exception):
    """The open pull request listing could not be fetched or parsed."""


@dataclass(frozen=True)
class PullRequestRecord:
    """Pull request as known to prstack. Immutable for the run."""
    number: int
    title: str
    body: str
    state: str
    base_ref: str = ""
    head_ref: str = ""
    dependencies: Tuple[int, ...] = ()

    @classmethod
    def from_payload(cls, payload: PullRequestPayload) -> 'PullRequestRecord':
        """Build a record from a validated payload, extracting dependencies."""
        body = payload.body or ""
        return cls(
            number=payload.number,
            title=payload.title,
            body=body,
            state=payload.display_state,
            base_ref=payload.base_ref,
            head_ref=payload.head_ref,
            dependencies=tuple(extract_dependencies(body)),
        )


@dataclass(frozen=True)
class PullRequestURL:
    """Coordinates parsed from a pull request URL."""
    host: str
    owner: str
    repo: str
    number: int

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


# Define protocols for GitHub objects
@runtime_checkable
class GitHubPullRequestProtocol(Protocol):
    """Protocol for GitHub pull request objects (real or fake)."""
    @property
    def number(self) -> int:
        """Get the PR number."""
        ...

    @property
    def raw_data(self) -> Dict[str, object]:
        """Get the JSON object returned by the API."""
        ...

@runtime_checkable
class GitHubRepoProtocol(Protocol):
    """Protocol for GitHub repository objects (real or fake)."""
    def get_pull(self, number: int) -> GitHubPullRequestProtocol:
        """Get a pull request by number."""
        ...

    def get_pulls(self, state: str = "open") -> List[GitHubPullRequestProtocol]:
        """Get the first page of pull requests in the given state."""
        ...

@runtime_checkable
class PyGithubProtocol(Protocol):
    """Protocol for PyGithub implementations (real or fake)."""
    def get_repo(self, full_name_or_id: str) -> GitHubRepoProtocol:
        """Get a repository by full name."""
        ...


class RecordStore:
    """Fetches pull requests and caches them for the rest of the run.

    Records never change during a run, so a cached record is always
    returned without another request. Failed fetches are not cached.
    """

    def __init__(self, repo: GitHubRepoProtocol):
        self.repo = repo
        self._cache: Dict[int, PullRequestRecord] = {}

    def fetch(self, number: int) -> PullRequestRecord:
        """Fetch a pull request by number.

        Raises:
            FetchError: On non-success status, network error, timeout or
                malformed payload.
        """
        record = self._cache.get(number)
        if record is not None:
            return record

        logger.info(f"> github fetch #{number}")
        try:
            data = self.repo.get_pull(number).raw_data
        except GithubException as e:
            raise FetchError(number, f"GitHub API error {e.status}: {e.data}") from e
        except requests.RequestException as e:
            raise FetchError(number, str(e)) from e
        except ValueError as e:
            # Undecodable or truncated JSON body
            raise FetchError(number, f"malformed payload: {e}") from e

        try:
            payload = parse_pull_request(data)
        except ValidationError as e:
            raise FetchError(number, f"malformed payload: {e}") from e

        record = PullRequestRecord.from_payload(payload)
        logger.debug(f"  PR #{record.number}: state={record.state} base={record.base_ref} "
                     f"head={record.head_ref} deps={list(record.dependencies)}")
        self._cache[number] = record
        return record

    def list_open_numbers(self) -> List[int]:
        """Get the numbers of open pull requests, one page only.

        Raises:
            ListingError: On non-success status, network error, timeout or
                malformed payload.
        """
        logger.info("> github list open pull requests")
        try:
            pulls = self.repo.get_pulls(state="open")
            numbers = parse_pull_request_list(pulls)
        except GithubException as e:
            raise ListingError(f"GitHub API error {e.status}: {e.data}") from e
        except requests.RequestException as e:
            raise ListingError(str(e)) from e
        except ValueError as e:
            # pydantic ValidationError, or an undecodable JSON body
            raise ListingError(f"malformed payload: {e}") from e
        logger.debug(f"Open PRs: {numbers}")
        return numbers


def parse_pr_url(url: str) -> PullRequestURL:
    """Parse HOST/OWNER/REPO/pull/NUMBER, with or without a scheme.

    Raises:
        ValueError: If the URL does not name a pull request.
    """
    match = PR_URL_PATTERN.match(url.strip())
    if not match:
        raise ValueError(f"invalid GitHub PR URL format: {url}")
    return PullRequestURL(
        host=match.group('host'),
        owner=match.group('owner'),
        repo=match.group('repo'),
        number=int(match.group('number')),
    )


def _token_from_gh_hosts(host: str) -> Optional[str]:
    """Read the oauth token gh keeps in ~/.config/gh/hosts.yml."""
    import yaml
    from pathlib import Path

    gh_config_path = Path.home() / ".config" / "gh" / "hosts.yml"
    if not gh_config_path.exists():
        return None
    try:
        with open(gh_config_path, "r") as f:
            gh_config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error reading gh CLI config: {e}")
        return None
    if gh_config and host in gh_config:
        token = gh_config[host].get("oauth_token")
        if isinstance(token, str) and token:
            return token
    return None


def find_github_token(flag_token: Optional[str] = None, host: str = "github.com") -> Optional[str]:
    """Find a GitHub token: explicit flag first, then the gh CLI."""
    if flag_token:
        return flag_token

    cmd = ["gh", "auth", "token"]
    if host != "github.com":
        cmd += ["--hostname", host]
    try:
        result = subprocess.run(cmd, capture_output=True, text=True, check=True,
                                timeout=GH_TOKEN_TIMEOUT)
    except FileNotFoundError:
        logger.debug("gh CLI not installed, trying its hosts.yml")
        return _token_from_gh_hosts(host)
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        logger.debug(f"gh auth token failed: {e}")
        return None

    token = result.stdout.strip()
    return token or None
