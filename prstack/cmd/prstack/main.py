"""CLI entry point."""

import sys
import logging
from typing import NoReturn, Optional

import click
from github import Auth, Github

from ... import setup_logging
from ...config import Config
from ...github import (
    FetchError, ListingError, RecordStore, find_github_token, parse_pr_url,
)
from ...github.adapters import PyGithubAdapter
from ...pretty import print_stack
from ...stack import StackAssembler

# Get module logger
logger = logging.getLogger(__name__)

def check(err: Exception) -> NoReturn:
    """Report a fatal error and exit."""
    logger.error(f"{err}")
    sys.exit(1)

def setup_github(config: Config, token: str) -> RecordStore:
    """Create a record store backed by a real PyGithub client."""
    real_github = Github(
        auth=Auth.Token(token),
        base_url=config.api_base_url,
        timeout=config.tool.api_timeout,
        per_page=config.tool.page_size,
        retry=None,
        lazy=True,
    )
    github_client = PyGithubAdapter(real_github)
    return RecordStore(github_client.get_repo(config.full_repo_name))

@click.command(name="prstack", help="Show the stack of GitHub pull requests a pull request belongs to.\n\n"
               "PR_URL looks like https://github.com/OWNER/REPO/pull/NUMBER. "
               "Without --token, the token comes from 'gh auth token'.")
@click.argument('pr_url')
@click.option('--token', '-t', help="GitHub personal access token")
@click.option('--default-branch', default="main", show_default=True,
              help="Branch that the bottom of a stack targets")
@click.option('-v', '--verbose', count=True, help="Increase verbosity (can be used multiple times for more verbosity)")
def cli(pr_url: str, token: Optional[str], default_branch: str, verbose: int) -> None:
    """Stack command."""
    setup_logging(verbose)

    try:
        url = parse_pr_url(pr_url)
    except ValueError as e:
        check(e)

    resolved_token = find_github_token(token, url.host)
    if not resolved_token:
        check(ValueError("No GitHub token found. Try one of:\n"
                         "1. Pass --token\n"
                         "2. Log in with 'gh auth login'"))

    config = Config({
        'repo': {
            'github_host': url.host,
            'github_repo_owner': url.owner,
            'github_repo_name': url.repo,
            'default_branch': default_branch,
        },
    })
    store = setup_github(config, resolved_token)

    logger.info(f"Analyzing {url.full_name} #{url.number}...")
    assembler = StackAssembler(store, default_branch=config.repo.default_branch)
    try:
        result = assembler.assemble(url.number)
    except (FetchError, ListingError) as e:
        check(e)

    print_stack(result.entries())


def main() -> None:
    """Main entry point."""
    cli()

if __name__ == "__main__":
    main()
