"""Tests for configuration models."""

from prstack.config import Config, default_config


def test_default_config() -> None:
    config = default_config()
    assert config.repo.default_branch == "main"
    assert config.repo.github_host == "github.com"
    assert config.tool.api_timeout == 30
    assert config.tool.page_size == 100
    assert config.api_base_url == "https://api.github.com"


def test_empty_sections_use_defaults() -> None:
    config = Config({})
    assert config.repo.default_branch == "main"
    assert config.repo.github_repo_owner is None
    assert config.tool.page_size == 100


def test_repo_settings() -> None:
    config = Config({
        'repo': {
            'github_repo_owner': 'octo',
            'github_repo_name': 'widgets',
            'default_branch': 'develop',
        },
        'tool': {'api_timeout': 5},
    })
    assert config.full_repo_name == "octo/widgets"
    assert config.repo.default_branch == "develop"
    assert config.tool.api_timeout == 5


def test_enterprise_api_url() -> None:
    config = Config({'repo': {'github_host': 'git.example.com'}})
    assert config.api_base_url == "https://git.example.com/api/v3"


def test_extra_fields_allowed() -> None:
    config = Config({'repo': {'something_new': True}})
    assert config.repo.model_dump()["something_new"] is True
