"""GitHub API access and repository aggregation."""

from src.services.github.aggregator import (
    classify_fetch_error,
    parse_repository_url,
    RepositoryAggregator,
)
from src.services.github.client import GitHubAPIError, GitHubClient

__all__ = [
    "classify_fetch_error",
    "GitHubAPIError",
    "GitHubClient",
    "parse_repository_url",
    "RepositoryAggregator",
]
