"""README generation and repository listing endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.auth.dependencies import get_access_token, require_access_token
from src.constants import (
    DEFAULT_REPO_SORT,
    DEFAULT_REPO_TYPE,
    DEFAULT_REPOS_PAGE_SIZE,
)
from src.models.schemas import (
    ErrorResponse,
    GenerateReadmeRequest,
    GenerateReadmeResponse,
    RepoData,
    RepositoryItem,
    RepositoryListResponse,
)
from src.services.dependencies import get_aggregator, get_generator
from src.services.generator.engine import ReadmeGenerator
from src.services.github.aggregator import RepositoryAggregator, parse_repository_url

router = APIRouter()
logger = logging.getLogger(__name__)

ERROR_RESPONSES = {
    status: {"model": ErrorResponse} for status in (400, 401, 403, 404, 429, 500)
}


@router.post(
    "/generate-readme",
    response_model=GenerateReadmeResponse,
    responses=ERROR_RESPONSES,
)
async def generate_readme(
    body: GenerateReadmeRequest,
    token: Annotated[str | None, Depends(get_access_token)],
    aggregator: Annotated[RepositoryAggregator, Depends(get_aggregator)],
    generator: Annotated[ReadmeGenerator, Depends(get_generator)],
) -> GenerateReadmeResponse:
    """Generate a README for a GitHub repository.

    Uses the session's GitHub token when logged in, so private repositories
    the user can see are supported.
    """
    # Validated before any upstream call is made
    owner, repo = parse_repository_url(body.repo_url)

    descriptor = await aggregator.fetch(owner, repo, token)
    document = await generator.generate(descriptor)
    logger.info(f"README for {owner}/{repo} served from {document.source.value}")

    return GenerateReadmeResponse(
        readme=document.body,
        source=document.source,
        repo_data=RepoData.from_descriptor(descriptor),
    )


@router.get(
    "/repositories",
    response_model=RepositoryListResponse,
    responses=ERROR_RESPONSES,
)
async def list_repositories(
    token: Annotated[str, Depends(require_access_token)],
    aggregator: Annotated[RepositoryAggregator, Depends(get_aggregator)],
    repo_type: Annotated[str, Query(alias="type")] = DEFAULT_REPO_TYPE,
    sort: str = DEFAULT_REPO_SORT,
    per_page: Annotated[int, Query(ge=1)] = DEFAULT_REPOS_PAGE_SIZE,
    page: Annotated[int, Query(ge=1)] = 1,
) -> RepositoryListResponse:
    """List the logged-in user's repositories (public and private)."""
    result = await aggregator.list_repositories(
        token,
        visibility=repo_type,
        sort=sort,
        page_size=per_page,
        page=page,
    )
    return RepositoryListResponse(
        repositories=[RepositoryItem.model_validate(repo) for repo in result.repositories],
        total=result.total,
        page=result.page,
        has_more=result.has_more,
    )
