"""Pydantic schemas for API validation and serialization."""

from pydantic import BaseModel, ConfigDict, Field

from src.models.repository import DocumentSource, RepositoryDescriptor


# Auth schemas
class UserInfo(BaseModel):
    """Public GitHub identity stored in the session."""

    model_config = ConfigDict(from_attributes=True)

    login: str
    name: str | None = None
    avatar_url: str | None = None


class AuthStatus(BaseModel):
    """Authentication status of the current session."""

    authenticated: bool
    user: UserInfo | None = None


class LogoutResponse(BaseModel):
    success: bool = True


# README generation schemas
class GenerateReadmeRequest(BaseModel):
    """Body of ``POST /api/generate-readme``."""

    model_config = ConfigDict(populate_by_name=True)

    repo_url: str | None = Field(default=None, alias="repoUrl")


class RepoData(BaseModel):
    """Repository summary echoed back with a generated README."""

    name: str
    stars: int
    language: str | None = None
    description: str | None = None
    private: bool
    forks: int

    @classmethod
    def from_descriptor(cls, descriptor: RepositoryDescriptor) -> "RepoData":
        return cls(
            name=descriptor.name,
            stars=descriptor.stars,
            language=descriptor.language,
            description=descriptor.description,
            private=descriptor.private,
            forks=descriptor.forks,
        )


class GenerateReadmeResponse(BaseModel):
    """Successful README generation."""

    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    readme: str
    source: DocumentSource
    repo_data: RepoData = Field(alias="repoData")


# Repository listing schemas
class RepositoryItem(BaseModel):
    """Repository entry in the user's listing."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    full_name: str
    description: str | None = None
    private: bool
    url: str
    language: str | None = None
    stars: int
    updated_at: str | None = None


class RepositoryListResponse(BaseModel):
    """Paginated repository listing."""

    model_config = ConfigDict(populate_by_name=True)

    repositories: list[RepositoryItem]
    total: int
    page: int
    has_more: bool = Field(alias="hasMore")


# Errors
class ErrorResponse(BaseModel):
    """Error body returned by every failing endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    error: str
    requires_auth: bool = Field(default=False, alias="requiresAuth")
