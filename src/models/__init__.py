"""Domain models and API schemas."""

from src.models.repository import (
    DocumentSource,
    GeneratedDocument,
    RepositoryDescriptor,
    RepositoryPage,
    RepositorySummary,
)

__all__ = [
    "DocumentSource",
    "GeneratedDocument",
    "RepositoryDescriptor",
    "RepositoryPage",
    "RepositorySummary",
]
