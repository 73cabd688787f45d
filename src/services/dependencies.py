"""Service dependencies for FastAPI."""

from fastapi import Request

from src.services.generator.engine import ReadmeGenerator
from src.services.github.aggregator import RepositoryAggregator


def get_aggregator(request: Request) -> RepositoryAggregator:
    return request.app.state.aggregator


def get_generator(request: Request) -> ReadmeGenerator:
    return request.app.state.generator
