"""README generation with deterministic fallback."""

import asyncio

from src.models.repository import DocumentSource, GeneratedDocument, RepositoryDescriptor
from src.services.generator.backend import GenerativeBackend
from src.services.generator.fallback import synthesize
from src.services.generator.prompts import build_prompt
from src.utils.logging import get_logger, LogContext

logger = get_logger(__name__)


class ReadmeGenerator:
    """Turns a repository descriptor into a README.

    The backend is called exactly once per document. Any backend failure
    (network, quota, timeout, empty answer) is recovered here by rendering the
    built-in template, so callers never see a generation error.
    """

    def __init__(self, backend: GenerativeBackend | None, timeout: float | None = None) -> None:
        self._backend = backend
        self._timeout = timeout

    @property
    def backend_name(self) -> str | None:
        return self._backend.name if self._backend else None

    async def generate(self, descriptor: RepositoryDescriptor) -> GeneratedDocument:
        log = LogContext(logger, repo=descriptor.name)
        if self._backend is None:
            log.info("No generative backend configured, using template")
            return GeneratedDocument(synthesize(descriptor), DocumentSource.FALLBACK)

        prompt = build_prompt(descriptor)
        try:
            body = await asyncio.wait_for(self._backend.complete(prompt), timeout=self._timeout)
        except Exception as e:
            log.warning(f"{self._backend.name} generation failed, using template: {e!r}")
            return GeneratedDocument(synthesize(descriptor), DocumentSource.FALLBACK)

        if not body or not body.strip():
            log.warning(f"{self._backend.name} returned an empty README, using template")
            return GeneratedDocument(synthesize(descriptor), DocumentSource.FALLBACK)

        log.info(f"Generated README with {self._backend.name} ({len(body)} chars)")
        return GeneratedDocument(body, DocumentSource.AI)
