"""README generation: prompt, AI backend and template fallback."""

from src.services.generator.backend import (
    create_generative_backend,
    GeminiBackend,
    GenerationError,
    GenerativeBackend,
)
from src.services.generator.engine import ReadmeGenerator
from src.services.generator.fallback import SECTION_HEADINGS, synthesize
from src.services.generator.prompts import build_prompt, README_SECTIONS

__all__ = [
    "build_prompt",
    "create_generative_backend",
    "GeminiBackend",
    "GenerationError",
    "GenerativeBackend",
    "README_SECTIONS",
    "ReadmeGenerator",
    "SECTION_HEADINGS",
    "synthesize",
]
