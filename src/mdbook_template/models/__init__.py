"""mdbook-template data models.

- PreprocessorContext: Run context supplied by the host
- RenderFailure: A chapter that failed to render
- iter_chapters: Depth-first walk over the host's book items
"""

from mdbook_template.models.book import (
    PreprocessorContext,
    RenderFailure,
    chapter_name,
    iter_chapters,
    top_level_items,
)

__all__ = [
    "PreprocessorContext",
    "RenderFailure",
    "chapter_name",
    "iter_chapters",
    "top_level_items",
]
