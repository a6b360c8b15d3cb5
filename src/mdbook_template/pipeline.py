"""Preprocessing pipeline.

A run has two phases, entered once and in order:
1. Loading: the JSON context is assembled. Any failure is fatal.
2. Rendering: each chapter is rendered on its own. A failing chapter is
   logged, left as it was and skipped.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from mdbook_template.config import SECTION_NAME, TemplateConfig, load_config_from_dict
from mdbook_template.context import load_context
from mdbook_template.errors import RenderError
from mdbook_template.models import (
    PreprocessorContext,
    RenderFailure,
    chapter_name,
    iter_chapters,
    top_level_items,
)
from mdbook_template.templates import ChapterRenderer

logger = logging.getLogger(__name__)


@dataclass
class PipelineResult:
    """Outcome of one run.

    Attributes:
        book: The processed book (same object that was passed in)
        rendered: Number of chapters processed without error
        failures: Chapters that failed to render
    """

    book: dict[str, Any]
    rendered: int = 0
    failures: list[RenderFailure] = field(default_factory=list)

    @property
    def has_failures(self) -> bool:
        """Return True if any chapter failed to render."""
        return bool(self.failures)


class TemplatePipeline:
    """Renders every chapter of a book against the configured JSON context.

    Usage:
        pipeline = TemplatePipeline(config, root=ctx.root)
        result = pipeline.run(book)
    """

    def __init__(self, config: TemplateConfig, root: Path | None = None) -> None:
        """Initialize the pipeline.

        Args:
            config: Validated preprocessor configuration
            root: Book root directory for relative data paths
        """
        self.config = config
        self.root = root

    def load(self) -> ChapterRenderer:
        """Loading phase: build the context and a renderer bound to it.

        Raises:
            ContextSourceError: If any data file cannot be read or parsed
        """
        if self.config.extra:
            logger.warning(
                "Ignoring unrecognized key(s) under [%s]: %s",
                SECTION_NAME,
                ", ".join(sorted(self.config.extra)),
            )

        context = load_context(self.config.paths, self.root)
        return ChapterRenderer(context)

    def render_chapter(
        self,
        renderer: ChapterRenderer,
        chapter: dict[str, Any],
    ) -> RenderFailure | None:
        """Render one chapter in place.

        Returns:
            RenderFailure if the chapter was left unchanged, None otherwise
        """
        content = chapter.get("content")
        if not isinstance(content, str):
            return None

        name = chapter_name(chapter)

        try:
            chapter["content"] = renderer.render(name, content)
        except RenderError as e:
            path = chapter.get("path")
            failure = RenderFailure(
                chapter=name,
                message=e.message,
                path=path if isinstance(path, str) else None,
            )
            logger.error(str(e), extra={"extra_data": failure.to_dict()})
            return failure

        return None

    def run(self, book: dict[str, Any]) -> PipelineResult:
        """Process a whole book.

        Args:
            book: Book as decoded from the host payload (mutated in place)

        Returns:
            PipelineResult with the book and any per-chapter failures

        Raises:
            ContextSourceError: If the Loading phase fails
        """
        renderer = self.load()
        result = PipelineResult(book=book)

        for chapter in iter_chapters(top_level_items(book)):
            failure = self.render_chapter(renderer, chapter)
            if failure is None:
                result.rendered += 1
            else:
                result.failures.append(failure)

        logger.info(
            "Rendered %d chapter(s), %d failed",
            result.rendered,
            len(result.failures),
        )
        return result


def run_preprocessor(ctx: PreprocessorContext, book: dict[str, Any]) -> PipelineResult:
    """Validate configuration from the host context and process the book.

    Raises:
        ConfigError: If [preprocessor.template] is missing or malformed
        ContextSourceError: If any data file cannot be read or parsed
    """
    config = load_config_from_dict(ctx.config)
    return TemplatePipeline(config, root=ctx.root).run(book)
