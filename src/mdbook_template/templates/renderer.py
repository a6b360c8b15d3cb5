"""Chapter renderer.

Renders chapter content against the merged JSON context using Jinja2.
Protected ``${{ ... }}`` spans are swapped out before the engine sees the
text and restored afterwards.
"""

import logging
from typing import Any

from jinja2 import ChainableUndefined, Environment, TemplateError, TemplateSyntaxError

from mdbook_template.errors import RenderError
from mdbook_template.templates.filters import display_value, to_pretty_json
from mdbook_template.templates.guard import protect_patterns, restore_patterns

logger = logging.getLogger(__name__)

COMMENT_START = "{{!--"
COMMENT_END = "--}}"


def create_environment() -> Environment:
    """Create the Jinja2 environment used for chapter content.

    Missing variables (and attribute lookups on them) render as empty
    strings. Output is not HTML-escaped: chapters are markdown.

    Comments use the Handlebars form ``{{!-- ... --}}`` because ``{#`` is
    mdBook heading-attribute syntax (``## Install {#install}``).
    """
    env = Environment(
        comment_start_string=COMMENT_START,
        comment_end_string=COMMENT_END,
        undefined=ChainableUndefined,
        autoescape=False,
        keep_trailing_newline=True,
        finalize=display_value,
    )
    env.filters["json"] = to_pretty_json
    return env


def has_template_syntax(text: str, env: Environment) -> bool:
    """Return True if the text contains any Jinja2 opening delimiter."""
    return any(
        marker in text
        for marker in (
            env.variable_start_string,
            env.block_start_string,
            env.comment_start_string,
        )
    )


def describe_error(error: Exception) -> str:
    """Format an engine exception for logs."""
    if isinstance(error, TemplateSyntaxError) and error.lineno:
        return f"{error.message} (line {error.lineno})"
    return str(error) or type(error).__name__


class ChapterRenderer:
    """Renders chapter text against a read-only template context.

    Usage:
        renderer = ChapterRenderer({"name": "Sol"})
        renderer.render("Intro", "Hello {{name}}!")  # "Hello Sol!"
    """

    def __init__(self, context: dict[str, Any]) -> None:
        """Initialize the renderer.

        Args:
            context: Merged template context, shared by every chapter
        """
        self.context = context
        self._env = create_environment()

    def render_text(self, name: str, text: str) -> str:
        """Run the engine over already-guarded text.

        Args:
            name: Chapter name, used in error reports
            text: Guarded chapter text

        Returns:
            Rendered text (placeholders untouched)

        Raises:
            RenderError: If the text fails to parse or evaluate
        """
        if not has_template_syntax(text, self._env):
            return text

        try:
            template = self._env.from_string(text)
            return template.render(self.context)
        except TemplateError as e:
            raise RenderError(name, describe_error(e)) from e
        except Exception as e:
            # Evaluation errors from expressions, e.g. {{ a / 0 }}
            raise RenderError(name, f"{type(e).__name__}: {e}") from e

    def render(self, name: str, text: str) -> str:
        """Render chapter content, keeping ``${{ ... }}`` spans verbatim.

        Args:
            name: Chapter name, used in error reports
            text: Raw chapter content

        Returns:
            Final chapter content

        Raises:
            RenderError: If the content fails to render
        """
        protected = protect_patterns(text)
        rendered = self.render_text(name, protected.text)

        if not protected.has_patterns:
            return rendered

        logger.debug("Restoring %d protected pattern(s) in %s", len(protected.patterns), name)
        return restore_patterns(rendered, protected.patterns)
