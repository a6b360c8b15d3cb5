"""Chapter template rendering.

Jinja2-based rendering of chapter content with ``${{ ... }}`` spans kept
verbatim.
"""

from mdbook_template.templates.guard import ProtectedText, protect_patterns, restore_patterns
from mdbook_template.templates.renderer import ChapterRenderer, create_environment

__all__ = [
    "ChapterRenderer",
    "ProtectedText",
    "create_environment",
    "protect_patterns",
    "restore_patterns",
]
