"""Host book entities.

The book arrives as decoded JSON and is written back the same way, so it
is kept as plain mappings. Only the ``content`` of chapters is ever
rewritten; every other field, including ones newer mdBook versions add,
passes through untouched.

Item shapes in the host format:
- {"Chapter": {"name": ..., "content": ..., "sub_items": [...], ...}}
- "Separator"
- {"PartTitle": "..."}
"""

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

# mdBook >= 0.5 renamed the top-level list from "sections" to "items"
BOOK_ITEM_KEYS = ("items", "sections")


@dataclass
class PreprocessorContext:
    """Run context supplied by the host alongside the book.

    Attributes:
        root: Book root directory
        config: Full book configuration (book.toml as JSON)
        renderer: Name of the renderer the book is being built for
        mdbook_version: Version of the host that invoked the tool
    """

    root: Path | None
    config: dict[str, Any]
    renderer: str = ""
    mdbook_version: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PreprocessorContext":
        """Create from the decoded context object."""
        root = data.get("root")
        config = data.get("config")
        return cls(
            root=Path(root) if isinstance(root, str) and root else None,
            config=config if isinstance(config, dict) else {},
            renderer=str(data.get("renderer") or ""),
            mdbook_version=str(data.get("mdbook_version") or ""),
        )


@dataclass
class RenderFailure:
    """A chapter that could not be rendered.

    Attributes:
        chapter: Chapter name
        message: Underlying engine message
        path: Source path of the chapter (if known)
    """

    chapter: str
    message: str
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "chapter": self.chapter,
            "message": self.message,
            "path": self.path,
        }


def top_level_items(book: dict[str, Any]) -> list[Any]:
    """Return the book's top-level item list (empty if absent)."""
    for key in BOOK_ITEM_KEYS:
        items = book.get(key)
        if isinstance(items, list):
            return items
    return []


def iter_chapters(items: list[Any]) -> Iterator[dict[str, Any]]:
    """Yield every chapter mapping depth-first, in book order.

    Separators, part titles and unknown items are skipped.

    Args:
        items: A list of book items (top level or sub_items)

    Yields:
        The inner chapter mapping, which callers may mutate in place
    """
    for item in items:
        if not isinstance(item, dict):
            continue

        chapter = item.get("Chapter")
        if not isinstance(chapter, dict):
            continue

        yield chapter

        sub_items = chapter.get("sub_items")
        if isinstance(sub_items, list):
            yield from iter_chapters(sub_items)


def chapter_name(chapter: dict[str, Any]) -> str:
    """Return a printable chapter identity."""
    name = chapter.get("name")
    if isinstance(name, str) and name:
        return name
    return str(chapter.get("path") or "<unnamed chapter>")
