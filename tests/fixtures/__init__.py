"""Test fixtures for mdbook-template.

- data/: JSON context sources (objects, a list root, invalid JSON)
- chapters/: Markdown chapters for the validate command
- make_book / make_payload: Builders for the host's stdin payload
"""

import json
from pathlib import Path
from typing import Any

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

DATA_DIR = FIXTURES_DIR / "data"
CHAPTERS_DIR = FIXTURES_DIR / "chapters"

OPERATORS_JSON = DATA_DIR / "operators.json"
PORTALS_JSON = DATA_DIR / "portals.json"
LIST_ROOT_JSON = DATA_DIR / "list_root.json"
INVALID_JSON = DATA_DIR / "invalid.json"


def make_chapter(
    name: str,
    content: str,
    sub_items: list[Any] | None = None,
) -> dict[str, Any]:
    """Build a chapter item in the host's JSON shape."""
    return {
        "Chapter": {
            "name": name,
            "content": content,
            "number": None,
            "sub_items": sub_items or [],
            "path": f"{name.lower().replace(' ', '_')}.md",
            "source_path": f"{name.lower().replace(' ', '_')}.md",
            "parent_names": [],
        }
    }


def make_book(*items: Any) -> dict[str, Any]:
    """Build a book from chapter and separator items."""
    return {"sections": list(items), "__non_exhaustive": None}


def make_context(
    paths: Any,
    root: Path | None = None,
    include_section: bool = True,
) -> dict[str, Any]:
    """Build the host context object with a [preprocessor.template] table."""
    preprocessor: dict[str, Any] = {}
    if include_section:
        preprocessor["template"] = {"command": "mdbook-template", "paths": paths}

    return {
        "root": str(root) if root is not None else "",
        "config": {
            "book": {"title": "Test Book", "src": "src"},
            "preprocessor": preprocessor,
        },
        "renderer": "html",
        "mdbook_version": "0.4.40",
    }


def make_payload(context: dict[str, Any], book: dict[str, Any]) -> str:
    """Serialize [context, book] the way mdBook writes it to stdin."""
    return json.dumps([context, book])
