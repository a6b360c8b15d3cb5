"""Template context assembly.

Reads the configured JSON data files in order and shallow-merges their
top-level keys into a single mapping. Loading is fail-fast: the first file
that cannot be read or parsed aborts the run.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from mdbook_template.errors import ContextSourceError

logger = logging.getLogger(__name__)


def resolve_path(path: str, root: Path | None = None) -> Path:
    """Resolve a configured data path.

    Args:
        path: Path as written in the configuration
        root: Book root directory (relative paths are anchored here)

    Returns:
        Path to read
    """
    candidate = Path(path)
    if root is not None and not candidate.is_absolute():
        return root / candidate
    return candidate


def read_source(path: str, root: Path | None = None) -> Any:
    """Read and decode one JSON data file.

    Args:
        path: Path as written in the configuration
        root: Book root directory

    Returns:
        Decoded JSON value (any type)

    Raises:
        ContextSourceError: If the file cannot be read or is not valid JSON
    """
    source = resolve_path(path, root)

    try:
        text = source.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ContextSourceError(path, "reading", str(e)) from e

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ContextSourceError(path, "parsing", str(e)) from e


def merge_into(context: dict[str, Any], value: Any) -> int:
    """Shallow-merge a decoded JSON value into the context.

    Only objects contribute keys. A colliding key is replaced wholesale.

    Returns:
        Number of keys merged
    """
    if not isinstance(value, dict):
        return 0

    for key, item in value.items():
        context[key] = item

    return len(value)


def load_context(
    paths: Iterable[str],
    root: Path | None = None,
) -> dict[str, Any]:
    """Build the template context from JSON data files.

    Args:
        paths: Data file paths in merge order
        root: Book root directory used for relative paths

    Returns:
        Merged context mapping

    Raises:
        ContextSourceError: On the first unreadable or unparsable file
    """
    context: dict[str, Any] = {}

    for path in paths:
        value = read_source(path, root)
        merged = merge_into(context, value)

        if isinstance(value, dict):
            logger.debug("Merged %d key(s) from %s", merged, path)
        else:
            logger.debug(
                "Skipping %s: top-level JSON is %s, not an object",
                path,
                type(value).__name__,
            )

    logger.info("Template context has %d key(s)", len(context))
    return context
