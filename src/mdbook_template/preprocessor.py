"""mdBook preprocessor protocol.

The host writes ``[context, book]`` as a single JSON array to stdin and
expects the processed book as JSON on stdout.
"""

import json
import logging
from typing import Any, BinaryIO

from mdbook_template.errors import ProtocolError
from mdbook_template.models import PreprocessorContext

logger = logging.getLogger(__name__)


def parse_input(stream: BinaryIO) -> tuple[PreprocessorContext, dict[str, Any]]:
    """Read the host payload.

    Args:
        stream: Binary stream holding the UTF-8 JSON payload (normally stdin)

    Returns:
        Tuple of (context, book)

    Raises:
        ProtocolError: If the payload is absent or malformed
    """
    raw = stream.read()
    if not raw.strip():
        raise ProtocolError("no preprocessor input on stdin")

    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ProtocolError(f"unable to parse preprocessor input: {e}") from e

    if not isinstance(payload, list) or len(payload) != 2:
        raise ProtocolError("preprocessor input must be a JSON array of [context, book]")

    ctx_data, book = payload
    if not isinstance(ctx_data, dict):
        raise ProtocolError("preprocessor context must be a JSON object")
    if not isinstance(book, dict):
        raise ProtocolError("book must be a JSON object")

    ctx = PreprocessorContext.from_dict(ctx_data)
    logger.debug(
        "Received book for renderer %r from mdBook %s",
        ctx.renderer,
        ctx.mdbook_version or "(unknown version)",
    )
    return ctx, book


def write_output(book: dict[str, Any], stream: BinaryIO) -> None:
    """Write the processed book back to the host as UTF-8.

    The payload is serialized in full before the first byte is written.

    Args:
        book: Processed book
        stream: Binary destination stream (normally stdout)
    """
    data = json.dumps(book, ensure_ascii=False).encode("utf-8")
    stream.write(data)
    stream.flush()
