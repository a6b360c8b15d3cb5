"""Protection of ``${{ ... }}`` spans.

Documentation often shows GitHub Actions or shell snippets such as
``${{ secrets.TOKEN }}``. Jinja2 would evaluate the ``{{ ... }}`` part, so
these spans are swapped for numbered placeholders before rendering and put
back afterwards.
"""

import re
from dataclasses import dataclass, field

# Non-greedy: the span closes at the first "}}"
PROTECTED_PATTERN_RE = re.compile(r"\$\{\{.*?\}\}")

PLACEHOLDER_TEMPLATE = "__PROTECTED_PATTERN_{index}__"


def placeholder(index: int) -> str:
    """Return the placeholder token for a capture index."""
    return PLACEHOLDER_TEMPLATE.format(index=index)


@dataclass(frozen=True)
class ProtectedText:
    """Guarded text plus the literals it replaced.

    Attributes:
        text: Text with every protected span replaced by its placeholder
        patterns: Captured spans, indexed in order of appearance
    """

    text: str
    patterns: tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_patterns(self) -> bool:
        """Return True if any span was captured."""
        return bool(self.patterns)


def protect_patterns(text: str) -> ProtectedText:
    """Replace ``${{ ... }}`` spans with placeholders.

    Args:
        text: Raw chapter content

    Returns:
        ProtectedText with the guarded text and captured spans

    Examples:
        >>> protect_patterns("run ${{ matrix.os }}").text
        'run __PROTECTED_PATTERN_0__'
        >>> protect_patterns("plain").patterns
        ()
    """
    if "${{" not in text:
        return ProtectedText(text=text)

    patterns: list[str] = []

    def capture(match: re.Match[str]) -> str:
        patterns.append(match.group(0))
        return placeholder(len(patterns) - 1)

    guarded = PROTECTED_PATTERN_RE.sub(capture, text)
    return ProtectedText(text=guarded, patterns=tuple(patterns))


def restore_patterns(text: str, patterns: tuple[str, ...] | list[str]) -> str:
    """Put captured spans back in place of their placeholders.

    Every occurrence of a placeholder is replaced. A placeholder that no
    longer appears in the text is skipped.

    Args:
        text: Rendered text
        patterns: Spans captured by protect_patterns

    Returns:
        Text with the original spans restored
    """
    for index, pattern in enumerate(patterns):
        text = text.replace(placeholder(index), pattern)
    return text
