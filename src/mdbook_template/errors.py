"""Error taxonomy for mdbook-template.

Two kinds of failure exist and they propagate differently:
- FatalError: configuration, context-source and host protocol problems.
  These abort the run before anything is written to stdout.
- RenderError: a single chapter failed to render. The pipeline records it,
  leaves the chapter untouched and moves on.
"""


class TemplateError(Exception):
    """Base class for all mdbook-template errors."""


class FatalError(TemplateError):
    """Raised when the whole run must abort."""


class ConfigError(FatalError):
    """Raised when the [preprocessor.template] section is missing or malformed."""


class ProtocolError(FatalError):
    """Raised when the host payload on stdin cannot be understood."""


class ContextSourceError(FatalError):
    """Raised when a JSON data file cannot be read or parsed."""

    def __init__(self, path: str, phase: str, reason: str) -> None:
        self.path = path
        self.phase = phase
        self.reason = reason
        super().__init__(f"{phase} {path}: {reason}")


class RenderError(TemplateError):
    """Raised when a single chapter fails to render."""

    def __init__(self, chapter: str, message: str) -> None:
        self.chapter = chapter
        self.message = message
        super().__init__(f"Template render error in {chapter}: {message}")
