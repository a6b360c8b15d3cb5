"""mdbook-template configuration.

Configuration lives in the book's ``book.toml`` and reaches the tool through
the host context on stdin, already converted to JSON:

    [preprocessor.template]
    paths = ["src/assets/operators.json", "src/assets/portals.json"]

Only ``paths`` has meaning. mdBook adds its own bookkeeping keys to every
preprocessor table; those are accepted and ignored.
"""

from dataclasses import dataclass, field
from typing import Any

from mdbook_template.errors import ConfigError

# =============================================================================
# Constants
# =============================================================================

PREPROCESSOR_NAME = "template"
SECTION_NAME = f"preprocessor.{PREPROCESSOR_NAME}"

# Keys mdBook itself understands on any [preprocessor.<name>] table
HOST_KEYS = frozenset({"command", "renderers", "before", "after", "optional"})


# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TemplateConfig:
    """Settings of the [preprocessor.template] table.

    Attributes:
        paths: JSON data files merged into the template context, in order.
            Later files override earlier ones on top-level key collisions.
        extra: Unrecognized keys, kept only so they can be reported
    """

    paths: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        """Validate the paths list."""
        if not isinstance(self.paths, list):
            raise ConfigError(
                f"`paths` under [{SECTION_NAME}] must be an array "
                f"(got {type(self.paths).__name__})"
            )

        for index, entry in enumerate(self.paths):
            if not isinstance(entry, str):
                raise ConfigError(
                    f"paths entries must be strings (entry {index} is "
                    f"{type(entry).__name__})"
                )


# =============================================================================
# Config Loading
# =============================================================================


def get_section(book_config: Any) -> dict[str, Any]:
    """Return the [preprocessor.template] table from the book configuration.

    Args:
        book_config: The full book configuration as decoded from the host payload

    Returns:
        The preprocessor table

    Raises:
        ConfigError: If the table is absent or not a table
    """
    missing = ConfigError(f"missing [{SECTION_NAME}] config with a `paths` array")

    if not isinstance(book_config, dict):
        raise missing

    preprocessors = book_config.get("preprocessor")
    if not isinstance(preprocessors, dict):
        raise missing

    section = preprocessors.get(PREPROCESSOR_NAME)
    if not isinstance(section, dict):
        raise missing

    return section


def load_config_from_dict(book_config: Any) -> TemplateConfig:
    """Build a TemplateConfig from the book configuration.

    Args:
        book_config: The ``config`` object of the host context

    Returns:
        Validated TemplateConfig

    Raises:
        ConfigError: If the section or its ``paths`` key is missing or malformed
    """
    section = get_section(book_config)

    if "paths" not in section:
        raise ConfigError(f"missing `paths` array under [{SECTION_NAME}]")

    extra = {
        key: value
        for key, value in section.items()
        if key != "paths" and key not in HOST_KEYS
    }

    return TemplateConfig(paths=section["paths"], extra=extra)


def create_default_config() -> str:
    """Create the book.toml snippet that enables the preprocessor.

    Returns:
        TOML string with comments
    """
    return f'''# mdbook-template configuration
# Paths are resolved relative to the book root.
[{SECTION_NAME}]
paths = [
  "src/assets/variables.json",
]
'''
