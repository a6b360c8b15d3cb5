"""Entry point for running mdbook-template as a module.

Usage:
    python -m mdbook_template [command] [options]

Example:
    python -m mdbook_template supports html
    python -m mdbook_template validate src/chapter_1.md
"""

from mdbook_template.cli import app

if __name__ == "__main__":
    app()
