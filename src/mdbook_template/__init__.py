"""mdbook-template - JSON-driven variable substitution for mdBook.

mdbook-template runs as an mdBook preprocessor. It merges the JSON files
listed under [preprocessor.template] into one context and renders every
chapter through Jinja2, so ``{{ operator.name }}`` in markdown becomes the
value from the data files.

Core principles:
- Fail fast on configuration and data problems, before any output
- Isolate chapter failures: one broken chapter never aborts the build
- Leave ``${{ ... }}`` spans (GitHub Actions syntax) exactly as written
"""

__version__ = "0.1.0"
__author__ = "mdbook-template Contributors"
