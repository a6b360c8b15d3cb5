"""Unit tests for the preprocessing pipeline."""

import logging
from pathlib import Path

import pytest

from mdbook_template.config import TemplateConfig
from mdbook_template.errors import ConfigError, ContextSourceError
from mdbook_template.models import PreprocessorContext
from mdbook_template.pipeline import PipelineResult, TemplatePipeline, run_preprocessor
from tests.fixtures import (
    LIST_ROOT_JSON,
    OPERATORS_JSON,
    PORTALS_JSON,
    make_book,
    make_chapter,
    make_context,
)


def chapter_content(book: dict, index: int) -> str:
    """Return the content of a top-level chapter."""
    return book["sections"][index]["Chapter"]["content"]


class TestPipelineResult:
    """Tests for PipelineResult."""

    def test_defaults(self) -> None:
        """Test a fresh result has no failures."""
        result = PipelineResult(book={})

        assert result.rendered == 0
        assert result.failures == []
        assert result.has_failures is False


class TestTemplatePipeline:
    """Tests for TemplatePipeline."""

    @pytest.fixture
    def pipeline(self) -> TemplatePipeline:
        """Create a pipeline over both data fixtures."""
        return TemplatePipeline(TemplateConfig(paths=[str(OPERATORS_JSON), str(PORTALS_JSON)]))

    def test_renders_nested_chapters(
        self,
        pipeline: TemplatePipeline,
        nested_book: dict,
    ) -> None:
        """Test every chapter, including sub-items, is rendered."""
        result = pipeline.run(nested_book)

        intro = nested_book["sections"][1]["Chapter"]
        assert intro["content"] == "Welcome to Lumen."
        assert intro["sub_items"][0]["Chapter"]["content"] == "Primary: Vega"
        assert result.rendered == 3
        assert result.book is nested_book

    def test_non_chapter_items_untouched(
        self,
        pipeline: TemplatePipeline,
        nested_book: dict,
    ) -> None:
        """Test separators and part titles pass through."""
        pipeline.run(nested_book)

        assert nested_book["sections"][0] == {"PartTitle": "Guide"}
        assert nested_book["sections"][2] == "Separator"
        assert nested_book["__non_exhaustive"] is None

    def test_plain_chapter_byte_identical(
        self,
        pipeline: TemplatePipeline,
        nested_book: dict,
    ) -> None:
        """Test a chapter with no template syntax is returned unchanged."""
        pipeline.run(nested_book)

        assert chapter_content(nested_book, 3) == "No templates here.\r\n"

    def test_other_chapter_fields_untouched(self, pipeline: TemplatePipeline) -> None:
        """Test only content is rewritten."""
        book = make_book(make_chapter("Intro", "{{ product }}"))
        before = dict(book["sections"][0]["Chapter"])

        pipeline.run(book)

        after = book["sections"][0]["Chapter"]
        assert after["content"] == "Lumen"
        assert {k: v for k, v in after.items() if k != "content"} == {
            k: v for k, v in before.items() if k != "content"
        }

    def test_isolated_failure(
        self,
        pipeline: TemplatePipeline,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test a broken chapter is left alone and its sibling still renders."""
        broken = "Value: {{ product"
        book = make_book(
            make_chapter("Broken", broken),
            make_chapter("Fine", "Product: {{ product }}"),
        )

        with caplog.at_level(logging.ERROR, logger="mdbook_template"):
            result = pipeline.run(book)

        assert chapter_content(book, 0) == broken
        assert chapter_content(book, 1) == "Product: Lumen"
        assert [f.chapter for f in result.failures] == ["Broken"]
        assert result.failures[0].path == "broken.md"

        errors = [r for r in caplog.records if r.levelno == logging.ERROR]
        assert len(errors) == 1
        assert "Broken" in errors[0].getMessage()

    def test_failure_does_not_leak_placeholders(self, pipeline: TemplatePipeline) -> None:
        """Test a failed chapter keeps its original ${{ }} spans, not placeholders."""
        broken = "${{ matrix.os }} {{ oops"
        book = make_book(make_chapter("Broken", broken))

        pipeline.run(book)

        assert chapter_content(book, 0) == broken

    def test_missing_source_is_fatal(self, tmp_path: Path) -> None:
        """Test a missing data file aborts before any chapter is touched."""
        pipeline = TemplatePipeline(TemplateConfig(paths=["missing.json"]), root=tmp_path)
        book = make_book(make_chapter("Intro", "{{ product }}"))

        with pytest.raises(ContextSourceError, match="missing.json"):
            pipeline.run(book)

        assert chapter_content(book, 0) == "{{ product }}"

    def test_list_root_source_tolerated(self) -> None:
        """Test a non-object data file contributes nothing and does not abort."""
        pipeline = TemplatePipeline(TemplateConfig(paths=[str(LIST_ROOT_JSON)]))
        book = make_book(make_chapter("Intro", "[{{ product }}]"))

        pipeline.run(book)

        assert chapter_content(book, 0) == "[]"

    def test_non_string_content_skipped(self, pipeline: TemplatePipeline) -> None:
        """Test a chapter without string content is left as is."""
        book = make_book({"Chapter": {"name": "Draft", "content": None, "sub_items": []}})

        result = pipeline.run(book)

        assert book["sections"][0]["Chapter"]["content"] is None
        assert result.failures == []

    def test_unknown_keys_warned(
        self,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test unrecognized config keys are reported."""
        pipeline = TemplatePipeline(TemplateConfig(paths=[], extra={"strict": True}))

        with caplog.at_level(logging.WARNING, logger="mdbook_template"):
            pipeline.run(make_book())

        assert "strict" in caplog.text


class TestRunPreprocessor:
    """Tests for run_preprocessor."""

    def test_end_to_end(self) -> None:
        """Test config parsing and rendering from a host context."""
        ctx = PreprocessorContext.from_dict(make_context([str(OPERATORS_JSON)]))
        book = make_book(make_chapter("Intro", "Hello {{ operators.backup }}"))

        result = run_preprocessor(ctx, book)

        assert chapter_content(result.book, 0) == "Hello Luna"

    def test_missing_section_is_fatal(self) -> None:
        """Test a context without [preprocessor.template] fails."""
        ctx = PreprocessorContext.from_dict(make_context([], include_section=False))

        with pytest.raises(ConfigError):
            run_preprocessor(ctx, make_book())

    def test_relative_paths_use_book_root(self, write_json, tmp_path: Path) -> None:
        """Test data paths resolve against the book root."""
        write_json("vars.json", '{"name": "Sol"}')
        ctx = PreprocessorContext.from_dict(make_context(["vars.json"], root=tmp_path))
        book = make_book(make_chapter("Intro", "Hi {{ name }}"))

        run_preprocessor(ctx, book)

        assert chapter_content(book, 0) == "Hi Sol"
