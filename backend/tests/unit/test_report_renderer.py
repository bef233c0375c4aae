"""
Unit tests for report rendering.
"""
import asyncio
from datetime import datetime, timezone

import pytest

from opptym.services import report_renderer
from opptym.services.page_scorer import RandomSimulator, score_html
from opptym.services.report_renderer import (
    PdfTimeoutError,
    PdfUnavailableError,
    ReportRenderer,
    get_jinja_env,
    report_filename,
    sanitize_filename,
)
from tests.fixtures.sample_pages import EXAMPLE_PAGE_HTML


@pytest.fixture
def example_result():
    return score_html(EXAMPLE_PAGE_HTML, "https://example.com", RandomSimulator(seed=3))


class TestFilenames:
    """Test download filenames."""

    @pytest.mark.parametrize("name,expected", [
        ("example.com", "example-com"),
        ("My Shop!", "My-Shop-"),
        ("abc123", "abc123"),
        ("", "report"),
    ])
    def test_sanitize_filename(self, name, expected):
        assert sanitize_filename(name) == expected

    def test_report_filename(self):
        when = datetime(2026, 3, 15, 23, 59, tzinfo=timezone.utc)

        assert report_filename("Acme Plumbing", "pdf", when) == "seo-report-Acme-Plumbing-2026-03-15.pdf"
        assert report_filename("example.com", "html", when) == "seo-report-example-com-2026-03-15.html"


class TestFilters:
    """Test template filters."""

    @pytest.mark.parametrize("score,grade", [(150, "A"), (90, "A"), (85, "B"), (70, "C"), (60, "D"), (40, "F")])
    def test_score_grade(self, score, grade):
        assert get_jinja_env().filters["score_grade"](score) == grade

    def test_truncate_url(self):
        truncate = get_jinja_env().filters["truncate_url"]

        assert truncate("https://example.com") == "https://example.com"
        assert truncate("https://example.com/" + "a" * 100) == ("https://example.com/" + "a" * 100)[:57] + "..."


class TestRenderHtml:
    """Test the HTML report."""

    def test_contains_result(self, example_result):
        html = ReportRenderer().render_html(example_result, project_name="Acme")

        assert "https://example.com" in html
        assert "Acme" in html
        assert "40 (F)" in html
        assert "Add Viewport Meta Tag" in html
        assert "Overall SEO Score Low" in html

    def test_marks_simulated_sections(self, example_result):
        html = ReportRenderer().render_html(example_result)

        assert "simulated" in html.lower()

    def test_escapes_content(self, example_result):
        html = ReportRenderer().render_html(example_result, project_name="<script>alert(1)</script>")

        assert "<script>alert(1)</script>" not in html
        assert "&lt;script&gt;" in html


class TestRenderPdf:
    """Test PDF printing without a browser."""

    @pytest.mark.asyncio
    async def test_unavailable_without_playwright(self, monkeypatch):
        monkeypatch.setattr(report_renderer, "PLAYWRIGHT_AVAILABLE", False)

        with pytest.raises(PdfUnavailableError):
            await ReportRenderer().render_pdf("<html></html>")

    @pytest.mark.asyncio
    async def test_returns_printed_bytes(self, monkeypatch):
        async def fake_print(self, html):
            return b"%PDF-1.4"

        monkeypatch.setattr(report_renderer, "PLAYWRIGHT_AVAILABLE", True)
        monkeypatch.setattr(ReportRenderer, "_print_pdf", fake_print)

        assert await ReportRenderer().render_pdf("<html></html>") == b"%PDF-1.4"

    @pytest.mark.asyncio
    async def test_times_out(self, monkeypatch):
        async def slow_print(self, html):
            await asyncio.sleep(5)
            return b""

        monkeypatch.setattr(report_renderer, "PLAYWRIGHT_AVAILABLE", True)
        monkeypatch.setattr(ReportRenderer, "_print_pdf", slow_print)

        with pytest.raises(PdfTimeoutError):
            await ReportRenderer(pdf_timeout=0.01).render_pdf("<html></html>")
