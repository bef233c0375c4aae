"""
Report Renderer

Renders an analysis result as a standalone HTML report with Jinja2 and,
when Playwright is installed, prints that HTML to PDF with headless
Chromium.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from opptym.config import settings
from opptym.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

try:
    from playwright.async_api import async_playwright
    PLAYWRIGHT_AVAILABLE = True
except ImportError:
    PLAYWRIGHT_AVAILABLE = False
    async_playwright = None

TEMPLATE_DIR = Path(__file__).parent / "templates"

PDF_MARGIN = {"top": "20mm", "right": "20mm", "bottom": "20mm", "left": "20mm"}

CHROMIUM_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-gpu",
]


class PdfUnavailableError(RuntimeError):
    """Raised when PDF output is requested but Playwright is not installed."""


class PdfTimeoutError(RuntimeError):
    """Raised when the browser does not produce the PDF in time."""


def get_jinja_env() -> Environment:
    """Get configured Jinja2 environment."""
    env = Environment(
        loader=FileSystemLoader(TEMPLATE_DIR),
        autoescape=select_autoescape(["html", "xml", "j2"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )

    env.filters["score_grade"] = lambda s: (
        "A" if s >= 90 else
        "B" if s >= 80 else
        "C" if s >= 70 else
        "D" if s >= 60 else
        "F"
    )
    env.filters["score_class"] = lambda s: "good" if s >= 80 else "warning" if s >= 50 else "error"
    env.filters["truncate_url"] = lambda url, length=60: (
        url if len(url) <= length else url[:length - 3] + "..."
    )

    return env


def sanitize_filename(name: str) -> str:
    """Replace every character outside [A-Za-z0-9] with a dash."""
    return re.sub(r"[^a-zA-Z0-9]", "-", name or "") or "report"


def report_filename(name: str, extension: str, when: datetime | None = None) -> str:
    when = when or datetime.now(timezone.utc)
    return f"seo-report-{sanitize_filename(name)}-{when.date().isoformat()}.{extension}"


class ReportRenderer:
    """Turns analysis results into downloadable documents."""

    def __init__(self, pdf_timeout: float | None = None):
        self.env = get_jinja_env()
        self.pdf_timeout = pdf_timeout if pdf_timeout is not None else settings.PDF_RENDER_TIMEOUT_SECONDS

    def render_html(self, result: AnalysisResult, project_name: str | None = None) -> str:
        template = self.env.get_template("report.html.j2")
        return template.render(
            result=result,
            project_name=project_name,
            generated_at=datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC"),
            app_name=settings.PROJECT_NAME,
        )

    async def _print_pdf(self, html: str) -> bytes:
        async with async_playwright() as p:
            browser = await p.chromium.launch(headless=True, args=CHROMIUM_ARGS)
            try:
                page = await browser.new_page()
                await page.set_content(html, wait_until="networkidle")
                return await page.pdf(format="A4", print_background=True, margin=PDF_MARGIN)
            finally:
                await browser.close()

    async def render_pdf(self, html: str) -> bytes:
        """
        Print rendered HTML to an A4 PDF.

        Raises:
            PdfUnavailableError: Playwright is not installed
            PdfTimeoutError: rendering took longer than the configured timeout
        """
        if not PLAYWRIGHT_AVAILABLE:
            raise PdfUnavailableError("PDF generation service is not available")

        try:
            return await asyncio.wait_for(self._print_pdf(html), timeout=self.pdf_timeout)
        except asyncio.TimeoutError:
            logger.warning(f"PDF generation timed out after {self.pdf_timeout}s")
            raise PdfTimeoutError("PDF generation timeout")
