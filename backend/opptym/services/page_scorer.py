"""
Heuristic Page Scorer

Fetches a single page and scores it from regex extraction of its head
tags, images and anchors. Link status and page speed are not measured:
they come from a Simulator and are flagged `simulated` in the output.

Scoring:
- 20 points for each of title, description, viewport, robots and
  canonical in "good" status
- 0.3 x alt text health
- 0.2 x link health
"""

import logging
import math
import random
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Protocol
from urllib.parse import urlparse

import httpx

from opptym.config import settings
from opptym.schemas.analysis import (
    AltTextAnalysis,
    AnalysisResult,
    AuditSection,
    BrokenLinksAnalysis,
    FieldAnalysis,
    ImageCheck,
    LengthFieldAnalysis,
    LinkCheck,
    MetaTagsAnalysis,
    OpenGraphAnalysis,
    PageSpeed,
    PerformanceMetrics,
    PerformanceSection,
    Recommendation,
)

logger = logging.getLogger(__name__)

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

TITLE_MIN_EXCLUSIVE = 10
TITLE_MAX = 60
DESCRIPTION_MIN = 120
DESCRIPTION_MAX = 160

BROKEN_LINK_RATIO = 0.08
REDIRECT_RATIO = 0.03

UNREACHABLE = "Unable to analyze - check URL accessibility"


def _meta_pattern(attribute: str, value: str) -> re.Pattern:
    return re.compile(
        rf"""<meta[^>]*{attribute}=["']{re.escape(value)}["'][^>]*content=["']([^"']*)["'][^>]*>""",
        re.IGNORECASE,
    )


TITLE_RE = re.compile(r"<title[^>]*>(.*?)</title>", re.IGNORECASE)
DESCRIPTION_RE = _meta_pattern("name", "description")
KEYWORDS_RE = _meta_pattern("name", "keywords")
VIEWPORT_RE = _meta_pattern("name", "viewport")
ROBOTS_RE = _meta_pattern("name", "robots")
OG_TITLE_RE = _meta_pattern("property", "og:title")
OG_DESCRIPTION_RE = _meta_pattern("property", "og:description")
OG_IMAGE_RE = _meta_pattern("property", "og:image")
OG_URL_RE = _meta_pattern("property", "og:url")
CANONICAL_RE = re.compile(
    r"""<link[^>]*rel=["']canonical["'][^>]*href=["']([^"']*)["'][^>]*>""",
    re.IGNORECASE,
)
ANCHOR_RE = re.compile(r"""<a[^>]*href=["']([^"']*)["'][^>]*>""", re.IGNORECASE)
IMG_RE = re.compile(r"<img[^>]*>", re.IGNORECASE)
SRC_RE = re.compile(r"""src=["']([^"']*)["']""", re.IGNORECASE)
ALT_RE = re.compile(r"""alt=["']([^"']*)["']""", re.IGNORECASE)


@dataclass
class PageData:
    """Raw values pulled out of a page."""
    title: str = ""
    description: str = ""
    keywords: str = ""
    viewport: str = ""
    robots: str = ""
    canonical: str = ""
    og_title: str = ""
    og_description: str = ""
    og_image: str = ""
    og_url: str = ""
    links: list[str] = field(default_factory=list)
    images: list[tuple[str, str]] = field(default_factory=list)


def normalize_url(url: str) -> str:
    """Prefix https:// when no http(s) scheme is given."""
    url = url.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


def js_round(value: float) -> int:
    """Round half up, so 0.5 goes to 1 and 2.5 goes to 3."""
    return math.floor(value + 0.5)


def _first(pattern: re.Pattern, html: str) -> str:
    match = pattern.search(html)
    return match.group(1).strip() if match else ""


def extract_page_data(html: str) -> PageData:
    """Pull head tags, anchors and images out of raw HTML."""
    images = []
    for tag in IMG_RE.findall(html):
        src = SRC_RE.search(tag)
        alt = ALT_RE.search(tag)
        if src and src.group(1):
            images.append((src.group(1), alt.group(1) if alt else ""))

    return PageData(
        title=_first(TITLE_RE, html),
        description=_first(DESCRIPTION_RE, html),
        keywords=_first(KEYWORDS_RE, html),
        viewport=_first(VIEWPORT_RE, html),
        robots=_first(ROBOTS_RE, html),
        canonical=_first(CANONICAL_RE, html),
        og_title=_first(OG_TITLE_RE, html),
        og_description=_first(OG_DESCRIPTION_RE, html),
        og_image=_first(OG_IMAGE_RE, html),
        og_url=_first(OG_URL_RE, html),
        links=[href for href in ANCHOR_RE.findall(html) if href],
        images=images,
    )


# =============================================================================
# Simulated measurements
# =============================================================================

class Simulator(Protocol):
    """Source of the link and page-speed figures that are not measured."""

    def link_status(self, total_links: int) -> tuple[int, int]:
        """Return (broken, redirects) for a page with `total_links` anchors."""
        ...

    def impact(self) -> str:
        ...

    def page_speed(self) -> PageSpeed:
        ...


class RandomSimulator:
    """Fixed-ratio link figures and random page-speed scores.

    Pass a seed for reproducible output.
    """

    def __init__(self, seed: int | None = None):
        self.random = random.Random(seed)

    def link_status(self, total_links: int) -> tuple[int, int]:
        return (
            math.floor(total_links * BROKEN_LINK_RATIO),
            math.floor(total_links * REDIRECT_RATIO),
        )

    def impact(self) -> str:
        return "high" if self.random.random() > 0.5 else "medium"

    def _score(self, spread: int, floor: int) -> int:
        return math.floor(self.random.random() * spread) + floor

    def page_speed(self) -> PageSpeed:
        return PageSpeed(
            overall_score=self._score(40, 60),
            performance=PerformanceSection(
                score=self._score(40, 60),
                status="good",
                metrics=PerformanceMetrics(
                    first_contentful_paint=self.random.random() * 2 + 1,
                    largest_contentful_paint=self.random.random() * 3 + 2,
                    first_input_delay=self.random.random() * 100 + 10,
                    cumulative_layout_shift=self.random.random() * 0.1,
                ),
            ),
            accessibility=AuditSection(score=self._score(30, 70), status="good"),
            best_practices=AuditSection(score=self._score(30, 70), status="good"),
            seo=AuditSection(score=self._score(30, 70), status="good"),
        )


# =============================================================================
# Field analysers
# =============================================================================

def analyze_title(title: str) -> LengthFieldAnalysis:
    length = len(title)
    if length == 0:
        status, recommendation = "error", "Title is missing"
    elif length <= TITLE_MIN_EXCLUSIVE:
        status, recommendation = "warning", "Title is too short (recommended: 10-60 characters)"
    elif length > TITLE_MAX:
        status, recommendation = "warning", "Title is too long (recommended: 10-60 characters)"
    else:
        status, recommendation = "good", "Title length is optimal"
    return LengthFieldAnalysis(content=title, length=length, status=status, recommendation=recommendation)


def analyze_description(description: str) -> LengthFieldAnalysis:
    length = len(description)
    if length == 0:
        status, recommendation = "error", "Meta description is missing"
    elif length < DESCRIPTION_MIN:
        status, recommendation = "warning", "Meta description is too short (recommended: 120-160 characters)"
    elif length > DESCRIPTION_MAX:
        status, recommendation = "warning", "Meta description is too long (recommended: 120-160 characters)"
    else:
        status, recommendation = "good", "Meta description length is optimal"
    return LengthFieldAnalysis(
        content=description, length=length, status=status, recommendation=recommendation
    )


def analyze_keywords(keywords: str) -> FieldAnalysis:
    # The keywords tag is ignored by search engines, so its absence is good
    if keywords:
        return FieldAnalysis(
            content=keywords,
            status="warning",
            recommendation="Meta keywords are not recommended for SEO. Consider removing them.",
        )
    return FieldAnalysis(status="good", recommendation="Good - no meta keywords tag (recommended)")


def analyze_viewport(viewport: str) -> FieldAnalysis:
    if viewport:
        return FieldAnalysis(
            content=viewport,
            status="good",
            recommendation="Viewport meta tag is properly configured for mobile",
        )
    return FieldAnalysis(
        status="error",
        recommendation="Viewport meta tag is missing - required for mobile optimization",
    )


def analyze_robots(robots: str) -> FieldAnalysis:
    if robots:
        return FieldAnalysis(content=robots, status="good", recommendation="Robots meta tag is configured")
    return FieldAnalysis(status="warning", recommendation="Consider adding robots meta tag for better control")


def analyze_open_graph(page: PageData) -> OpenGraphAnalysis:
    complete = bool(page.og_title and page.og_description and page.og_image)
    return OpenGraphAnalysis(
        title=page.og_title,
        description=page.og_description,
        image=page.og_image,
        url=page.og_url,
        status="good" if complete else "warning",
        recommendation=(
            "Open Graph tags are properly configured for social sharing"
            if complete
            else "Some Open Graph tags are missing - add og:title, og:description, and og:image"
        ),
    )


def analyze_canonical(canonical: str) -> FieldAnalysis:
    if canonical:
        return FieldAnalysis(content=canonical, status="good", recommendation="Canonical URL is properly set")
    return FieldAnalysis(
        status="warning",
        recommendation="Consider adding canonical URL to avoid duplicate content issues",
    )


def analyze_alt_text(images: list[tuple[str, str]]) -> AltTextAnalysis:
    total = len(images)
    missing = sum(1 for _, alt in images if not alt)
    present = [alt for _, alt in images if alt]
    health = js_round((total - missing) / total * 100) if total else 100

    return AltTextAnalysis(
        total_images=total,
        missing_alt=missing,
        duplicate_alt=len(present) - len(set(present)),
        health_score=health,
        images=[
            ImageCheck(
                src=src,
                alt=alt,
                status="good" if alt else "error",
                recommendation="Alt text is present" if alt else "Add alt text for better accessibility and SEO",
            )
            for src, alt in images
        ],
    )


def analyze_links(
    links: list[str],
    page_url: str,
    simulator: Simulator,
    max_listed: int = 20,
) -> BrokenLinksAnalysis:
    total = len(links)
    broken, redirects = simulator.link_status(total)
    hostname = urlparse(page_url).hostname or ""

    checks = []
    for index, link in enumerate(links[:max_listed]):
        is_broken = index < broken
        is_redirect = not is_broken and index < broken + redirects
        is_external = link.startswith("http") and hostname not in link
        checks.append(LinkCheck(
            url=link,
            status=404 if is_broken else 301 if is_redirect else 200,
            type="external" if is_external else "internal",
            found_on=page_url,
            impact=simulator.impact() if is_broken else "low",
        ))

    return BrokenLinksAnalysis(
        total=total,
        broken=broken,
        working=total - broken,
        redirects=redirects,
        health_score=js_round((total - broken) / total * 100) if total else 100,
        links=checks,
    )


# =============================================================================
# Recommendations
# =============================================================================

def build_recommendations(
    meta: MetaTagsAnalysis,
    alt_text: AltTextAnalysis,
    links: BrokenLinksAnalysis,
    overall_score: int,
) -> list[Recommendation]:
    """Walk the findings in a fixed order, then add one general band entry."""
    recs = []

    if meta.title.status != "good":
        recs.append(Recommendation(
            category="Meta Tags", priority="high", title="Fix Title Tag",
            description=meta.title.recommendation,
            impact="High - Title is crucial for SEO",
        ))

    if meta.description.status != "good":
        recs.append(Recommendation(
            category="Meta Tags", priority="high", title="Fix Meta Description",
            description=meta.description.recommendation,
            impact="High - Meta description affects click-through rates",
        ))

    if meta.viewport.status == "error":
        recs.append(Recommendation(
            category="Mobile Optimization", priority="high", title="Add Viewport Meta Tag",
            description=meta.viewport.recommendation,
            impact="High - Required for mobile optimization",
        ))

    if alt_text.missing_alt > 0:
        recs.append(Recommendation(
            category="Accessibility", priority="medium", title="Add Alt Text to Images",
            description=f"Add alt text to {alt_text.missing_alt} images for better accessibility and SEO",
            impact="Medium - Improves accessibility and SEO",
        ))

    if links.broken > 0:
        recs.append(Recommendation(
            category="Link Health", priority="medium", title="Fix Broken Links",
            description=f"Fix {links.broken} broken links to improve user experience and SEO",
            impact="Medium - Broken links hurt user experience and SEO",
        ))

    if meta.open_graph.status == "warning":
        recs.append(Recommendation(
            category="Social Media", priority="low", title="Add Open Graph Tags",
            description=meta.open_graph.recommendation,
            impact="Low - Improves social media sharing",
        ))

    if meta.canonical.status == "warning":
        recs.append(Recommendation(
            category="Technical SEO", priority="medium", title="Add Canonical URL",
            description=meta.canonical.recommendation,
            impact="Medium - Prevents duplicate content issues",
        ))

    if meta.robots.status == "warning":
        recs.append(Recommendation(
            category="Technical SEO", priority="low", title="Configure Robots Meta Tag",
            description=meta.robots.recommendation,
            impact="Low - Better control over search engine crawling",
        ))

    if meta.keywords.status == "warning":
        recs.append(Recommendation(
            category="Meta Tags", priority="low", title="Remove Meta Keywords",
            description=meta.keywords.recommendation,
            impact="Low - Meta keywords are not used by search engines",
        ))

    recs.append(general_recommendation(overall_score))
    return recs


def general_recommendation(overall_score: int) -> Recommendation:
    if overall_score < 50:
        return Recommendation(
            category="General", priority="high", title="Overall SEO Score Low",
            description=(
                "Your website has significant SEO issues that need immediate attention. "
                "Focus on meta tags, mobile optimization, and link health."
            ),
            impact="High - Poor SEO performance affects search rankings",
        )
    if overall_score < 80:
        return Recommendation(
            category="General", priority="medium", title="SEO Score Needs Improvement",
            description=(
                "Your website has some SEO issues. Address the recommendations above "
                "to improve your search engine rankings."
            ),
            impact="Medium - Good SEO performance improves search visibility",
        )
    return Recommendation(
        category="General", priority="low", title="Good SEO Performance",
        description=(
            "Your website has good SEO fundamentals. Continue monitoring and "
            "optimizing for better results."
        ),
        impact="Low - Maintain current SEO practices",
    )


# =============================================================================
# Scoring
# =============================================================================

def _now() -> datetime:
    return datetime.now(timezone.utc)


def score_html(
    html: str,
    url: str,
    simulator: Simulator,
    max_listed_links: int = 20,
) -> AnalysisResult:
    """Score already-fetched HTML. Only the simulated sections vary between runs."""
    page = extract_page_data(html)

    meta = MetaTagsAnalysis(
        title=analyze_title(page.title),
        description=analyze_description(page.description),
        keywords=analyze_keywords(page.keywords),
        viewport=analyze_viewport(page.viewport),
        robots=analyze_robots(page.robots),
        open_graph=analyze_open_graph(page),
        canonical=analyze_canonical(page.canonical),
    )
    alt_text = analyze_alt_text(page.images)
    links = analyze_links(page.links, url, simulator, max_listed_links)

    scored_fields = [meta.title, meta.description, meta.viewport, meta.robots, meta.canonical]
    meta_score = 20 * sum(1 for f in scored_fields if f.status == "good")
    overall = js_round(meta_score + alt_text.health_score * 0.3 + links.health_score * 0.2)

    return AnalysisResult(
        url=url,
        timestamp=_now(),
        overall_score=overall,
        broken_links=links,
        meta_tags=meta,
        alt_text=alt_text,
        page_speed=simulator.page_speed(),
        recommendations=build_recommendations(meta, alt_text, links, overall),
    )


def failed_result(url: str) -> AnalysisResult:
    """Zeroed result for a page that could not be fetched."""
    unreachable = FieldAnalysis(status="error", recommendation=UNREACHABLE)
    unreachable_length = LengthFieldAnalysis(status="error", recommendation=UNREACHABLE)

    return AnalysisResult(
        url=url,
        timestamp=_now(),
        overall_score=0,
        broken_links=BrokenLinksAnalysis(),
        meta_tags=MetaTagsAnalysis(
            title=unreachable_length,
            description=unreachable_length,
            keywords=unreachable,
            viewport=unreachable,
            robots=unreachable,
            open_graph=OpenGraphAnalysis(status="error", recommendation=UNREACHABLE),
            canonical=unreachable,
        ),
        alt_text=AltTextAnalysis(),
        page_speed=PageSpeed(),
        recommendations=[
            Recommendation(
                category="Error",
                priority="high",
                title="URL Analysis Failed",
                description=(
                    "Unable to analyze the provided URL. Please check if the URL "
                    "is accessible and try again."
                ),
                impact="High - Analysis cannot be completed",
            )
        ],
    )


class PageScorer:
    """Fetch a page once and score it."""

    def __init__(
        self,
        simulator: Simulator | None = None,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
        max_listed_links: int | None = None,
    ):
        self.simulator = simulator or RandomSimulator(settings.ANALYZER_SEED)
        self.timeout = timeout if timeout is not None else settings.ANALYZER_TIMEOUT_SECONDS
        self.client = client
        self.max_listed_links = max_listed_links or settings.ANALYZER_MAX_LISTED_LINKS

    async def fetch(self, url: str) -> str:
        if self.client is not None:
            response = await self.client.get(
                url, headers=BROWSER_HEADERS, timeout=self.timeout, follow_redirects=True
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout, follow_redirects=True) as client:
                response = await client.get(url, headers=BROWSER_HEADERS)
        response.raise_for_status()
        return response.text

    async def analyze(self, url: str, tool_type: str = "seo-analyzer") -> AnalysisResult:
        """
        Analyze a URL.

        Args:
            url: Page to analyze; https:// is assumed when no scheme is given
            tool_type: Name of the requesting tool, for logging

        Returns:
            AnalysisResult; unreachable pages give `failed_result`
        """
        url = normalize_url(url)
        logger.info(f"Running {tool_type} analysis for {url}")

        try:
            html = await self.fetch(url)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Failed to fetch {url}: {e}")
            return failed_result(url)

        return score_html(html, url, self.simulator, self.max_listed_links)
