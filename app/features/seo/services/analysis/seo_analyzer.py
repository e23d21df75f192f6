import json
import re
from datetime import datetime, timezone
from typing import Optional
from urllib.parse import urljoin, urlparse

from bs4 import BeautifulSoup

from app.features.seo.schemas.analysis import AnalysisOptions
from app.features.seo.schemas.report import (
    AccessibilitySection,
    AnalysisReport,
    BrokenLink,
    ContentQualitySection,
    DescriptionInfo,
    HeadingEntry,
    HeadingsSection,
    ImagesSection,
    ImageWithoutAlt,
    LinkInfo,
    LinksSection,
    MetadataSection,
    MobileSection,
    PerformanceSection,
    SecuritySection,
    StructuredDataSection,
    TapTargets,
    TechnicalSection,
    TitleInfo,
)
from app.features.seo.services.analysis.recommendations import RecommendationService
from app.features.seo.utils.document import has_doctype, parse_document, visible_text
from app.platform.exceptions import AnalysisError
from app.platform.logger import get_logger

logger = get_logger(__name__)


class SEOAnalyzerService:
    """
    Turns a rendered page into an AnalysisReport.

    Every section analyzer is a pure function of the parsed document (and
    the page URL for links/security); none of them mutate the tree.
    """

    TITLE_MIN_LENGTH = 30
    TITLE_MAX_LENGTH = 60
    DESCRIPTION_MIN_LENGTH = 120
    DESCRIPTION_MAX_LENGTH = 160

    MIN_WORD_COUNT = 300
    MIN_PARAGRAPHS = 3
    MAX_STYLESHEETS = 5
    MIN_TAP_TARGET_PX = 44

    SOCIAL_DOMAINS = (
        "facebook.com",
        "twitter.com",
        "linkedin.com",
        "instagram.com",
        "pinterest.com",
        "youtube.com",
    )

    @staticmethod
    def analyze(html: str, url: str, options: Optional[AnalysisOptions] = None) -> AnalysisReport:
        """
        Main entry point: parse `html` fetched from `url` and build the report.

        Options are validated upstream and carried for the caller; every
        section is always produced so reports keep a stable shape.

        Raises:
            AnalysisError: if the document cannot be parsed or a section fails
        """
        options = options or AnalysisOptions()
        try:
            soup = parse_document(html)

            report = AnalysisReport(
                url=url,
                timestamp=datetime.now(timezone.utc).isoformat(),
                metadata=SEOAnalyzerService.analyze_metadata(soup),
                headings=SEOAnalyzerService.analyze_headings(soup),
                links=SEOAnalyzerService.analyze_links(soup, url),
                images=SEOAnalyzerService.analyze_images(soup),
                performance=SEOAnalyzerService.analyze_performance(soup),
                security=SEOAnalyzerService.analyze_security(url),
                technical=SEOAnalyzerService.analyze_technical(soup),
                accessibility=SEOAnalyzerService.analyze_accessibility(soup),
                structured_data=SEOAnalyzerService.analyze_structured_data(soup),
                mobile=SEOAnalyzerService.analyze_mobile_friendliness(soup),
                content_quality=SEOAnalyzerService.analyze_content_quality(soup),
            )

            report.recommendations = RecommendationService.generate_recommendations(report)
            report.score = RecommendationService.calculate_overall_score(report)
            return report

        except Exception as e:
            logger.error(f"SEO analysis failed for {url}: {e}")
            message = e.message if isinstance(e, AnalysisError) else str(e)
            raise AnalysisError(f"SEO analysis failed: {message}") from e

    @staticmethod
    def analyze_metadata(soup: BeautifulSoup) -> MetadataSection:
        titles = soup.find_all("title")
        title = titles[0].get_text() if titles else ""

        description_tag = soup.find("meta", attrs={"name": "description"})
        description = description_tag.get("content") if description_tag else None

        keywords_tag = soup.find("meta", attrs={"name": "keywords"})
        keywords = keywords_tag.get("content") if keywords_tag else None

        canonical_tag = soup.select_one('link[rel="canonical"]')
        robots_tag = soup.find("meta", attrs={"name": "robots"})

        title_info = TitleInfo(content=title, length=len(title))
        description_info = DescriptionInfo(
            content=description,
            length=len(description) if description else 0,
        )

        # Title
        if not title:
            title_info.issues.append("Missing title tag")
        if len(titles) > 1:
            title_info.issues.append("Multiple title tags found; only the first will be used")
        if title:
            if len(title) < SEOAnalyzerService.TITLE_MIN_LENGTH:
                title_info.issues.append(f"Title too short (< {SEOAnalyzerService.TITLE_MIN_LENGTH} characters)")
            if len(title) > SEOAnalyzerService.TITLE_MAX_LENGTH:
                title_info.issues.append(f"Title too long (> {SEOAnalyzerService.TITLE_MAX_LENGTH} characters)")

        # Description
        if not description:
            description_info.issues.append("Missing meta description")
        else:
            if len(description) < SEOAnalyzerService.DESCRIPTION_MIN_LENGTH:
                description_info.issues.append(
                    f"Description too short (< {SEOAnalyzerService.DESCRIPTION_MIN_LENGTH} characters)"
                )
            if len(description) > SEOAnalyzerService.DESCRIPTION_MAX_LENGTH:
                description_info.issues.append(
                    f"Description too long (> {SEOAnalyzerService.DESCRIPTION_MAX_LENGTH} characters)"
                )

        return MetadataSection(
            title=title_info,
            description=description_info,
            keywords=[k.strip() for k in keywords.split(",")] if keywords else [],
            canonical=(canonical_tag.get("href") if canonical_tag else None) or None,
            robots=(robots_tag.get("content") if robots_tag else None) or None,
        )

    @staticmethod
    def analyze_headings(soup: BeautifulSoup) -> HeadingsSection:
        headings = HeadingsSection()

        for level in range(1, 7):
            entries = getattr(headings, f"h{level}")
            for elem in soup.find_all(f"h{level}"):
                text = elem.get_text().strip()
                entries.append(HeadingEntry(text=text, length=len(text)))

        if not headings.h1:
            headings.issues.append("Missing H1 heading")
        if len(headings.h1) > 1:
            headings.issues.append("Multiple H1 headings found")

        # Hierarchy, in document order
        previous_level = 1
        for elem in soup.find_all(["h1", "h2", "h3", "h4", "h5", "h6"]):
            current_level = int(elem.name[1])
            if current_level - previous_level > 1:
                headings.issues.append(f"Skipped heading level: from H{previous_level} to H{current_level}")
            previous_level = current_level

        return headings

    @staticmethod
    def _resolve_link(href: str, base_url: str) -> str:
        """Resolve href against the page URL; raises ValueError when it can't be."""
        resolved = urljoin(base_url, href.strip())
        parsed = urlparse(resolved)
        if not parsed.scheme:
            raise ValueError(f"Invalid URL format: {href}")
        if parsed.scheme in ("http", "https"):
            if not parsed.hostname or re.search(r"\s", parsed.netloc):
                raise ValueError(f"Invalid URL format: {href}")
            parsed.port  # raises ValueError on a malformed port
        return resolved

    @staticmethod
    def is_social_media_link(hostname: str) -> bool:
        return any(domain in hostname for domain in SEOAnalyzerService.SOCIAL_DOMAINS)

    @staticmethod
    def analyze_links(soup: BeautifulSoup, base_url: str) -> LinksSection:
        links = LinksSection()

        base_hostname = urlparse(base_url).hostname
        if not base_hostname:
            raise ValueError(f"Invalid URL: {base_url}")

        for elem in soup.find_all("a"):
            href = elem.get("href")
            text = elem.get_text().strip()
            rel = elem.get("rel") or ""
            if isinstance(rel, list):
                rel = " ".join(rel)

            if not href:
                links.broken.append(BrokenLink(text=text, reason="Missing href attribute"))
                continue

            try:
                resolved = SEOAnalyzerService._resolve_link(href, base_url)
            except ValueError:
                links.broken.append(BrokenLink(text=text, href=href, reason="Invalid URL format"))
                continue

            link_info = LinkInfo(url=resolved, text=text, rel=rel)

            if "nofollow" in rel:
                links.attributes.nofollow += 1
            if "sponsored" in rel:
                links.attributes.sponsored += 1
            if "ugc" in rel:
                links.attributes.ugc += 1

            hostname = urlparse(resolved).hostname or ""
            if hostname == base_hostname:
                links.internal.append(link_info)
            else:
                if SEOAnalyzerService.is_social_media_link(hostname):
                    links.social.append(link_info)
                links.external.append(link_info)

        links.total = len(links.internal) + len(links.external)

        if links.broken:
            links.issues.append(f"Found {len(links.broken)} broken links")
        if links.external and links.attributes.nofollow == 0:
            links.issues.append("External links without nofollow attributes")

        return links

    @staticmethod
    def analyze_images(soup: BeautifulSoup) -> ImagesSection:
        images = ImagesSection()

        for img in soup.find_all("img"):
            src = img.get("src")
            images.total += 1

            if not img.get("alt"):
                context = img.parent.decode_contents() if img.parent is not None else None
                images.without_alt.append(ImageWithoutAlt(src=src, context=context))
            else:
                images.with_alt += 1

            if not img.get("width") or not img.get("height"):
                images.issues.append(f"Image missing dimensions: {src or ''}")

        if images.without_alt:
            images.issues.append(f"{len(images.without_alt)} images missing alt text")

        return images

    @staticmethod
    def analyze_performance(soup: BeautifulSoup) -> PerformanceSection:
        performance = PerformanceSection()

        for hint in ("preload", "preconnect", "prefetch"):
            hrefs = getattr(performance.resource_hints, hint)
            for elem in soup.select(f'link[rel="{hint}"]'):
                hrefs.append(elem.get("href"))

        for script in soup.find_all("script"):
            performance.total_scripts += 1
            if script.has_attr("defer"):
                performance.deferred_scripts += 1
            if script.has_attr("async"):
                performance.async_scripts += 1

        performance.total_styles = len(soup.select('link[rel="stylesheet"]'))

        if performance.total_scripts > 0 and performance.deferred_scripts == 0 and performance.async_scripts == 0:
            performance.issues.append("No deferred or async scripts found")
        if performance.total_styles > SEOAnalyzerService.MAX_STYLESHEETS:
            performance.issues.append("High number of stylesheet files")

        return performance

    @staticmethod
    def analyze_security(url: str) -> SecuritySection:
        security = SecuritySection(https=url.startswith("https://"))
        if not security.https:
            security.issues.append("Site not served over HTTPS")
        return security

    @staticmethod
    def _viewport(soup: BeautifulSoup) -> Optional[str]:
        tag = soup.find("meta", attrs={"name": "viewport"})
        return tag.get("content") if tag else None

    @staticmethod
    def analyze_technical(soup: BeautifulSoup) -> TechnicalSection:
        charset_tag = soup.find("meta", attrs={"charset": True})
        html_tag = soup.find("html")

        technical = TechnicalSection(
            viewport=SEOAnalyzerService._viewport(soup),
            charset=charset_tag.get("charset") if charset_tag else None,
            language=html_tag.get("lang") if html_tag else None,
            doctype=has_doctype(soup),
        )

        if not technical.viewport:
            technical.issues.append("Missing viewport meta tag")
        if not technical.charset:
            technical.issues.append("Missing charset declaration")
        if not technical.language:
            technical.issues.append("Missing language declaration")
        if not technical.doctype:
            technical.issues.append("Missing DOCTYPE declaration")

        return technical

    @staticmethod
    def analyze_accessibility(soup: BeautifulSoup) -> AccessibilitySection:
        accessibility = AccessibilitySection(
            aria_attributes=len(soup.select("[aria-label], [aria-describedby], [aria-hidden]")),
            skip_links=bool(soup.select('a[href^="#main"], a[href^="#content"]')),
            form_labels=len(soup.select("form label")),
            form_inputs=len(soup.select("form input")),
        )

        if not accessibility.skip_links:
            accessibility.issues.append("No skip navigation links found")
        # Plain count comparison, not per-field pairing
        if accessibility.form_inputs > accessibility.form_labels:
            accessibility.issues.append("Some form inputs missing labels")

        return accessibility

    @staticmethod
    def analyze_structured_data(soup: BeautifulSoup) -> StructuredDataSection:
        structured_data = StructuredDataSection()

        for script in soup.find_all("script", attrs={"type": "application/ld+json"}):
            try:
                data = json.loads(script.string or "")
            except (json.JSONDecodeError, TypeError):
                structured_data.issues.append("Invalid JSON-LD structured data")
                continue
            if isinstance(data, dict) and data.get("@type"):
                structured_data.types.append(data["@type"])

        return structured_data

    @staticmethod
    def _inline_px(style: str, prop: str) -> Optional[float]:
        match = re.search(rf"(?:^|;)\s*{prop}\s*:\s*([\d.]+)px", style, re.IGNORECASE)
        return float(match.group(1)) if match else None

    @staticmethod
    def analyze_tap_targets(soup: BeautifulSoup) -> TapTargets:
        """
        Heuristic only: without layout, an element counts as small when an
        inline style gives it a px width or height under the minimum.
        """
        targets = TapTargets()
        minimum = SEOAnalyzerService.MIN_TAP_TARGET_PX

        for elem in soup.find_all(["a", "button", "input", "select", "textarea"]):
            targets.total += 1
            style = elem.get("style") or ""
            sizes = [SEOAnalyzerService._inline_px(style, prop) for prop in ("width", "height")]
            if any(size is not None and size < minimum for size in sizes):
                targets.small += 1

        return targets

    @staticmethod
    def analyze_mobile_friendliness(soup: BeautifulSoup) -> MobileSection:
        mobile = MobileSection(
            viewport=SEOAnalyzerService._viewport(soup),
            touch_icons=len(soup.select('link[rel*="apple-touch-icon"]')),
            tap_targets=SEOAnalyzerService.analyze_tap_targets(soup),
        )

        if not mobile.viewport:
            mobile.issues.append("Missing viewport meta tag")
        elif "width=device-width" not in mobile.viewport:
            mobile.issues.append("Viewport meta tag missing width=device-width")

        if mobile.tap_targets.small > 0:
            mobile.issues.append(f"{mobile.tap_targets.small} tap targets too small")

        return mobile

    @staticmethod
    def analyze_content_quality(soup: BeautifulSoup) -> ContentQualitySection:
        content = ContentQualitySection(
            word_count=len(visible_text(soup).split()),
            paragraphs=len(soup.find_all("p")),
            lists=len(soup.find_all(["ul", "ol"])),
            tables=len(soup.find_all("table")),
        )

        if content.word_count < SEOAnalyzerService.MIN_WORD_COUNT:
            content.issues.append(
                f"Content length below recommended minimum ({SEOAnalyzerService.MIN_WORD_COUNT} words)"
            )
        if content.paragraphs < SEOAnalyzerService.MIN_PARAGRAPHS:
            content.issues.append("Too few paragraphs")

        return content
