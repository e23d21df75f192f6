from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel


class ReportModel(BaseModel):
    """Base for report records: snake_case in Python, camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


# ── Metadata ────────────────────────────────────

class TitleInfo(ReportModel):
    content: str = ""
    length: int = 0
    issues: List[str] = Field(default_factory=list)


class DescriptionInfo(ReportModel):
    content: Optional[str] = None
    length: int = 0
    issues: List[str] = Field(default_factory=list)


class MetadataSection(ReportModel):
    title: TitleInfo
    description: DescriptionInfo
    keywords: List[str] = Field(default_factory=list)
    canonical: Optional[str] = None
    robots: Optional[str] = None


# ── Headings ────────────────────────────────────

class HeadingEntry(ReportModel):
    text: str
    length: int


class HeadingsSection(ReportModel):
    h1: List[HeadingEntry] = Field(default_factory=list)
    h2: List[HeadingEntry] = Field(default_factory=list)
    h3: List[HeadingEntry] = Field(default_factory=list)
    h4: List[HeadingEntry] = Field(default_factory=list)
    h5: List[HeadingEntry] = Field(default_factory=list)
    h6: List[HeadingEntry] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


# ── Links ───────────────────────────────────────

class LinkInfo(ReportModel):
    url: str
    text: str
    rel: str = ""


class BrokenLink(ReportModel):
    text: str
    href: Optional[str] = None
    reason: str


class LinkAttributes(ReportModel):
    nofollow: int = 0
    sponsored: int = 0
    ugc: int = 0


class LinksSection(ReportModel):
    internal: List[LinkInfo] = Field(default_factory=list)
    external: List[LinkInfo] = Field(default_factory=list)
    broken: List[BrokenLink] = Field(default_factory=list)
    social: List[LinkInfo] = Field(default_factory=list)
    attributes: LinkAttributes = Field(default_factory=LinkAttributes)
    total: int = 0
    issues: List[str] = Field(default_factory=list)


# ── Images ──────────────────────────────────────

class ImageWithoutAlt(ReportModel):
    src: Optional[str] = None
    context: Optional[str] = None


class ImagesSection(ReportModel):
    total: int = 0
    with_alt: int = 0
    without_alt: List[ImageWithoutAlt] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


# ── Performance ─────────────────────────────────

class ResourceHints(ReportModel):
    preload: List[Optional[str]] = Field(default_factory=list)
    preconnect: List[Optional[str]] = Field(default_factory=list)
    prefetch: List[Optional[str]] = Field(default_factory=list)


class PerformanceSection(ReportModel):
    resource_hints: ResourceHints = Field(default_factory=ResourceHints)
    deferred_scripts: int = 0
    async_scripts: int = 0
    total_scripts: int = 0
    total_styles: int = 0
    issues: List[str] = Field(default_factory=list)


# ── Security / technical / accessibility ────────

class SecuritySection(ReportModel):
    https: bool
    issues: List[str] = Field(default_factory=list)


class TechnicalSection(ReportModel):
    viewport: Optional[str] = None
    charset: Optional[str] = None
    language: Optional[str] = None
    doctype: bool = False
    issues: List[str] = Field(default_factory=list)


class AccessibilitySection(ReportModel):
    aria_attributes: int = 0
    skip_links: bool = False
    form_labels: int = 0
    form_inputs: int = 0
    issues: List[str] = Field(default_factory=list)


class StructuredDataSection(ReportModel):
    types: List[Any] = Field(default_factory=list)
    issues: List[str] = Field(default_factory=list)


# ── Mobile / content ────────────────────────────

class TapTargets(ReportModel):
    total: int = 0
    small: int = 0


class MobileSection(ReportModel):
    viewport: Optional[str] = None
    touch_icons: int = 0
    tap_targets: TapTargets = Field(default_factory=TapTargets)
    issues: List[str] = Field(default_factory=list)


class ContentQualitySection(ReportModel):
    word_count: int = 0
    paragraphs: int = 0
    lists: int = 0
    tables: int = 0
    issues: List[str] = Field(default_factory=list)


# ── Report ──────────────────────────────────────

class Recommendation(ReportModel):
    category: str
    priority: Literal["High", "Medium", "Low"]
    issue: str
    solution: str


class AnalysisReport(ReportModel):
    url: str
    timestamp: str
    metadata: MetadataSection
    headings: HeadingsSection
    links: LinksSection
    images: ImagesSection
    performance: PerformanceSection
    security: SecuritySection
    technical: TechnicalSection
    accessibility: AccessibilitySection
    structured_data: StructuredDataSection
    mobile: MobileSection
    content_quality: ContentQualitySection
    recommendations: List[Recommendation] = Field(default_factory=list)
    score: int = Field(100, ge=0, le=100)

    def to_response(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
