from typing import Any, Dict

from pydantic import BaseModel, Field

from app.features.seo.schemas.report import ReportModel


class FetchMetadata(ReportModel):
    status_code: int
    headers: Dict[str, str] = Field(default_factory=dict)
    timing: Dict[str, Any] = Field(default_factory=dict)
    url: str


class FetchResult(BaseModel):
    """Rendered HTML plus provider response metadata for one request."""
    html: str
    metadata: FetchMetadata
