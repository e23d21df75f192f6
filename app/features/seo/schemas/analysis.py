from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from app.platform.config import settings
from app.platform.utils.url_validator import validate_url


def _checked_url(value: str) -> str:
    is_valid, normalized_url, error = validate_url(value)
    if not is_valid:
        raise ValueError(error)
    return normalized_url


class AnalyzeRequest(BaseModel):
    url: str
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("url")
    @classmethod
    def validate_target_url(cls, value: str) -> str:
        """Trim, prepend https:// when missing, and reject private or malformed hosts."""
        return _checked_url(value)

    @field_validator("options", mode="before")
    @classmethod
    def default_options(cls, value: Optional[Dict[str, Any]]) -> Dict[str, Any]:
        return value or {}

    class Config:
        json_schema_extra = {
            "example": {
                "url": "https://example.com",
                "options": {
                    "includeImages": True,
                    "includeLinks": True,
                    "includePerformance": True,
                    "timeout": 20000,
                },
            }
        }


class AnalysisOptions(BaseModel):
    """Options after validation; timeout is in milliseconds."""
    include_images: bool = True
    include_links: bool = True
    include_performance: bool = True
    timeout: int = settings.DEFAULT_ANALYSIS_TIMEOUT_MS

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ValidateUrlRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def validate_target_url(cls, value: str) -> str:
        return _checked_url(value)
