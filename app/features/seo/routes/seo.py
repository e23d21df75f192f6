import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status

from app.features.seo.dependencies.scrape import get_scrape_service
from app.features.seo.schemas.analysis import AnalysisOptions, AnalyzeRequest, ValidateUrlRequest
from app.features.seo.services.analysis.seo_analyzer import SEOAnalyzerService
from app.features.seo.services.scraping.scrape_service import ScrapeService
from app.features.seo.utils.guidelines import GENERAL_RECOMMENDATIONS
from app.platform.config import settings
from app.platform.logger import get_logger, log_seo_analysis
from app.platform.response import error_response, success_response
from app.platform.utils.url_validator import validate_analysis_options

logger = get_logger(__name__)

router = APIRouter(prefix="/seo", tags=["seo"])


@router.post("/analyze", summary="Analyze a URL for technical SEO factors")
async def analyze(
    payload: AnalyzeRequest,
    scrape_service: ScrapeService = Depends(get_scrape_service),
):
    """
    Fetch the page through the rendering provider and return the full report.
    Scrape and analysis failures are mapped to 400/429/500/504 by the
    platform exception handlers.
    """
    errors = validate_analysis_options(payload.options)
    if errors:
        return error_response(
            error="Invalid analysis parameters",
            details=errors,
            status_code=status.HTTP_400_BAD_REQUEST,
        )

    options = AnalysisOptions.model_validate(payload.options)
    logger.info(f"Starting SEO analysis for {payload.url} (timeout={options.timeout}ms)")

    fetched = await scrape_service.scrape_url(
        payload.url,
        max_retries=settings.SCRAPE_MAX_RETRIES,
        retry_delay_ms=settings.SCRAPE_RETRY_DELAY_MS,
        timeout_ms=options.timeout,
    )

    started = time.perf_counter()
    report = SEOAnalyzerService.analyze(fetched.html, payload.url, options)
    analysis_time_ms = int((time.perf_counter() - started) * 1000)

    log_seo_analysis(logger, payload.url, report.score, len(report.recommendations))

    return success_response(
        success=True,
        timestamp=datetime.now(timezone.utc).isoformat(),
        url=payload.url,
        metadata={
            **fetched.metadata.model_dump(by_alias=True),
            "analysisTime": analysis_time_ms,
        },
        results=report.to_response(),
    )


@router.post("/validate-url", summary="Validate a URL without analyzing it")
async def validate_url_endpoint(payload: ValidateUrlRequest):
    return success_response(valid=True, url=payload.url)


@router.get("/recommendations", summary="General SEO best practices")
async def general_recommendations():
    return success_response(**GENERAL_RECOMMENDATIONS)


@router.get("/service-status", summary="Rendering provider status")
async def service_status():
    return error_response(
        error="Not implemented",
        message="Service status endpoint is not implemented",
        status_code=status.HTTP_501_NOT_IMPLEMENTED,
    )
