from app.features.seo.services.scraping.scrape_service import ScrapeService


def get_scrape_service() -> ScrapeService:
    """Request-scoped rendering provider client built from settings."""
    return ScrapeService()
