import logging
import os
from logging.handlers import RotatingFileHandler

from app.platform.config import settings

# 1. Create the logs directory if it doesn't exist
log_dir = os.path.join(os.getcwd(), settings.LOG_DIR)
if not os.path.exists(log_dir):
    os.makedirs(log_dir)

# 2. Define the path to the log file
log_file_path = os.path.join(log_dir, "seo_tech_check.log")


def get_logger(name: str):
    """
    Creates a logger instance that writes to console AND a file.
    """
    logger = logging.getLogger(name)

    if logger.handlers:
        return logger

    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO
    logger.setLevel(level)

    # 3. Create Formatters (How the log looks)
    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    # 4. Handler 1: Write to File (Rotating)
    file_handler = RotatingFileHandler(log_file_path, maxBytes=10_000_000, backupCount=5)
    file_handler.setFormatter(formatter)
    file_handler.setLevel(level)

    # 5. Handler 2: Write to Console (Terminal)
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    logger.addHandler(file_handler)
    logger.addHandler(console_handler)

    return logger


def log_seo_analysis(logger: logging.Logger, url: str, score: int, issues_count: int) -> None:
    """Emit the 'analysis completed' event with its structured fields."""
    logger.info(
        f"SEO Analysis completed for {url}: score={score}, recommendations={issues_count}",
        extra={"url": url, "score": score, "issues_count": issues_count, "event_type": "seo_analysis"},
    )


def log_scrape_error(logger: logging.Logger, url: str, error: str) -> None:
    """`error` must already be described; raw httpx errors embed the provider token."""
    logger.error(
        f"URL scraping failed for {url}: {error}",
        extra={"url": url, "event_type": "scrape_error"},
    )
