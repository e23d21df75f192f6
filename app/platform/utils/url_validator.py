import re
from typing import Any, Dict, List, Tuple
from urllib.parse import urlparse

MAX_URL_LENGTH = 2048

MIN_TIMEOUT_MS = 1000
MAX_TIMEOUT_MS = 30000

_LOCALHOST_NAMES = {"localhost", "127.0.0.1", "::1"}
_PRIVATE_HOST_PATTERNS = [
    re.compile(r"^10\."),
    re.compile(r"^192\.168\."),
    re.compile(r"^172\.(1[6-9]|2[0-9]|3[0-1])\."),
    re.compile(r"^169\.254\."),
]
_HOST_LABEL = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)


def normalize_url(url: str) -> Tuple[str, bool]:

    url = url.strip()

    if not re.match(r"^https?://", url, re.IGNORECASE):
        normalized = f"https://{url}"
        return normalized, True

    return url, False


def _is_valid_host(hostname: str) -> bool:
    if hostname.endswith("."):
        return False
    if hostname.startswith("[") or ":" in hostname:
        return True  # IPv6 literal
    labels = hostname.split(".")
    if len(labels) < 2:
        return False
    return all(label and _HOST_LABEL.match(label) for label in labels)


def validate_url(url: str) -> Tuple[bool, str, str]:
    """
    Validate a user supplied URL.

    Returns (is_valid, normalized_url, error). The URL gets `https://`
    prepended when it has no http(s) scheme.
    """
    if not url or not isinstance(url, str) or not url.strip():
        return False, "", "URL cannot be empty"

    if len(url.strip()) > MAX_URL_LENGTH:
        return False, url.strip(), f"URL must be between 1 and {MAX_URL_LENGTH} characters"

    normalized_url, was_modified = normalize_url(url)

    try:
        parsed = urlparse(normalized_url)
        hostname = (parsed.hostname or "").lower()
    except ValueError:
        return False, normalized_url, "Invalid URL structure"

    if parsed.scheme.lower() not in ("http", "https"):
        return False, normalized_url, "Only HTTP and HTTPS protocols are allowed"

    if not hostname or " " in normalized_url:
        return False, normalized_url, "Invalid URL format"

    if parsed.username or parsed.password:
        return False, normalized_url, "Invalid URL format"

    if hostname in _LOCALHOST_NAMES:
        return False, normalized_url, "Localhost URLs are not allowed"

    if any(pattern.match(hostname) for pattern in _PRIVATE_HOST_PATTERNS):
        return False, normalized_url, "Private IP addresses are not allowed"

    if not _is_valid_host(hostname):
        return False, normalized_url, "Invalid URL format"

    try:
        parsed.port
    except ValueError:
        return False, normalized_url, "Invalid URL format"

    return True, normalized_url, ""


def validate_analysis_options(options: Dict[str, Any]) -> List[str]:
    """Check the optional analysis flags; returns a list of error messages."""
    errors = []

    for flag in ("includeImages", "includeLinks", "includePerformance"):
        value = options.get(flag)
        if value is not None and not isinstance(value, bool):
            errors.append(f"{flag} must be a boolean")

    timeout = options.get("timeout")
    if timeout is not None:
        try:
            timeout_ms = int(timeout)
        except (TypeError, ValueError):
            timeout_ms = None
        if isinstance(timeout, bool) or timeout_ms is None or not MIN_TIMEOUT_MS <= timeout_ms <= MAX_TIMEOUT_MS:
            errors.append(f"timeout must be between {MIN_TIMEOUT_MS} and {MAX_TIMEOUT_MS} milliseconds")

    return errors
