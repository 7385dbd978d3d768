from typing import Tuple
from urllib.parse import unquote, urldefrag, urlparse

MENUDATA_FILENAME = "menudata.js"


def is_valid_url(url: str) -> bool:
    """
    Check if the URL is a valid http(s) URL.

    Args:
        url (str): The URL to validate

    Returns:
        bool: True if the URL is valid, False otherwise
    """
    try:
        result = urlparse(url)
    except ValueError:
        return False
    return result.scheme in ("http", "https") and bool(result.netloc)


def is_external_target(url: str) -> bool:
    """True for menu targets that leave the documentation site (absolute or scheme URLs)."""
    parsed = urlparse(url)
    return bool(parsed.scheme or parsed.netloc)


def split_target(url: str) -> Tuple[str, str]:
    """Split a menu url into its page and its decoded fragment, e.g. ``("globals.html", "index_b")``."""
    page, fragment = urldefrag(url)
    return page, unquote(fragment)


def ensure_trailing_slash(url: str) -> str:
    return url if url.endswith("/") else url + "/"
