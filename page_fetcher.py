"""
Page fetcher
- Given a job posting URL, downloads the HTML and returns its visible text.
- Prefers known job-description containers, falls back to the whole body.
"""
import re
import logging

import requests
from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# some job boards refuse non-browser clients
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

CONTENT_SELECTORS = [
    '[class*="job-description"]',
    '[class*="jobDescription"]',
    '[class*="job_description"]',
    '[id*="job-description"]',
    '[id*="jobDescription"]',
    '[class*="description"]',
    '[class*="content"]',
    "main",
    "article",
    ".posting-requirements",
    ".job-details",
]

SELECTOR_MIN_CHARS = 200
MIN_CONTENT_CHARS = 100
DEFAULT_TIMEOUT = 10


class FetchError(Exception):
    """The page could not be downloaded."""


class InsufficientContentError(FetchError):
    """The page was downloaded but holds too little text to analyze."""


def extract_page_text(html):
    """Visible text of an HTML document, given as str or raw bytes."""
    soup = BeautifulSoup(html, "html.parser")

    for tag in soup(["script", "style"]):
        tag.decompose()

    content = ""
    for selector in CONTENT_SELECTORS:
        elements = soup.select(selector)
        text = "".join(el.get_text() for el in elements)
        if elements and len(text) > SELECTOR_MIN_CHARS:
            content = text
            break

    if len(content) < SELECTOR_MIN_CHARS:
        root = soup.body or soup
        content = root.get_text()

    return re.sub(r"\s+", " ", content).strip()


def fetch_page_text(url, timeout=DEFAULT_TIMEOUT, session=None):
    """Fetch a job posting and return its cleaned text.

    Raises FetchError when the request fails or returns a non-success status,
    and InsufficientContentError when fewer than MIN_CONTENT_CHARS remain.
    """
    http = session or requests
    try:
        resp = http.get(url, headers={"User-Agent": USER_AGENT}, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {url}: {e}") from e

    # raw bytes let BeautifulSoup honour <meta charset> when the header has none
    content = extract_page_text(resp.content)
    if len(content) < MIN_CONTENT_CHARS:
        raise InsufficientContentError(
            f"Could not extract sufficient content from {url} ({len(content)} chars)"
        )

    logger.info("fetched %s (%d chars of text)", url, len(content))
    return content
