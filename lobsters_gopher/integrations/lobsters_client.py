"""Lobsters API client.

Fetches the hottest stories and per-story comment threads. Each request
opens its own connection; failures are wrapped and never retried.
"""

import logging
from urllib.parse import urljoin, urlsplit

import httpx

from lobsters_gopher.models import Comment, Story, decode_comment_thread, decode_stories
from lobsters_gopher.workflow.error_handling import TransportError

logger = logging.getLogger(__name__)

HOTTEST_PATH = "hottest.json"
COMMENTS_SUFFIX = ".json"


def normalize_host(host: str) -> str:
    """Turn a user-supplied host into an HTTPS base URL.

    Args:
        host: Hostname with or without scheme, e.g. "lobste.rs" or
            "http://lobste.rs/"

    Returns:
        Base URL with https scheme and a trailing slash

    Raises:
        ValueError: If host is empty
    """
    host = host.strip() if host else ""
    if not host:
        raise ValueError("Host cannot be empty")

    if "://" not in host:
        host = f"https://{host}"

    parts = urlsplit(host)
    if not parts.netloc:
        raise ValueError(f"Invalid host: {host!r}")

    path = parts.path.rstrip("/")
    return f"https://{parts.netloc}{path}/"


def fetch_text(url: str) -> str:
    """GET a URL and return the response body.

    Args:
        url: Absolute URL

    Returns:
        Decoded response text

    Raises:
        TransportError: On network, TLS or non-2xx HTTP failure
    """
    try:
        with httpx.Client() as client:
            response = client.get(url)
            response.raise_for_status()
            return response.text
    except httpx.HTTPStatusError as e:
        raise TransportError(
            f"HTTP {e.response.status_code}", url=url, status_code=e.response.status_code
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise TransportError(f"{type(e).__name__}: {e}", url=url) from e


def hottest_url(base_url: str) -> str:
    return urljoin(base_url, HOTTEST_PATH)


def comments_url(story: Story) -> str:
    return f"{story.permalink}{COMMENTS_SUFFIX}"


def fetch_stories(base_url: str) -> list[Story]:
    """Fetch the hottest stories.

    Args:
        base_url: Normalized base URL (see normalize_host)

    Returns:
        Stories in the API's ranking order, without comments

    Raises:
        TransportError: If the request fails
        DecodeError: If the payload is not a valid story list
    """
    url = hottest_url(base_url)
    stories = decode_stories(fetch_text(url), source=url)
    logger.info(f"Fetched {len(stories)} stories from {url}")
    return stories


def fetch_comments(story: Story) -> list[Comment]:
    """Fetch the comment thread of one story.

    The result is returned, not attached; the caller owns the story.

    Raises:
        TransportError: If the request fails
        DecodeError: If the payload is not a valid comment thread
    """
    url = comments_url(story)
    comments = decode_comment_thread(fetch_text(url), source=url)
    logger.debug(f"Fetched {len(comments)} comments for {story.id}")
    return comments
