"""Wikipedia search and plain-text content retrieval.

Both functions return ``None`` on any failure (network error, HTTP error,
not found, unexpected payload); they never raise.
"""

import logging
from dataclasses import dataclass
import httpx
from resume_ia.core.config import settings

logger = logging.getLogger(__name__)

HEADERS = {"User-Agent": "resume-ia/0.1"}


@dataclass
class WikipediaSearchResult:
    title: str
    url: str


def _http_client() -> httpx.Client:
    return httpx.Client(timeout=settings.http_timeout_s, headers=HEADERS)


def _get_json(params: dict) -> dict | list | None:
    try:
        with _http_client() as client:
            response = client.get(settings.wikipedia_api_url, params=params)
            response.raise_for_status()
            return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("Wikipedia API request failed", extra={"action": params.get("action"), "error": str(exc)})
        return None


def search_wikipedia(term: str) -> WikipediaSearchResult | None:
    params = {
        "action": "opensearch",
        "search": term,
        "limit": "1",
        "namespace": "0",
        "format": "json",
    }
    data = _get_json(params)
    # opensearch format is [term, [titles], [descriptions], [urls]]
    if not isinstance(data, list) or len(data) < 4:
        return None
    titles, urls = data[1], data[3]
    if not isinstance(titles, list) or not isinstance(urls, list) or not titles or not urls:
        return None
    if not isinstance(titles[0], str) or not isinstance(urls[0], str):
        return None
    return WikipediaSearchResult(title=titles[0], url=urls[0])


def _extract(page_title: str, intro_only: bool) -> str | None:
    params = {
        "action": "query",
        "prop": "extracts",
        "explaintext": "1",
        "titles": page_title,
        "format": "json",
        "redirects": "1",
    }
    if intro_only:
        params["exintro"] = "1"
    data = _get_json(params)
    if not isinstance(data, dict):
        return None
    query = data.get("query")
    pages = query.get("pages") if isinstance(query, dict) else None
    if not isinstance(pages, dict):
        logger.warning("Unexpected Wikipedia extract payload", extra={"title": page_title})
        return None
    for page in pages.values():
        extract = page.get("extract") if isinstance(page, dict) else None
        if isinstance(extract, str) and extract:
            return extract
    return None


def get_wikipedia_page_content(page_title: str) -> str | None:
    intro = _extract(page_title, intro_only=True)
    if intro is None:
        return None
    if len(intro) < settings.wikipedia_intro_min_chars:
        logger.info("Wikipedia intro too short, fetching full article", extra={"title": page_title})
        return _extract(page_title, intro_only=False)
    return intro
