"""YouTube video id parsing, metadata lookup and transcript retrieval.

Lookups return ``None`` on any failure so callers can proceed without
metadata or transcript. Metadata needs ``YOUTUBE_API_KEY``; without it the
lookup is skipped silently.
"""

import html
import logging
import re
from dataclasses import dataclass, field
import httpx
from youtube_transcript_api import CouldNotRetrieveTranscript, YouTubeTranscriptApi
from resume_ia.core.config import settings

logger = logging.getLogger(__name__)

YOUTUBE_ID_RE = re.compile(
    r"(?:youtube(?:-nocookie)?\.com/(?:[^/\n\s]+/\S+/|(?:v|e(?:mbed)?|shorts|live)/|\S*?[?&]v=)|youtu\.be/)"
    r"([a-zA-Z0-9_-]{11})"
)

TRANSCRIPT_LANGUAGES = ["fr", "en", "es", "de", "it", "pt"]


@dataclass
class VideoDetails:
    title: str
    description: str
    tags: list[str] = field(default_factory=list)


def looks_like_youtube_url(value: str) -> bool:
    return "youtube.com/" in value or "youtu.be/" in value


def parse_youtube_video_id(url: str) -> str | None:
    match = YOUTUBE_ID_RE.search(url or "")
    return match.group(1) if match else None


def watch_url(video_id: str) -> str:
    return f"https://www.youtube.com/watch?v={video_id}"


def _http_client() -> httpx.Client:
    return httpx.Client(timeout=settings.http_timeout_s)


def _unescaped(value) -> str:
    return html.unescape(value) if isinstance(value, str) else ""


def get_video_details(video_id: str) -> VideoDetails | None:
    if not video_id or not settings.youtube_api_key:
        return None
    params = {"part": "snippet", "id": video_id, "key": settings.youtube_api_key}
    try:
        with _http_client() as client:
            response = client.get(settings.youtube_api_url, params=params)
            response.raise_for_status()
            data = response.json()
    except (httpx.HTTPError, ValueError) as exc:
        logger.error("YouTube metadata lookup failed", extra={"video_id": video_id, "error": str(exc)})
        return None
    items = data.get("items") if isinstance(data, dict) else None
    item = items[0] if isinstance(items, list) and items else None
    snippet = item.get("snippet") if isinstance(item, dict) else None
    if not isinstance(snippet, dict):
        logger.info("YouTube video not found or private", extra={"video_id": video_id})
        return None
    tags = snippet.get("tags")
    return VideoDetails(
        title=_unescaped(snippet.get("title")) or "Titre non disponible",
        description=_unescaped(snippet.get("description")),
        tags=[_unescaped(tag) for tag in tags if isinstance(tag, str)] if isinstance(tags, list) else [],
    )


def get_youtube_transcript(video_id: str) -> str | None:
    try:
        fetched = YouTubeTranscriptApi().fetch(video_id, languages=TRANSCRIPT_LANGUAGES)
    except (CouldNotRetrieveTranscript, OSError) as exc:
        logger.info("No transcript available", extra={"video_id": video_id, "error": str(exc)})
        return None
    text = " ".join(snippet.text.strip() for snippet in fetched if snippet.text.strip())
    return text or None
