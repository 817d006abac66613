import hashlib
import io
import logging
import os
from datetime import datetime
from gtts import gTTS
from gtts.tts import gTTSError
from sqlalchemy.orm import Session
from resume_ia.core.config import settings
from resume_ia.core.errors import ConfigurationError, FlowError, InputValidationError
from resume_ia.models import AudioAsset, SavedSummary
from resume_ia.services.rendering import html_to_text

logger = logging.getLogger(__name__)

GTTS_LANGUAGES = {
    "fr": "fr",
    "en": "en",
    "es": "es",
    "de": "de",
    "it": "it",
    "pt": "pt",
    "ja": "ja",
    "ko": "ko",
}


def _hash_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _ensure_dirs(account_id: str) -> str:
    path = os.path.join(settings.audio_dir, account_id)
    os.makedirs(path, exist_ok=True)
    return path


def _generate_with_gtts(text: str, lang: str, output_path: str) -> None:
    if not settings.tts_allow_network:
        raise ConfigurationError("La synthèse vocale gTTS nécessite un accès réseau ; définissez TTS_ALLOW_NETWORK=true.")
    try:
        gTTS(text=text, lang=lang).save(output_path)
    except gTTSError as exc:
        logger.error("gTTS synthesis failed", extra={"error": str(exc), "output_path": output_path})
        raise FlowError("La synthèse vocale du résumé a échoué. Veuillez réessayer.") from exc


def synthesize_mp3(content: str, target_language: str) -> bytes:
    """Speak an unsaved result; nothing is written to disk."""
    text = html_to_text(content)
    if not text:
        raise InputValidationError("Ce résumé ne contient aucun texte à lire.")
    if not settings.tts_allow_network:
        raise ConfigurationError("La synthèse vocale gTTS nécessite un accès réseau ; définissez TTS_ALLOW_NETWORK=true.")
    buffer = io.BytesIO()
    try:
        gTTS(text=text, lang=GTTS_LANGUAGES.get(target_language, "fr")).write_to_fp(buffer)
    except gTTSError as exc:
        logger.error("gTTS synthesis failed", extra={"error": str(exc), "chars": len(text)})
        raise FlowError("La synthèse vocale du résumé a échoué. Veuillez réessayer.") from exc
    return buffer.getvalue()


def generate_audio(db: Session, summary: SavedSummary) -> AudioAsset:
    text = html_to_text(summary.content)
    if not text:
        raise FlowError("Ce résumé ne contient aucun texte à lire.")

    lang = GTTS_LANGUAGES.get(summary.target_language, "fr")
    content_hash = _hash_text(f"{lang}:{text}")
    existing = (
        db.query(AudioAsset)
        .filter(AudioAsset.summary_id == summary.id)
        .filter(AudioAsset.content_hash == content_hash)
        .first()
    )
    if existing and os.path.exists(existing.file_path):
        return existing

    dir_path = _ensure_dirs(summary.account_id)
    file_path = os.path.join(dir_path, f"{summary.id}.mp3")
    _generate_with_gtts(text, lang, file_path)

    if existing:
        existing.file_path = file_path
        existing.created_at = datetime.utcnow()
        audio = existing
    else:
        audio = AudioAsset(
            summary_id=summary.id,
            content_hash=content_hash,
            language=lang,
            file_path=file_path,
            format="mp3",
            created_at=datetime.utcnow(),
        )
        db.add(audio)
    db.commit()
    db.refresh(audio)
    logger.info("Audio generated", extra={"summary_id": summary.id, "file_path": file_path})
    return audio


def latest_audio(db: Session, summary_id: str) -> AudioAsset | None:
    return (
        db.query(AudioAsset)
        .filter(AudioAsset.summary_id == summary_id)
        .order_by(AudioAsset.created_at.desc())
        .first()
    )
