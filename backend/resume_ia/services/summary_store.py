import logging
import os
from sqlalchemy.orm import Session
from resume_ia.models import SavedSummary
from resume_ia.schemas.summary import SavedSummaryCreate

logger = logging.getLogger(__name__)


def save_summary(db: Session, account_id: str, payload: SavedSummaryCreate) -> SavedSummary:
    summary = SavedSummary(
        account_id=account_id,
        title=payload.title,
        content=payload.content,
        quiz_data=payload.quiz_data.model_dump() if payload.quiz_data else None,
        revision_data=payload.revision_data.model_dump() if payload.revision_data else None,
        input_type=payload.input_type,
        input_value=payload.input_value,
        output_format=payload.output_format,
        target_language=payload.target_language,
        summary_length=payload.summary_length,
        source_url=payload.source_url,
    )
    db.add(summary)
    db.commit()
    db.refresh(summary)
    logger.info("Summary saved", extra={"summary_id": summary.id, "account_id": account_id})
    return summary


def list_summaries(db: Session, account_id: str) -> list[SavedSummary]:
    return (
        db.query(SavedSummary)
        .filter(SavedSummary.account_id == account_id)
        .order_by(SavedSummary.created_at.desc())
        .all()
    )


def get_summary(db: Session, account_id: str, summary_id: str) -> SavedSummary | None:
    return (
        db.query(SavedSummary)
        .filter(SavedSummary.id == summary_id, SavedSummary.account_id == account_id)
        .first()
    )


def delete_summary(db: Session, summary: SavedSummary) -> None:
    summary_id = summary.id
    audio_paths = [audio.file_path for audio in summary.audio_assets]
    db.delete(summary)
    db.commit()
    for path in audio_paths:
        try:
            if path and os.path.exists(path):
                os.remove(path)
        except OSError:
            logger.warning("Failed to delete audio file", extra={"path": path, "summary_id": summary_id})
    logger.info("Summary deleted", extra={"summary_id": summary_id})
