import uuid
from datetime import datetime
from sqlalchemy import JSON, DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from resume_ia.models.base import Base


def _new_id() -> str:
    return uuid.uuid4().hex


class SavedSummary(Base):
    __tablename__ = "saved_summaries"

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    account_id: Mapped[str] = mapped_column(String(128), index=True)
    title: Mapped[str] = mapped_column(String(512))
    content: Mapped[str] = mapped_column(Text)
    quiz_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    revision_data: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    input_type: Mapped[str] = mapped_column(String(16), default="text")
    input_value: Mapped[str] = mapped_column(Text, default="")
    output_format: Mapped[str] = mapped_column(String(16), default="resume")
    target_language: Mapped[str] = mapped_column(String(8), default="fr")
    summary_length: Mapped[str] = mapped_column(String(16), default="moyen")
    source_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow, index=True)

    audio_assets = relationship("AudioAsset", back_populates="summary", cascade="all, delete-orphan")
