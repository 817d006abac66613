from datetime import datetime
from sqlalchemy import Boolean, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column
from resume_ia.models.base import Base


class UserPreferences(Base):
    __tablename__ = "user_preferences"

    id: Mapped[int] = mapped_column(primary_key=True)
    account_id: Mapped[str] = mapped_column(String(128), unique=True, index=True)
    default_language: Mapped[str] = mapped_column(String(8), default="fr")
    default_summary_length: Mapped[str] = mapped_column(String(16), default="moyen")
    notify_download_success: Mapped[bool] = mapped_column(Boolean, default=True)
    notify_share_success: Mapped[bool] = mapped_column(Boolean, default=True)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=datetime.utcnow)
