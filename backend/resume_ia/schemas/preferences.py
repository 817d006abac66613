from datetime import datetime
from pydantic import BaseModel
from resume_ia.schemas.summary import SummaryLength, TargetLanguage


class PreferencesOut(BaseModel):
    default_language: TargetLanguage
    default_summary_length: SummaryLength
    notify_download_success: bool
    notify_share_success: bool
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class PreferencesUpdate(BaseModel):
    default_language: TargetLanguage = "fr"
    default_summary_length: SummaryLength = "moyen"
    notify_download_success: bool = True
    notify_share_success: bool = True
