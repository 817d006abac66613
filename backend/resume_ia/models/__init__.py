from resume_ia.models.base import Base
from resume_ia.models.saved_summary import SavedSummary
from resume_ia.models.audio_asset import AudioAsset
from resume_ia.models.user_preferences import UserPreferences

__all__ = [
    "Base",
    "SavedSummary",
    "AudioAsset",
    "UserPreferences",
]
