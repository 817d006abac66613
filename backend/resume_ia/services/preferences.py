from datetime import datetime
from sqlalchemy.orm import Session
from resume_ia.models import UserPreferences
from resume_ia.schemas.preferences import PreferencesOut, PreferencesUpdate


def get_preferences(db: Session, account_id: str) -> PreferencesOut:
    preferences = db.query(UserPreferences).filter(UserPreferences.account_id == account_id).first()
    if not preferences:
        return PreferencesOut(**PreferencesUpdate().model_dump())
    return PreferencesOut.model_validate(preferences)


def update_preferences(db: Session, account_id: str, payload: PreferencesUpdate) -> PreferencesOut:
    preferences = db.query(UserPreferences).filter(UserPreferences.account_id == account_id).first()
    if not preferences:
        preferences = UserPreferences(account_id=account_id, **payload.model_dump())
        db.add(preferences)
    else:
        for field, value in payload.model_dump().items():
            setattr(preferences, field, value)
        preferences.updated_at = datetime.utcnow()
    db.commit()
    db.refresh(preferences)
    return PreferencesOut.model_validate(preferences)
