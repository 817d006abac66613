from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from resume_ia.api.deps import get_current_account
from resume_ia.db.session import get_db
from resume_ia.schemas.preferences import PreferencesOut, PreferencesUpdate
from resume_ia.schemas.account import AccountOut
from resume_ia.services.preferences import get_preferences, update_preferences

router = APIRouter(prefix="/me/preferences")


@router.get("", response_model=PreferencesOut)
def read_preferences(account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    return get_preferences(db, account.account_id)


@router.put("", response_model=PreferencesOut)
def write_preferences(
    payload: PreferencesUpdate,
    account: AccountOut = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    return update_preferences(db, account.account_id, payload)
