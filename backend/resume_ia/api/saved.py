import os
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse
from sqlalchemy.orm import Session
from resume_ia.api.deps import get_current_account
from resume_ia.db.session import get_db
from resume_ia.schemas.audio import AudioAssetOut
from resume_ia.schemas.quiz import QuizData
from resume_ia.schemas.summary import SavedSummaryCreate, SavedSummaryOut
from resume_ia.schemas.account import AccountOut
from resume_ia.services.rendering import download_filename, export_text
from resume_ia.services.summary_store import delete_summary, get_summary, list_summaries, save_summary
from resume_ia.services.tts_service import generate_audio, latest_audio

router = APIRouter(prefix="/me/summaries")


def _owned_summary(summary_id: str, account: AccountOut, db: Session):
    summary = get_summary(db, account.account_id, summary_id)
    if not summary:
        raise HTTPException(status_code=404, detail="Résumé introuvable.")
    return summary


@router.get("", response_model=list[SavedSummaryOut])
def list_saved_summaries(account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    return list_summaries(db, account.account_id)


@router.post("", response_model=SavedSummaryOut, status_code=201)
def create_saved_summary(
    payload: SavedSummaryCreate,
    account: AccountOut = Depends(get_current_account),
    db: Session = Depends(get_db),
):
    return save_summary(db, account.account_id, payload)


@router.get("/{summary_id}", response_model=SavedSummaryOut)
def get_saved_summary(summary_id: str, account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    return _owned_summary(summary_id, account, db)


@router.delete("/{summary_id}")
def delete_saved_summary(summary_id: str, account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    summary = _owned_summary(summary_id, account, db)
    delete_summary(db, summary)
    return {"status": "deleted"}


@router.get("/{summary_id}/export", response_class=PlainTextResponse)
def export_saved_summary(summary_id: str, account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    summary = _owned_summary(summary_id, account, db)
    quiz = QuizData.model_validate(summary.quiz_data) if summary.quiz_data else None
    filename = download_filename(summary.title, summary.output_format, summary.target_language)
    return PlainTextResponse(
        export_text(summary.title, summary.content, quiz),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/{summary_id}/tts", response_model=AudioAssetOut)
def synthesize_saved_summary(summary_id: str, account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    summary = _owned_summary(summary_id, account, db)
    return generate_audio(db, summary)


@router.get("/{summary_id}/audio")
def get_saved_summary_audio(summary_id: str, account: AccountOut = Depends(get_current_account), db: Session = Depends(get_db)):
    summary = _owned_summary(summary_id, account, db)
    audio = latest_audio(db, summary.id)
    if not audio or not os.path.exists(audio.file_path):
        raise HTTPException(status_code=404, detail="Audio introuvable.")
    return FileResponse(audio.file_path, media_type="audio/mpeg", filename=os.path.basename(audio.file_path))
