from fastapi import APIRouter, File, Form, UploadFile
from fastapi.responses import PlainTextResponse, Response
from starlette.concurrency import run_in_threadpool
from resume_ia.schemas.summary import (
    OutputFormat,
    ResultExportIn,
    ResultSpeechIn,
    SummaryLength,
    SummaryRequest,
    SummaryResult,
    TargetLanguage,
)
from resume_ia.core.errors import InputValidationError
from resume_ia.services.dispatcher import generate_summary_action
from resume_ia.services.rendering import download_filename, export_text
from resume_ia.services.tts_service import synthesize_mp3

router = APIRouter()

MAX_PDF_BYTES = 20 * 1024 * 1024


@router.post("/summaries:generate", response_model=SummaryResult)
def generate_summary(payload: SummaryRequest):
    if payload.input_type == "pdf":
        raise InputValidationError("Les fichiers PDF doivent être envoyés sur /summaries:generate-pdf.")
    return generate_summary_action(payload)


@router.post("/summaries:generate-pdf", response_model=SummaryResult)
async def generate_pdf_summary(
    file: UploadFile = File(...),
    output_format: OutputFormat = Form("resume"),
    target_language: TargetLanguage = Form("fr"),
    summary_length: SummaryLength = Form("moyen"),
):
    if not file.filename or not file.filename.lower().endswith(".pdf"):
        raise InputValidationError("Seuls les fichiers PDF sont acceptés.")
    content = await file.read()
    if len(content) > MAX_PDF_BYTES:
        raise InputValidationError("Le fichier PDF est trop volumineux (20 Mo maximum).")
    request = SummaryRequest(
        input_type="pdf",
        input_value=file.filename,
        output_format=output_format,
        target_language=target_language,
        summary_length=summary_length,
    )
    return await run_in_threadpool(generate_summary_action, request, pdf_bytes=content)


@router.post("/summaries:export", response_class=PlainTextResponse)
def export_result(payload: ResultExportIn):
    filename = download_filename(payload.title, payload.output_format, payload.target_language)
    return PlainTextResponse(
        export_text(payload.title, payload.content, payload.quiz_data),
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/summaries:tts")
def speak_result(payload: ResultSpeechIn):
    return Response(content=synthesize_mp3(payload.content, payload.target_language), media_type="audio/mpeg")
