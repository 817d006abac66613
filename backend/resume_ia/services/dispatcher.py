"""Turn a summary request coming from the UI into a display-ready result.

Pipeline: base summary from the source, output-format rendering, optional
translation, optional quiz. Input validation happens before any network call.
"""

import logging
from resume_ia.core.config import settings
from resume_ia.core.errors import InputValidationError
from resume_ia.schemas.flows import SummarizeTextInput, SummarizeWikipediaInput, SummarizeYouTubeInput, TranslateTextInput
from resume_ia.schemas.quiz import GenerateQuizInput, QuizData
from resume_ia.schemas.revision import GenerateRevisionSheetInput, RevisionSheetData
from resume_ia.schemas.summary import SummaryRequest, SummaryResult
from resume_ia.services.pdf_extraction import extract_pdf_text, placeholder_narrative
from resume_ia.services.prompts import LANGUAGE_DISPLAY_NAMES
from resume_ia.services.quiz_generation import generate_quiz
from resume_ia.services.rendering import (
    render_audio_context_html,
    render_quiz_context_html,
    render_revision_sheet_html,
    render_summary_html,
)
from resume_ia.services.revision_sheet import generate_revision_sheet
from resume_ia.services.text_summary import summarize_text
from resume_ia.services.translation import translate_text
from resume_ia.services.wikipedia_summary import summarize_wikipedia_article
from resume_ia.services.youtube import looks_like_youtube_url
from resume_ia.services.youtube_summary import summarize_youtube_video

logger = logging.getLogger(__name__)

OUTPUT_FORMAT_LABELS = {
    "resume": "Résumé",
    "fiche": "Fiche de révision",
    "qcm": "QCM",
    "audio": "Version Audio",
}


def validate_request(request: SummaryRequest) -> None:
    value = request.input_value.strip()
    # padding counts toward the minimum
    if request.input_type == "text" and (len(request.input_value) < settings.min_text_length or not value):
        raise InputValidationError(f"Le texte doit contenir au moins {settings.min_text_length} caractères.")
    if request.input_type == "youtube" and not looks_like_youtube_url(value):
        raise InputValidationError("Veuillez entrer une URL YouTube valide.")
    if request.input_type == "wikipedia" and not value:
        raise InputValidationError("Veuillez saisir un terme de recherche Wikipédia.")
    if request.input_type == "pdf" and not value:
        raise InputValidationError("Veuillez sélectionner un fichier PDF.")


def _base_summary(request: SummaryRequest, pdf_bytes: bytes | None) -> tuple[str, str, str | None]:
    """Return (summary, source name, source url) for the request's source."""
    value = request.input_value.strip()
    if request.input_type == "text":
        result = summarize_text(SummarizeTextInput(text=value, summary_length=request.summary_length))
        return result.summary, "Texte personnalisé", None
    if request.input_type == "youtube":
        result = summarize_youtube_video(
            SummarizeYouTubeInput(youtube_video_url=value, summary_length=request.summary_length)
        )
        return result.summary, result.video_title or "Vidéo YouTube", result.video_url
    if request.input_type == "wikipedia":
        result = summarize_wikipedia_article(
            SummarizeWikipediaInput(search_term=value, summary_length=request.summary_length)
        )
        return result.summary, f"Wikipédia : {result.article_title}", result.article_url

    extracted = extract_pdf_text(pdf_bytes) if pdf_bytes else ""
    if extracted.strip():
        result = summarize_text(SummarizeTextInput(text=extracted, summary_length=request.summary_length))
        return result.summary, value, None
    logger.warning("PDF without extractable text, using placeholder", extra={"file_name": value})
    return placeholder_narrative(value), f"{value} (Erreur d'extraction)", None


def _translate(text: str, target_language: str) -> str:
    return translate_text(TranslateTextInput(text_to_translate=text, target_language=target_language)).translated_text


def generate_summary_action(request: SummaryRequest, pdf_bytes: bytes | None = None) -> SummaryResult:
    validate_request(request)
    summary, source_name, source_url = _base_summary(request, pdf_bytes)

    translating = request.target_language != "fr"
    translated_label = ""
    if translating:
        language = LANGUAGE_DISPLAY_NAMES.get(request.target_language, request.target_language)
        translated_label = f" (Traduit en {language})"
    title = f"{OUTPUT_FORMAT_LABELS[request.output_format]} - {source_name}{translated_label}"

    quiz_data: QuizData | None = None
    revision_data: RevisionSheetData | None = None

    if request.output_format == "fiche":
        revision_data = generate_revision_sheet(GenerateRevisionSheetInput(source_text=summary))
        content = render_revision_sheet_html(revision_data)
        if translating:
            content = _translate(content, request.target_language)
    elif request.output_format in ("qcm", "audio"):
        view_summary = _translate(summary, request.target_language) if translating else summary
        if request.output_format == "qcm":
            quiz_data = generate_quiz(GenerateQuizInput(summary_text=view_summary))
            content = render_quiz_context_html(view_summary)
        else:
            content = render_audio_context_html(view_summary)
    else:
        content = render_summary_html(summary)
        if translating:
            content = _translate(content, request.target_language)

    logger.info(
        "Summary generated",
        extra={
            "input_type": request.input_type,
            "output_format": request.output_format,
            "target_language": request.target_language,
        },
    )
    return SummaryResult(
        title=title,
        content=content,
        quiz_data=quiz_data,
        revision_data=revision_data,
        source_url=source_url,
    )
