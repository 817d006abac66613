import logging
from resume_ia.core.config import settings
from resume_ia.core.errors import FlowError, InputValidationError
from resume_ia.schemas.flows import SummarizeTextOutput, SummarizeYouTubeInput, SummarizeYouTubeOutput
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import (
    YOUTUBE_METADATA_TEMPLATE,
    YOUTUBE_SYSTEM,
    YOUTUBE_TRANSCRIPT_TEMPLATE,
    length_instruction,
)
from resume_ia.services.youtube import get_video_details, get_youtube_transcript, parse_youtube_video_id, watch_url

logger = logging.getLogger(__name__)


def summarize_youtube_video(payload: SummarizeYouTubeInput) -> SummarizeYouTubeOutput:
    video_id = parse_youtube_video_id(payload.youtube_video_url)
    if not video_id:
        raise InputValidationError("L'URL de la vidéo YouTube est invalide ou l'ID n'a pas pu être extrait.")

    instruction = length_instruction(payload.summary_length)
    transcript = get_youtube_transcript(video_id)
    details = get_video_details(video_id)
    video_title = details.title if details else "Titre inconnu"

    if transcript:
        logger.info("Summarizing YouTube transcript", extra={"video_id": video_id, "chars": len(transcript)})
        user_prompt = YOUTUBE_TRANSCRIPT_TEMPLATE.format(
            video_title=video_title,
            length_instruction=instruction,
            transcript=transcript[: settings.max_source_chars],
        )
        error_message = "La génération du résumé à partir de la transcription a échoué."
    elif details and details.description:
        logger.warning("No transcript, falling back to metadata", extra={"video_id": video_id})
        description = details.description
        if details.tags:
            description = f"{description}\nMots-clés : {', '.join(details.tags)}"
        user_prompt = YOUTUBE_METADATA_TEMPLATE.format(
            video_title=video_title,
            video_description=description,
            length_instruction=instruction,
        )
        error_message = "La génération du résumé à partir des métadonnées a échoué."
    else:
        raise FlowError(
            "Impossible de récupérer la transcription ou les détails de la vidéo. Le résumé ne peut pas être généré."
        )

    output = run_structured_prompt(YOUTUBE_SYSTEM, user_prompt, SummarizeTextOutput, error_message)
    if not output.summary.strip():
        raise FlowError(error_message)
    return SummarizeYouTubeOutput(
        summary=output.summary,
        video_title=details.title if details else None,
        video_url=watch_url(video_id),
    )
