import logging
from resume_ia.core.errors import FlowError
from resume_ia.schemas.flows import SummarizeTextInput, SummarizeTextOutput
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import SUMMARIZE_TEXT_SYSTEM, SUMMARIZE_TEXT_TEMPLATE, length_instruction

logger = logging.getLogger(__name__)

FALLBACK_SUMMARY = "Impossible de générer un résumé pour le texte fourni avec les options sélectionnées."


def summarize_text(payload: SummarizeTextInput) -> SummarizeTextOutput:
    """Summarize free text in French.

    Never raises for model-side problems: an empty, invalid or failed model
    answer yields ``FALLBACK_SUMMARY``.
    """
    user_prompt = SUMMARIZE_TEXT_TEMPLATE.format(
        length_instruction=length_instruction(payload.summary_length),
        text=payload.text,
    )
    try:
        output = run_structured_prompt(SUMMARIZE_TEXT_SYSTEM, user_prompt, SummarizeTextOutput, FALLBACK_SUMMARY)
    except FlowError as exc:
        logger.warning("Text summary fell back", extra={"reason": exc.message, "text_len": len(payload.text)})
        return SummarizeTextOutput(summary=FALLBACK_SUMMARY)
    if not output.summary.strip():
        return SummarizeTextOutput(summary=FALLBACK_SUMMARY)
    return output
