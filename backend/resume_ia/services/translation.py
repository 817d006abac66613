from resume_ia.core.errors import FlowError
from resume_ia.schemas.flows import TranslateTextInput, TranslateTextOutput
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import LANGUAGE_NAMES, TRANSLATE_SYSTEM, TRANSLATE_TEMPLATE

TRANSLATION_ERROR = "La traduction du contenu a échoué."


def translate_text(payload: TranslateTextInput) -> TranslateTextOutput:
    target_language_name = LANGUAGE_NAMES.get(payload.target_language, payload.target_language)
    user_prompt = TRANSLATE_TEMPLATE.format(
        target_language_name=target_language_name,
        text_to_translate=payload.text_to_translate,
    )
    output = run_structured_prompt(TRANSLATE_SYSTEM, user_prompt, TranslateTextOutput, TRANSLATION_ERROR)
    if not output.translated_text.strip():
        raise FlowError(TRANSLATION_ERROR)
    return output
