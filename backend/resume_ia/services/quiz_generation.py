from resume_ia.core.config import settings
from resume_ia.core.errors import InputValidationError
from resume_ia.schemas.quiz import GenerateQuizInput, QuizData
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import QUIZ_SYSTEM, QUIZ_TEMPLATE

QUIZ_TOO_SHORT = "Le résumé est trop court pour générer un quiz. Veuillez fournir un résumé plus long."
QUIZ_ERROR = (
    "Le résumé fourni semble trop court ou trop complexe pour générer un quiz automatiquement. "
    "Veuillez essayer avec un résumé plus long."
)


def generate_quiz(payload: GenerateQuizInput) -> QuizData:
    summary_text = payload.summary_text.strip()
    if len(summary_text) < settings.min_quiz_source_chars:
        raise InputValidationError(QUIZ_TOO_SHORT)
    user_prompt = QUIZ_TEMPLATE.format(summary_text=summary_text)
    return run_structured_prompt(QUIZ_SYSTEM, user_prompt, QuizData, QUIZ_ERROR)
