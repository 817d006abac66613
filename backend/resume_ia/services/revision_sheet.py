from resume_ia.core.errors import InputValidationError
from resume_ia.schemas.revision import GenerateRevisionSheetInput, RevisionSheetData
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import REVISION_SHEET_SYSTEM, REVISION_SHEET_TEMPLATE

REVISION_SHEET_ERROR = "La génération de la fiche de révision n'a pas produit de résultat exploitable."


def generate_revision_sheet(payload: GenerateRevisionSheetInput) -> RevisionSheetData:
    source_text = payload.source_text.strip()
    if not source_text:
        raise InputValidationError("Le texte source de la fiche de révision est vide.")
    user_prompt = REVISION_SHEET_TEMPLATE.format(source_text=source_text)
    return run_structured_prompt(REVISION_SHEET_SYSTEM, user_prompt, RevisionSheetData, REVISION_SHEET_ERROR)
