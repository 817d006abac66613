import logging
import fitz
from resume_ia.core.config import settings

logger = logging.getLogger(__name__)


def extract_pdf_text(data: bytes, max_chars: int | None = None) -> str:
    """Return the plain text of a PDF, or an empty string when nothing can be read."""
    limit = max_chars or settings.max_source_chars
    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except (fitz.FileDataError, RuntimeError, ValueError) as exc:
        logger.warning("PDF could not be opened", extra={"error": str(exc), "size": len(data)})
        return ""
    parts = []
    total = 0
    try:
        if doc.needs_pass:
            logger.warning("PDF is password protected")
            return ""
        for page_index in range(doc.page_count):
            text = doc.load_page(page_index).get_text("text").strip()
            if not text:
                continue
            parts.append(text)
            total += len(text)
            if total >= limit:
                break
    finally:
        doc.close()
    return "\n".join(parts)[:limit]


def placeholder_narrative(file_name: str) -> str:
    return (
        f"Le traitement du fichier PDF « {file_name} » n'a pas pu extraire de contenu textuel. "
        "Veuillez réessayer ou vérifier le fichier. Si le problème persiste, "
        "le fichier est peut-être protégé, scanné sans reconnaissance de texte ou corrompu."
    )
