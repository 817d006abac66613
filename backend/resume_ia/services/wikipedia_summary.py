import logging
from resume_ia.core.config import settings
from resume_ia.core.errors import FlowError
from resume_ia.schemas.flows import SummarizeTextOutput, SummarizeWikipediaInput, SummarizeWikipediaOutput
from resume_ia.services.flow_runner import run_structured_prompt
from resume_ia.services.prompts import SUMMARIZE_TEXT_SYSTEM, SUMMARIZE_WIKIPEDIA_TEMPLATE, length_instruction
from resume_ia.services.wikipedia import get_wikipedia_page_content, search_wikipedia

logger = logging.getLogger(__name__)


def summarize_wikipedia_article(payload: SummarizeWikipediaInput) -> SummarizeWikipediaOutput:
    search_result = search_wikipedia(payload.search_term)
    if not search_result:
        raise FlowError(f"Aucun article Wikipédia trouvé pour « {payload.search_term} ».")

    article_content = get_wikipedia_page_content(search_result.title)
    if not article_content:
        raise FlowError(f"Impossible de récupérer le contenu de l'article Wikipédia « {search_result.title} ».")

    logger.info("Summarizing Wikipedia article", extra={"title": search_result.title, "chars": len(article_content)})
    user_prompt = SUMMARIZE_WIKIPEDIA_TEMPLATE.format(
        length_instruction=length_instruction(payload.summary_length),
        article_content=article_content[: settings.max_source_chars],
    )
    output = run_structured_prompt(
        SUMMARIZE_TEXT_SYSTEM,
        user_prompt,
        SummarizeTextOutput,
        "La génération du résumé de l'article Wikipédia a échoué.",
    )
    if not output.summary.strip():
        raise FlowError("La génération du résumé de l'article Wikipédia a échoué.")
    return SummarizeWikipediaOutput(
        summary=output.summary,
        article_title=search_result.title,
        article_url=search_result.url,
    )
