"""HTML fragments for summary results and their plain-text export."""

import re
import unicodedata
from html import escape
from bs4 import BeautifulSoup
from resume_ia.schemas.quiz import QuizData
from resume_ia.schemas.revision import RevisionSheetData

HEADING_STYLE = "font-size: 1.2em; font-weight: bold; margin-bottom: 0.5em;"
BULLET_RE = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s+")
SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?…])\s+")
MAX_KEY_POINTS = 5


def _paragraphs(text: str) -> str:
    blocks = [block.strip() for block in re.split(r"\n\s*\n", text) if block.strip()]
    return "".join(f"<p>{escape(block).replace(chr(10), '<br/>')}</p>" for block in blocks)


def _strip_markdown(text: str) -> str:
    return text.replace("**", "").replace("__", "").strip()


def extract_key_points(summary: str, limit: int = MAX_KEY_POINTS) -> tuple[str, list[str]]:
    """Split a summary into its prose and a list of key points.

    Bullet lines become the key points; without bullets the leading sentences
    of the summary are used.
    """
    prose_lines = []
    bullets = []
    for line in summary.splitlines():
        if BULLET_RE.match(line):
            bullets.append(_strip_markdown(BULLET_RE.sub("", line)))
        else:
            prose_lines.append(line)
    prose = "\n".join(prose_lines).strip()
    if bullets:
        return prose, [point for point in bullets if point][:limit]
    sentences = [sentence.strip() for sentence in SENTENCE_SPLIT_RE.split(_strip_markdown(prose)) if sentence.strip()]
    return prose, sentences[:limit]


def render_summary_html(summary: str) -> str:
    prose, key_points = extract_key_points(summary)
    points_html = "".join(f"<li>{escape(point)}</li>" for point in key_points)
    return (
        f'<h3 style="{HEADING_STYLE}">Résumé</h3>'
        f"{_paragraphs(prose or summary)}"
        f'<h3 style="{HEADING_STYLE} margin-top: 1.2em;">Points clés</h3>'
        f"<ul>{points_html}</ul>"
    )


def render_revision_sheet_html(sheet: RevisionSheetData) -> str:
    key_points_html = "".join(f"<li>{escape(point)}</li>" for point in sheet.key_points)
    qa_pairs_html = "".join(
        f"<dt><strong>{escape(qa.question)}</strong></dt><dd>{escape(qa.answer)}</dd>" for qa in sheet.qa_pairs
    )
    return (
        f'<h3 style="{HEADING_STYLE}">Résumé</h3>'
        f"{_paragraphs(sheet.summary)}"
        f'<h3 style="{HEADING_STYLE} margin-top: 1.2em;">Points clés à retenir</h3>'
        f"<ul>{key_points_html}</ul>"
        f'<h3 style="{HEADING_STYLE} margin-top: 1.2em;">Questions &amp; Réponses</h3>'
        f'<dl style="display: grid; grid-template-columns: auto; gap: 0.75em;">{qa_pairs_html}</dl>'
    )


def render_quiz_context_html(summary: str) -> str:
    return f'<div class="quiz-context" style="max-height: 200px; overflow-y: auto;">{_paragraphs(summary)}</div>'


def render_audio_context_html(summary: str) -> str:
    return (
        '<h4 style="font-weight: bold; margin-bottom: 0.5em;">🎧 Version Audio</h4>'
        "<p>Utilisez le bouton « Écouter le résumé » pour entendre la synthèse vocale du résumé.</p>"
        "<p>Contenu textuel du résumé :</p>"
        '<blockquote style="border-left: 4px solid #ccc; padding-left: 1em; margin-left: 0; font-style: italic;">'
        f"{_paragraphs(summary)}"
        "</blockquote>"
    )


def html_to_text(content: str) -> str:
    soup = BeautifulSoup(content or "", "html.parser")
    return soup.get_text("\n", strip=True)


def quiz_to_text(quiz: QuizData) -> str:
    lines = []
    for index, question in enumerate(quiz.questions, start=1):
        lines.append(f"{index}. {question.question_text}")
        for option in question.options:
            marker = "*" if option.id == question.correct_answer_id else "-"
            lines.append(f"   {marker} {option.text}")
        if question.explanation:
            lines.append(f"   Explication : {question.explanation}")
    return "\n".join(lines)


def export_text(title: str, content: str, quiz: QuizData | None = None) -> str:
    parts = [title, "", html_to_text(content)]
    if quiz:
        parts.extend(["", "QCM", quiz_to_text(quiz)])
    return "\n".join(parts).strip() + "\n"


def download_filename(title: str, output_format: str, target_language: str) -> str:
    ascii_title = unicodedata.normalize("NFKD", title).encode("ascii", "ignore").decode("ascii")
    safe_title = re.sub(r"[^a-z0-9]+", "_", ascii_title.lower()).strip("_") or "resume"
    return f"{safe_title}_{output_format}_{target_language}.txt"
