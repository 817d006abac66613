"""Prompt templates for every AI operation.

Templates are plain ``str.format`` strings; the flow modules fill them with
validated input fields. Length instructions and language names are fixed
lookup tables.
"""

import json
from pydantic import BaseModel

DEFAULT_SUMMARY_LENGTH = "moyen"

LENGTH_INSTRUCTIONS = {
    "court": "Génère un résumé très concis en 2-3 phrases essentielles.",
    "moyen": "Génère un résumé d'un paragraphe complet, bien structuré et facile à lire.",
    "long": "Génère un résumé détaillé en 2-3 paragraphes, couvrant les aspects importants du texte.",
    "detaille": (
        "Génère une analyse détaillée avec des points clés clairement identifiés. "
        "Si pertinent, utilise des titres ou des listes à puces pour structurer les points clés."
    ),
}

LANGUAGE_NAMES = {
    "fr": "French",
    "en": "English",
    "es": "Spanish",
    "de": "German",
    "it": "Italian",
    "pt": "Portuguese",
    "ja": "Japanese",
    "ko": "Korean",
}

LANGUAGE_DISPLAY_NAMES = {
    "fr": "Français",
    "en": "Anglais",
    "es": "Espagnol",
    "de": "Allemand",
    "it": "Italien",
    "pt": "Portugais",
    "ja": "Japonais",
    "ko": "Coréen",
}


def length_instruction(summary_length: str | None) -> str:
    return LENGTH_INSTRUCTIONS.get(summary_length or "", LENGTH_INSTRUCTIONS[DEFAULT_SUMMARY_LENGTH])


SUMMARIZE_TEXT_SYSTEM = "Tu es un assistant qui résume fidèlement des textes en français. N'invente aucun détail."

SUMMARIZE_TEXT_TEMPLATE = """Résume le texte suivant en français.
Instruction pour la longueur et le style du résumé : {length_instruction}

Texte à résumer :
{text}
"""

SUMMARIZE_WIKIPEDIA_TEMPLATE = """Résume le texte suivant, qui provient d'un article Wikipédia, en français.
Instruction pour la longueur et le style du résumé : {length_instruction}

Texte de l'article à résumer :
{article_content}
"""

YOUTUBE_SYSTEM = "Vous êtes un assistant IA expert dans la synthèse de contenu vidéo."

YOUTUBE_TRANSCRIPT_TEMPLATE = """Le titre de la vidéo est "{video_title}".
Votre tâche est de générer un résumé en français de la transcription de la vidéo YouTube fournie ci-dessous.

Instruction pour la longueur et le style du résumé : {length_instruction}

---
Transcription de la vidéo :
{transcript}
---

Générez le résumé maintenant.
"""

YOUTUBE_METADATA_TEMPLATE = """La transcription de cette vidéo n'est pas disponible. Votre tâche est de générer un résumé en français basé UNIQUEMENT sur le titre et la description de la vidéo.

Instruction pour la longueur et le style du résumé : {length_instruction}

---
Titre : {video_title}
Description : {video_description}
---

Générez le résumé maintenant, et mentionnez que la transcription n'était pas disponible.
"""

TRANSLATE_SYSTEM = "You are a professional translator."

TRANSLATE_TEMPLATE = """Translate the following text into {target_language_name}.
The original text is likely in French.
IMPORTANT: If the text contains HTML tags (like <h2>, <p>, <ul>, <li>, <strong>, <dt>, <dd>), you MUST preserve these tags in their correct positions in the translated output. Only translate the text content within the tags.
Provide only the translated text, without any introductory phrases like "Here is the translation:" or markdown formatting.

Text to translate:
{text_to_translate}
"""

QUIZ_SYSTEM = """Vous êtes un assistant IA expert dans la création de contenu pédagogique. Votre tâche est de générer un quiz à choix multiples (QCM) basé sur le texte de résumé fourni.
Le quiz doit contenir entre 3 et 5 questions pertinentes qui testent la compréhension du résumé.
Chaque question doit avoir 3 ou 4 options de réponse. Une seule option doit être correcte.
Variez le style des questions : certaines peuvent porter sur des faits directs, d'autres sur des déductions ou des concepts clés.
Fournissez une brève explication pour chaque bonne réponse si cela semble pertinent.
Les `id` des questions (ex: "q1", "q2") et des options (ex: "q1a", "q1b", "q1c") doivent être uniques au sein de leur contexte.
L'identifiant de l'option correcte (correct_answer_id) doit correspondre à l'un des identifiants des options de cette question."""

QUIZ_TEMPLATE = """Voici le résumé sur lequel baser le quiz :

{summary_text}

Générez le quiz QCM en respectant scrupuleusement le format JSON et les contraintes spécifiées dans les instructions système.
"""

REVISION_SHEET_SYSTEM = """You are an expert in creating educational content. Your task is to generate a structured revision sheet in French based on the provided text.
The revision sheet must contain three distinct sections:
1. summary: A brief summary of the main ideas.
2. key_points: The most important facts, concepts, or takeaways. There should be between 3 and 7 key points.
3. qa_pairs: A set of 3 to 5 relevant questions with their corresponding answers to test comprehension."""

REVISION_SHEET_TEMPLATE = """Générez la fiche de révision en français à partir du texte suivant :

{source_text}
"""


def with_output_schema(system_prompt: str, output_model: type[BaseModel]) -> str:
    schema = json.dumps(output_model.model_json_schema(), ensure_ascii=False)
    return (
        f"{system_prompt}\n\n"
        "Vous devez impérativement retourner un unique objet JSON valide conforme au schéma JSON suivant, "
        "sans texte ni balise markdown autour :\n"
        f"{schema}"
    )
