from fastapi import APIRouter
from resume_ia.schemas.flows import (
    SummarizeTextInput,
    SummarizeTextOutput,
    SummarizeWikipediaInput,
    SummarizeWikipediaOutput,
    SummarizeYouTubeInput,
    SummarizeYouTubeOutput,
    TranslateTextInput,
    TranslateTextOutput,
)
from resume_ia.schemas.quiz import GenerateQuizInput, QuizData
from resume_ia.schemas.revision import GenerateRevisionSheetInput, RevisionSheetData
from resume_ia.services.quiz_generation import generate_quiz
from resume_ia.services.revision_sheet import generate_revision_sheet
from resume_ia.services.text_summary import summarize_text
from resume_ia.services.translation import translate_text
from resume_ia.services.wikipedia_summary import summarize_wikipedia_article
from resume_ia.services.youtube_summary import summarize_youtube_video

router = APIRouter(prefix="/flows")


@router.post("/summarize-text", response_model=SummarizeTextOutput)
def summarize_text_flow(payload: SummarizeTextInput):
    return summarize_text(payload)


@router.post("/translate", response_model=TranslateTextOutput)
def translate_flow(payload: TranslateTextInput):
    return translate_text(payload)


@router.post("/quiz", response_model=QuizData)
def quiz_flow(payload: GenerateQuizInput):
    return generate_quiz(payload)


@router.post("/revision-sheet", response_model=RevisionSheetData)
def revision_sheet_flow(payload: GenerateRevisionSheetInput):
    return generate_revision_sheet(payload)


@router.post("/wikipedia", response_model=SummarizeWikipediaOutput)
def wikipedia_flow(payload: SummarizeWikipediaInput):
    return summarize_wikipedia_article(payload)


@router.post("/youtube", response_model=SummarizeYouTubeOutput)
def youtube_flow(payload: SummarizeYouTubeInput):
    return summarize_youtube_video(payload)
