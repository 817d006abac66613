from pydantic import BaseModel, Field
from resume_ia.schemas.summary import SummaryLength, TargetLanguage


class SummarizeTextInput(BaseModel):
    text: str
    summary_length: SummaryLength = "moyen"


class SummarizeTextOutput(BaseModel):
    summary: str = Field(description="Le résumé du texte.")


class TranslateTextInput(BaseModel):
    text_to_translate: str
    target_language: TargetLanguage


class TranslateTextOutput(BaseModel):
    translated_text: str = Field(description="Le texte traduit.")


class SummarizeWikipediaInput(BaseModel):
    search_term: str = Field(min_length=1)
    summary_length: SummaryLength = "moyen"


class SummarizeWikipediaOutput(BaseModel):
    summary: str
    article_title: str
    article_url: str


class SummarizeYouTubeInput(BaseModel):
    youtube_video_url: str
    summary_length: SummaryLength = "moyen"


class SummarizeYouTubeOutput(BaseModel):
    summary: str
    video_title: str | None = None
    video_url: str | None = None
