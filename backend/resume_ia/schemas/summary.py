from datetime import datetime
from typing import Literal
from pydantic import BaseModel, Field
from resume_ia.schemas.quiz import QuizData
from resume_ia.schemas.revision import RevisionSheetData

InputType = Literal["text", "youtube", "pdf", "wikipedia"]
OutputFormat = Literal["resume", "fiche", "qcm", "audio"]
TargetLanguage = Literal["fr", "en", "es", "de", "it", "pt", "ja", "ko"]
SummaryLength = Literal["court", "moyen", "long", "detaille"]


class SummaryRequest(BaseModel):
    input_type: InputType
    input_value: str
    output_format: OutputFormat = "resume"
    target_language: TargetLanguage = "fr"
    summary_length: SummaryLength = "moyen"


class SummaryResult(BaseModel):
    title: str
    content: str
    quiz_data: QuizData | None = None
    revision_data: RevisionSheetData | None = None
    source_url: str | None = None


class SavedSummaryCreate(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    content: str
    quiz_data: QuizData | None = None
    revision_data: RevisionSheetData | None = None
    input_type: InputType = "text"
    input_value: str = ""
    output_format: OutputFormat = "resume"
    target_language: TargetLanguage = "fr"
    summary_length: SummaryLength = "moyen"
    source_url: str | None = None


class SavedSummaryOut(BaseModel):
    id: str
    account_id: str
    title: str
    content: str
    quiz_data: QuizData | None = None
    revision_data: RevisionSheetData | None = None
    input_type: InputType
    input_value: str
    output_format: OutputFormat
    target_language: TargetLanguage
    summary_length: SummaryLength
    source_url: str | None = None
    created_at: datetime

    class Config:
        from_attributes = True


class ResultExportIn(BaseModel):
    title: str = Field(min_length=1, max_length=512)
    content: str
    quiz_data: QuizData | None = None
    output_format: OutputFormat = "resume"
    target_language: TargetLanguage = "fr"


class ResultSpeechIn(BaseModel):
    content: str = Field(min_length=1)
    target_language: TargetLanguage = "fr"
