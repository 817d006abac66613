from pydantic import BaseModel, Field


class QAPair(BaseModel):
    question: str = Field(min_length=1, description="Une question pertinente sur le texte.")
    answer: str = Field(min_length=1, description="La réponse correspondante.")


class RevisionSheetData(BaseModel):
    summary: str = Field(min_length=1, description="Un résumé concis du texte source.")
    key_points: list[str] = Field(min_length=3, max_length=7, description="3 à 7 points clés à retenir.")
    qa_pairs: list[QAPair] = Field(min_length=3, max_length=5, description="3 à 5 paires question/réponse.")


class GenerateRevisionSheetInput(BaseModel):
    source_text: str
