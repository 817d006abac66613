from datetime import datetime
from pydantic import BaseModel


class AudioAssetOut(BaseModel):
    id: int
    summary_id: str
    language: str
    format: str
    created_at: datetime

    class Config:
        from_attributes = True
