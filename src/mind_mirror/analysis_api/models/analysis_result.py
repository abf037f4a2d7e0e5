from typing import List
from pydantic import BaseModel, Field

class AnalysisResult(BaseModel):
    sentiment: str = Field(..., description="Overall sentiment label")
    themes: List[str] = Field(..., description="Recurring themes, in the order the model gave them")
    tone: str = Field(..., description="Short description of the tone")
    summary: str = Field(..., description="Neutral summary of the text")
