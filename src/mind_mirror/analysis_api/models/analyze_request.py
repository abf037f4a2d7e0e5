from typing import Optional
from pydantic import BaseModel, Field

class AnalyzeRequest(BaseModel):
    text: Optional[str] = Field(default=None, description="Text to analyze")
