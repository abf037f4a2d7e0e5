from pydantic import BaseModel, Field
from mind_mirror.analysis_api.models.analysis_result import AnalysisResult

class AnalyzeResponse(BaseModel):
    success: bool = Field(default=True, description="Whether the analysis succeeded")
    analysis: AnalysisResult = Field(..., description="Normalized analysis")
