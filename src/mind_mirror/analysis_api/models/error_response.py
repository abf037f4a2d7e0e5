from pydantic import BaseModel, Field

class ErrorResponse(BaseModel):
    success: bool = Field(default=False, description="Always false for errors")
    error: str = Field(..., description="Human readable error message")
