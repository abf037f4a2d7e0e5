from typing import List, Dict, Any
from pydantic import BaseModel, ConfigDict, Field

class ModelsResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = Field(default=True, description="Whether the catalog was listed")
    models: List[Dict[str, Any]] = Field(..., description="Model catalog from the provider")
    api_version: str = Field(..., alias="apiVersion", description="Configured API version")
    current_model: str = Field(..., alias="currentModel", description="Configured default model")
    base_url: str = Field(..., alias="baseUrl", description="Configured provider base URL")
