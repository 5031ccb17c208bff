from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CorrectionRequest(BaseModel):
    code: str
    language: str
    description: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class CorrectionResponse(BaseModel):
    correctedCode: str
    explanation: str
    issues: List[str] = Field(default_factory=list)


class ErrorResponse(BaseModel):
    error: str
    details: Optional[str] = None


class Language(BaseModel):
    value: str
    label: str
    extension: str
