from typing import List, Optional
from pydantic import BaseModel, Field


class FailureReport(BaseModel):
    path: str
    error_type: str
    message: str


class FormatReport(BaseModel):
    root: str
    success: bool
    files_formatted: int = 0
    original_size: int = 0
    formatted_size: int = 0
    size_delta: int = 0
    elapsed_seconds: float = 0.0
    failures: List[FailureReport] = Field(default_factory=list)
    error: Optional[str] = None
