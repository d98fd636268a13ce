# backend/app/models.py

from pydantic import BaseModel, Field


class SectionScore(BaseModel):
    score: float = 0
    message: str = "N/A"


class AnalysisMetadata(BaseModel):
    summary: str = "No summary."
    restrictedItems: SectionScore = Field(default_factory=SectionScore)
    productPages: SectionScore = Field(default_factory=SectionScore)
    ownership: SectionScore = Field(default_factory=SectionScore)
    overallSafety: SectionScore = Field(default_factory=SectionScore)


class ScreenshotAnalysis(BaseModel):
    score: float = 0
    metadata: AnalysisMetadata = Field(default_factory=AnalysisMetadata)


class AnalysisResponse(BaseModel):
    message: str
    screenshotAnalysis: ScreenshotAnalysis


class ErrorResponse(BaseModel):
    error: str


class Alert(BaseModel):
    type: str
    message: str
    timestamp: int  # ms since epoch
