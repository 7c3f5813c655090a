from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List, Literal, Optional


class ChatTurn(BaseModel):
    """One recorded turn of caller-owned history. The web client tags model turns as 'ai'."""
    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value):
        if isinstance(value, str) and value.strip().lower() == "ai":
            return "assistant"
        return value


class ChatRequest(BaseModel):
    message: str
    history: List[ChatTurn] = Field(default_factory=list)
    stream: bool = False


class Headings(BaseModel):
    h1: str = ""
    h2: str = ""


class ExtractionResult(BaseModel):
    source_url: str
    title: str = ""
    headings: Headings = Field(default_factory=Headings)
    meta_description: str = ""
    body_text: str = ""
    extractor_used: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return bool(self.body_text) and self.error is None


class SourceInfo(BaseModel):
    url: str
    extractorUsed: Optional[str] = None
    error: Optional[str] = None


class ChatResponse(BaseModel):
    message: str
    scrapedContentPreview: Optional[str] = None
    scrapeError: Optional[str] = None
    extractorUsed: Optional[str] = None


class ErrorResponse(BaseModel):
    message: str


class HealthCheckResponse(BaseModel):
    status: str
    message: str
    model: str
