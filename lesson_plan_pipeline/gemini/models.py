"""Gemini generateContent 요청/응답 데이터 모델."""

from __future__ import annotations
from typing import Optional
from pydantic import BaseModel, Field


# --- 요청 ---

class Part(BaseModel):
    text: str = ""


class Content(BaseModel):
    parts: list[Part] = Field(default_factory=list)
    role: Optional[str] = None


class GenerateContentRequest(BaseModel):
    """POST /models/{model}:generateContent 요청 바디."""
    contents: list[Content]

    @classmethod
    def from_prompt(cls, prompt: str) -> "GenerateContentRequest":
        return cls(contents=[Content(parts=[Part(text=prompt)])])


# --- 응답 ---

class Candidate(BaseModel):
    content: Optional[Content] = None
    finish_reason: Optional[str] = Field(None, alias="finishReason")

    model_config = {"populate_by_name": True}

    @property
    def text(self) -> str:
        if self.content is None:
            return ""
        return "".join(p.text for p in self.content.parts)


class PromptFeedback(BaseModel):
    block_reason: Optional[str] = Field(None, alias="blockReason")

    model_config = {"populate_by_name": True}


class UsageMetadata(BaseModel):
    prompt_token_count: int = Field(0, alias="promptTokenCount")
    candidates_token_count: int = Field(0, alias="candidatesTokenCount")
    total_token_count: int = Field(0, alias="totalTokenCount")

    model_config = {"populate_by_name": True}


class GenerateContentResponse(BaseModel):
    """generateContent 응답. 첫 번째 후보의 텍스트만 사용한다."""
    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: Optional[PromptFeedback] = Field(None, alias="promptFeedback")
    usage_metadata: Optional[UsageMetadata] = Field(None, alias="usageMetadata")

    model_config = {"populate_by_name": True}

    @property
    def text(self) -> str:
        return self.candidates[0].text if self.candidates else ""
