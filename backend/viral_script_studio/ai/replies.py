"""Structured reply contracts for the two model calls."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AnalysisReply(BaseModel):
    model_config = ConfigDict(extra="forbid")

    structuralAnalysis: list[str] = Field(
        min_length=1, description="3-5 bullets describing the script's structure"
    )
    tone: str = Field(description="Overall tone and manner")
    hookStrategy: str = Field(description="How the opening grabs attention")
    suggestedTopics: list[str] = Field(
        min_length=4, max_length=4, description="Four new topics that fit the same formula"
    )


class GenerationReply(BaseModel):
    model_config = ConfigDict(extra="forbid")

    title: str = Field(description="Click-worthy title")
    script: str = Field(description="Full rewritten script as markdown")

    @field_validator("script")
    @classmethod
    def _script_has_text(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("script must not be empty")
        return value
