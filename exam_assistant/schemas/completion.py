"""
Request and response records for the YandexGPT completion call.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer


class CompletionOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stream: bool = False
    temperature: float = 0.1
    max_tokens: int = Field(1000, alias="maxTokens")

    @field_serializer("max_tokens")
    def _serialize_max_tokens(self, value: int) -> str:
        # int64 fields travel as strings in the foundation models JSON API.
        return str(value)


class CompletionMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Literal["system", "user", "assistant"]
    text: str


class CompletionRequest(BaseModel):
    """Body sent to the completion endpoint: one system turn, one user turn."""

    model_config = ConfigDict(populate_by_name=True)

    model_uri: str = Field(..., alias="modelUri")
    completion_options: CompletionOptions = Field(
        default_factory=CompletionOptions, alias="completionOptions"
    )
    messages: List[CompletionMessage]


class CompletionAlternative(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: CompletionMessage
    status: str | None = None


class CompletionResult(BaseModel):
    model_config = ConfigDict(extra="ignore")

    alternatives: List[CompletionAlternative] = Field(default_factory=list)


class CompletionResponse(BaseModel):
    """Envelope returned by the completion endpoint."""

    model_config = ConfigDict(extra="ignore")

    result: CompletionResult = Field(default_factory=CompletionResult)


__all__ = [
    "CompletionAlternative",
    "CompletionMessage",
    "CompletionOptions",
    "CompletionRequest",
    "CompletionResponse",
    "CompletionResult",
]
