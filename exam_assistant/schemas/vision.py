"""
Request and response records for the Yandex Vision OCR recognizeText call.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RecognizeTextRequest(BaseModel):
    """Body sent to the OCR endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    language_codes: List[str] = Field(default_factory=lambda: ["*"], alias="languageCodes")
    model: str = "page"
    content: str = Field(..., description="Base64-encoded image bytes.")


class TextLine(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str = ""


class TextBlock(BaseModel):
    model_config = ConfigDict(extra="ignore")

    lines: List[TextLine] = Field(default_factory=list)


class TextAnnotation(BaseModel):
    model_config = ConfigDict(extra="ignore")

    blocks: List[TextBlock] = Field(default_factory=list)


class RecognitionResult(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    text_annotation: TextAnnotation = Field(
        default_factory=TextAnnotation, alias="textAnnotation"
    )


class RecognizeTextResponse(BaseModel):
    """Envelope returned by the OCR endpoint."""

    model_config = ConfigDict(extra="ignore")

    result: RecognitionResult = Field(default_factory=RecognitionResult)

    @property
    def blocks(self) -> List[TextBlock]:
        return self.result.text_annotation.blocks


__all__ = [
    "RecognitionResult",
    "RecognizeTextRequest",
    "RecognizeTextResponse",
    "TextAnnotation",
    "TextBlock",
    "TextLine",
]
