"""Exception hierarchy shared by the clients and the dispatcher."""


class ExamAssistantError(Exception):
    """Base class for failures raised by the assistant's collaborators."""


class MalformedUpdateError(ExamAssistantError):
    """Raised when an inbound webhook body cannot be decoded into an update."""


class InstructionFetchError(ExamAssistantError):
    """Raised when the instruction document cannot be retrieved."""


class InstructionPathError(InstructionFetchError):
    """Raised when the configured instruction URL lacks a bucket or object key."""


class VisionServiceError(ExamAssistantError):
    """Raised when the OCR service call fails or returns an unreadable body."""


class TextNotFoundError(VisionServiceError):
    """Raised when OCR succeeds but reports no text blocks."""


class CompletionServiceError(ExamAssistantError):
    """Raised when the completion service call fails or returns an unreadable body."""


class NoAlternativesError(CompletionServiceError):
    """Raised when the completion service returns zero alternatives."""


class TelegramFileError(ExamAssistantError):
    """Raised when a Telegram file cannot be resolved or downloaded."""


__all__ = [
    "CompletionServiceError",
    "ExamAssistantError",
    "InstructionFetchError",
    "InstructionPathError",
    "MalformedUpdateError",
    "NoAlternativesError",
    "TelegramFileError",
    "TextNotFoundError",
    "VisionServiceError",
]
