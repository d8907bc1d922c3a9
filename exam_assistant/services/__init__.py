"""Service layer exports."""

from .dispatcher import UpdateDispatcher
from .request_signer import SigningContext, extract_bucket_and_key, sign_get_request
from .webhook import WebhookResult, parse_update, process_webhook

__all__ = [
    "SigningContext",
    "UpdateDispatcher",
    "WebhookResult",
    "extract_bucket_and_key",
    "parse_update",
    "process_webhook",
    "sign_get_request",
]
