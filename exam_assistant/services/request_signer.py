"""
Signature V4 request signing for object storage GETs.

Only the unsigned-payload GET variant is supported: the canonical request always
carries the same three signed headers and the ``UNSIGNED-PAYLOAD`` marker.
"""

from __future__ import annotations

import hashlib
import hmac
from dataclasses import dataclass
from datetime import datetime, timezone

import httpx

from exam_assistant.core.errors import InstructionPathError

ALGORITHM = "AWS4-HMAC-SHA256"
UNSIGNED_PAYLOAD = "UNSIGNED-PAYLOAD"
SIGNED_HEADERS = "host;x-amz-content-sha256;x-amz-date"
_TERMINATOR = "aws4_request"


def sign(key: bytes, message: str) -> bytes:
    """Single HMAC-SHA256 step of the key derivation chain."""
    return hmac.new(key, message.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(secret_key: str, date: str, region: str, service: str) -> bytes:
    """Derive the scoped signing key for ``date``/``region``/``service``."""
    k_date = sign(f"AWS4{secret_key}".encode("utf-8"), date)
    k_region = sign(k_date, region)
    k_service = sign(k_region, service)
    return sign(k_service, _TERMINATOR)


def compute_signature(derived_key: bytes, string_to_sign: str) -> str:
    return sign(derived_key, string_to_sign).hex()


@dataclass(frozen=True, slots=True)
class SigningContext:
    """Inputs that fully determine a derived signing key and its scope."""

    secret_key: str
    date: str
    region: str
    service: str
    amz_date: str

    @classmethod
    def from_datetime(
        cls, *, secret_key: str, region: str, service: str, moment: datetime
    ) -> "SigningContext":
        """Build a context from one instant so date and amz_date never drift apart."""
        moment = moment.astimezone(timezone.utc)
        return cls(
            secret_key=secret_key,
            date=moment.strftime("%Y%m%d"),
            region=region,
            service=service,
            amz_date=moment.strftime("%Y%m%dT%H%M%SZ"),
        )

    @property
    def scope(self) -> str:
        return f"{self.date}/{self.region}/{self.service}/{_TERMINATOR}"

    def signing_key(self) -> bytes:
        return derive_signing_key(self.secret_key, self.date, self.region, self.service)


def _parse_url(raw_url: str) -> httpx.URL:
    try:
        return httpx.URL(raw_url)
    except httpx.InvalidURL as exc:
        raise InstructionPathError(f"Malformed object URL {raw_url!r}: {exc}") from exc


def extract_bucket_and_key(raw_url: str) -> tuple[str, str]:
    """Split a path-style object URL into its bucket and object key.

    ``https://host/bucket/a/b/c`` yields ``("bucket", "a/b/c")``. The key keeps
    the percent-encoded form httpx puts on the request line, so ``my file.txt``
    becomes ``my%20file.txt``.
    """
    raw_path = _parse_url(raw_url).raw_path.decode("ascii")
    path = raw_path.partition("?")[0].strip("/")
    parts = path.split("/") if path else []
    if len(parts) < 2:
        raise InstructionPathError(
            f"URL does not contain both bucket name and object key: {raw_url!r}"
        )
    return parts[0], "/".join(parts[1:])


def build_canonical_request(host: str, bucket: str, object_key: str, amz_date: str) -> str:
    canonical_headers = (
        f"host:{host}\n"
        f"x-amz-content-sha256:{UNSIGNED_PAYLOAD}\n"
        f"x-amz-date:{amz_date}\n"
    )
    return (
        f"GET\n/{bucket}/{object_key}\n\n"
        f"{canonical_headers}\n{SIGNED_HEADERS}\n{UNSIGNED_PAYLOAD}"
    )


def build_string_to_sign(amz_date: str, scope: str, canonical_request: str) -> str:
    digest = hashlib.sha256(canonical_request.encode("utf-8")).hexdigest()
    return f"{ALGORITHM}\n{amz_date}\n{scope}\n{digest}"


def build_authorization_header(access_key: str, scope: str, signature: str) -> str:
    return (
        f"{ALGORITHM} Credential={access_key}/{scope}, "
        f"SignedHeaders={SIGNED_HEADERS}, Signature={signature}"
    )


def sign_get_request(url: str, *, access_key: str, context: SigningContext) -> dict[str, str]:
    """Return the headers that authenticate an unsigned-payload GET of ``url``."""
    bucket, object_key = extract_bucket_and_key(url)
    host = _parse_url(url).netloc.decode("ascii")
    if not host:
        raise InstructionPathError(f"URL has no host: {url!r}")

    canonical_request = build_canonical_request(host, bucket, object_key, context.amz_date)
    string_to_sign = build_string_to_sign(context.amz_date, context.scope, canonical_request)
    signature = compute_signature(context.signing_key(), string_to_sign)
    return {
        "x-amz-date": context.amz_date,
        "x-amz-content-sha256": UNSIGNED_PAYLOAD,
        "Authorization": build_authorization_header(access_key, context.scope, signature),
    }


__all__ = [
    "ALGORITHM",
    "SIGNED_HEADERS",
    "SigningContext",
    "UNSIGNED_PAYLOAD",
    "build_authorization_header",
    "build_canonical_request",
    "build_string_to_sign",
    "compute_signature",
    "derive_signing_key",
    "extract_bucket_and_key",
    "sign",
    "sign_get_request",
]
