"""Encode/decode helpers for JSON stored in text columns.

``service_locations`` and ``verification_documents`` are persisted as JSON
text. Decoding is lenient: stored garbage degrades to an empty value instead
of failing the request.
"""

import json
from typing import Any

from core.logger import get_logger

logger = get_logger(__name__)

VERIFICATION_DOCUMENT_FIELDS = (
    "nid_no",
    "live_photo_url",
    "trade_license_id",
    "training_certificate",
)


def encode_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), default=str)


def decode_service_locations(raw: Any) -> list[Any] | None:
    """Decode stored ``service_locations``.

    NULL stays None. Anything that fails to decode, or decodes to something
    other than a list, becomes an empty list.
    """
    if raw is None:
        return None
    if isinstance(raw, list):
        return raw
    if raw == "":
        return []
    try:
        decoded = json.loads(raw)
    except (TypeError, ValueError):
        logger.debug("json_column.decode_failed", column="service_locations")
        return []
    return decoded if isinstance(decoded, list) else []


def encode_verification_documents(documents: dict[str, Any]) -> str:
    """Always store all four document keys; missing ones become null."""
    return encode_json(
        {field: documents.get(field) or None for field in VERIFICATION_DOCUMENT_FIELDS}
    )


def decode_verification_documents(raw: Any) -> dict[str, str | None] | None:
    """Decode stored ``verification_documents``; undecodable values become None."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, dict):
        decoded = raw
    else:
        try:
            decoded = json.loads(raw)
        except (TypeError, ValueError):
            logger.debug("json_column.decode_failed", column="verification_documents")
            return None
    if not isinstance(decoded, dict):
        return None
    return {field: decoded.get(field) for field in VERIFICATION_DOCUMENT_FIELDS}
