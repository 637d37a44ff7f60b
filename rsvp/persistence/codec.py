"""Byte-level codec for stored invite records.

Records are stored as UTF-8 JSON produced by the domain model itself, so the
payload layout is the same snake_case shape used by seed files and the admin
API. Field order follows the model declaration, which keeps encoding
deterministic across restarts.
"""

from pydantic import ValidationError as PydanticValidationError

from rsvp.domain.model.invite import InviteRecord
from rsvp.persistence.error import CodecError


def encode(record: InviteRecord) -> bytes:
    """Serialize an invite record for storage.

    Args:
        record: Record to serialize

    Returns:
        UTF-8 JSON payload
    """
    return record.model_dump_json().encode("utf-8")


def decode(payload: bytes) -> InviteRecord:
    """Deserialize a stored invite record.

    Args:
        payload: Bytes previously produced by ``encode``

    Returns:
        The decoded record

    Raises:
        CodecError: If the payload is truncated, not JSON, or has the wrong shape
    """
    try:
        return InviteRecord.model_validate_json(payload)
    except PydanticValidationError as e:
        raise CodecError(f"invalid invite payload: {e.error_count()} error(s)") from e
