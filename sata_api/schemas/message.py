"""Message Schemas: WhatsApp interaction request body and the stored metadata record.

Invariants:
    - userId is required, non-empty and opaque (long unknown ids 404, not 400)
    - Client metadata is a flat map of scalars and cannot shadow reserved keys
    - MessageMetadata.phoneNumber is only ever the redaction marker, never a number
"""

from typing import Literal

from pydantic import Field, field_validator

from sata_api.core.domain_types import MESSAGE_PLATFORM, MessageType
from sata_api.schemas.base import CamelModel, ScalarValue

RESERVED_METADATA_KEYS = frozenset(
    {"messageContent", "messageType", "phoneNumber", "platform"},
)


class MessageCreate(CamelModel):
    """Incoming message interaction."""
    user_id: str = Field(min_length=1, max_length=255)
    message_content: str | None = Field(None, max_length=4096)
    message_type: MessageType = MessageType.TEXT
    phone_number: str | None = Field(None, max_length=32)
    extra: dict[str, ScalarValue] = Field(
        default_factory=dict, alias="metadata", max_length=20,
    )

    @field_validator("user_id")
    @classmethod
    def strip_user_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("userId cannot be empty or whitespace")
        return v

    @field_validator("phone_number")
    @classmethod
    def blank_phone_is_none(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("extra")
    @classmethod
    def reject_reserved_keys(cls, v: dict[str, ScalarValue]) -> dict[str, ScalarValue]:
        clashes = sorted(RESERVED_METADATA_KEYS.intersection(v))
        if clashes:
            raise ValueError(
                f"metadata cannot override reserved keys: {', '.join(clashes)}"
            )
        return v


class MessageMetadata(CamelModel):
    """Metadata record persisted on a WHATSAPP_MESSAGE interaction."""
    message_content: str = ""
    message_type: MessageType = MessageType.TEXT
    phone_number: Literal["encrypted"] | None = None
    platform: Literal["whatsapp"] = MESSAGE_PLATFORM
    extra: dict[str, ScalarValue] = Field(default_factory=dict)

    def to_storage(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

