from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import Any, Dict
import orjson
import uuid, time

from .event_value import EVENT_VALUE_SCALE, INT32_MAX, INT32_MIN

CUSTOM_EVENT_TYPE = "custom_event"

# Push extras key carrying the send identifier
PUSH_SEND_ID_KEY = "com.urbanairship.push.PUSH_ID"

# Interaction type used for events attributed to an inbox message
MCRAP_INTERACTION_TYPE = "ua_mcrap"

DATA_KEYS = (
    "event_name",
    "event_value",
    "transaction_id",
    "interaction_id",
    "interaction_type",
    "conversion_send_id",
    "last_received_send_id",
)

MAX_FIELD_LENGTH = 255

MIN_EVENT_VALUE = INT32_MIN * EVENT_VALUE_SCALE
MAX_EVENT_VALUE = INT32_MAX * EVENT_VALUE_SCALE


def field_length(value: str) -> int:
    """Length of a string in UTF-16 code units; lone surrogates count as one."""
    return len(value.encode("utf-16-le", "surrogatepass")) // 2


def _check_length(field: str, v: str) -> str:
    if field_length(v) > MAX_FIELD_LENGTH:
        raise ValueError(f"{field} must not exceed {MAX_FIELD_LENGTH} characters")
    return v


class EventRecord(BaseModel):
    """Immutable custom event, produced only by EventBuilder.create()."""
    model_config = ConfigDict(frozen=True)

    event_name: str = Field(..., description="Business event name")
    event_value: int | None = Field(default=None, description="Value scaled by 10^6")
    transaction_id: str | None = None
    interaction_id: str | None = None
    interaction_type: str | None = None
    conversion_send_id: str | None = None
    last_received_send_id: str | None = None
    event_id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    ts: float = Field(default_factory=lambda: time.time())

    @field_validator("event_name")
    @classmethod
    def validate_event_name(cls, v: str) -> str:
        if field_length(v) == 0:
            raise ValueError("event_name must not be empty")
        return _check_length("event_name", v)

    @field_validator("transaction_id", "interaction_id", "interaction_type")
    @classmethod
    def validate_optional_field(cls, v: str | None, info) -> str | None:
        if v is None:
            return v
        return _check_length(info.field_name, v)

    @field_validator("event_value")
    @classmethod
    def validate_event_value(cls, v: int | None) -> int | None:
        if v is not None and not MIN_EVENT_VALUE <= v <= MAX_EVENT_VALUE:
            raise ValueError(f"event_value must be between {MIN_EVENT_VALUE} and {MAX_EVENT_VALUE}")
        return v

    @model_validator(mode="after")
    def check_single_attribution(self) -> "EventRecord":
        if self.conversion_send_id is not None and self.last_received_send_id is not None:
            raise ValueError("conversion_send_id and last_received_send_id are mutually exclusive")
        return self

    @property
    def event_type(self) -> str:
        return CUSTOM_EVENT_TYPE

    def data(self) -> Dict[str, Any]:
        """Event data keyed by the fixed field names, omitting unset fields."""
        return {key: getattr(self, key) for key in DATA_KEYS if getattr(self, key) is not None}

    def to_payload(self, session_id: str | None = None) -> Dict[str, Any]:
        """
        Build the upload envelope for this event.

        Args:
            session_id: Analytics session to stamp into the event data

        Returns:
            Dict with type, event_id, time (seconds, millisecond precision) and data
        """
        data = self.data()
        if session_id is not None:
            data["session_id"] = session_id
        return {
            "type": self.event_type,
            "event_id": self.event_id,
            "time": f"{self.ts:.3f}",
            "data": data,
        }

    def to_json(self, session_id: str | None = None) -> bytes:
        return orjson.dumps(self.to_payload(session_id))


class PushMessage(BaseModel):
    """A delivered push, reduced to the extras it arrived with."""
    model_config = ConfigDict(frozen=True)

    extras: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_extras(cls, extras: Dict[str, Any] | None) -> "PushMessage":
        return cls(extras=dict(extras or {}))

    @property
    def send_id(self) -> str | None:
        value = self.extras.get(PUSH_SEND_ID_KEY)
        return str(value) if value is not None else None


class InboxMessage(BaseModel):
    """An inbox message that an event interaction can point at."""
    model_config = ConfigDict(frozen=True)

    message_id: str
