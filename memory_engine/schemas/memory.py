import re
from datetime import datetime, timezone
from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, StrictStr, field_validator
from pydantic.alias_generators import to_camel
from typing import Annotated, Any, Dict, List, Optional

# ids are stored in signed 64-bit integer columns
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

_NUMERIC_STRING = re.compile(r"^\s*[+-]?\d+(\.\d*)?\s*$")

class CamelModel(BaseModel):
    """Wire models use camelCase keys; unknown keys are dropped."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

def coerce_json_int(value: Any) -> Any:
    # JSON does not distinguish 7 from 7.0; strings and booleans are never numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError("must be a number")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError("must be a whole number")
        return int(value)
    return value

RecordId = Annotated[int, BeforeValidator(coerce_json_int), Field(ge=INT64_MIN, le=INT64_MAX)]

def coerce_timestamp(value: Any) -> Any:
    # numbers are epoch milliseconds; date strings are left to pydantic's datetime parser
    if isinstance(value, bool):
        raise ValueError("timestamp must be a date string or epoch milliseconds")
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError) as e:
            raise ValueError(f"timestamp out of range: {value}") from e
    if isinstance(value, str) and _NUMERIC_STRING.match(value):
        raise ValueError("timestamp string must be a date, not a number")
    return value

class MemoryMetadata(CamelModel):
    title: Optional[StrictStr] = None
    origin: Optional[StrictStr] = None
    tags: StrictStr
    category: List[StrictStr]
    others: Optional[StrictStr] = None

class MemoryMetadataPatch(CamelModel):
    title: Optional[StrictStr] = None
    origin: Optional[StrictStr] = None
    tags: Optional[StrictStr] = None
    category: Optional[List[StrictStr]] = None
    others: Optional[StrictStr] = None

class MemoryCreate(CamelModel):
    user_id: RecordId
    source: StrictStr
    source_id: StrictStr
    timestamp: datetime
    content: StrictStr
    metadata: MemoryMetadata

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        return coerce_timestamp(value)

class MemoryUpdate(CamelModel):
    """Partial update: only ``id`` is required, ``None`` leaves a field untouched."""
    id: RecordId
    user_id: Optional[RecordId] = None
    source: Optional[StrictStr] = None
    source_id: Optional[StrictStr] = None
    timestamp: Optional[datetime] = None
    content: Optional[StrictStr] = None
    metadata: Optional[MemoryMetadataPatch] = None

    @field_validator("timestamp", mode="before")
    @classmethod
    def parse_timestamp(cls, value: Any) -> Any:
        return coerce_timestamp(value)

class MemoryDelete(CamelModel):
    id: RecordId
    user_id: RecordId

class MemoryLookup(CamelModel):
    id: RecordId
    user_id: Optional[RecordId] = None

class UserMemoryLookup(CamelModel):
    # string here while every other schema takes a numeric userId
    user_id: StrictStr

class MemoryRead(CamelModel):
    id: int
    user_id: int
    source: str
    source_id: str
    timestamp: datetime
    content: str
    metadata: Dict[str, Any]

    @classmethod
    def from_model(cls, mem: Any) -> "MemoryRead":
        # ORM attribute is ``meta``; ``metadata`` on a declarative class is the table MetaData
        ts = mem.timestamp
        if ts is not None and ts.tzinfo is None:
            ts = ts.replace(tzinfo=timezone.utc)
        return cls(
            id=mem.id,
            user_id=mem.user_id,
            source=mem.source,
            source_id=mem.source_id,
            timestamp=ts,
            content=mem.content,
            metadata=dict(mem.meta or {}),
        )

class MemoryList(BaseModel):
    memories: List[MemoryRead]

class MemoryDeleted(BaseModel):
    message: str = "Memory deleted"
    id: int
