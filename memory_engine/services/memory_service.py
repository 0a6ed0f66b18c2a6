import logging
import re
from datetime import timezone
from sqlalchemy import select
from sqlalchemy.orm import Session
from ..core.errors import MemoryNotFoundError
from ..models.memory import Memory
from ..schemas.memory import INT64_MIN, INT64_MAX, MemoryCreate, MemoryUpdate, MemoryDelete, MemoryLookup, UserMemoryLookup
from typing import List, Optional

logger = logging.getLogger("memory_engine.store")
_DIGITS = re.compile(r"-?[0-9]+")

def _utc(ts):
    if ts is None or ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc)

class MemoryService:
    def create_memory(self, db: Session, data: MemoryCreate) -> Memory:
        mem = Memory(
            user_id=data.user_id,
            source=data.source,
            source_id=data.source_id,
            timestamp=_utc(data.timestamp),
            content=data.content,
            meta=data.metadata.model_dump(),
        )
        db.add(mem)
        db.commit()
        db.refresh(mem)
        logger.info(f"Stored memory {mem.id} for user {mem.user_id}")
        return mem

    def update_memory(self, db: Session, data: MemoryUpdate) -> Memory:
        mem = self._find(db, data.id)
        changes = data.model_dump(exclude={"id", "metadata"}, exclude_none=True)
        if "timestamp" in changes:
            changes["timestamp"] = _utc(changes["timestamp"])
        for field, value in changes.items():
            setattr(mem, field, value)
        if data.metadata is not None:
            # reassign so the JSON column is flagged dirty
            mem.meta = {**(mem.meta or {}), **data.metadata.model_dump(exclude_none=True)}
        db.commit()
        db.refresh(mem)
        logger.info(f"Updated memory {mem.id} ({', '.join(sorted(changes)) or 'metadata only'})")
        return mem

    def delete_memory(self, db: Session, data: MemoryDelete) -> int:
        mem = self._find(db, data.id, user_id=data.user_id)
        db.delete(mem)
        db.commit()
        logger.info(f"Deleted memory {data.id} for user {data.user_id}")
        return data.id

    def get_memory(self, db: Session, data: MemoryLookup) -> Memory:
        return self._find(db, data.id, user_id=data.user_id)

    def get_user_memories(self, db: Session, data: UserMemoryLookup) -> List[Memory]:
        # stored user ids are integers; anything that is not one matches nobody
        # 20 chars covers "-9223372036854775808" and keeps int() away from huge inputs
        raw = data.user_id
        if len(raw) > 20 or not _DIGITS.fullmatch(raw) or not INT64_MIN <= int(raw) <= INT64_MAX:
            logger.info(f"userId {data.user_id!r} is not a stored user id; returning no memories")
            return []
        user_id = int(raw)
        stmt = select(Memory).where(Memory.user_id == user_id).order_by(Memory.timestamp, Memory.id)
        return list(db.scalars(stmt))

    def _find(self, db: Session, memory_id: int, user_id: Optional[int] = None) -> Memory:
        mem = db.get(Memory, memory_id)
        if mem is None or (user_id is not None and mem.user_id != user_id):
            raise MemoryNotFoundError(memory_id)
        return mem

memory_service = MemoryService()
