from sqlalchemy import Column, Integer, String, Text, DateTime, JSON, func
from ..core.database import Base

class Memory(Base):
    __tablename__ = "memories"
    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, index=True, nullable=False)
    source = Column(String(255), nullable=False)
    source_id = Column(String(255), nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, index=True)
    content = Column(Text, nullable=False)
    meta = Column("metadata", JSON, nullable=False, default=dict)  # DB column 'metadata' but attr 'meta'
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
