from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Boolean, DateTime, JSON, Text
from sqlalchemy.dialects import mysql
from string_analyzer.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class StringRecord(Base):
    __tablename__ = "strings"

    id = Column(String(64), primary_key=True, index=True)  # SHA-256 of the trimmed value
    value = Column(Text, nullable=False)
    length = Column(Integer, nullable=False, index=True)
    is_palindrome = Column(Boolean, nullable=False, default=False, index=True)
    unique_characters = Column(Integer, nullable=False)
    word_count = Column(Integer, nullable=False, index=True)
    character_frequency = Column(JSON, nullable=False)
    # Microsecond resolution keeps "newest first" ordering stable; MySQL needs fsp=6 for it
    created_at = Column(
        DateTime(timezone=True).with_variant(mysql.DATETIME(fsp=6), "mysql"),
        nullable=False,
        default=utcnow,
        index=True,
    )

    @property
    def sha256_hash(self) -> str:
        return self.id

    def __repr__(self):
        return f"<StringRecord {self.id[:12]} length={self.length}>"
