from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from sqlalchemy import case, func
from datetime import timedelta
from typing import Any, Dict, List, Optional
import logging
import re

from string_analyzer.errors import ConflictError
from string_analyzer.models.string_record import StringRecord, utcnow
from string_analyzer.schemas.string_record import AnalyzedString, StringFilters
from string_analyzer.services.analyzer import hash_of

logger = logging.getLogger(__name__)

_HEX_DIGEST = re.compile(r"[0-9a-f]{64}")


def exists(db: Session, value: str) -> bool:
    """Check whether a record for this value is already stored"""
    return db.query(StringRecord.id).filter(StringRecord.id == hash_of(value)).first() is not None


def insert(db: Session, analysis: AnalyzedString) -> StringRecord:
    """Persist an analysis; the primary key rejects duplicates"""
    props = analysis.properties
    record = StringRecord(
        id=props.sha256_hash,
        value=analysis.value,
        length=props.length,
        is_palindrome=props.is_palindrome,
        unique_characters=props.unique_characters,
        word_count=props.word_count,
        character_frequency=dict(props.character_frequency),
    )

    db.add(record)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Duplicate insert rejected for {props.sha256_hash[:12]}")
        raise ConflictError("String already exists in the system") from e

    db.refresh(record)
    logger.info(f"Stored string {record.id[:12]} (length={record.length})")
    return record


def find_by_hash(db: Session, content_hash: str) -> Optional[StringRecord]:
    """Get a record by its content hash"""
    return db.query(StringRecord).filter(StringRecord.id == content_hash).first()


def find_by_value(db: Session, value: str) -> Optional[StringRecord]:
    """Get a record by its raw value"""
    return find_by_hash(db, hash_of(value))


def resolve(db: Session, key: str) -> Optional[StringRecord]:
    """
    Look a record up by raw value, falling back to treating the key as a
    content hash when it has the shape of one.
    """
    record = find_by_value(db, key)
    if record is None and _HEX_DIGEST.fullmatch(key):
        record = find_by_hash(db, key)
    return record


def find_by_filters(db: Session, filters: StringFilters) -> List[StringRecord]:
    """Get all records matching every given filter, newest first"""
    query = db.query(StringRecord)

    if filters.is_palindrome is not None:
        query = query.filter(StringRecord.is_palindrome == filters.is_palindrome)

    if filters.min_length is not None:
        query = query.filter(StringRecord.length >= filters.min_length)

    if filters.max_length is not None:
        query = query.filter(StringRecord.length <= filters.max_length)

    if filters.word_count is not None:
        query = query.filter(StringRecord.word_count == filters.word_count)

    records = query.order_by(StringRecord.created_at.desc(), StringRecord.id).all()

    if filters.contains_character is not None:
        # Existence test against the stored frequency map
        records = [r for r in records if filters.contains_character in r.character_frequency]

    return records


def search_by_pattern(db: Session, pattern: str) -> List[StringRecord]:
    """Get records whose value contains the pattern, newest first"""
    return (
        db.query(StringRecord)
        .filter(StringRecord.value.contains(pattern, autoescape=True))
        .order_by(StringRecord.created_at.desc(), StringRecord.id)
        .all()
    )


def delete_by_hash(db: Session, content_hash: str) -> bool:
    """Delete a record by content hash"""
    record = find_by_hash(db, content_hash)
    if record:
        db.delete(record)
        db.commit()
        logger.info(f"Deleted string {content_hash[:12]}")
        return True
    return False


def cleanup_old_records(db: Session, days_old: int = 30) -> int:
    """Delete records created more than days_old days ago"""
    cutoff = utcnow() - timedelta(days=days_old)
    deleted = (
        db.query(StringRecord)
        .filter(StringRecord.created_at < cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()
    logger.info(f"Removed {deleted} strings older than {days_old} days")
    return deleted


def aggregate_statistics(db: Session) -> Dict[str, Any]:
    """Summary figures over every stored string"""
    row = db.query(
        func.count(StringRecord.id).label("total_strings"),
        func.avg(StringRecord.length).label("average_length"),
        func.min(StringRecord.length).label("min_length"),
        func.max(StringRecord.length).label("max_length"),
        func.sum(case((StringRecord.is_palindrome, 1), else_=0)).label("palindrome_count"),
        func.avg(StringRecord.word_count).label("average_word_count"),
        func.max(StringRecord.created_at).label("last_created_at"),
    ).one()

    return {
        "total_strings": row.total_strings,
        "average_length": float(row.average_length) if row.average_length is not None else None,
        "min_length": row.min_length,
        "max_length": row.max_length,
        "palindrome_count": int(row.palindrome_count or 0),
        "average_word_count": float(row.average_word_count) if row.average_word_count is not None else None,
        "last_created_at": row.last_created_at,
    }
