"""
Catalog code generation backed by durable per-prefix counters.
"""
import logging
import re
from typing import Optional

from sqlalchemy import update
from sqlmodel import Session

from app.core.exceptions import InternalError
from app.models.code_sequence import CodeSequence
from app.models.enums import CodePrefix
from app.utils.db_utils import insert_ignore_conflicts

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = CodePrefix.ST
CODE_DIGITS = 7
CODE_PATTERN = re.compile(r"^(ST|CS)-\d{7}$")


def resolve_prefix(hint: Optional[str]) -> CodePrefix:
    """Map a payload hint to a known prefix, falling back to ST when absent or unrecognized."""
    if hint:
        try:
            return CodePrefix(hint.strip().upper())
        except ValueError:
            logger.info(f"Unrecognized code prefix hint {hint!r}, using {DEFAULT_PREFIX.value}")
    return DEFAULT_PREFIX


def format_code(prefix: CodePrefix, value: int) -> str:
    """Format a counter value as '<PREFIX>-<7 digits>'."""
    if value >= 10 ** CODE_DIGITS:
        raise InternalError(f"Code sequence {prefix.value} exhausted")
    return f"{prefix.value}-{value:0{CODE_DIGITS}d}"


def is_valid_code(code: str) -> bool:
    return bool(CODE_PATTERN.match(code))


def ensure_code_sequences(session: Session) -> None:
    """Create a zero counter for every prefix that has none. Does not commit."""
    for prefix in CodePrefix:
        session.exec(insert_ignore_conflicts(
            session,
            CodeSequence,
            {"prefix": prefix.value, "last_value": 0},
            index_elements=["prefix"],
        ))


def _increment(session: Session, prefix: CodePrefix) -> Optional[int]:
    table = CodeSequence.__table__
    statement = (
        update(table)
        .where(table.c.prefix == prefix.value)
        .values(last_value=table.c.last_value + 1)
        .returning(table.c.last_value)
    )
    return session.exec(statement).scalar_one_or_none()


def next_code(session: Session, prefix: CodePrefix) -> str:
    """
    Allocate the next catalog code for a prefix.

    The counter row is incremented by a single UPDATE ... RETURNING, so the
    database serializes concurrent allocations and the increment rolls back with
    the enclosing transaction. Does not commit.

    Args:
        session: Database session (inside the caller's transaction)
        prefix: Code prefix

    Returns:
        New code, e.g. 'ST-0000042'
    """
    value = _increment(session, prefix)
    if value is None:
        # First use of this prefix on a database that was not seeded
        session.exec(insert_ignore_conflicts(
            session,
            CodeSequence,
            {"prefix": prefix.value, "last_value": 0},
            index_elements=["prefix"],
        ))
        value = _increment(session, prefix)
    if value is None:
        raise InternalError(f"Could not allocate a code for prefix {prefix.value}")

    code = format_code(prefix, value)
    logger.info(f"Allocated catalog code {code}")
    return code
