"""
CodeSequence model.
"""
from sqlmodel import SQLModel, Field


class CodeSequence(SQLModel, table=True):
    """CodeSequence table - one monotonically increasing counter per catalog code prefix."""
    __tablename__ = "code_sequence"

    prefix: str = Field(primary_key=True, max_length=2)
    last_value: int = Field(default=0)
