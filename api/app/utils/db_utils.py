"""
Database utility functions.
"""
from sqlmodel import Session
from sqlalchemy.dialects import postgresql, sqlite


def insert_ignore_conflicts(session: Session, model, values: dict, index_elements: list[str]):
    """
    Build an INSERT ... ON CONFLICT DO NOTHING statement for the session's dialect.

    The returned statement inserts nothing (rowcount 0) when a row with the same
    values for index_elements already exists, so concurrent callers can race on
    the same key without an IntegrityError.

    Args:
        session: Database session (used to detect the dialect)
        model: SQLModel table class
        values: Column values to insert
        index_elements: Columns of the unique constraint to test

    Returns:
        Executable insert statement
    """
    dialect_name = session.get_bind().dialect.name
    if dialect_name == "postgresql":
        insert = postgresql.insert
    elif dialect_name == "sqlite":
        insert = sqlite.insert
    else:
        raise NotImplementedError(f"insert-or-skip is not supported for dialect {dialect_name}")

    return insert(model.__table__).values(**values).on_conflict_do_nothing(index_elements=index_elements)
