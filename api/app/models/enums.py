"""
Model enums.
"""
from enum import Enum


class ChangeRequestKind(str, Enum):
    """Kind of catalog mutation proposed by a change request."""
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"


class ChangeRequestStatus(str, Enum):
    """Status of a change request. Only PENDING can transition."""
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class CodePrefix(str, Enum):
    """Catalog code prefixes, one durable counter each."""
    ST = "ST"  # Standard items (default)
    CS = "CS"
