"""
Tests for catalog code generation.
"""
import pytest

from app.core.exceptions import InternalError
from app.models.code_sequence import CodeSequence
from app.models.enums import CodePrefix
from app.services.code_generation_service import (
    format_code,
    is_valid_code,
    next_code,
    resolve_prefix,
)


class TestResolvePrefix:

    @pytest.mark.parametrize("hint, expected", [
        ("CS", CodePrefix.CS),
        ("cs", CodePrefix.CS),
        (" ST ", CodePrefix.ST),
        ("XY", CodePrefix.ST),
        ("", CodePrefix.ST),
        (None, CodePrefix.ST),
    ])
    def test_hints(self, hint, expected):
        assert resolve_prefix(hint) == expected


class TestFormatCode:

    def test_zero_padded_to_seven_digits(self):
        assert format_code(CodePrefix.ST, 42) == "ST-0000042"
        assert format_code(CodePrefix.CS, 9999999) == "CS-9999999"

    def test_exhausted_sequence(self):
        with pytest.raises(InternalError):
            format_code(CodePrefix.ST, 10_000_000)

    @pytest.mark.parametrize("code, valid", [
        ("ST-0000042", True),
        ("CS-1234567", True),
        ("XX-0000001", False),
        ("ST-42", False),
        ("st-0000042", False),
    ])
    def test_is_valid_code(self, code, valid):
        assert is_valid_code(code) is valid


class TestNextCode:

    def test_counters_are_per_prefix(self, session):
        assert next_code(session, CodePrefix.ST) == "ST-0000001"
        assert next_code(session, CodePrefix.ST) == "ST-0000002"
        assert next_code(session, CodePrefix.CS) == "CS-0000001"
        session.commit()

    def test_rolled_back_allocation_is_reused(self, session):
        next_code(session, CodePrefix.ST)
        session.rollback()
        assert next_code(session, CodePrefix.ST) == "ST-0000001"

    def test_missing_counter_row_is_created(self, session):
        session.delete(session.get(CodeSequence, "CS"))
        session.commit()

        assert next_code(session, CodePrefix.CS) == "CS-0000001"
