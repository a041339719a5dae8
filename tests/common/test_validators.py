import pytest

from shiftdesk.common.validators import parse_shift_start, require_date, require_non_empty
from shiftdesk.core.exceptions import ValidationError


def test_shift_start_defaults_to_nine():
    assert parse_shift_start(None) == (9, 0)
    assert parse_shift_start("") == (9, 0)
    assert parse_shift_start("08:30") == (8, 30)


def test_shift_start_rejects_garbage():
    with pytest.raises(ValidationError):
        parse_shift_start("nine")


def test_required_values():
    assert require_non_empty("  hi ", "Reason") == "hi"
    with pytest.raises(ValidationError, match="Reason is required"):
        require_non_empty("   ", "Reason")
    with pytest.raises(ValidationError):
        require_date("06/01/2025", "Start date")
