from datetime import date, datetime

import pytest

from expense_tracker.exceptions import ValidationError
from expense_tracker.validation import (
    build_expense,
    clean_category,
    parse_amount,
    parse_date,
    validate_budget,
)


def test_parse_amount_accepts_numbers_and_strings():
    assert parse_amount(12) == 12.0
    assert parse_amount("1,250.50") == 1250.5
    assert parse_amount(" 0 ") == 0.0
    assert parse_amount(19.999) == 20.0


@pytest.mark.parametrize('value', ["", None, "abc", "-5", -0.01, float('nan'), float('inf'), True])
def test_parse_amount_rejects_invalid_input(value):
    with pytest.raises(ValidationError):
        parse_amount(value)


def test_parse_amount_error_mentions_field():
    with pytest.raises(ValidationError, match='Budget limit'):
        parse_amount("-1", field='Budget limit')


def test_clean_category():
    assert clean_category("  Food ") == "Food"
    with pytest.raises(ValidationError):
        clean_category("   ")
    with pytest.raises(ValidationError):
        clean_category(None)


def test_parse_date_variants():
    assert parse_date(date(2024, 2, 29)) == date(2024, 2, 29)
    assert parse_date(datetime(2024, 2, 29, 18, 0)) == date(2024, 2, 29)
    assert parse_date("2024-02-29") == date(2024, 2, 29)
    with pytest.raises(ValidationError):
        parse_date("29/02/2024")
    with pytest.raises(ValidationError):
        parse_date(None)


def test_build_expense_cleans_values():
    expense = build_expense("99.90", " Food ", "2024-01-10", "  Lunch ")
    assert expense.amount == 99.9
    assert expense.category == "Food"
    assert expense.description == "Lunch"
    assert expense.date == date(2024, 1, 10)
    assert expense.id is None


def test_build_expense_keeps_identity_for_edits():
    expense = build_expense(5, "Food", date(2024, 1, 1), expense_id="x1", created_at="2024-01-01T00:00:00+00:00")
    assert expense.id == "x1"
    assert expense.created_at == "2024-01-01T00:00:00+00:00"


def test_validate_budget():
    assert validate_budget(" Food ", "1000") == ("Food", 1000.0)
    with pytest.raises(ValidationError):
        validate_budget("Food", -1)
    with pytest.raises(ValidationError):
        validate_budget("", 10)
