from datetime import date

import pytest

from expense_tracker.exceptions import ValidationError
from expense_tracker.models import Expense


def test_negative_amount_rejected():
    with pytest.raises(ValidationError):
        Expense(amount=-1.0, category='Food', date=date(2024, 1, 1))


@pytest.mark.parametrize('amount', [float('nan'), float('inf'), float('-inf')])
def test_non_finite_amount_rejected(amount):
    with pytest.raises(ValidationError):
        Expense(amount=amount, category='Food', date=date(2024, 1, 1))


def test_empty_category_rejected():
    with pytest.raises(ValidationError):
        Expense(amount=1.0, category='  ', date=date(2024, 1, 1))


def test_with_identity_fills_missing_fields_only():
    expense = Expense(amount=5.0, category='Food', date=date(2024, 1, 1))
    filled = expense.with_identity()
    assert filled.id and filled.created_at
    assert filled.with_identity() == filled

    kept = Expense(amount=5.0, category='Food', date=date(2024, 1, 1), id='abc', created_at='2024-01-01T00:00:00+00:00')
    assert kept.with_identity() == kept


def test_to_dict_uses_stored_field_names():
    expense = Expense(
        id='abc', amount=42.0, category='Travel', description='Taxi',
        date=date(2024, 3, 9), created_at='2024-03-09T10:00:00+00:00',
    )
    assert expense.to_dict() == {
        'id': 'abc',
        'amount': 42.0,
        'category': 'Travel',
        'description': 'Taxi',
        'date': '2024-03-09',
        'createdAt': '2024-03-09T10:00:00+00:00',
    }
    assert Expense.from_dict(expense.to_dict()) == expense


def test_from_dict_accepts_datetime_strings():
    expense = Expense.from_dict({'amount': '10', 'category': 'Food', 'date': '2024-05-01T12:30:00.000Z'})
    assert expense.date == date(2024, 5, 1)
    assert expense.amount == 10.0
    assert expense.description == ''


@pytest.mark.parametrize('data', [
    {'category': 'Food', 'date': '2024-01-01'},
    {'amount': 'abc', 'category': 'Food', 'date': '2024-01-01'},
    {'amount': 1, 'category': 'Food', 'date': 'yesterday'},
    {'amount': -3, 'category': 'Food', 'date': '2024-01-01'},
    {'amount': 'nan', 'category': 'Food', 'date': '2024-01-01'},
    {'amount': 'inf', 'category': 'Food', 'date': '2024-01-01'},
    'not a record',
])
def test_from_dict_rejects_malformed_records(data):
    with pytest.raises(ValidationError):
        Expense.from_dict(data)
