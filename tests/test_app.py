from datetime import date
from pathlib import Path

import pytest
from streamlit.testing.v1 import AppTest

from expense_tracker import app, config
from expense_tracker.models import Expense
from expense_tracker.persistence import JsonFileStore
from expense_tracker.ui.add_expense import NEW_CATEGORY_OPTION

HOME = Path(__file__).resolve().parent.parent / 'expense_tracker' / 'Home.py'


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, 'DATA_DIR', tmp_path)
    monkeypatch.setattr(app, '_LOGGING_CONFIGURED', True)
    return tmp_path


def _run_app():
    at = AppTest.from_file(str(HOME), default_timeout=30)
    at.run()
    assert not at.exception
    return at


def _subheaders(at):
    return [s.value for s in at.subheader]


def _click_submit(at, label):
    next(b for b in at.button if b.label == label).click().run()
    assert not at.exception


def test_edit_button_opens_edit_form(data_dir):
    expense = Expense(
        id='abc', amount=250.0, category='Food', description='Dinner',
        date=date(2024, 1, 5), created_at='2024-01-05T10:00:00+00:00',
    )
    JsonFileStore(data_dir).set(config.EXPENSES_KEY, [expense.to_dict()])
    at = _run_app()
    assert '➕ Add Expense' in _subheaders(at)

    at.button(key='edit_abc').click().run()

    assert '✏️ Edit Expense' in _subheaders(at)
    assert at.number_input(key='expense_amount_edit_abc').value == 250.0
    assert at.text_input(key='expense_description_edit_abc').value == 'Dinner'


def test_invalid_submission_keeps_entered_values(data_dir):
    at = _run_app()
    at.number_input(key='expense_amount_new_0').set_value(75.0)
    at.selectbox(key='expense_category_new_0').select(NEW_CATEGORY_OPTION)
    at.text_input(key='expense_description_new_0').input('Groceries')

    _click_submit(at, '➕ Add Expense')

    assert len(at.error) == 1
    assert at.number_input(key='expense_amount_new_0').value == 75.0
    assert at.text_input(key='expense_description_new_0').value == 'Groceries'
    assert not (data_dir / 'expenses.json').exists()


def test_successful_add_saves_and_resets_form(data_dir):
    at = _run_app()
    at.number_input(key='expense_amount_new_0').set_value(75.0)
    at.text_input(key='expense_description_new_0').input('Groceries')

    _click_submit(at, '➕ Add Expense')

    assert any('Added' in s.value for s in at.success)
    assert at.text_input(key='expense_description_new_1').value == ''
    saved = JsonFileStore(data_dir).get(config.EXPENSES_KEY)
    assert [(e['amount'], e['description']) for e in saved] == [(75.0, 'Groceries')]
