from datetime import date

from expense_tracker import config
from expense_tracker.models import Expense
from expense_tracker.persistence import InMemoryStore
from expense_tracker.state import SESSION_KEY, create_app_state, get_app_state


def test_get_app_state_is_created_once_per_session():
    session = {}
    storage = InMemoryStore()
    first = get_app_state(session, storage)
    second = get_app_state(session, InMemoryStore())
    assert first is second
    assert session[SESSION_KEY] is first


def test_stores_share_storage_under_separate_entries():
    storage = InMemoryStore()
    state = create_app_state(storage)
    state.expenses.add(Expense(amount=5.0, category='Food', date=date(2024, 1, 1)))
    state.budgets.set_budget('Food', 100)
    assert sorted(storage.keys()) == [config.BUDGETS_KEY, config.EXPENSES_KEY]


def test_failures_from_both_stores_are_collected_and_drained():
    state = create_app_state(InMemoryStore(quota_bytes=1))
    state.expenses.add(Expense(amount=5.0, category='Food', date=date(2024, 1, 1)))
    state.budgets.set_budget('Food', 100)

    notices = state.drain_notifications()

    assert len(notices) == 2
    assert state.drain_notifications() == []
    assert len(state.expenses) == 1
    assert state.budgets.get_budgets() == {'Food': 100.0}


def test_default_storage_uses_data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(config, 'DATA_DIR', tmp_path / 'data')
    state = create_app_state()
    state.budgets.set_budget('Food', 10)
    assert (tmp_path / 'data' / 'budgets.json').exists()
