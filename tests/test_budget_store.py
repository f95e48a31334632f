import pytest

from expense_tracker.budget_store import BudgetStore
from expense_tracker.exceptions import ValidationError
from expense_tracker.persistence import InMemoryStore


def test_set_budget_upserts_and_persists():
    storage = InMemoryStore()
    store = BudgetStore(storage)

    store.set_budget('Food', 1000)
    store.set_budget('Travel', '250.50')
    store.set_budget('Food', 800)

    assert store.get_budgets() == {'Food': 800.0, 'Travel': 250.5}
    assert storage.get('budgets') == {'Food': 800.0, 'Travel': 250.5}


def test_category_is_stripped():
    store = BudgetStore(InMemoryStore())
    store.set_budget('  Food ', 10)
    assert store.get_budget('Food') == 10.0
    assert store.get_budget('Other') is None


@pytest.mark.parametrize('category, limit', [('Food', -1), ('', 10), ('Food', 'lots')])
def test_invalid_budget_rejected_without_write(category, limit):
    storage = InMemoryStore()
    store = BudgetStore(storage)
    with pytest.raises(ValidationError):
        store.set_budget(category, limit)
    assert store.get_budgets() == {}
    assert storage.get('budgets') is None


def test_zero_limit_allowed():
    store = BudgetStore(InMemoryStore())
    store.set_budget('Food', 0)
    assert store.get_budgets() == {'Food': 0.0}


def test_get_budgets_returns_snapshot():
    store = BudgetStore(InMemoryStore())
    store.set_budget('Food', 100)
    snapshot = store.get_budgets()
    snapshot['Food'] = 1.0
    snapshot['Rent'] = 5.0
    assert store.get_budgets() == {'Food': 100.0}


def test_reload_from_storage():
    storage = InMemoryStore()
    BudgetStore(storage).set_budget('Food', 1000)
    assert BudgetStore(storage).get_budgets() == {'Food': 1000.0}


def test_invalid_stored_entries_are_skipped():
    storage = InMemoryStore()
    storage.set('budgets', {'Food': 100, 'Bad': -5, 'Worse': 'x'})
    assert BudgetStore(storage).get_budgets() == {'Food': 100.0}


def test_persistence_failure_keeps_memory_state():
    notices = []
    store = BudgetStore(InMemoryStore(quota_bytes=5), notify=notices.append)
    store.set_budget('Food', 100)
    assert store.get_budgets() == {'Food': 100.0}
    assert len(notices) == 1
