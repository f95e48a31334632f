import logging

from expense_tracker.logging_config import configure_logging


def test_configure_logging_sets_root_level():
    configure_logging(logging.DEBUG)
    assert logging.getLogger().level == logging.DEBUG
    assert logging.getLogger('expense_tracker.expense_store').isEnabledFor(logging.DEBUG)
    configure_logging('WARNING')
    assert logging.getLogger().level == logging.WARNING
