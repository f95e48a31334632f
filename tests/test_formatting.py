from expense_tracker import config
from expense_tracker.formatting import escape_currency_for_markdown, format_currency, format_percent


def test_format_currency(monkeypatch):
    monkeypatch.setattr(config, 'CURRENCY_SYMBOL', '₹')
    assert format_currency(1234.56) == '₹1,234.56'
    assert format_currency(1234.56, include_sign=False) == '1,234.56'
    assert format_currency(-50) == '-₹50.00'


def test_escape_currency_for_markdown(monkeypatch):
    monkeypatch.setattr(config, 'CURRENCY_SYMBOL', '$')
    assert escape_currency_for_markdown(1234.56) == '\\$1,234.56'


def test_format_percent():
    assert format_percent(85.0) == '85.0%'
    assert format_percent(12.3456, digits=2) == '12.35%'
    assert format_percent(None) == 'n/a'
    assert format_percent(float('nan')) == 'n/a'
    assert format_percent(float('inf')) == 'n/a'
