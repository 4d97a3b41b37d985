import pytest


@pytest.fixture(autouse=True)
def _peso_currency(monkeypatch):
    monkeypatch.setenv('BUDGETWISE_CURRENCY_SYMBOL', '₱')
