from datetime import date, timedelta
import importlib.util
from pathlib import Path

import pandas as pd

SCRIPT_PATH = Path(__file__).resolve().parents[1] / 'scripts' / 'show_budget_insights.py'


def _load_script():
    spec = importlib.util.spec_from_file_location('show_budget_insights_test', SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _write_exports(tmp_path, dates):
    transactions = pd.DataFrame([
        {'id': f't{i}', 'type': 'expense', 'amount': 150.0, 'date': day.isoformat(),
         'category_id': 'subs', 'category_name': 'Subscriptions', 'description': 'Spotify',
         'is_recurring': False}
        for i, day in enumerate(dates)
    ])
    categories = pd.DataFrame([
        {'id': 'subs', 'name': 'Subscriptions', 'budget_amount': 1000, 'budget_period': 'monthly',
         'is_active': True},
    ])
    transactions_path = tmp_path / 'transactions.csv'
    categories_path = tmp_path / 'categories.csv'
    transactions.to_csv(transactions_path, index=False)
    categories.to_csv(categories_path, index=False)
    return transactions_path, categories_path


def test_prints_insights_and_recurring_suggestions(tmp_path, capsys):
    today = date.today()
    dates = [today - timedelta(days=7 * weeks) for weeks in (3, 2, 1)]
    transactions_path, categories_path = _write_exports(tmp_path, dates)

    _load_script().main(transactions_path, categories_path)

    out = capsys.readouterr().out
    assert 'Loaded 3 transactions' in out
    assert 'Subscriptions' in out
    assert 'Overall:' in out
    assert 'every week for "Spotify"' in out


def test_old_history_has_no_suggestions(tmp_path, capsys):
    dates = [date(2020, 1, 1), date(2020, 1, 8), date(2020, 1, 15)]
    transactions_path, _ = _write_exports(tmp_path, dates)

    _load_script().main(transactions_path)

    out = capsys.readouterr().out
    assert 'Budget insights' not in out
    assert 'No recurring patterns detected.' in out
