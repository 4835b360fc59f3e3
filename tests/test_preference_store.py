from __future__ import annotations

from loan_rate_web.preference_store import PreferenceStore


def _store(tmp_path) -> PreferenceStore:
    return PreferenceStore(f"sqlite:///{tmp_path / 'prefs.sqlite3'}")


def test_default_is_light(tmp_path):
    assert _store(tmp_path).get_dark_mode("abc") is False


def test_set_and_toggle(tmp_path):
    store = _store(tmp_path)
    store.set_dark_mode("abc", True)
    assert store.get_dark_mode("abc") is True
    assert store.get_dark_mode("other") is False
    assert store.toggle_dark_mode("abc") is False
    assert store.get_dark_mode("abc") is False


def test_preference_survives_new_store(tmp_path):
    _store(tmp_path).set_dark_mode("abc", True)
    assert _store(tmp_path).get_dark_mode("abc") is True


def test_missing_token_is_ignored(tmp_path):
    store = _store(tmp_path)
    store.set_dark_mode("", True)
    assert store.get_dark_mode("") is False
