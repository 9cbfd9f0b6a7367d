import os

from budget_manager.utils.app_config import (
    get_db_folder, load_config, resolve_db_path, set_db_folder,
)


def test_missing_config_is_empty(tmp_path):
    assert load_config(tmp_path / "config.json") == {}


def test_corrupt_config_is_empty(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == {}


def test_db_folder_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    set_db_folder("/data/budget", path)
    assert get_db_folder(path) == "/data/budget"
    set_db_folder(None, path)
    assert get_db_folder(path) is None


def test_resolve_db_path_precedence(tmp_path):
    path = tmp_path / "config.json"
    assert resolve_db_path(None, path) == "budget.db"
    set_db_folder(str(tmp_path), path)
    assert resolve_db_path(None, path) == os.path.join(str(tmp_path), "budget.db")
    assert resolve_db_path("other.db", path) == "other.db"
