"""
Preference Store Tests
======================

Copyright 2024-2025 北京思源智教科技有限公司 (Beijing Siyuan Zhijiao Technology Co., Ltd.)
All Rights Reserved
Proprietary License
"""

import json
from unittest.mock import Mock

from services.editor.preferences import (
    AUTOSAVE_PREFERENCE_KEY,
    AutosavePreference,
    PreferenceStore,
)


def test_autosave_defaults_to_off(tmp_path):
    store = PreferenceStore(tmp_path / "prefs.json")

    assert store.load_autosave() == AutosavePreference(enabled=False)


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "prefs.json"
    store = PreferenceStore(path)

    store.save_autosave(AutosavePreference(enabled=True))

    assert store.load_autosave().enabled is True
    assert json.loads(path.read_text(encoding="utf-8")) == {AUTOSAVE_PREFERENCE_KEY: True}


def test_other_keys_are_kept(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({"theme": "dark"}), encoding="utf-8")

    PreferenceStore(path).save_autosave(AutosavePreference(enabled=False))

    assert json.loads(path.read_text(encoding="utf-8"))["theme"] == "dark"


def test_corrupt_file_falls_back_to_default(tmp_path):
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")

    assert PreferenceStore(path).load_autosave().enabled is False


def test_from_config_uses_preferences_path(tmp_path):
    config_mock = Mock(PREFERENCES_PATH=tmp_path / "p.json")

    assert PreferenceStore.from_config(config_mock).path == tmp_path / "p.json"
