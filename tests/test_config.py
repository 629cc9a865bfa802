# tests/test_config.py
import config


def test_bible_api_ids_defaults():
    assert config.bible_api_ids() == {"NIV": "78a9f6124f344018-01"}


def test_bible_api_ids_merge_over_defaults(monkeypatch):
    monkeypatch.setenv("BIBLE_API_IDS", '{"nasb": "nasb-id", "NIV": "niv-override"}')
    assert config.bible_api_ids() == {"NIV": "niv-override", "NASB": "nasb-id"}


def test_bible_api_ids_rejects_non_object(monkeypatch):
    monkeypatch.setenv("BIBLE_API_IDS", '["NIV"]')
    assert config.bible_api_ids() == {"NIV": "78a9f6124f344018-01"}


def test_upstream_timeout(monkeypatch):
    assert config.upstream_timeout() is None
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "soon")
    assert config.upstream_timeout() is None
    monkeypatch.setenv("UPSTREAM_TIMEOUT", "10")
    assert config.upstream_timeout() == 10.0


def test_anthropic_model_default(monkeypatch):
    assert config.anthropic_model() == config.Config.DEFAULT_ANTHROPIC_MODEL
    monkeypatch.setenv("ANTHROPIC_MODEL", "claude-other")
    assert config.anthropic_model() == "claude-other"


def test_data_paths_follow_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("STRONGS_DATA_DIR", str(tmp_path))
    assert config.strongs_data_dir() == str(tmp_path)
    assert config.questions_file().endswith("questions.json")
