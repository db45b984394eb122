"""Tests for configuration and store context wiring."""

from __future__ import annotations

import pytest
from sqlalchemy import inspect

from feature_setting import Feature, Setting, create_store_context
from feature_setting.config import BaseConfig, TestConfig
from feature_setting.infra.database import bootstrap_database, session_scope
from feature_setting.models import SettingRecord


@pytest.fixture
def context(tmp_path):
    ctx = create_store_context(TestConfig(data_dir=tmp_path))
    yield ctx
    Setting.use_repository(None)
    Feature.use_repository(None)
    ctx.dispose()


def test_base_config_reads_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("FEATURE_SETTING_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FEATURE_SETTING_DEV_MODE", "off")
    monkeypatch.setenv("FEATURE_SETTING_LOG_LEVEL", "debug")
    monkeypatch.delenv("FEATURE_SETTING_DATABASE_URL", raising=False)

    config = BaseConfig()

    assert config.DATA_DIR == (tmp_path / "data").resolve()
    assert config.DATA_DIR.exists()
    assert config.DEV_MODE is False
    assert config.LOG_LEVEL == "DEBUG"
    assert config.DATABASE_URL == f"sqlite:///{config.DATA_DIR / 'feature_setting.db'}"


def test_database_url_override(monkeypatch, tmp_path):
    monkeypatch.setenv("FEATURE_SETTING_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("FEATURE_SETTING_DATABASE_URL", "postgresql://u:p@db/settings")

    config = BaseConfig()

    assert config.DATABASE_URL == "postgresql://u:p@db/settings"
    assert "connect_args" not in config.sqlalchemy_engine_options()


def test_create_store_context_binds_base_classes(context):
    assert Setting.repository() is context.settings_repo
    assert Feature.repository() is context.features_repo


def test_store_context_end_to_end(context):
    class MailerSetting(Setting):
        SETTINGS = {"sender": "noreply@example.com", "retries": 3}

    class MailerFeature(Feature):
        FEATURES = {"digest": False}

    MailerSetting.init_settings()
    MailerFeature.init_features()
    MailerSetting.set(retries=5)
    MailerFeature.enable("digest")

    assert MailerSetting.get("retries") == 5
    assert MailerFeature.is_enabled("digest") is True

    with session_scope(context.engine) as session:
        assert session.get(SettingRecord, 1).key == "sender"


def test_bootstrap_database_creates_tables(tmp_path):
    engine, factory = bootstrap_database(TestConfig(data_dir=tmp_path))
    try:
        assert set(inspect(engine).get_table_names()) == {"fs_setting", "fs_feature"}
        with factory() as session:
            session.add(SettingRecord(klass="app.X", key="k", value="str:v"))
        with factory() as session:
            assert session.get(SettingRecord, 1).value == "str:v"
    finally:
        engine.dispose()
