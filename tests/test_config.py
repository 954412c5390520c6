"""Unit tests for taskboard.engine.config — PlatformConfig and taskboard.yaml loading."""

import pytest

from taskboard.engine.config import (
    CONFIG_FILENAME,
    DatabaseConfig,
    LoggingConfig,
    PlatformConfig,
    SecurityConfig,
    get_config,
    get_project_root,
    load_config,
)
from taskboard.engine.errors import TaskboardConfigError


class TestPlatformConfig:
    """Test PlatformConfig Pydantic model."""

    def test_defaults(self):
        cfg = PlatformConfig()
        assert cfg.name == "Taskboard"
        assert cfg.environment == "dev"
        assert cfg.database.pool_size == 10
        assert cfg.security.session_timeout == 7 * 24 * 3600
        assert cfg.security.password_min_length == 8
        assert cfg.logging.level == "INFO"
        assert cfg.ui.display_date_format == "%b %d, %Y"

    def test_valid_environments(self):
        for env in ("dev", "staging", "prod"):
            assert PlatformConfig(environment=env).environment == env

    def test_invalid_environment(self):
        with pytest.raises(ValueError, match="dev/staging/prod"):
            PlatformConfig(environment="test")

    def test_sqlite_detection(self):
        assert DatabaseConfig(url="sqlite:///tasks.db").is_sqlite is True
        assert DatabaseConfig().is_sqlite is False

    def test_log_level_is_normalised(self):
        assert LoggingConfig(level="debug").level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValueError):
            LoggingConfig(level="LOUD")

    def test_bcrypt_rounds_range(self):
        with pytest.raises(ValueError, match="between 4 and 31"):
            SecurityConfig(bcrypt_rounds=2)


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_dir):
        cfg = load_config(str(tmp_dir / CONFIG_FILENAME))
        assert cfg == PlatformConfig()

    def test_loads_yaml(self, tmp_dir):
        path = tmp_dir / CONFIG_FILENAME
        path.write_text(
            "platform:\n"
            "  name: TeamBoard\n"
            "environment: staging\n"
            "database:\n"
            "  url: sqlite:///board.db\n"
            "security:\n"
            "  password_min_length: 12\n"
            "ui:\n"
            "  display_date_format: '%d.%m.%Y'\n",
            encoding="utf-8",
        )
        cfg = load_config(str(path))
        assert cfg.name == "TeamBoard"
        assert cfg.environment == "staging"
        assert cfg.database.url == "sqlite:///board.db"
        assert cfg.security.password_min_length == 12
        assert cfg.ui.display_date_format == "%d.%m.%Y"

    def test_invalid_yaml(self, tmp_dir):
        path = tmp_dir / CONFIG_FILENAME
        path.write_text("database: [unclosed\n", encoding="utf-8")
        with pytest.raises(TaskboardConfigError, match="Could not parse"):
            load_config(str(path))

    def test_invalid_values(self, tmp_dir):
        path = tmp_dir / CONFIG_FILENAME
        path.write_text("environment: qa\n", encoding="utf-8")
        with pytest.raises(TaskboardConfigError) as exc_info:
            load_config(str(path))
        assert exc_info.value.context["path"] == str(path)

    def test_get_config_caches(self, tmp_dir, monkeypatch):
        monkeypatch.chdir(tmp_dir)
        assert get_config() is get_config()

    def test_auto_discovery_walks_up(self, tmp_dir, monkeypatch):
        (tmp_dir / CONFIG_FILENAME).write_text("environment: prod\n", encoding="utf-8")
        nested = tmp_dir / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.chdir(nested)
        assert get_project_root() == tmp_dir.resolve()
        assert load_config().environment == "prod"
