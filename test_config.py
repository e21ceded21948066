from tte import config, logger

def test_defaults():
    settings = config.Settings()
    assert settings.quit_times == 3
    assert settings.message_timeout == 5.0
    assert settings.alternate_screen is True

def test_parse_settings():
    settings = config.parse_settings([
        "# tte settings",
        "",
        "quit_times = 5",
        "message_timeout=2.5",
        "alternate_screen=no",
        "log_file=",
    ])
    assert settings.quit_times == 5
    assert settings.message_timeout == 2.5
    assert settings.alternate_screen is False
    assert settings.log_file == ""

def test_bad_values_keep_defaults():
    settings = config.parse_settings([
        "quit_times=abc",
        "message_timeout=soon",
        "alternate_screen=maybe",
        "bogus=1",
        "no equals sign",
    ])
    assert settings == config.Settings()

def test_quit_times_must_be_positive():
    assert config.parse_settings(["quit_times=0"]).quit_times == 3

def test_load_settings_missing_file(tmp_path):
    assert config.load_settings(str(tmp_path / "none.conf")) == config.Settings()

def test_load_settings_from_env(tmp_path, monkeypatch):
    path = tmp_path / "tte.conf"
    path.write_text("quit_times=2\n", encoding="utf-8")
    monkeypatch.setenv("TTE_CONFIG", str(path))
    assert config.load_settings().quit_times == 2

def test_logger_writes_when_configured(tmp_path):
    path = tmp_path / "logs" / "tte.log"
    logger.configure(str(path))
    logger.log("hello")
    logger.log_error("save failed", OSError(13, "Permission denied"))
    text = path.read_text(encoding="utf-8")
    assert "] hello\n" in text
    assert "ERROR save failed: PermissionError" in text

def test_logger_disabled_by_empty_path(tmp_path):
    logger.configure("")
    assert logger.LOG_FILE_PATH is None
    logger.log("dropped")
