import json
import logging

from utils.logger import MAX_FIELD_CHARS, JsonFormatter, LoggerConfig, LogSettings


def _record(name, msg, **extra):
    record = logging.LogRecord(name, logging.WARNING, __file__, 10, msg, None, None, func="fetch")
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_tags_component_and_clips_fields():
    record = _record(
        "tools.web.search_client",
        "Using snippet",
        extra_fields={"url": "https://example.com/" + "a" * 500, "status": 500},
    )
    entry = json.loads(JsonFormatter().format(record))
    assert entry["component"] == "web"
    assert entry["level"] == "WARNING"
    assert entry["message"] == "Using snippet"
    assert entry["status"] == 500
    assert len(entry["url"]) == MAX_FIELD_CHARS + 3
    assert entry["timestamp"].endswith("Z")


def test_unknown_package_is_app_component():
    entry = json.loads(JsonFormatter().format(_record("__main__", "hello")))
    assert entry["component"] == "app"
    assert "extra_fields" not in entry


def test_setup_writes_files(tmp_path):
    previous = LoggerConfig.settings
    try:
        LoggerConfig.setup_logging(LogSettings(log_dir=tmp_path, level="DEBUG"), force=True)
        logging.getLogger("orchestrator.query_classifier").error("model down")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert {p.name for p in tmp_path.iterdir()} == {"app.log", "error.log", "debug.log"}
        line = (tmp_path / "error.log").read_text(encoding="utf-8").strip().splitlines()[-1]
        assert json.loads(line)["component"] == "classifier"
    finally:
        LoggerConfig.setup_logging(previous, force=True)
