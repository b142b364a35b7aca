import logging

from typed_struct import logging as struct_logging


def test_log_message(caplog):
    logger = logging.getLogger("typed_struct.tests")
    with caplog.at_level(logging.DEBUG, logger="typed_struct.tests"):
        struct_logging.log_message("hello", level="warning", logger=logger)

    record = caplog.records[-1]
    assert record.levelno == logging.WARNING
    assert record.getMessage() == "hello"


def test_log_exception(caplog):
    logger = logging.getLogger("typed_struct.tests")
    try:
        raise ValueError("bad value")
    except ValueError as exc:
        with caplog.at_level(logging.DEBUG, logger="typed_struct.tests"):
            struct_logging.log_exception(
                exc, "Could not parse", level=logging.DEBUG, logger=logger
            )

    record = caplog.records[-1]
    assert record.levelno == logging.DEBUG
    assert record.getMessage() == "Could not parse: bad value"
    assert record.exc_info[0] is ValueError


def test_setup_logging(tmp_path, monkeypatch):
    captured = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: captured.update(kwargs))
    log_file = tmp_path / "logs" / "typed_struct.log"

    struct_logging.setup_logging(log_file=str(log_file), base_level="DEBUG")

    handlers = captured["handlers"]
    try:
        assert captured["level"] == "DEBUG"
        assert [type(handler) for handler in handlers] == [
            logging.StreamHandler,
            logging.FileHandler,
        ]
        assert log_file.parent.is_dir()
    finally:
        for handler in handlers:
            handler.close()
