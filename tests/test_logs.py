import io

from espnixie.logs import LogDispatcher, LoggingLevel, StreamLogger


def test_stream_logger_format():
    out = io.StringIO()
    StreamLogger(out).log(LoggingLevel.ERROR, "src/dir/file.cpp", 12, "x=%d", 5)
    assert out.getvalue() == "E file.cpp:12 x=5\r\n"


def test_leading_slash_kept():
    out = io.StringIO()
    StreamLogger(out).log(LoggingLevel.ESP_INFO, "/a.cpp", 1, "hi")
    assert out.getvalue().startswith("WI /a.cpp:1")


def test_message_truncated():
    out = io.StringIO()
    StreamLogger(out).log(LoggingLevel.DEBUG, "f", 1, "a" * 300)
    assert len(out.getvalue().split(" ", 2)[2].rstrip("\r\n")) == 127


def test_dispatcher_without_and_with_logger():
    out = io.StringIO()
    d = LogDispatcher()
    d.log(LoggingLevel.INFO, "f", 1, "lost")
    assert out.getvalue() == ""
    d.set_logger(StreamLogger(out))
    d.log(LoggingLevel.INFO, "f", 2, "kept")
    assert out.getvalue() == "I f:2 kept\r\n"