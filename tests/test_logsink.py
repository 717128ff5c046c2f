"""Tests for LoggingLogSink."""

import logging

from checkprofile.collaborators.logsink import LoggingLogSink


def test_warning_and_error_are_logged(caplog):
    sink = LoggingLogSink(logging.getLogger("checkprofile.test"))
    with caplog.at_level(logging.WARNING):
        sink.log_warning("Found duplicate id: memleak")
        sink.log_error("Error reloading the problems", OSError("no such file"))
    assert "Found duplicate id: memleak" in caplog.text
    assert "Error reloading the problems: no such file" in caplog.text
    assert sink.user_errors == []


def test_user_errors_are_kept(caplog):
    sink = LoggingLogSink()
    cause = ValueError("bad token")
    with caplog.at_level(logging.ERROR):
        sink.show_user_error("Invalid problem profile preferences found", cause)
    assert sink.user_errors == [("Invalid problem profile preferences found", cause)]
    assert "Invalid problem profile preferences found" in caplog.text
