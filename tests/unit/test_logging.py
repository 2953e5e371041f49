"""Unit tests for spdcore.utils.logging."""

from __future__ import annotations

import json

import spdcore
from spdcore.utils.logging import get_logger, setup_logging


class TestGetLogger:
    def test_package_imports(self):
        assert spdcore.decode_spd is not None

    def test_json_event_carries_logger_name(self, capsys):
        setup_logging(level="DEBUG", json_output=True)
        get_logger("spdcore.test").info("spd_test_event", slot=3)

        line = capsys.readouterr().err.strip().splitlines()[-1]
        event = json.loads(line)
        assert event["event"] == "spd_test_event"
        assert event["logger_name"] == "spdcore.test"
        assert event["slot"] == 3
        assert event["level"] == "info"

    def test_level_filtering(self, capsys):
        setup_logging(level="WARNING", json_output=True)
        log = get_logger("spdcore.test")
        log.info("spd_hidden")
        log.warning("spd_shown")

        err = capsys.readouterr().err
        assert "spd_hidden" not in err
        assert "spd_shown" in err

    def test_unnamed_logger(self, capsys):
        setup_logging(level="INFO", json_output=True)
        get_logger().info("spd_unnamed")
        assert "spd_unnamed" in capsys.readouterr().err
