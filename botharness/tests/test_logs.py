"""
Tests for per-harness log capture.
"""

import logging

from ..logs import RoundLogHandler, create_player_logger, release_player_logger


class TestRoundLogHandler:
    """Tests for buffering and flushing."""

    def test_flush_appends_and_drains(self, tmp_path):
        """Each flush appends only what was logged since the last one."""
        logger, handler = create_player_logger("Tester")
        path = tmp_path / "log.txt"

        logger.info("first")
        handler.flush_to(path)
        logger.warning("second")
        handler.flush_to(path)
        handler.flush_to(path)

        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 2
        assert lines[0].endswith("[INFO] first")
        assert lines[1].endswith("[WARNING] second")
        release_player_logger(logger, handler)

    def test_nothing_buffered_writes_nothing(self, tmp_path):
        """An empty buffer creates no log file."""
        handler = RoundLogHandler()
        handler.flush_to(tmp_path / "log.txt")
        assert not (tmp_path / "log.txt").exists()

    def test_same_name_loggers_are_isolated(self):
        """Harnesses sharing a player name do not see each other's records."""
        first_logger, first = create_player_logger("Same")
        second_logger, second = create_player_logger("Same")

        first_logger.info("only first")

        assert "only first" in first.peek()
        assert second.peek() == ""
        release_player_logger(first_logger, first)
        release_player_logger(second_logger, second)

    def test_debug_not_captured(self):
        """Debug records reach the tree but not the round log."""
        logger, handler = create_player_logger("Quiet")
        logger.debug("noise")
        assert handler.peek() == ""
        assert logger.isEnabledFor(logging.DEBUG)
        release_player_logger(logger, handler)


class TestPlayerLogger:
    """Tests for the per-harness logger itself."""

    def test_logger_not_kept_by_logging_manager(self):
        """Creating harness loggers does not grow the global logger registry."""
        logger, handler = create_player_logger("Transient")
        release_player_logger(logger, handler)

        assert logger.name not in logging.Logger.manager.loggerDict

    def test_records_reach_the_logging_tree(self, caplog):
        """Records still propagate through the botharness.player logger."""
        logger, handler = create_player_logger("Loud")
        assert logger.parent is logging.getLogger("botharness.player")

        logger.warning("heard upstream")

        assert "heard upstream" in caplog.text
        release_player_logger(logger, handler)
