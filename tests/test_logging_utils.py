"""
Tests for logging setup.
"""
import logging
import os
import tempfile
import unittest
from logging.handlers import RotatingFileHandler
from types import SimpleNamespace

from logging_utils import LoggingConfig, setup_logging


class TestLoggingSetup(unittest.TestCase):

    def setUp(self):
        self.root = logging.getLogger()
        self.saved_handlers = self.root.handlers[:]
        self.saved_level = self.root.level
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        for handler in self.root.handlers[:]:
            self.root.removeHandler(handler)
            handler.close()
        for handler in self.saved_handlers:
            self.root.addHandler(handler)
        self.root.setLevel(self.saved_level)
        self.tmp.cleanup()

    def test_defaults(self):
        config = LoggingConfig()
        self.assertEqual(config.log_level, logging.INFO)
        self.assertEqual(config.logs_dir, "logs")
        self.assertEqual(config.third_party_levels["aiohttp"], logging.WARNING)

    def test_file_and_console_handlers(self):
        config = SimpleNamespace(LOGS_DIR=self.tmp.name, LOG_FILE="test.log", LOG_LEVEL=logging.WARNING)
        logger = setup_logging(config)

        self.assertEqual(logger.name, "trivia")
        file_handlers = [h for h in self.root.handlers if isinstance(h, RotatingFileHandler)]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(len(self.root.handlers), 2)

        logging.getLogger("trivia.question_cache").info("written to file only")
        file_handlers[0].flush()
        with open(os.path.join(self.tmp.name, "test.log"), encoding="utf-8") as f:
            self.assertIn("written to file only", f.read())

    def test_console_only(self):
        config = SimpleNamespace(ENABLE_FILE_LOGGING=False, LOGS_DIR=self.tmp.name)
        setup_logging(config)

        self.assertEqual(len(self.root.handlers), 1)
        self.assertFalse(os.path.exists(os.path.join(self.tmp.name, "trivia.log")))
        self.assertEqual(logging.getLogger("aiohttp").level, logging.WARNING)


if __name__ == '__main__':
    unittest.main()
