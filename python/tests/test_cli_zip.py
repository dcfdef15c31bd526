"""
Integration tests for the zip CLI tool.
"""

import logging
import os
import shutil
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from cli_zip import EXIT_FAILURE, EXIT_OK, EXIT_USAGE, ZipCLI
from zip_ops import ArchiveError


class TestZipCLIBehavior(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.staging_root = tempfile.mkdtemp()
        self.input_dir = Path(self.temp_dir) / "docs"
        self.input_dir.mkdir()
        (self.input_dir / "readme.txt").write_text("hello", encoding="utf-8")

        # Keep user config files and JIPPER_* variables out of the tests
        self.env = patch.dict(
            os.environ, {"JIPPER_ARCHIVE_TEMP_DIR": self.staging_root}, clear=True
        )
        self.env.start()
        self.no_config = patch("zip_ops.config.find_config_file", return_value=None)
        self.no_config.start()
        self.cli = ZipCLI()

    def tearDown(self):
        self.no_config.stop()
        self.env.stop()
        shutil.rmtree(self.temp_dir, ignore_errors=True)
        shutil.rmtree(self.staging_root, ignore_errors=True)

    def test_create_archive(self):
        result = self.cli.run([str(self.input_dir)])

        self.assertEqual(result, EXIT_OK)
        self.assertTrue((Path(self.temp_dir) / "docs.zip").is_file())
        self.assertEqual(os.listdir(self.staging_root), [])

    def test_missing_directory_fails_cleanly(self):
        result = self.cli.run([str(Path(self.temp_dir) / "missing")])

        self.assertEqual(result, EXIT_FAILURE)
        self.assertEqual(sorted(os.listdir(self.temp_dir)), ["docs"])

    def test_zero_password_length_is_usage_error(self):
        result = self.cli.run([str(self.input_dir), "--length-of-password", "0"])

        self.assertEqual(result, EXIT_USAGE)
        self.assertFalse((Path(self.temp_dir) / "docs.zip").exists())

    def test_non_numeric_password_length_exits(self):
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit) as ctx:
                self.cli.run([str(self.input_dir), "-l", "twelve"])
        self.assertEqual(ctx.exception.code, 2)

    def test_password_options_are_forwarded(self):
        with patch("cli_zip.ArchiveManager") as manager_cls:
            result = self.cli.run([str(self.input_dir), "-p", "secret", "-l", "8"])

        self.assertEqual(result, EXIT_OK)
        manager_cls.return_value.create_archive.assert_called_once_with(
            str(self.input_dir), password="secret", password_length=8
        )

    def test_cli_flags_override_settings(self):
        with patch("cli_zip.ArchiveManager") as manager_cls:
            self.cli.run(
                [
                    str(self.input_dir),
                    "--exclude",
                    "Thumbs.db",
                    "-x",
                    "*.tmp",
                    "--encoding",
                    "shift_jis",
                    "--level",
                    "9",
                ]
            )

        settings = manager_cls.call_args[0][0]
        self.assertEqual(settings.exclude_patterns, ["Thumbs.db", "*.tmp"])
        self.assertEqual(settings.encoding, "shift_jis")
        self.assertEqual(settings.compression_level, 9)
        self.assertEqual(settings.temp_dir, self.staging_root)

    def test_invalid_level_is_usage_error(self):
        self.assertEqual(self.cli.run([str(self.input_dir), "--level", "12"]), EXIT_USAGE)

    def test_unknown_encoding_is_usage_error(self):
        result = self.cli.run([str(self.input_dir), "--encoding", "no-such-codec"])
        self.assertEqual(result, EXIT_USAGE)

    def test_missing_config_file_is_usage_error(self):
        result = self.cli.run(
            [str(self.input_dir), "--config", str(Path(self.temp_dir) / "nope.yml")]
        )
        self.assertEqual(result, EXIT_USAGE)

    def test_encoding_flag_with_scalar_config_section_is_usage_error(self):
        config_path = Path(self.temp_dir) / "jipper.yml"
        config_path.write_text("encoding: shift_jis\n", encoding="utf-8")

        result = self.cli.run(
            [str(self.input_dir), "--config", str(config_path), "--encoding", "cp932"]
        )

        self.assertEqual(result, EXIT_USAGE)
        self.assertFalse((Path(self.temp_dir) / "docs.zip").exists())

    def test_level_flag_fills_empty_config_section(self):
        config_path = Path(self.temp_dir) / "jipper.yml"
        config_path.write_text("archive:\n", encoding="utf-8")

        with patch("cli_zip.ArchiveManager") as manager_cls:
            result = self.cli.run(
                [str(self.input_dir), "--config", str(config_path), "--level", "9"]
            )

        self.assertEqual(result, EXIT_OK)
        self.assertEqual(manager_cls.call_args[0][0].compression_level, 9)

    def test_numeric_log_level_from_env(self):
        os.environ["JIPPER_LOGGING_LEVEL"] = "10"
        root = logging.getLogger()
        previous = root.level
        try:
            with patch("cli_zip.ArchiveManager"):
                self.assertEqual(self.cli.run([str(self.input_dir)]), EXIT_OK)
            self.assertEqual(root.level, logging.DEBUG)
        finally:
            root.setLevel(previous)

    def test_run_failure_returns_failure(self):
        with patch("cli_zip.ArchiveManager") as manager_cls:
            manager_cls.return_value.create_archive.side_effect = ArchiveError("boom")
            result = self.cli.run([str(self.input_dir)])

        self.assertEqual(result, EXIT_FAILURE)

    def test_unrepresentable_name_returns_failure(self):
        (self.input_dir / "\U0001F600.txt").write_text("x", encoding="utf-8")

        result = self.cli.run([str(self.input_dir)])

        self.assertEqual(result, EXIT_FAILURE)
        self.assertFalse((Path(self.temp_dir) / "docs.zip").exists())
        self.assertEqual(os.listdir(self.staging_root), [])

    def test_keyboard_interrupt(self):
        with patch("cli_zip.ArchiveManager") as manager_cls:
            manager_cls.return_value.create_archive.side_effect = KeyboardInterrupt
            self.assertEqual(self.cli.run([str(self.input_dir)]), 130)

    def test_quiet_and_verbose_are_exclusive(self):
        with patch("sys.stderr"):
            with self.assertRaises(SystemExit):
                self.cli.run([str(self.input_dir), "-q", "-v"])


if __name__ == "__main__":
    unittest.main()
