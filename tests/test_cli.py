#!/usr/bin/env python3

import io
import logging
import os
import tempfile
import unittest
from unittest.mock import MagicMock, patch

from medialibfs.cli import main
from medialibfs.store import MediaStore


class TestCli(unittest.TestCase):
    """Test case for the command-line interface."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.temp_dir = tempfile.TemporaryDirectory()
        patcher = patch(
            "medialibfs.cli.setup_logging", return_value=logging.getLogger("test")
        )
        self.mock_setup_logging = patcher.start()
        self.addCleanup(patcher.stop)

        self.store = MagicMock(spec=MediaStore)
        self.store.open.return_value = True

    def tearDown(self):
        """Clean up after each test."""
        self.temp_dir.cleanup()

    def write_config(self, text):
        with open(os.path.join(self.temp_dir.name, "config.json"), "w") as f:
            f.write(text)

    def run_cli(self, *argv):
        with patch("sys.stdout", new_callable=io.StringIO) as stdout:
            code = main(list(argv))
        return code, stdout.getvalue()

    def test_resolve(self):
        code, output = self.run_cli("resolve", "library/tvshows/genres/5/titles/")

        self.assertEqual(code, 0)
        self.assertIn("GENRE = 5", output)
        self.assertIn("TITLE_TVSHOWS", output)
        self.assertIn("lists: TITLE_TVSHOWS", output)
        self.assertIn("content: tvshows", output)
        self.assertIn("genre: 5", output)

    def test_resolve_invalid_path(self):
        code, _ = self.run_cli("resolve", "library/bogus/")
        self.assertEqual(code, 1)

    def test_ls_menu(self):
        with patch(
            "medialibfs.config.load_store_factory", return_value=lambda: self.store
        ):
            code, output = self.run_cli(
                "ls", "library/top100/", "--store", "x:y", "-c", self.temp_dir.name
            )

        self.assertEqual(code, 0)
        self.assertIn("Top 100 songs\tlibrary/top100/songs/", output)

    def test_ls_records(self):
        self.store.get_songs_nav.return_value = [{"id": 12, "label": "Bohemian Rhapsody"}]
        with patch(
            "medialibfs.config.load_store_factory", return_value=lambda: self.store
        ):
            code, output = self.run_cli(
                "ls", "library/songs/", "--store", "x:y", "-c", self.temp_dir.name
            )

        self.assertEqual(code, 0)
        self.assertIn("Bohemian Rhapsody\t12", output)

    def test_ls_failure(self):
        self.store.open.return_value = False
        with patch(
            "medialibfs.config.load_store_factory", return_value=lambda: self.store
        ):
            code, _ = self.run_cli(
                "ls", "library/songs/", "--store", "x:y", "-c", self.temp_dir.name
            )

        self.assertEqual(code, 1)

    def test_ls_without_store(self):
        code, _ = self.run_cli("ls", "library/", "-c", self.temp_dir.name)
        self.assertEqual(code, 1)

    def test_ls_with_malformed_config(self):
        self.write_config("{not json")

        code, output = self.run_cli("ls", "library/", "-c", self.temp_dir.name)

        self.assertEqual(code, 1)
        self.assertEqual(output, "")

    @patch("medialibfs.cli.mount_medialibfs")
    def test_mount_with_malformed_config(self, mock_mount):
        self.write_config("[1, 2]")

        code, _ = self.run_cli(
            "mount", "-m", self.temp_dir.name, "-c", self.temp_dir.name, "-f"
        )

        self.assertEqual(code, 1)
        mock_mount.assert_not_called()

    @patch("medialibfs.cli.mount_medialibfs")
    def test_mount(self, mock_mount):
        factory = MagicMock()
        with patch("medialibfs.config.load_store_factory", return_value=factory):
            code, _ = self.run_cli(
                "mount",
                "-m",
                self.temp_dir.name,
                "--store",
                "x:y",
                "--origin",
                "musicdb",
                "-c",
                self.temp_dir.name,
                "-f",
            )

        self.assertEqual(code, 0)
        mock_mount.assert_called_once_with(
            mount_point=self.temp_dir.name,
            store_factory=factory,
            origin="musicdb",
            show_all_items=True,
            strings={},
            foreground=True,
        )

    @patch("medialibfs.cli.mount_medialibfs")
    def test_mount_without_store(self, mock_mount):
        code, _ = self.run_cli(
            "mount", "-m", self.temp_dir.name, "-c", self.temp_dir.name, "-f"
        )

        self.assertEqual(code, 1)
        mock_mount.assert_not_called()

    @patch("medialibfs.cli.mount_medialibfs", side_effect=RuntimeError("fuse: busy"))
    def test_mount_failure(self, mock_mount):
        with patch("medialibfs.config.load_store_factory", return_value=MagicMock()):
            code, _ = self.run_cli(
                "mount",
                "-m",
                self.temp_dir.name,
                "--store",
                "x:y",
                "-c",
                self.temp_dir.name,
                "--no-all-items",
            )

        self.assertEqual(code, 1)
        self.assertFalse(mock_mount.call_args[1]["show_all_items"])


if __name__ == "__main__":
    unittest.main()
