#!/usr/bin/env python3

import unittest
from unittest.mock import MagicMock
import logging

from medialibfs.content import ContentProducer, Failure, Folders, Records
from medialibfs.media_directory import MediaDirectory
from medialibfs.node_types import NodeKind
from medialibfs.store import MediaStore


class TestMediaDirectory(unittest.TestCase):
    """Test case for MediaDirectory."""

    def setUp(self):
        """Set up test fixtures before each test method."""
        self.store = MagicMock(spec=MediaStore)
        self.store.open.return_value = True
        logger = logging.getLogger("test")
        producer = ContentProducer(store_factory=lambda: self.store, logger=logger)
        self.directory = MediaDirectory(producer, logger=logger)

    def test_get_directory(self):
        self.store.get_items.return_value = [{"id": 7, "label": "Rock"}]

        listing = self.directory.get_directory("library/genres/")

        self.assertEqual(listing.label, "Genres")
        self.assertIsInstance(listing.result, Folders)
        self.assertEqual(listing.result.items[0].path, "library/genres/7/")

    def test_get_directory_records(self):
        self.store.get_songs_nav.return_value = [{"id": 1, "label": "Song"}]
        self.store.lookup_label_by_id.return_value = "A Night at the Opera"

        listing = self.directory.get_directory("library/albums/titles/9/songs/")

        self.assertEqual(listing.label, "Songs")
        self.assertIsInstance(listing.result, Records)
        self.store.get_songs_nav.assert_called_once_with(
            "library/albums/titles/9/songs/", -1, -1, 9, -1
        )

    def test_get_directory_invalid_path(self):
        listing = self.directory.get_directory("library/bogus/")

        self.assertEqual(listing.label, "")
        self.assertEqual(listing.result, Failure("invalid path"))
        self.store.open.assert_not_called()

    def test_get_directory_store_failure(self):
        self.store.open.return_value = False

        listing = self.directory.get_directory("library/songs/")

        self.assertEqual(listing.result, Failure("store unavailable"))

    def test_directory_types(self):
        path = "library/genres/7/artists/3/"
        self.assertEqual(self.directory.get_directory_type(path), NodeKind.ARTIST)
        self.assertEqual(self.directory.get_directory_child_type(path), NodeKind.ALBUM)
        self.assertEqual(self.directory.get_directory_parent_type(path), NodeKind.GENRE)

    def test_directory_types_on_bad_path(self):
        path = "library/genres/x/"
        self.assertEqual(self.directory.get_directory_type(path), NodeKind.NONE)
        self.assertEqual(self.directory.get_directory_child_type(path), NodeKind.NONE)
        self.assertEqual(self.directory.get_directory_parent_type(path), NodeKind.NONE)
        self.assertEqual(
            self.directory.get_directory_parent_type("library/"), NodeKind.NONE
        )

    def test_exists(self):
        self.assertTrue(self.directory.exists("library/"))
        self.assertTrue(self.directory.exists("library/movies/titles/"))
        self.assertFalse(self.directory.exists("library/movies/bogus/"))

    def test_is_all_item(self):
        self.assertTrue(self.directory.is_all_item("library/artists/-1/"))
        self.assertFalse(self.directory.is_all_item("library/artists/3/"))
        self.assertFalse(self.directory.is_all_item("library/artists/-1/albums/"))

    def test_is_artist_dir(self):
        self.assertTrue(self.directory.is_artist_dir("library/artists/"))
        self.assertFalse(self.directory.is_artist_dir("library/genres/"))

    def test_contains_songs(self):
        self.assertTrue(self.directory.contains_songs("library/songs/"))
        self.assertTrue(self.directory.contains_songs("library/albums/titles/9/"))
        self.assertTrue(self.directory.contains_songs("library/years/1999/albums/-1/"))
        self.assertFalse(self.directory.contains_songs("library/genres/"))
        self.assertFalse(self.directory.contains_songs("library/bogus/"))

    def test_get_query_params(self):
        params = self.directory.get_query_params("library/genres/7/artists/3/")
        self.assertEqual(params.as_dict(), {"genre": 7, "artist": 3})
        self.assertIsNone(self.directory.get_query_params("library/bogus/"))

    def test_get_label_from_filters(self):
        labels = {("genres", 7): "Rock", ("artists", 3): "Queen"}
        self.store.lookup_label_by_id.side_effect = lambda t, i: labels[(t, i)]

        label = self.directory.get_label("library/genres/7/artists/3/")

        self.assertEqual(label, "Rock / Queen")

    def test_get_label_with_year(self):
        self.assertEqual(self.directory.get_label("library/years/1999/"), "1999")

    def test_get_label_falls_back_to_category(self):
        self.assertEqual(self.directory.get_label("library/genres/"), "Genres")
        self.assertEqual(self.directory.get_label("library/"), "")
        self.assertEqual(self.directory.get_label("library/bogus/"), "")


if __name__ == "__main__":
    unittest.main()
