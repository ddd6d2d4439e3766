#!/usr/bin/env python3

import unittest

from medialibfs.directory_node import (
    DirectoryNode,
    build_path,
    parse_path,
    resolve_child_kind,
    split_path,
    try_parse_path,
)
from medialibfs.errors import ParseError
from medialibfs.node_types import NodeKind


class TestParsePath(unittest.TestCase):
    """Test case for path parsing."""

    def test_parse_root(self):
        node = parse_path("library/")
        self.assertEqual(node.kind, NodeKind.ROOT)
        self.assertEqual(node.origin, "library")
        self.assertIsNone(node.parent)

    def test_parse_music_chain(self):
        node = parse_path("library/genres/7/artists/3/albums/9/songs/")

        chain = [(n.kind, n.name) for n in node.chain()]
        self.assertEqual(
            chain,
            [
                (NodeKind.ROOT, ""),
                (NodeKind.GENRE, "7"),
                (NodeKind.ARTIST, "3"),
                (NodeKind.ALBUM, "9"),
                (NodeKind.SONG, "songs"),
            ],
        )
        self.assertTrue(all(n.origin == "library" for n in node.chain()))

    def test_parse_tvshows_chain(self):
        node = parse_path("library/tvshows/genres/5/titles/")

        self.assertEqual(node.kind, NodeKind.TITLE_TVSHOWS)
        self.assertFalse(node.is_selected)
        self.assertEqual(node.parent.kind, NodeKind.GENRE)
        self.assertEqual(node.parent.node_id, 5)
        self.assertEqual(node.parent.parent.kind, NodeKind.TVSHOWS_OVERVIEW)
        self.assertEqual(node.parent.parent.name, "tvshows")

    def test_parse_all_items_sentinel(self):
        node = parse_path("library/albums/compilations/-1/")

        self.assertEqual(node.kind, NodeKind.ALBUM_COMPILATIONS)
        self.assertTrue(node.is_all)
        self.assertEqual(node.node_id, -1)
        self.assertEqual(node.child_kind(), NodeKind.ALBUM_COMPILATIONS_SONGS)

    def test_trailing_slash_is_optional(self):
        self.assertEqual(parse_path("library/genres/7"), parse_path("library/genres/7/"))

    def test_parse_without_origin_prefix(self):
        node = parse_path("genres/7/", origin="musicdb")
        self.assertEqual(node.origin, "musicdb")
        self.assertEqual(build_path(node), "musicdb/genres/7/")

    def test_unknown_token(self):
        with self.assertRaises(ParseError) as ctx:
            parse_path("library/bogus/")
        self.assertEqual(ctx.exception.token, "bogus")
        self.assertEqual(ctx.exception.path, "library/bogus/")

    def test_wrong_keyword_after_selected_dimension(self):
        # A music genre leads to artists, not albums
        with self.assertRaises(ParseError):
            parse_path("library/genres/7/albums/")

    def test_non_integer_value(self):
        for path in ("library/genres/rock/", "library/genres/-2/", "library/years/1e3/"):
            with self.assertRaises(ParseError, msg=path):
                parse_path(path)

    def test_non_ascii_digits_rejected(self):
        for path in ("library/genres/\u00b2/", "library/years/\u0661\u0669\u0669\u0669/"):
            with self.assertRaises(ParseError, msg=path):
                parse_path(path)
        self.assertIsNone(try_parse_path("library/artists/\u00b3/"))

    def test_terminal_has_no_children(self):
        with self.assertRaises(ParseError):
            parse_path("library/songs/12/")

    def test_empty_segments_and_origin(self):
        for path in ("", "/", "/genres/", "library//genres/"):
            with self.assertRaises(ParseError, msg=path):
                parse_path(path)

    def test_try_parse_path(self):
        self.assertIsNone(try_parse_path("library/bogus/"))
        self.assertEqual(try_parse_path("library/songs/").kind, NodeKind.SONG)


class TestBuildPath(unittest.TestCase):
    """Test case for path building."""

    def test_build_round_trip(self):
        paths = [
            "library/",
            "library/genres/",
            "library/genres/7/artists/3/albums/9/songs/",
            "library/albums/titles/-1/songs/",
            "library/top100/albums/4/songs/",
            "library/movies/years/1999/titles/",
            "library/musicvideos/artists/4/albums/-1/titles/",
            "library/inprogresstvshows/3/seasons/1/episodes/",
        ]
        for path in paths:
            self.assertEqual(build_path(parse_path(path)), path)

    def test_build_from_nodes(self):
        root = DirectoryNode.root("library")
        genre = DirectoryNode(NodeKind.GENRE, "7", "library", root)
        artist = DirectoryNode(NodeKind.ARTIST, "", "library", genre)

        self.assertEqual(artist.build_path(), "library/genres/7/artists/")
        self.assertEqual(parse_path(artist.build_path()), artist)


class TestResolveChildKind(unittest.TestCase):
    """Test case for child kind resolution."""

    def test_menu_lookup(self):
        root = DirectoryNode.root("library")
        self.assertEqual(resolve_child_kind(root, "genres"), NodeKind.GENRE)
        self.assertEqual(resolve_child_kind(root, "bogus"), NodeKind.NONE)

    def test_unselected_dimension_has_no_child(self):
        node = parse_path("library/genres/")
        self.assertEqual(resolve_child_kind(node, "artists"), NodeKind.NONE)

    def test_selected_dimension_accepts_only_its_keyword(self):
        node = parse_path("library/genres/7/")
        self.assertEqual(resolve_child_kind(node, "artists"), NodeKind.ARTIST)
        self.assertEqual(resolve_child_kind(node, "albums"), NodeKind.NONE)


class TestSplitPath(unittest.TestCase):
    def test_split(self):
        self.assertEqual(split_path("library/genres/7/"), ("library", ["genres", "7"]))
        self.assertEqual(split_path("library"), ("library", []))
        self.assertEqual(split_path("/genres/", origin="x"), ("x", ["genres"]))


if __name__ == "__main__":
    unittest.main()
