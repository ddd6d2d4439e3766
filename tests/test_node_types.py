#!/usr/bin/env python3

import unittest
from unittest.mock import patch

from medialibfs import node_types
from medialibfs.content import QUERIES, content_kind
from medialibfs.directory_node import (
    DirectoryNode,
    build_path,
    create_child,
    parse_path,
    token_for,
)
from medialibfs.errors import RegistryInconsistencyError
from medialibfs.node_types import (
    MENUS,
    MenuEntry,
    NodeKind,
    dimension_child_kind,
    is_menu,
    item_type_for,
    menu_entries,
    validate_registry,
)
from medialibfs.query_params import collect_filters


def walk_tree(origin="library"):
    """Yield every node reachable from the root, trying "-1" and "1" as values."""
    stack = [DirectoryNode.root(origin)]
    while stack:
        node = stack.pop()
        yield node
        if is_menu(node.kind):
            for entry in menu_entries(node.kind):
                stack.append(create_child(node, entry.kind, entry.token))
        elif node.is_selected:
            child = node.child_kind()
            stack.append(create_child(node, child, token_for(node, child)))
        elif node.is_dimension:
            for value in ("-1", "1"):
                stack.append(node.with_value(value))


class TestRegistry(unittest.TestCase):
    """Test case for the node kind registry."""

    def test_registry_is_consistent(self):
        validate_registry()

    def test_every_kind_is_reachable(self):
        reached = {node.kind for node in walk_tree()}
        expected = set(NodeKind) - {NodeKind.NONE}
        self.assertEqual(reached, expected)

    def test_no_chain_claims_a_slot_twice(self):
        """Collecting filters must succeed for every reachable chain."""
        for node in walk_tree():
            collect_filters(node)

    def test_every_listing_has_a_query(self):
        for node in walk_tree():
            if is_menu(node.kind):
                continue
            self.assertIn(content_kind(node), QUERIES, build_path(node))

    def test_every_reachable_path_round_trips(self):
        for node in walk_tree():
            path = build_path(node)
            self.assertEqual(parse_path(path), node, path)
            self.assertEqual(build_path(parse_path(path)), path)

    def test_duplicate_menu_token_is_rejected(self):
        broken = (
            MenuEntry(NodeKind.SONG_TOP100, "songs", "top100_songs"),
            MenuEntry(NodeKind.ALBUM_TOP100, "songs", "top100_albums"),
        )
        with patch.dict(MENUS, {NodeKind.TOP100: broken}):
            with self.assertRaises(RegistryInconsistencyError):
                validate_registry()

    def test_numeric_menu_token_is_rejected(self):
        broken = (MenuEntry(NodeKind.SONG_TOP100, "100", "top100_songs"),)
        with patch.dict(MENUS, {NodeKind.TOP100: broken}):
            with self.assertRaises(RegistryInconsistencyError):
                validate_registry()

    def test_dimension_without_slot_is_rejected(self):
        info = node_types.KIND_INFO[NodeKind.GENRE]._replace(slot="mood")
        with patch.dict(node_types.KIND_INFO, {NodeKind.GENRE: info}):
            with self.assertRaises(RegistryInconsistencyError):
                validate_registry()

    def test_menu_order_is_presentation_order(self):
        tokens = [entry.token for entry in menu_entries(NodeKind.TOP100)]
        self.assertEqual(tokens, ["songs", "albums"])
        self.assertTrue(all(e.on_top for e in menu_entries(NodeKind.TOP100)))

    def test_non_menu_has_no_entries(self):
        self.assertEqual(menu_entries(NodeKind.SONG), ())


class TestTransitions(unittest.TestCase):
    """Test case for selected dimension routing."""

    def test_grouped_kinds_route_by_content(self):
        self.assertEqual(
            dimension_child_kind(NodeKind.GENRE, "5", "music"), NodeKind.ARTIST
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.GENRE, "5", "movies"), NodeKind.TITLE_MOVIES
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.GENRE, "5", "tvshows"),
            NodeKind.TITLE_TVSHOWS,
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.YEAR, "1999", "music"), NodeKind.YEAR_ALBUM
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.ACTOR, "4", "musicvideos"),
            NodeKind.MUSICVIDEOS_ALBUM,
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.DIRECTOR, "4", "musicvideos"),
            NodeKind.TITLE_MUSICVIDEOS,
        )

    def test_all_items_selects_songs_grouping(self):
        self.assertEqual(
            dimension_child_kind(NodeKind.ALBUM_COMPILATIONS, "-1", "music"),
            NodeKind.ALBUM_COMPILATIONS_SONGS,
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.ALBUM_COMPILATIONS, "12", "music"),
            NodeKind.SONG,
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.YEAR_ALBUM, "-1", "music"),
            NodeKind.YEAR_SONG,
        )

    def test_fixed_children(self):
        self.assertEqual(
            dimension_child_kind(NodeKind.ARTIST, "3", "music"), NodeKind.ALBUM
        )
        self.assertEqual(
            dimension_child_kind(NodeKind.SEASONS, "2", "tvshows"), NodeKind.EPISODES
        )

    def test_terminal_has_no_child(self):
        self.assertEqual(
            dimension_child_kind(NodeKind.SONG, "1", "music"), NodeKind.NONE
        )

    def test_item_type_for_music_video_artists(self):
        self.assertEqual(item_type_for(NodeKind.ACTOR, "movies"), "actors")
        self.assertEqual(item_type_for(NodeKind.ACTOR, "musicvideos"), "artists")
        self.assertIsNone(item_type_for(NodeKind.NONE))


if __name__ == "__main__":
    unittest.main()
