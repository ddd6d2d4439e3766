#!/usr/bin/env python3
"""Static node kind registry.

Every kind of directory node is described once in ``KIND_INFO``. Menu kinds
additionally own an ordered entry table in ``MENUS``; the order of a table is
the presentation order of the folders it generates. Selected dimension nodes
route to exactly one child kind through ``dimension_child_kind``.

All tables are built at import time and never mutated afterwards, so they are
safe to read from any thread.
"""

from enum import Enum
from typing import Dict, NamedTuple, Optional, Tuple
from medialibfs.constants import (
    ALL_ITEMS_TOKEN,
    CONTENT_MOVIES,
    CONTENT_MUSIC,
    CONTENT_MUSICVIDEOS,
    CONTENT_TVSHOWS,
    FILTER_SLOTS,
)
from medialibfs.errors import RegistryInconsistencyError


class NodeKind(Enum):
    """Every kind of node the directory tree can contain."""

    NONE = "none"
    ROOT = "root"

    # Music
    GENRE = "genre"
    SOURCE = "source"
    ROLE = "role"
    ARTIST = "artist"
    ALBUMS_OVERVIEW = "albums_overview"
    ALBUM = "album"
    SINGLES = "singles"
    SONG = "song"
    YEAR = "year"
    YEAR_ALBUM = "year_album"
    YEAR_SONG = "year_song"
    TOP100 = "top100"
    SONG_TOP100 = "song_top100"
    ALBUM_TOP100 = "album_top100"
    ALBUM_TOP100_SONGS = "album_top100_songs"
    ALBUM_RECENTLY_ADDED = "album_recently_added"
    ALBUM_RECENTLY_ADDED_SONGS = "album_recently_added_songs"
    ALBUM_RECENTLY_PLAYED = "album_recently_played"
    ALBUM_RECENTLY_PLAYED_SONGS = "album_recently_played_songs"
    ALBUM_COMPILATIONS = "album_compilations"
    ALBUM_COMPILATIONS_SONGS = "album_compilations_songs"
    PLAYLIST = "playlist"

    # Video
    MOVIES_OVERVIEW = "movies_overview"
    TVSHOWS_OVERVIEW = "tvshows_overview"
    MUSICVIDEOS_OVERVIEW = "musicvideos_overview"
    TITLE_MOVIES = "title_movies"
    TITLE_TVSHOWS = "title_tvshows"
    TITLE_MUSICVIDEOS = "title_musicvideos"
    SEASONS = "seasons"
    EPISODES = "episodes"
    RECENTLY_ADDED_MOVIES = "recently_added_movies"
    RECENTLY_ADDED_EPISODES = "recently_added_episodes"
    RECENTLY_ADDED_MUSICVIDEOS = "recently_added_musicvideos"
    INPROGRESS_TVSHOWS = "inprogress_tvshows"
    ACTOR = "actor"
    DIRECTOR = "director"
    STUDIO = "studio"
    COUNTRY = "country"
    SETS = "sets"
    TAGS = "tags"
    MUSICVIDEOS_ALBUM = "musicvideos_album"


class KindRole(Enum):
    MENU = "menu"
    DIMENSION = "dimension"
    TERMINAL = "terminal"


class KindInfo(NamedTuple):
    """Static description of one node kind.

    Attributes:
        role: Whether the kind is a menu, a dimension or a terminal listing
        label: Label key of the category the kind represents
        keyword: Path token used when the kind is reached from a selected
            dimension node (menus supply their own tokens)
        slot: Filter slot a dimension fills
        item_type: Store item type used for grouped listings and id lookups
        all_label: Label key of the "All ..." entry of a dimension
        offers_all: Whether listings of the kind start with an "All" folder
        content: Content type contributed to every descendant
    """

    role: KindRole
    label: str
    keyword: Optional[str] = None
    slot: Optional[str] = None
    item_type: Optional[str] = None
    all_label: str = "all_items"
    offers_all: bool = False
    content: Optional[str] = None


class MenuEntry(NamedTuple):
    kind: NodeKind
    token: str
    label: str
    on_top: bool = False


MENU = KindRole.MENU
DIMENSION = KindRole.DIMENSION
TERMINAL = KindRole.TERMINAL

KIND_INFO: Dict[NodeKind, KindInfo] = {
    NodeKind.ROOT: KindInfo(MENU, ""),
    # Music
    NodeKind.GENRE: KindInfo(DIMENSION, "genres", "genres", "genre", "genres"),
    NodeKind.SOURCE: KindInfo(DIMENSION, "sources", "sources", "source", "sources"),
    NodeKind.ROLE: KindInfo(DIMENSION, "roles", "roles", "role", "roles"),
    NodeKind.ARTIST: KindInfo(
        DIMENSION, "artists", "artists", "artist", "artists", "all_artists", True
    ),
    NodeKind.ALBUMS_OVERVIEW: KindInfo(MENU, "albums"),
    NodeKind.ALBUM: KindInfo(
        DIMENSION, "albums", "albums", "album", "albums", "all_albums", True
    ),
    NodeKind.SINGLES: KindInfo(TERMINAL, "singles", "singles"),
    NodeKind.SONG: KindInfo(TERMINAL, "songs", "songs"),
    NodeKind.YEAR: KindInfo(DIMENSION, "years", "years", "year", "years"),
    NodeKind.YEAR_ALBUM: KindInfo(
        DIMENSION, "albums", "albums", "album", "albums", "all_albums", True
    ),
    NodeKind.YEAR_SONG: KindInfo(TERMINAL, "songs", "songs"),
    NodeKind.TOP100: KindInfo(MENU, "top100"),
    NodeKind.SONG_TOP100: KindInfo(TERMINAL, "top100_songs", "songs"),
    NodeKind.ALBUM_TOP100: KindInfo(
        DIMENSION, "top100_albums", "albums", "album", "albums", "all_albums", True
    ),
    NodeKind.ALBUM_TOP100_SONGS: KindInfo(TERMINAL, "top100_albums", "songs"),
    NodeKind.ALBUM_RECENTLY_ADDED: KindInfo(
        DIMENSION,
        "recently_added_albums",
        "recentlyadded",
        "album",
        "albums",
        "all_albums",
        True,
    ),
    NodeKind.ALBUM_RECENTLY_ADDED_SONGS: KindInfo(
        TERMINAL, "recently_added_albums", "songs"
    ),
    NodeKind.ALBUM_RECENTLY_PLAYED: KindInfo(
        DIMENSION,
        "recently_played_albums",
        "recentlyplayed",
        "album",
        "albums",
        "all_albums",
        True,
    ),
    NodeKind.ALBUM_RECENTLY_PLAYED_SONGS: KindInfo(
        TERMINAL, "recently_played_albums", "songs"
    ),
    NodeKind.ALBUM_COMPILATIONS: KindInfo(
        DIMENSION,
        "compilations",
        "compilations",
        "album",
        "albums",
        "all_albums",
        True,
    ),
    NodeKind.ALBUM_COMPILATIONS_SONGS: KindInfo(TERMINAL, "compilations", "songs"),
    NodeKind.PLAYLIST: KindInfo(
        DIMENSION, "playlists", "playlists", "playlist", "playlists"
    ),
    # Video
    NodeKind.MOVIES_OVERVIEW: KindInfo(MENU, "movies", content=CONTENT_MOVIES),
    NodeKind.TVSHOWS_OVERVIEW: KindInfo(MENU, "tvshows", content=CONTENT_TVSHOWS),
    NodeKind.MUSICVIDEOS_OVERVIEW: KindInfo(
        MENU, "musicvideos", content=CONTENT_MUSICVIDEOS
    ),
    NodeKind.TITLE_MOVIES: KindInfo(TERMINAL, "titles", "titles"),
    NodeKind.TITLE_TVSHOWS: KindInfo(
        DIMENSION, "titles", "titles", "tvshow", "tvshows"
    ),
    NodeKind.TITLE_MUSICVIDEOS: KindInfo(TERMINAL, "titles", "titles"),
    NodeKind.SEASONS: KindInfo(
        DIMENSION, "seasons", "seasons", "season", "seasons", "all_seasons", True
    ),
    NodeKind.EPISODES: KindInfo(TERMINAL, "episodes", "episodes"),
    NodeKind.RECENTLY_ADDED_MOVIES: KindInfo(
        TERMINAL, "recently_added_movies", content=CONTENT_MOVIES
    ),
    NodeKind.RECENTLY_ADDED_EPISODES: KindInfo(
        TERMINAL, "recently_added_episodes", content=CONTENT_TVSHOWS
    ),
    NodeKind.RECENTLY_ADDED_MUSICVIDEOS: KindInfo(
        TERMINAL, "recently_added_musicvideos", content=CONTENT_MUSICVIDEOS
    ),
    NodeKind.INPROGRESS_TVSHOWS: KindInfo(
        DIMENSION,
        "inprogress_tvshows",
        "inprogresstvshows",
        "tvshow",
        "tvshows",
        content=CONTENT_TVSHOWS,
    ),
    NodeKind.ACTOR: KindInfo(DIMENSION, "actors", "actors", "actor", "actors"),
    NodeKind.DIRECTOR: KindInfo(
        DIMENSION, "directors", "directors", "director", "directors"
    ),
    NodeKind.STUDIO: KindInfo(DIMENSION, "studios", "studios", "studio", "studios"),
    NodeKind.COUNTRY: KindInfo(
        DIMENSION, "countries", "countries", "country", "countries"
    ),
    NodeKind.SETS: KindInfo(DIMENSION, "sets", "sets", "set", "sets"),
    NodeKind.TAGS: KindInfo(DIMENSION, "tags", "tags", "tag", "tags"),
    NodeKind.MUSICVIDEOS_ALBUM: KindInfo(
        DIMENSION, "albums", "albums", "album", "albums"
    ),
}

MENUS: Dict[NodeKind, Tuple[MenuEntry, ...]] = {
    NodeKind.ROOT: (
        MenuEntry(NodeKind.GENRE, "genres", "genres"),
        MenuEntry(NodeKind.ARTIST, "artists", "artists"),
        MenuEntry(NodeKind.ALBUMS_OVERVIEW, "albums", "albums"),
        MenuEntry(NodeKind.SINGLES, "singles", "singles"),
        MenuEntry(NodeKind.SONG, "songs", "songs"),
        MenuEntry(NodeKind.YEAR, "years", "years"),
        MenuEntry(NodeKind.TOP100, "top100", "top100"),
        MenuEntry(NodeKind.ROLE, "roles", "roles"),
        MenuEntry(NodeKind.SOURCE, "sources", "sources"),
        MenuEntry(NodeKind.PLAYLIST, "playlists", "playlists"),
        MenuEntry(NodeKind.MOVIES_OVERVIEW, "movies", "movies"),
        MenuEntry(NodeKind.TVSHOWS_OVERVIEW, "tvshows", "tvshows"),
        MenuEntry(NodeKind.MUSICVIDEOS_OVERVIEW, "musicvideos", "musicvideos"),
        MenuEntry(
            NodeKind.RECENTLY_ADDED_MOVIES,
            "recentlyaddedmovies",
            "recently_added_movies",
        ),
        MenuEntry(
            NodeKind.RECENTLY_ADDED_EPISODES,
            "recentlyaddedepisodes",
            "recently_added_episodes",
        ),
        MenuEntry(
            NodeKind.RECENTLY_ADDED_MUSICVIDEOS,
            "recentlyaddedmusicvideos",
            "recently_added_musicvideos",
        ),
        MenuEntry(
            NodeKind.INPROGRESS_TVSHOWS, "inprogresstvshows", "inprogress_tvshows"
        ),
    ),
    NodeKind.ALBUMS_OVERVIEW: (
        MenuEntry(NodeKind.ALBUM, "titles", "albums"),
        MenuEntry(NodeKind.ALBUM_COMPILATIONS, "compilations", "compilations"),
        MenuEntry(
            NodeKind.ALBUM_RECENTLY_ADDED, "recentlyadded", "recently_added_albums"
        ),
        MenuEntry(
            NodeKind.ALBUM_RECENTLY_PLAYED, "recentlyplayed", "recently_played_albums"
        ),
    ),
    NodeKind.TOP100: (
        MenuEntry(NodeKind.SONG_TOP100, "songs", "top100_songs", True),
        MenuEntry(NodeKind.ALBUM_TOP100, "albums", "top100_albums", True),
    ),
    NodeKind.MOVIES_OVERVIEW: (
        MenuEntry(NodeKind.GENRE, "genres", "genres"),
        MenuEntry(NodeKind.TITLE_MOVIES, "titles", "titles"),
        MenuEntry(NodeKind.YEAR, "years", "years"),
        MenuEntry(NodeKind.ACTOR, "actors", "actors"),
        MenuEntry(NodeKind.DIRECTOR, "directors", "directors"),
        MenuEntry(NodeKind.STUDIO, "studios", "studios"),
        MenuEntry(NodeKind.SETS, "sets", "sets"),
        MenuEntry(NodeKind.COUNTRY, "countries", "countries"),
        MenuEntry(NodeKind.TAGS, "tags", "tags"),
    ),
    NodeKind.TVSHOWS_OVERVIEW: (
        MenuEntry(NodeKind.GENRE, "genres", "genres"),
        MenuEntry(NodeKind.TITLE_TVSHOWS, "titles", "titles"),
        MenuEntry(NodeKind.YEAR, "years", "years"),
        MenuEntry(NodeKind.ACTOR, "actors", "actors"),
        MenuEntry(NodeKind.STUDIO, "studios", "studios"),
        MenuEntry(NodeKind.TAGS, "tags", "tags"),
    ),
    NodeKind.MUSICVIDEOS_OVERVIEW: (
        MenuEntry(NodeKind.GENRE, "genres", "genres", True),
        MenuEntry(NodeKind.TITLE_MUSICVIDEOS, "titles", "titles", True),
        MenuEntry(NodeKind.YEAR, "years", "years", True),
        MenuEntry(NodeKind.ACTOR, "artists", "artists", True),
        MenuEntry(NodeKind.MUSICVIDEOS_ALBUM, "albums", "albums", True),
        MenuEntry(NodeKind.DIRECTOR, "directors", "directors", True),
        MenuEntry(NodeKind.STUDIO, "studios", "studios", True),
        MenuEntry(NodeKind.TAGS, "tags", "tags", True),
    ),
}

# Dimensions whose listing is a plain "distinct values" query and whose
# child depends on the content type of the subtree.
GROUPED_KINDS = frozenset(
    {
        NodeKind.GENRE,
        NodeKind.SOURCE,
        NodeKind.ROLE,
        NodeKind.YEAR,
        NodeKind.ACTOR,
        NodeKind.DIRECTOR,
        NodeKind.STUDIO,
        NodeKind.COUNTRY,
        NodeKind.SETS,
        NodeKind.TAGS,
    }
)

FIXED_CHILDREN: Dict[NodeKind, NodeKind] = {
    NodeKind.ARTIST: NodeKind.ALBUM,
    NodeKind.ALBUM: NodeKind.SONG,
    NodeKind.PLAYLIST: NodeKind.SONG,
    NodeKind.MUSICVIDEOS_ALBUM: NodeKind.TITLE_MUSICVIDEOS,
    NodeKind.TITLE_TVSHOWS: NodeKind.SEASONS,
    NodeKind.INPROGRESS_TVSHOWS: NodeKind.SEASONS,
    NodeKind.SEASONS: NodeKind.EPISODES,
}

# Album-like dimensions: "-1" lists every song of the grouping instead of
# drilling into one album.
SONGS_GROUPING: Dict[NodeKind, NodeKind] = {
    NodeKind.ALBUM_COMPILATIONS: NodeKind.ALBUM_COMPILATIONS_SONGS,
    NodeKind.ALBUM_RECENTLY_ADDED: NodeKind.ALBUM_RECENTLY_ADDED_SONGS,
    NodeKind.ALBUM_RECENTLY_PLAYED: NodeKind.ALBUM_RECENTLY_PLAYED_SONGS,
    NodeKind.ALBUM_TOP100: NodeKind.ALBUM_TOP100_SONGS,
    NodeKind.YEAR_ALBUM: NodeKind.YEAR_SONG,
}

TITLE_KINDS: Dict[str, NodeKind] = {
    CONTENT_MOVIES: NodeKind.TITLE_MOVIES,
    CONTENT_TVSHOWS: NodeKind.TITLE_TVSHOWS,
    CONTENT_MUSICVIDEOS: NodeKind.TITLE_MUSICVIDEOS,
}

SONG_KINDS = frozenset(
    {
        NodeKind.SONG,
        NodeKind.SINGLES,
        NodeKind.YEAR_SONG,
        NodeKind.SONG_TOP100,
        NodeKind.ALBUM_TOP100_SONGS,
        NodeKind.ALBUM_RECENTLY_ADDED_SONGS,
        NodeKind.ALBUM_RECENTLY_PLAYED_SONGS,
        NodeKind.ALBUM_COMPILATIONS_SONGS,
    }
)


def kind_info(kind: NodeKind) -> Optional[KindInfo]:
    return KIND_INFO.get(kind)


def is_menu(kind: NodeKind) -> bool:
    info = KIND_INFO.get(kind)
    return info is not None and info.role is MENU


def is_dimension(kind: NodeKind) -> bool:
    info = KIND_INFO.get(kind)
    return info is not None and info.role is DIMENSION


def menu_entries(kind: NodeKind) -> Tuple[MenuEntry, ...]:
    """Return the ordered entry table of a menu kind (empty for other kinds)."""
    return MENUS.get(kind, ())


def menu_child_kind(kind: NodeKind, token: str) -> NodeKind:
    for entry in menu_entries(kind):
        if entry.token == token:
            return entry.kind
    return NodeKind.NONE


def menu_entry_for_kind(kind: NodeKind, child: NodeKind) -> Optional[MenuEntry]:
    for entry in menu_entries(kind):
        if entry.kind is child:
            return entry
    return None


def dimension_child_kind(kind: NodeKind, name: str, content: str) -> NodeKind:
    """Return the single child kind of a selected dimension node.

    Args:
        kind: Kind of the dimension node
        name: The node's value token ("-1" or an id)
        content: Content type collected from the node's ancestors

    Returns:
        The child kind, or NodeKind.NONE if the kind has no children
    """
    if kind in SONGS_GROUPING:
        if name == ALL_ITEMS_TOKEN:
            return SONGS_GROUPING[kind]
        return NodeKind.SONG

    if kind in FIXED_CHILDREN:
        return FIXED_CHILDREN[kind]

    if kind in GROUPED_KINDS:
        if content == CONTENT_MUSICVIDEOS and kind is NodeKind.ACTOR:
            return NodeKind.MUSICVIDEOS_ALBUM
        if content in TITLE_KINDS:
            return TITLE_KINDS[content]
        if kind is NodeKind.YEAR:
            return NodeKind.YEAR_ALBUM
        return NodeKind.ARTIST

    return NodeKind.NONE


def item_type_for(kind: NodeKind, content: str = CONTENT_MUSIC) -> Optional[str]:
    """Return the store item type for a dimension kind in a content context."""
    info = KIND_INFO.get(kind)
    if info is None:
        return None
    # Music video "actors" are the performing artists
    if kind is NodeKind.ACTOR and content == CONTENT_MUSICVIDEOS:
        return "artists"
    return info.item_type


def validate_registry() -> None:
    """Check the static tables for internal consistency.

    Raises:
        RegistryInconsistencyError: If any table references an unknown kind,
            repeats a token or kind, or a dimension lacks a usable slot.
    """
    for kind in NodeKind:
        if kind is NodeKind.NONE:
            if kind in KIND_INFO:
                raise RegistryInconsistencyError("NONE must not be registered")
            continue
        if kind not in KIND_INFO:
            raise RegistryInconsistencyError(f"{kind} has no registry entry")

    for kind, info in KIND_INFO.items():
        if info.role is MENU and kind not in MENUS:
            raise RegistryInconsistencyError(f"Menu {kind} has no entry table")
        if info.role is not MENU and kind in MENUS:
            raise RegistryInconsistencyError(f"{kind} is not a menu but has entries")
        if info.role is DIMENSION:
            if info.slot not in FILTER_SLOTS:
                raise RegistryInconsistencyError(
                    f"Dimension {kind} maps to unknown slot {info.slot!r}"
                )
            if not info.item_type:
                raise RegistryInconsistencyError(f"Dimension {kind} has no item type")
        elif info.slot is not None:
            raise RegistryInconsistencyError(f"{kind} is not a dimension but has a slot")

    for kind, entries in MENUS.items():
        tokens = [entry.token for entry in entries]
        kinds = [entry.kind for entry in entries]
        if len(set(tokens)) != len(tokens):
            raise RegistryInconsistencyError(f"Menu {kind} repeats a token")
        if len(set(kinds)) != len(kinds):
            raise RegistryInconsistencyError(f"Menu {kind} repeats a kind")
        for entry in entries:
            if entry.kind not in KIND_INFO:
                raise RegistryInconsistencyError(
                    f"Menu {kind} references unregistered {entry.kind}"
                )
            if not entry.token or entry.token.lstrip("-").isdigit():
                raise RegistryInconsistencyError(
                    f"Menu {kind} token {entry.token!r} is not a keyword"
                )

    # Kinds reached from a selected dimension are written with their keyword.
    reached = set(FIXED_CHILDREN.values()) | set(SONGS_GROUPING.values())
    reached |= set(TITLE_KINDS.values())
    reached |= {NodeKind.SONG, NodeKind.ARTIST, NodeKind.YEAR_ALBUM}
    reached |= {NodeKind.MUSICVIDEOS_ALBUM}
    for kind in reached:
        if not KIND_INFO[kind].keyword:
            raise RegistryInconsistencyError(f"{kind} is reachable but has no keyword")
