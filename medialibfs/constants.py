"""Shared constants for the medialibfs package."""

from typing import Dict, Tuple


PATH_SEPARATOR = "/"

# Dimension value meaning "no filter selected" (or "group differently").
ALL_ITEMS_TOKEN = "-1"
UNSET_ID = -1

DEFAULT_ORIGIN = "library"

# Content types collected from overview nodes; music is implied when no
# overview ancestor says otherwise.
CONTENT_MUSIC = "music"
CONTENT_MOVIES = "movies"
CONTENT_TVSHOWS = "tvshows"
CONTENT_MUSICVIDEOS = "musicvideos"

# Filter slots a dimension node can fill.
FILTER_SLOTS: Tuple[str, ...] = (
    "genre",
    "artist",
    "album",
    "year",
    "actor",
    "director",
    "studio",
    "country",
    "set",
    "tag",
    "season",
    "tvshow",
    "source",
    "role",
    "playlist",
)

# Failure reasons reported by the content producer.
FAILURE_STORE_UNAVAILABLE = "store unavailable"
FAILURE_QUERY_ERROR = "query error"

RECORD_FILE_SUFFIX = ".json"

# English labels keyed by label key. Overridable through the config file.
DEFAULT_STRINGS: Dict[str, str] = {
    "genres": "Genres",
    "artists": "Artists",
    "albums": "Albums",
    "singles": "Singles",
    "songs": "Songs",
    "years": "Years",
    "top100": "Top 100",
    "top100_songs": "Top 100 songs",
    "top100_albums": "Top 100 albums",
    "recently_added_albums": "Recently added albums",
    "recently_played_albums": "Recently played albums",
    "compilations": "Compilations",
    "roles": "Roles",
    "sources": "Sources",
    "playlists": "Playlists",
    "movies": "Movies",
    "tvshows": "TV shows",
    "musicvideos": "Music videos",
    "recently_added_movies": "Recently added movies",
    "recently_added_episodes": "Recently added episodes",
    "recently_added_musicvideos": "Recently added music videos",
    "inprogress_tvshows": "In progress TV shows",
    "titles": "Titles",
    "actors": "Actors",
    "directors": "Directors",
    "studios": "Studios",
    "countries": "Countries",
    "sets": "Movie sets",
    "tags": "Tags",
    "seasons": "Seasons",
    "episodes": "Episodes",
    "all_albums": "All albums",
    "all_artists": "All artists",
    "all_seasons": "All seasons",
    "all_items": "All items",
}
