#!/usr/bin/env python3
"""Backing store interface consumed by the content producer.

A store instance is one handle: the producer opens it, issues a single query
and closes it again. Implementations own their connection handling and
locking; the producer never shares a handle between calls.

Every query takes the base path of the listing first, followed by the filter
ids relevant to it. Unset filters are passed as -1. Queries return a list of
record dicts; each record carries at least ``id`` and ``label``.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

Record = Dict[str, Any]


class MediaStore(ABC):
    """Abstract base class for media library stores.

    Subclasses must implement the handle lifecycle and label lookup. Query
    methods default to raising NotImplementedError, so a store may serve only
    part of the library; listings it does not implement report a query error.
    """

    @abstractmethod
    def open(self) -> bool:
        """Open the store. Returns False if it is unavailable."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        raise NotImplementedError

    @abstractmethod
    def lookup_label_by_id(self, item_type: str, item_id: int) -> Optional[str]:
        """Translate a stored id of ``item_type`` into its display label."""
        raise NotImplementedError

    # Grouped dimensions (genres, years, actors, ...)

    def get_items(
        self, base_path: str, content: str, item_type: str, filters: Dict[str, int]
    ) -> List[Record]:
        """List the distinct values of ``item_type`` matching ``filters``.

        Args:
            base_path: Path of the listing
            content: Content type of the subtree (music, movies, ...)
            item_type: Item type such as "genres" or "years"
            filters: Filter ids already selected higher up the path
        """
        raise NotImplementedError

    # Music

    def get_artists_nav(
        self, base_path: str, genre_id: int, source_id: int, role_id: int
    ) -> List[Record]:
        raise NotImplementedError

    def get_albums_nav(
        self, base_path: str, genre_id: int, artist_id: int
    ) -> List[Record]:
        raise NotImplementedError

    def get_songs_nav(
        self,
        base_path: str,
        genre_id: int,
        artist_id: int,
        album_id: int,
        playlist_id: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_singles(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_albums_by_year(self, base_path: str, year: int) -> List[Record]:
        raise NotImplementedError

    def get_songs_by_year(self, base_path: str, year: int) -> List[Record]:
        raise NotImplementedError

    def get_top100_songs(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_top100_albums(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_top100_album_songs(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_added_albums(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_added_album_songs(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_played_albums(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_played_album_songs(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_compilation_albums(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_compilation_songs(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_playlists_nav(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    # Video

    def get_movies_nav(
        self,
        base_path: str,
        genre_id: int,
        year: int,
        actor_id: int,
        director_id: int,
        studio_id: int,
        country_id: int,
        set_id: int,
        tag_id: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_tvshows_nav(
        self,
        base_path: str,
        genre_id: int,
        year: int,
        actor_id: int,
        director_id: int,
        studio_id: int,
        tag_id: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_seasons_nav(
        self,
        base_path: str,
        tvshow_id: int,
        genre_id: int,
        year: int,
        actor_id: int,
        director_id: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_episodes_nav(
        self,
        base_path: str,
        genre_id: int,
        year: int,
        actor_id: int,
        director_id: int,
        tvshow_id: int,
        season: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_musicvideos_nav(
        self,
        base_path: str,
        genre_id: int,
        year: int,
        artist_id: int,
        director_id: int,
        studio_id: int,
        album_id: int,
        tag_id: int,
    ) -> List[Record]:
        raise NotImplementedError

    def get_recently_added_movies_nav(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_added_episodes_nav(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_recently_added_musicvideos_nav(self, base_path: str) -> List[Record]:
        raise NotImplementedError

    def get_in_progress_tvshows_nav(self, base_path: str) -> List[Record]:
        raise NotImplementedError
