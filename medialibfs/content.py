#!/usr/bin/env python3

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, List, Optional, Union
from medialibfs.constants import (
    ALL_ITEMS_TOKEN,
    FAILURE_QUERY_ERROR,
    FAILURE_STORE_UNAVAILABLE,
)
from medialibfs.directory_node import DirectoryNode, create_child, token_for
from medialibfs.errors import QueryError, StoreUnavailableError
from medialibfs.localization import Localizer
from medialibfs.node_types import (
    GROUPED_KINDS,
    NodeKind,
    is_dimension,
    is_menu,
    item_type_for,
    kind_info,
    menu_entries,
    menu_entry_for_kind,
)
from medialibfs.query_params import DimensionFilterSet, FilterCollector
from medialibfs.store import MediaStore, Record
import logging
import traceback


class SortHint(Enum):
    NONE = "none"
    ON_TOP = "on_top"


@dataclass(frozen=True)
class FolderItem:
    """A sub-directory entry produced by a listing."""

    label: str
    path: str
    is_folder: bool = True
    queueable: bool = False
    sort_hint: SortHint = SortHint.NONE
    kind: NodeKind = NodeKind.NONE
    item_id: Optional[int] = None


@dataclass
class Folders:
    items: List[FolderItem] = field(default_factory=list)
    # Set when some store records could not be turned into folders
    partial: bool = False


@dataclass
class Records:
    items: List[Record] = field(default_factory=list)


@dataclass
class Failure:
    reason: str


ListResult = Union[Folders, Records, Failure]

QueryFn = Callable[[MediaStore, str, DimensionFilterSet], Optional[List[Record]]]


def _grouped(kind: NodeKind) -> QueryFn:
    def query(store, base, f):
        return store.get_items(
            base, f.content, item_type_for(kind, f.content), f.as_dict()
        )

    return query


# One query per content kind; each passes only the filters that kind uses.
QUERIES: Dict[NodeKind, QueryFn] = {
    kind: _grouped(kind) for kind in GROUPED_KINDS | {NodeKind.MUSICVIDEOS_ALBUM}
}
QUERIES.update(
    {
        NodeKind.ARTIST: lambda s, base, f: s.get_artists_nav(
            base, f.get("genre"), f.get("source"), f.get("role")
        ),
        NodeKind.ALBUM: lambda s, base, f: s.get_albums_nav(
            base, f.get("genre"), f.get("artist")
        ),
        NodeKind.SONG: lambda s, base, f: s.get_songs_nav(
            base, f.get("genre"), f.get("artist"), f.get("album"), f.get("playlist")
        ),
        NodeKind.SINGLES: lambda s, base, f: s.get_singles(base),
        NodeKind.YEAR_ALBUM: lambda s, base, f: s.get_albums_by_year(
            base, f.get("year")
        ),
        NodeKind.YEAR_SONG: lambda s, base, f: s.get_songs_by_year(
            base, f.get("year")
        ),
        NodeKind.SONG_TOP100: lambda s, base, f: s.get_top100_songs(base),
        NodeKind.ALBUM_TOP100: lambda s, base, f: s.get_top100_albums(base),
        NodeKind.ALBUM_TOP100_SONGS: lambda s, base, f: s.get_top100_album_songs(base),
        NodeKind.ALBUM_RECENTLY_ADDED: lambda s, base, f: s.get_recently_added_albums(
            base
        ),
        NodeKind.ALBUM_RECENTLY_ADDED_SONGS: lambda s, base, f: (
            s.get_recently_added_album_songs(base)
        ),
        NodeKind.ALBUM_RECENTLY_PLAYED: lambda s, base, f: (
            s.get_recently_played_albums(base)
        ),
        NodeKind.ALBUM_RECENTLY_PLAYED_SONGS: lambda s, base, f: (
            s.get_recently_played_album_songs(base)
        ),
        NodeKind.ALBUM_COMPILATIONS: lambda s, base, f: s.get_compilation_albums(base),
        NodeKind.ALBUM_COMPILATIONS_SONGS: lambda s, base, f: s.get_compilation_songs(
            base
        ),
        NodeKind.PLAYLIST: lambda s, base, f: s.get_playlists_nav(base),
        NodeKind.TITLE_MOVIES: lambda s, base, f: s.get_movies_nav(
            base,
            f.get("genre"),
            f.get("year"),
            f.get("actor"),
            f.get("director"),
            f.get("studio"),
            f.get("country"),
            f.get("set"),
            f.get("tag"),
        ),
        NodeKind.TITLE_TVSHOWS: lambda s, base, f: s.get_tvshows_nav(
            base,
            f.get("genre"),
            f.get("year"),
            f.get("actor"),
            f.get("director"),
            f.get("studio"),
            f.get("tag"),
        ),
        NodeKind.SEASONS: lambda s, base, f: s.get_seasons_nav(
            base,
            f.get("tvshow"),
            f.get("genre"),
            f.get("year"),
            f.get("actor"),
            f.get("director"),
        ),
        NodeKind.EPISODES: lambda s, base, f: s.get_episodes_nav(
            base,
            f.get("genre"),
            f.get("year"),
            f.get("actor"),
            f.get("director"),
            f.get("tvshow"),
            f.get("season"),
        ),
        NodeKind.TITLE_MUSICVIDEOS: lambda s, base, f: s.get_musicvideos_nav(
            base,
            f.get("genre"),
            f.get("year"),
            f.get("actor"),
            f.get("director"),
            f.get("studio"),
            f.get("album"),
            f.get("tag"),
        ),
        NodeKind.RECENTLY_ADDED_MOVIES: lambda s, base, f: (
            s.get_recently_added_movies_nav(base)
        ),
        NodeKind.RECENTLY_ADDED_EPISODES: lambda s, base, f: (
            s.get_recently_added_episodes_nav(base)
        ),
        NodeKind.RECENTLY_ADDED_MUSICVIDEOS: lambda s, base, f: (
            s.get_recently_added_musicvideos_nav(base)
        ),
        NodeKind.INPROGRESS_TVSHOWS: lambda s, base, f: (
            s.get_in_progress_tvshows_nav(base)
        ),
    }
)


def content_kind(node: DirectoryNode) -> NodeKind:
    """Return the kind whose content a listing of ``node`` produces.

    Selected dimensions list their child kind; every other node lists
    itself.
    """
    if node.is_selected:
        return node.child_kind()
    return node.kind


class ContentProducer:
    """Produces folder or record listings for directory nodes."""

    def __init__(
        self,
        store_factory: Callable[[], MediaStore],
        localizer: Optional[Localizer] = None,
        show_all_items: bool = True,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the content producer.

        Args:
            store_factory: Callable returning a fresh, unopened store handle
            localizer: Label resolver; English defaults if None
            show_all_items: Prepend "All ..." folders to listings that offer one
            logger: Optional logger instance
        """
        self.store_factory = store_factory
        self.localizer = localizer or Localizer()
        self.show_all_items = show_all_items
        self.logger = logger or logging.getLogger("MediaLibFS")
        self.collector = FilterCollector(logger=self.logger)

    def list_children(self, node: DirectoryNode) -> ListResult:
        """List the children of a node.

        Menu nodes enumerate their entry table without touching the store.
        Every other node collects its filters and issues exactly one store
        query for its content kind.

        Args:
            node: A node produced by the path parser

        Returns:
            Folders, Records or Failure
        """
        if not isinstance(node, DirectoryNode) or node.kind is NodeKind.NONE:
            raise ValueError(f"Cannot list unresolved node: {node!r}")

        if is_menu(node.kind):
            return self._list_menu(node)

        target = self._content_node(node)
        if target.kind not in QUERIES:
            raise ValueError(f"No listing for {target.kind.name}")

        filters = self.collector.collect(target)
        base_path = target.build_path()
        records = self._query(target.kind, base_path, filters)
        if isinstance(records, Failure):
            return records

        if is_dimension(target.kind):
            return self._folders_from_records(target, base_path, records)
        return Records(items=list(records))

    def _content_node(self, node: DirectoryNode) -> DirectoryNode:
        kind = content_kind(node)
        if kind is node.kind:
            return node
        # Transient unselected child, as if its keyword had been appended
        return create_child(node, kind, token_for(node, kind))

    def _list_menu(self, node: DirectoryNode) -> Folders:
        base_path = node.build_path()
        items = []
        for entry in menu_entries(node.kind):
            items.append(
                FolderItem(
                    label=self.localizer.label_for(entry.label),
                    path=f"{base_path}{entry.token}/",
                    queueable=False,
                    sort_hint=SortHint.ON_TOP if entry.on_top else SortHint.NONE,
                    kind=entry.kind,
                )
            )
        return Folders(items=items)

    def _open_store(self, purpose: str) -> Optional[MediaStore]:
        """Create and open a store handle, None if that fails for any reason."""
        try:
            store = self.store_factory()
            if store.open():
                return store
        except StoreUnavailableError as e:
            self.logger.error(f"Cannot open store while {purpose}: {e}")
            return None
        except Exception as e:
            self.logger.error(f"Cannot open store while {purpose}: {e}")
            self.logger.error(traceback.format_exc())
            return None
        self.logger.error(f"Store unavailable while {purpose}")
        return None

    def _query(self, kind: NodeKind, base_path: str, filters: DimensionFilterSet):
        store = self._open_store(f"listing {base_path}")
        if store is None:
            return Failure(FAILURE_STORE_UNAVAILABLE)

        try:
            self.logger.debug(f"Querying {kind.name} for {base_path}: {filters}")
            records = QUERIES[kind](store, base_path, filters)
        except QueryError as e:
            self.logger.error(f"Query for {base_path} rejected by store: {e}")
            return Failure(FAILURE_QUERY_ERROR)
        except Exception as e:
            self.logger.error(f"Query for {base_path} failed: {e}")
            self.logger.error(traceback.format_exc())
            return Failure(FAILURE_QUERY_ERROR)
        finally:
            store.close()

        if records is None:
            self.logger.error(f"Query for {base_path} returned no result")
            return Failure(FAILURE_QUERY_ERROR)
        return records

    def _folders_from_records(
        self, target: DirectoryNode, base_path: str, records: List[Record]
    ) -> Folders:
        info = kind_info(target.kind)
        result = Folders()

        if self.show_all_items and info.offers_all:
            result.items.append(
                FolderItem(
                    label=self.localizer.label_for(info.all_label),
                    path=f"{base_path}{ALL_ITEMS_TOKEN}/",
                    queueable=True,
                    sort_hint=SortHint.ON_TOP,
                    kind=target.kind,
                    item_id=-1,
                )
            )

        for record in records:
            item_id = self._record_id(record)
            if item_id is None:
                self.logger.warning(f"Record without usable id in {base_path}: {record}")
                result.partial = True
                continue
            result.items.append(
                FolderItem(
                    label=str(record.get("label", item_id)),
                    path=f"{base_path}{item_id}/",
                    queueable=True,
                    kind=target.kind,
                    item_id=item_id,
                )
            )
        return result

    @staticmethod
    def _record_id(record: Record) -> Optional[int]:
        # Ids become path segments, so they must parse back as dimension values
        try:
            item_id = int(record["id"])
        except (KeyError, TypeError, ValueError):
            return None
        return item_id if item_id >= 0 else None

    def localized_name(self, node: DirectoryNode) -> str:
        """Return the display name of a node.

        Args:
            node: The node to name

        Returns:
            The label; "" if it cannot be determined
        """
        if node.parent is None:
            return ""

        info = kind_info(node.kind)
        if not node.is_dimension:
            entry = menu_entry_for_kind(node.parent.kind, node.kind)
            return self.localizer.label_for(entry.label if entry else info.label)

        if not node.is_selected:
            return self.localizer.label_for(info.label)
        if node.is_all:
            return self.localizer.label_for(info.all_label)
        if node.kind is NodeKind.YEAR:
            return node.name

        return self.lookup_label(
            item_type_for(node.kind, node.content_type()), node.node_id
        )

    def lookup_label(self, item_type: str, item_id: int) -> str:
        """Look up the label of a stored item, "" if the store cannot say."""
        store = self._open_store(f"naming {item_type} {item_id}")
        if store is None:
            return ""
        try:
            return store.lookup_label_by_id(item_type, item_id) or ""
        except Exception as e:
            self.logger.error(f"Label lookup for {item_type} {item_id} failed: {e}")
            return ""
        finally:
            store.close()
