#!/usr/bin/env python3

from fuse import FUSE, Operations, FuseOSError
from typing import Any, Callable, Dict, List, Optional, Tuple
from medialibfs.constants import DEFAULT_ORIGIN, PATH_SEPARATOR, RECORD_FILE_SUFFIX
from medialibfs.content import ContentProducer, Failure, Folders, Records
from medialibfs.directory_node import DirectoryNode, token_for
from medialibfs.localization import Localizer
from medialibfs.media_directory import MediaDirectory
from medialibfs.processor import RecordProcessor
from medialibfs.store import MediaStore
import errno
import itertools
import logging
import os
import stat
import threading
import time
import traceback


class MediaLibraryFS(Operations):
    """Read-only FUSE view of one media library origin."""

    def __init__(
        self,
        directory: MediaDirectory,
        origin: str = DEFAULT_ORIGIN,
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize the FUSE filesystem.

        Args:
            directory: MediaDirectory serving listings
            origin: Origin tag the mount root maps to
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger("MediaLibFS")
        self.directory = directory
        self.origin = origin
        self.processor = RecordProcessor(logger=self.logger)

        self.open_files: Dict[int, bytes] = {}
        self.open_files_lock = threading.Lock()
        self.next_fh = itertools.count(1)

        self.logger.info(f"MediaLibFS initialized for origin {origin!r}")

    def _engine_path(self, path: str) -> str:
        relative = path.strip(PATH_SEPARATOR)
        if not relative:
            return f"{self.origin}{PATH_SEPARATOR}"
        return f"{self.origin}{PATH_SEPARATOR}{relative}{PATH_SEPARATOR}"

    def _dir_attrs(self) -> Dict[str, Any]:
        now = time.time()
        return {
            "st_mode": stat.S_IFDIR | 0o555,
            "st_nlink": 2,
            "st_size": 4096,
            "st_uid": os.getuid(),
            "st_gid": os.getgid(),
            "st_atime": now,
            "st_mtime": now,
            "st_ctime": now,
        }

    def _file_attrs(self, size: int) -> Dict[str, Any]:
        attrs = self._dir_attrs()
        attrs.update({"st_mode": stat.S_IFREG | 0o444, "st_nlink": 1, "st_size": size})
        return attrs

    def _listing(self, node: DirectoryNode, path: str):
        result = self.directory.producer.list_children(node)
        if isinstance(result, Failure):
            self.logger.error(f"Listing {path} failed: {result.reason}")
            raise FuseOSError(errno.EIO)
        return result

    def _find_record(self, path: str) -> Tuple[Optional[Dict[str, Any]], bool]:
        """Locate the record a file path refers to.

        Returns:
            Tuple of (record or None, whether the parent directory exists)
        """
        parent_path, _, filename = path.rstrip(PATH_SEPARATOR).rpartition(
            PATH_SEPARATOR
        )
        if not filename.endswith(RECORD_FILE_SUFFIX):
            return None, False

        parent = self.directory.get_node(self._engine_path(parent_path))
        if parent is None:
            return None, False

        result = self._listing(parent, parent_path or PATH_SEPARATOR)
        if not isinstance(result, Records):
            return None, True
        return self.processor.find_record(result.items, filename), True

    def readdir(self, path: str, fh: Optional[int] = None) -> List[str]:
        """Read directory contents.

        Args:
            path: Directory path
            fh: File handle (unused)

        Returns:
            List of directory entries
        """
        self.logger.debug(f"readdir: {path}")
        engine_path = self._engine_path(path)
        node = self.directory.get_node(engine_path)
        if node is None:
            raise FuseOSError(errno.ENOENT)

        # A selected dimension leads to exactly one sub-directory
        if node.is_selected:
            return [".", "..", token_for(node, node.child_kind())]

        try:
            result = self._listing(node, path)
        except FuseOSError:
            raise
        except Exception as e:
            self.logger.error(f"Error in readdir for {path}: {e}")
            self.logger.error(traceback.format_exc())
            raise FuseOSError(errno.EIO)

        if isinstance(result, Folders):
            entries = self.processor.folder_entries(engine_path, result.items)
        else:
            entries = [self.processor.record_filename(r) for r in result.items]
        self.logger.debug(f"readdir returned {len(entries)} entries for {path}")
        return [".", ".."] + entries

    def getattr(self, path: str, fh: Optional[int] = None) -> Dict[str, Any]:
        """Get file attributes.

        Args:
            path: File path
            fh: File handle (unused)

        Returns:
            File attributes
        """
        if self.directory.get_node(self._engine_path(path)) is not None:
            return self._dir_attrs()

        try:
            record, _ = self._find_record(path)
        except FuseOSError:
            raise
        except Exception as e:
            self.logger.error(f"Error in getattr for {path}: {e}")
            self.logger.error(traceback.format_exc())
            raise FuseOSError(errno.ENOENT)

        if record is None:
            raise FuseOSError(errno.ENOENT)
        return self._file_attrs(len(self.processor.render_record(record)))

    def open(self, path: str, flags: int) -> int:
        """Open file and return file handle.

        Args:
            path: File path
            flags: Open flags

        Returns:
            File handle
        """
        self.logger.debug(f"open: {path} (flags={flags})")
        if self.directory.get_node(self._engine_path(path)) is not None:
            raise FuseOSError(errno.EISDIR)
        if flags & (os.O_WRONLY | os.O_RDWR):
            raise FuseOSError(errno.EROFS)

        record, _ = self._find_record(path)
        if record is None:
            raise FuseOSError(errno.ENOENT)

        body = self.processor.render_record(record)
        with self.open_files_lock:
            fh = next(self.next_fh)
            self.open_files[fh] = body
        return fh

    def read(self, path: str, size: int, offset: int, fh: int) -> bytes:
        """Read data from file.

        Args:
            path: File path
            size: Number of bytes to read
            offset: Offset to start reading from
            fh: File handle

        Returns:
            Bytes read from file
        """
        with self.open_files_lock:
            body = self.open_files.get(fh)
        if body is None:
            self.logger.error(f"read on unknown handle {fh} for {path}")
            raise FuseOSError(errno.EBADF)
        return body[offset : offset + size]

    def release(self, path: str, fh: int) -> int:
        self.logger.debug(f"release: {path} (fh={fh})")
        with self.open_files_lock:
            self.open_files.pop(fh, None)
        return 0

    def mkdir(self, path, mode):
        self.logger.warning(f"mkdir not supported: {path}")
        raise OSError(errno.EPERM, "Directory creation not supported")

    def rmdir(self, path):
        self.logger.warning(f"rmdir not supported: {path}")
        raise OSError(errno.EPERM, "Directory removal not supported")

    def destroy(self, path: str) -> None:
        self.logger.info("Destroying MediaLibFS instance")
        with self.open_files_lock:
            self.open_files.clear()


def mount_medialibfs(
    mount_point: str,
    store_factory: Callable[[], MediaStore],
    origin: str = DEFAULT_ORIGIN,
    show_all_items: bool = True,
    strings: Optional[Dict[str, str]] = None,
    foreground: bool = False,
) -> None:
    """Mount the media library filesystem.

    Args:
        mount_point: Directory where the filesystem will be mounted
        store_factory: Callable returning a fresh store handle
        origin: Origin tag the mount root maps to
        show_all_items: Show "All ..." folders as "-1" directories
        strings: Label overrides
        foreground: Run in the foreground (for debugging)
    """
    # Set fuse logger to WARNING level to suppress debug messages about unsupported operations
    logging.getLogger("fuse").setLevel(logging.WARNING)

    logger = logging.getLogger("MediaLibFS")
    producer = ContentProducer(
        store_factory=store_factory,
        localizer=Localizer(strings=strings, logger=logger),
        show_all_items=show_all_items,
        logger=logger,
    )

    fuse_options = {
        "foreground": foreground,
        "nothreads": False,
        "ro": True,
        "uid": os.getuid(),
        "gid": os.getgid(),
    }

    FUSE(
        MediaLibraryFS(MediaDirectory(producer, logger=logger), origin, logger),
        mount_point,
        **fuse_options,
    )
