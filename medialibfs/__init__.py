"""
MediaLibFS - Media library FUSE filesystem

Browse a media library as a virtual directory tree of genres, artists,
albums, movies, TV shows and more.
"""

__version__ = "0.1.0"

from medialibfs.content import ContentProducer, Failure, FolderItem, Folders, Records
from medialibfs.directory_node import DirectoryNode, build_path, parse_path
from medialibfs.media_directory import MediaDirectory
from medialibfs.node_types import NodeKind
from medialibfs.store import MediaStore
