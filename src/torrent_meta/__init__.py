"""
Typed view of .torrent metainfo built on top of bencode_core.
"""
from .metainfo import FileEntry, InfoDictionary, MetaInfoError, TorrentMeta, load_torrent

__all__ = ['TorrentMeta', 'InfoDictionary', 'FileEntry', 'MetaInfoError', 'load_torrent']
