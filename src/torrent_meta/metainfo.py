import hashlib
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from bencode_core import BencodeDict, BencodeInt, BencodeList, BencodeString, BufferCursor, decode, decode_from, encode

logger = logging.getLogger(__name__)

PIECE_HASH_LENGTH = 20


class MetaInfoError(ValueError):
    """Raised when a decoded document is not a usable torrent."""
    pass


def _get(mapping: BencodeDict, key: bytes, kind):
    """Returns mapping[key] when present and of the expected kind, else None."""
    value = mapping.get(key)
    return value if isinstance(value, kind) else None


def _text(mapping: BencodeDict, key: bytes) -> Optional[str]:
    value = _get(mapping, key, BencodeString)
    return value.text(errors="replace") if value is not None else None


def _split_pieces(raw: bytes) -> List[bytes]:
    if len(raw) % PIECE_HASH_LENGTH != 0:
        raise MetaInfoError(f"Invalid torrent: pieces length {len(raw)} is not a multiple of {PIECE_HASH_LENGTH}")
    return [raw[i:i + PIECE_HASH_LENGTH] for i in range(0, len(raw), PIECE_HASH_LENGTH)]


def extract_info_bytes(raw: bytes) -> Optional[bytes]:
    """
    Extract the exact bencoded 'info' value as it appears in the file.
    The infohash is the SHA-1 of these bytes, key order included.
    Returns None when the root is not a dictionary or has no 'info' key.
    """
    cursor = BufferCursor(raw)
    if cursor.peek() != ord("d"):
        return None
    cursor.read_byte()  # skip 'd'

    while cursor.peek() not in (None, ord("e")):
        key = decode_from(cursor)
        start = cursor.position
        decode_from(cursor)
        if key == BencodeString(b"info"):
            return raw[start:cursor.position]
    return None


@dataclass(frozen=True)
class FileEntry:
    """One file of a multi-file torrent."""
    length: int
    path: List[str]

    @property
    def joined_path(self) -> str:
        return "/".join(self.path)


@dataclass(frozen=True)
class InfoDictionary:
    """The 'info' dictionary: what the torrent holds and how it is split into pieces."""
    name: Optional[str]
    piece_length: int
    pieces: List[bytes] = field(repr=False)
    length: Optional[int] = None
    files: Optional[List[FileEntry]] = None
    private: bool = False

    @property
    def is_multi_file(self) -> bool:
        return self.files is not None

    @property
    def total_length(self) -> int:
        if self.files is not None:
            return sum(f.length for f in self.files)
        return self.length or 0

    @property
    def num_pieces(self) -> int:
        return len(self.pieces)

    @property
    def last_piece_length(self) -> int:
        if not self.piece_length:
            return 0
        return (self.total_length % self.piece_length) or self.piece_length

    @classmethod
    def from_element(cls, info: BencodeDict) -> "InfoDictionary":
        piece_len_b = _get(info, b"piece length", BencodeInt)
        pieces_b = _get(info, b"pieces", BencodeString)
        length_b = _get(info, b"length", BencodeInt)
        private_b = _get(info, b"private", BencodeInt)

        files = None
        files_b = _get(info, b"files", BencodeList)
        if files_b is not None:
            files = []
            for f_entry in files_b:
                if not isinstance(f_entry, BencodeDict):
                    raise MetaInfoError("Invalid torrent: file entry must be a dictionary")
                f_length = _get(f_entry, b"length", BencodeInt)
                f_path = _get(f_entry, b"path", BencodeList) or ()
                parts = [p.text(errors="replace") for p in f_path if isinstance(p, BencodeString)]
                files.append(FileEntry(length=f_length.value if f_length is not None else 0, path=parts))

        return cls(
            name=_text(info, b"name"),
            piece_length=piece_len_b.value if piece_len_b is not None else 0,
            pieces=_split_pieces(pieces_b.value) if pieces_b is not None else [],
            length=length_b.value if length_b is not None else None,
            files=files,
            private=private_b is not None and private_b.value == 1,
        )

    def to_element(self) -> BencodeDict:
        entries = {
            b"piece length": BencodeInt(self.piece_length),
            b"pieces": BencodeString(b"".join(self.pieces)),
        }
        if self.name is not None:
            entries[b"name"] = BencodeString(self.name)
        if self.length is not None:
            entries[b"length"] = BencodeInt(self.length)
        if self.files is not None:
            entries[b"files"] = BencodeList([
                BencodeDict({
                    b"length": BencodeInt(f.length),
                    b"path": BencodeList([BencodeString(p) for p in f.path]),
                })
                for f in self.files
            ])
        if self.private:
            entries[b"private"] = BencodeInt(1)
        return BencodeDict(entries)


@dataclass(frozen=True)
class TorrentMeta:
    """Data extracted from a .torrent file."""
    info: InfoDictionary
    info_hash: bytes = field(repr=False)
    announce: Optional[str] = None
    announce_list: Optional[List[List[str]]] = None
    comment: Optional[str] = None
    created_by: Optional[str] = None
    creation_date: Optional[datetime] = None
    encoding: Optional[str] = None

    @property
    def name(self) -> Optional[str]:
        return self.info.name

    def announce_urls(self) -> List[str]:
        """All tracker URLs, announce-list tiers first."""
        if self.announce_list:
            return [url for tier in self.announce_list for url in tier]
        return [self.announce] if self.announce else []

    @classmethod
    def from_element(cls, root, info_bytes: Optional[bytes] = None) -> "TorrentMeta":
        if not isinstance(root, BencodeDict):
            raise MetaInfoError("Invalid torrent: root must be a dictionary")

        info_b = _get(root, b"info", BencodeDict)
        if info_b is None:
            raise MetaInfoError("Torrent missing 'info' dictionary")

        # ------------------ ANNOUNCE-LIST ------------------
        announce_list = None
        ann_list_b = _get(root, b"announce-list", BencodeList)
        if ann_list_b is not None:
            tiers = []
            for tier in ann_list_b:
                if not isinstance(tier, BencodeList):
                    continue
                urls = [u.text(errors="replace") for u in tier if isinstance(u, BencodeString)]
                if urls:
                    tiers.append(urls)
            if tiers:
                announce_list = tiers

        # ------------------ CREATION DATE ------------------
        creation_date = None
        date_b = _get(root, b"creation date", BencodeInt)
        if date_b is not None:
            try:
                creation_date = datetime.fromtimestamp(date_b.value, tz=timezone.utc)
            except (OverflowError, OSError, ValueError):
                logger.debug("ignoring out of range creation date %d", date_b.value)

        return cls(
            info=InfoDictionary.from_element(info_b),
            info_hash=hashlib.sha1(info_bytes if info_bytes is not None else encode(info_b)).digest(),
            announce=_text(root, b"announce"),
            announce_list=announce_list,
            comment=_text(root, b"comment"),
            created_by=_text(root, b"created by"),
            creation_date=creation_date,
            encoding=_text(root, b"encoding"),
        )

    @classmethod
    def from_bytes(cls, raw: bytes) -> "TorrentMeta":
        root = decode(raw)
        return cls.from_element(root, info_bytes=extract_info_bytes(raw))

    def to_element(self) -> BencodeDict:
        entries = {b"info": self.info.to_element()}
        if self.announce is not None:
            entries[b"announce"] = BencodeString(self.announce)
        if self.announce_list is not None:
            entries[b"announce-list"] = BencodeList([
                BencodeList([BencodeString(u) for u in tier]) for tier in self.announce_list
            ])
        if self.comment is not None:
            entries[b"comment"] = BencodeString(self.comment)
        if self.created_by is not None:
            entries[b"created by"] = BencodeString(self.created_by)
        if self.creation_date is not None:
            entries[b"creation date"] = BencodeInt(int(self.creation_date.timestamp()))
        if self.encoding is not None:
            entries[b"encoding"] = BencodeString(self.encoding)
        return BencodeDict(entries)

    def encode(self) -> bytes:
        return encode(self.to_element())


def load_torrent(path) -> TorrentMeta:
    """Reads and decodes a .torrent file."""
    path = Path(path)
    raw = path.read_bytes()
    meta = TorrentMeta.from_bytes(raw)
    logger.debug("loaded %s: %d pieces, info hash %s", path, meta.info.num_pieces, meta.info_hash.hex())
    return meta
