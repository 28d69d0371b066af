import hashlib
from datetime import datetime, timezone

import pytest

from bencode_core import DecodeError, decode, encode
from torrent_meta.metainfo import MetaInfoError, TorrentMeta, extract_info_bytes, load_torrent


def single_file_torrent() -> dict:
    return {
        "announce": "http://tracker.com/announce",
        "comment": "Test Comment",
        "created by": "TestClient/1.0",
        "creation date": 1672531200,
        "encoding": "UTF-8",
        "info": {
            "name": "single-file.txt",
            "piece length": 262144,
            "pieces": b"\x01" * 20,
            "length": 12345,
        },
    }


def multi_file_torrent() -> dict:
    return {
        "announce": "http://tracker.com/announce",
        "announce-list": [["http://a/announce", "http://b/announce"], ["udp://c:80"]],
        "info": {
            "name": "multi-file-dir",
            "piece length": 1024,
            "pieces": b"\x02" * 40,
            "files": [
                {"length": 1024, "path": ["dir1", "file1.txt"]},
                {"length": 100, "path": ["file2.txt"]},
            ],
            "private": 1,
        },
    }


def test_single_file_torrent(tmp_path):
    path = tmp_path / "single.torrent"
    path.write_bytes(encode(single_file_torrent()))

    meta = load_torrent(path)
    print("Parsed TorrentMeta:", meta)

    assert meta.announce == "http://tracker.com/announce"
    assert meta.comment == "Test Comment"
    assert meta.created_by == "TestClient/1.0"
    assert meta.encoding == "UTF-8"
    assert meta.creation_date == datetime(2023, 1, 1, tzinfo=timezone.utc)
    assert meta.name == "single-file.txt"
    assert meta.info.length == 12345
    assert meta.info.total_length == 12345
    assert not meta.info.is_multi_file
    assert meta.info.pieces == [b"\x01" * 20]
    assert meta.info.last_piece_length == 12345
    assert meta.announce_urls() == ["http://tracker.com/announce"]


def test_multi_file_torrent():
    meta = TorrentMeta.from_bytes(encode(multi_file_torrent()))

    assert meta.name == "multi-file-dir"
    assert meta.info.length is None
    assert meta.info.is_multi_file
    assert [f.joined_path for f in meta.info.files] == ["dir1/file1.txt", "file2.txt"]
    assert meta.info.total_length == 1124
    assert meta.info.num_pieces == 2
    assert meta.info.last_piece_length == 100
    assert meta.info.private
    assert meta.announce_list == [["http://a/announce", "http://b/announce"], ["udp://c:80"]]
    assert meta.announce_urls() == ["http://a/announce", "http://b/announce", "udp://c:80"]


def test_info_hash_is_sha1_of_info_dict():
    raw = encode(multi_file_torrent())
    meta = TorrentMeta.from_bytes(raw)
    assert meta.info_hash == hashlib.sha1(encode(multi_file_torrent()["info"])).digest()
    assert meta.info_hash == hashlib.sha1(encode(decode(raw)["info"])).digest()


def test_wrong_kind_optional_fields_are_ignored():
    data = single_file_torrent()
    data["comment"] = 5
    data["creation date"] = "yesterday"
    meta = TorrentMeta.from_bytes(encode(data))
    assert meta.comment is None
    assert meta.creation_date is None


def test_encode_round_trip():
    raw = encode(multi_file_torrent())
    meta = TorrentMeta.from_bytes(raw)
    assert meta.encode() == raw
    assert TorrentMeta.from_bytes(meta.encode()) == meta


def test_missing_info():
    with pytest.raises(MetaInfoError):
        TorrentMeta.from_bytes(encode({"announce": "http://x"}))


def test_root_must_be_dict():
    with pytest.raises(MetaInfoError):
        TorrentMeta.from_bytes(b"l4:spame")


def test_bad_pieces_length():
    data = single_file_torrent()
    data["info"]["pieces"] = b"\x00" * 19
    with pytest.raises(MetaInfoError):
        TorrentMeta.from_bytes(encode(data))


def test_malformed_file_surfaces_decode_error(tmp_path):
    path = tmp_path / "broken.torrent"
    path.write_bytes(b"d8:announce")
    with pytest.raises(DecodeError):
        load_torrent(path)


def test_info_hash_uses_bytes_from_file():
    # 'name' before 'length' is not canonical order
    info = b"d4:name1:a6:lengthi5e12:piece lengthi16e6:pieces20:" + b"\x03" * 20 + b"e"
    raw = b"d8:announce10:http://x/a4:info" + info + b"e"

    meta = TorrentMeta.from_bytes(raw)
    assert meta.info_hash == hashlib.sha1(info).digest()
    assert meta.info_hash != hashlib.sha1(encode(decode(info))).digest()
    assert meta.info.length == 5


def test_extract_info_bytes():
    info = b"d6:lengthi1ee"
    assert extract_info_bytes(b"d1:ai1e4:info" + info + b"1:zle" + b"e") == info
    assert extract_info_bytes(b"d1:ai1ee") is None
    assert extract_info_bytes(b"l4:infoe") is None
