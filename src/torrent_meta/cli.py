import logging
import sys
from argparse import ArgumentParser
from pathlib import Path
from pprint import pformat

from bencode_core import BencodeError, decode

from .metainfo import MetaInfoError, load_torrent


def build_parser() -> ArgumentParser:
    parser = ArgumentParser("torrent_meta", description="Inspect bencoded files")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    info = commands.add_parser("info", help="Show the metainfo of a .torrent file")
    info.add_argument("torrent", help="Path to a .torrent file", type=str)

    dump = commands.add_parser("dump", help="Print any bencoded file as a Python structure")
    dump.add_argument("path", help="Path to a bencoded file", type=str)
    dump.add_argument("--strict", action="store_true", help="Only accept canonical bencode")
    return parser


def _print_info(path: str):
    meta = load_torrent(path)
    print("name:", meta.name)
    print("announce:", meta.announce)
    if meta.announce_list:
        print("announce_list:", meta.announce_list)
    if meta.comment:
        print("comment:", meta.comment)
    if meta.created_by:
        print("created by:", meta.created_by)
    if meta.creation_date:
        print("creation date:", meta.creation_date.isoformat())
    print("total length:", meta.info.total_length)
    print("piece length:", meta.info.piece_length)
    print("pieces:", meta.info.num_pieces)
    if meta.info.is_multi_file:
        for f in meta.info.files:
            print(f"  {f.length:>12}  {f.joined_path}")
    print("info_hash:", meta.info_hash.hex())


def _print_dump(path: str, strict: bool):
    root = decode(Path(path).read_bytes(), strict=strict)
    print(pformat(root.to_native()))


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.command == "info":
            _print_info(args.torrent)
        else:
            _print_dump(args.path, args.strict)
    except (BencodeError, MetaInfoError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
