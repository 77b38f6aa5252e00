"""
Command-line front end for the rename/reorder engine.

Exit codes: 0 success, 1 files not listed in order, 2 hard error.
"""
import sys
import argparse
import logging

from playorder.core.engine import ReorderEngine
from playorder.core.errors import PlayOrderError
from playorder.core.filesystem import normalize_extension
from playorder.core.logging_utils import setup_logging
from playorder.core.mirror import sync_directory
from playorder.core.reorder import is_ordered, reorder_and_verify

EXIT_OK = 0
EXIT_UNORDERED = 1
EXIT_ERROR = 2

logger = logging.getLogger(__name__)


def read_order_file(path: str, extension: str) -> list:
    names = []
    with open(path, "r", encoding="utf-8") as f:
        for line in f:
            name = line.strip()
            if name:
                names.append(_strip_extension(name, extension))
    return names


def _strip_extension(name: str, extension: str) -> str:
    if name.lower().endswith(extension.lower()):
        return name[:-len(extension)]
    return name


def cmd_list(args) -> int:
    engine = ReorderEngine(args.directory, extension=args.ext)
    for track in engine.list_tracks():
        print(track.name)
    return EXIT_OK


def cmd_apply(args) -> int:
    engine = ReorderEngine(args.directory, mirror_dir=args.mirror, extension=args.ext)
    if args.order_file:
        order = read_order_file(args.order_file, args.ext)
    elif args.names:
        order = [_strip_extension(n, args.ext) for n in args.names]
    else:
        order = engine.list_tracks()

    result = engine.apply(order)
    for old, new in result.renamed:
        print(f"{old} -> {new}")
    if result.mirror_error:
        print(f"Mirror sync failed: {result.mirror_error}", file=sys.stderr)
    if not result.ordered:
        print("Files are not listed in the right order", file=sys.stderr)
    return result.exit_code


def cmd_reorder(args) -> int:
    ordered, _ = reorder_and_verify(args.directory, args.ext, attempts=1)
    return EXIT_OK if ordered else EXIT_UNORDERED


def cmd_verify(args) -> int:
    return EXIT_OK if is_ordered(args.directory, args.ext) else EXIT_UNORDERED


def cmd_sync(args) -> int:
    report = sync_directory(args.source, args.dest, args.ext)
    for name in report.deleted:
        print(f"deleted {name}")
    for name in report.copied:
        print(f"copied {name}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="playorder-cli",
                                     description="Number files in play order and re-lay the directory to match")
    parser.add_argument("--ext", default=".mp3", help="Tracked file extension (default: .mp3)")
    parser.add_argument("--debug", action="store_true", help="Verbose logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("list", help="Show the files in name order")
    p.add_argument("directory")
    p.set_defaults(func=cmd_list)

    p = sub.add_parser("apply", help="Rename files to the given order and re-lay the directory")
    p.add_argument("directory")
    p.add_argument("names", nargs="*", help="Current names in the wanted order")
    p.add_argument("--order-file", help="File with one current name per line")
    p.add_argument("--mirror", help="Backup directory to sync afterwards")
    p.set_defaults(func=cmd_apply)

    p = sub.add_parser("reorder", help="Re-lay the directory entries in name order")
    p.add_argument("directory")
    p.set_defaults(func=cmd_reorder)

    p = sub.add_parser("verify", help="Check that the directory lists in name order")
    p.add_argument("directory")
    p.set_defaults(func=cmd_verify)

    p = sub.add_parser("sync", help="Mirror SOURCE into DEST")
    p.add_argument("source")
    p.add_argument("dest")
    p.set_defaults(func=cmd_sync)

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.ext = normalize_extension(args.ext)
    setup_logging(debug=args.debug, to_files=False)

    try:
        return args.func(args)
    except PlayOrderError as e:
        logger.error("%s", e)
        return EXIT_ERROR
    except OSError as e:
        logger.error("I/O error: %s", e)
        return EXIT_ERROR


if __name__ == "__main__":
    raise SystemExit(main())
