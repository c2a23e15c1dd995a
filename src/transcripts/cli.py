"""Command-line interface for fetching video transcripts.

Usage:
    python -m src.transcripts.cli fetch <video_id> --language en [--language de ...]
        [--preserve-formatting] [--segments]
    python -m src.transcripts.cli list <video_id>

All subcommands output JSON to stdout. Logs go to stderr.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import Optional, Sequence

from src.transcripts.errors import TranscriptError
from src.transcripts.service import TranscriptService


def cmd_fetch(args: argparse.Namespace) -> None:
    transcript, segments = TranscriptService().fetch_transcript(
        args.video_id, args.language, preserve_formatting=args.preserve_formatting
    )
    result: dict[str, object] = {
        "video_id": args.video_id,
        "language_code": transcript.language_code,
        "is_generated": transcript.is_generated,
    }
    if args.segments:
        result["segments"] = [segment.to_dict() for segment in segments]
    else:
        result["text"] = " ".join(segment.text for segment in segments)
    print(json.dumps(result, ensure_ascii=False, indent=2))


def cmd_list(args: argparse.Namespace) -> None:
    catalog = TranscriptService().list_transcripts(args.video_id)
    print(json.dumps(catalog.to_dict(), ensure_ascii=False, indent=2))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.transcripts.cli",
        description="Video transcript tools. All output is JSON.",
    )
    parser.add_argument("--verbose", action="store_true", help="Log debug output to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    # fetch
    p_fetch = sub.add_parser("fetch", help="Fetch the transcript of a video")
    p_fetch.add_argument("video_id", help="Bare video ID (not a URL)")
    p_fetch.add_argument(
        "--language",
        action="append",
        default=[],
        help="Preferred language code; repeat to give a fallback order",
    )
    p_fetch.add_argument("--preserve-formatting", action="store_true")
    p_fetch.add_argument("--segments", action="store_true", help="Emit timed segments instead of joined text")
    p_fetch.set_defaults(func=cmd_fetch)

    # list
    p_list = sub.add_parser("list", help="List the transcripts a video advertises")
    p_list.add_argument("video_id")
    p_list.set_defaults(func=cmd_list)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        args.func(args)
    except TranscriptError as exc:
        print(json.dumps(exc.to_dict(), ensure_ascii=False), file=sys.stderr)
        sys.exit(1)
    except ValueError as exc:
        print(json.dumps({"error": str(exc)}), file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
