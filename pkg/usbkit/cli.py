"""
usbkit command line.

Run: usbkit scan [FILE ...]   (no files: ask system_profiler)
     usbkit verify-log
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Tuple

from .config import Settings
from .drivers.inventory import load_inventory
from .errors import UsbKitError
from .render import render_devices
from .session import Session
from .logging import Logger


def configure_logging(verbose: int) -> None:
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose > 1:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)


def settings_from_args(args: argparse.Namespace) -> Settings:
    settings = Settings.from_env()
    if getattr(args, "workdir", None):
        settings.workdir = Path(args.workdir)
    return settings


def cmd_scan(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    session = Session(settings=settings)
    sources: List[Tuple[str, Any]] = []
    failed = 0
    if args.files:
        for f in args.files:
            try:
                sources.append((f, load_inventory(f)))
            except UsbKitError as exc:
                print(f"ERROR: {f}: {exc}", file=sys.stderr)
                failed += 1
    else:
        try:
            sources.append(Session.discover(settings))
        except UsbKitError as exc:
            print(f"ERROR: {exc}", file=sys.stderr)
            return 1

    results = session.scan(sources)
    out = []
    for result in results:
        if not result.ok:
            print(f"ERROR: {result.source}: {result.error}", file=sys.stderr)
            failed += 1
            continue
        if args.export:
            art = session.export(result)
            print(f"exported {art.path} sha256={art.sha256}", file=sys.stderr)
        if args.json:
            out.append({"source": result.source, "devices": [d.to_dict() for d in result.devices]})
        elif result.devices:
            print(render_devices(result.devices))
        else:
            print(f"{result.source}: no USB storage found")
    if args.json:
        print(json.dumps(out, ensure_ascii=False, indent=2))
    return 1 if failed else 0


def cmd_verify_log(args: argparse.Namespace) -> int:
    settings = settings_from_args(args)
    logger = Logger(settings.workdir / "log.jsonl")
    if logger.verify():
        print(f"ok {len(logger.events())} events")
        return 0
    print(f"BROKEN hash chain in {logger.path}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug")
    common.add_argument("--workdir", help="directory for the audit log and exports")

    p = argparse.ArgumentParser(prog="usbkit", description="List USB mass-storage devices, media and volumes")
    sub = p.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("scan", parents=[common], help="extract storage devices from profiler output")
    sp.add_argument("files", nargs="*", help="saved `system_profiler -json SPUSBDataType` captures")
    sp.add_argument("--json", action="store_true", help="print JSON instead of a text tree")
    sp.add_argument("--export", action="store_true", help="write <source>-<hash>.json into the workdir")
    sp.set_defaults(func=cmd_scan)

    sv = sub.add_parser("verify-log", parents=[common], help="check the audit log hash chain")
    sv.set_defaults(func=cmd_verify_log)
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)
    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
