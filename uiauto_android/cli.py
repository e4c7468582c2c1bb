# uiauto_android/cli.py
"""
@file cli.py
@brief Command-line interface for uiauto-android.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from .config import load_config
from .device import DeviceClient
from .element import Element
from .exceptions import UIAutoError
from .hierarchy import DEFAULT_QUERY
from .timinglogger import TIMING_LOGGER


def _configure_timing_logger_from_env() -> None:
    """Configure timing logging from environment variables."""
    enabled = os.getenv("UIAUTO_ANDROID_TIMING_LOGGING", "").lower() in {"1", "true", "yes", "on"}
    if not enabled:
        TIMING_LOGGER.disable()
        return

    log_file = os.getenv("UIAUTO_ANDROID_TIMING_LOG_FILE")
    level = os.getenv("UIAUTO_ANDROID_TIMING_LOG_LEVEL", "INFO")
    TIMING_LOGGER.configure(console=True, file_path=log_file, level=level)
    TIMING_LOGGER.enable()


def _element_to_dict(element: Element) -> Dict[str, Any]:
    b = element.bounds
    return {
        "center": [element.center.x, element.center.y],
        "bounds": [b.x, b.y, b.right, b.bottom],
        "text": element.text,
        "resource_id": element.resource_id,
        "class": element.class_name,
        "content_desc": element.content_desc,
    }


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="uiauto-android",
        description="uiauto-android - UI lookup and input automation over adb",
    )
    p.add_argument("--config", "-c", default=None, help="Path to client config YAML")
    p.add_argument("--serial", "-s", default=None, help="Device serial (overrides config and UIAUTO_ANDROID_SERIAL)")
    p.add_argument("--adb", default=None, help="Path to adb executable")
    p.add_argument("--verbose", action="store_true", help="Log adb commands to stderr")
    sub = p.add_subparsers(dest="cmd", required=True)

    # -------------------------
    # dump
    # -------------------------
    dumpp = sub.add_parser("dump", help="Print the current UI hierarchy XML")
    dumpp.add_argument("--out", "-o", default=None, help="Write XML to this file instead of stdout")

    # -------------------------
    # find
    # -------------------------
    findp = sub.add_parser("find", help="Find elements by XPath")
    findp.add_argument("--query", "-q", default=DEFAULT_QUERY, help=f"XPath query (default: {DEFAULT_QUERY})")
    findp.add_argument("--timeout", "-t", type=float, default=None, help="Retry budget in seconds (default: the client's locator.default_timeout)")
    findp.add_argument("--all", action="store_true", help="Return every match instead of the first")

    # -------------------------
    # input
    # -------------------------
    tapp = sub.add_parser("tap", help="Tap at coordinates")
    tapp.add_argument("x", type=int)
    tapp.add_argument("y", type=int)

    swp = sub.add_parser("swipe", help="Swipe between coordinates")
    swp.add_argument("x1", type=int)
    swp.add_argument("y1", type=int)
    swp.add_argument("x2", type=int)
    swp.add_argument("y2", type=int)
    swp.add_argument("--speed", type=int, default=300, help="Swipe duration in milliseconds (default: 300)")

    keyp = sub.add_parser("key", help="Send a key event (e.g. KEYCODE_HOME)")
    keyp.add_argument("key")

    textp = sub.add_parser("text", help="Type text")
    textp.add_argument("text")

    # -------------------------
    # apps
    # -------------------------
    for name, help_text in (
        ("status", "Print app status (foreground/background/stopped)"),
        ("start", "Start an app"),
        ("stop", "Force-stop an app"),
    ):
        ap = sub.add_parser(name, help=help_text)
        ap.add_argument("package", help="Package name")

    return p


def main(argv: Optional[List[str]] = None, client: Optional[DeviceClient] = None) -> int:
    """Main entry point for the CLI."""
    argv = argv if argv is not None else sys.argv[1:]
    _configure_timing_logger_from_env()

    args = _build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="[%(asctime)s] %(name)s.%(levelname)s: %(message)s")

    try:
        config = load_config(args.config).with_overrides(serial=args.serial, adb_path=args.adb)
        if client is None:
            client = DeviceClient.from_config(config)
    except UIAutoError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        if args.cmd == "dump":
            xml = client.dump_screen_string()
            if args.out:
                os.makedirs(os.path.dirname(os.path.abspath(args.out)) or ".", exist_ok=True)
                with open(args.out, "w", encoding="utf-8") as f:
                    f.write(xml)
                print(json.dumps({"status": "ok", "output": os.path.abspath(args.out)}))
            else:
                print(xml)
            return 0

        if args.cmd == "find":
            if args.all:
                elements = client.find_elements(args.query, timeout=args.timeout)
            else:
                element = client.find_element(args.query, timeout=args.timeout)
                elements = [element] if element is not None else []
            print(json.dumps({
                "status": "ok" if elements else "not_found",
                "query": args.query,
                "elements": [_element_to_dict(e) for e in elements],
            }, indent=2, ensure_ascii=False))
            return 0 if elements else 2

        if args.cmd == "tap":
            client.click_at(args.x, args.y)
        elif args.cmd == "swipe":
            client.swipe_at(args.x1, args.y1, args.x2, args.y2, args.speed)
        elif args.cmd == "key":
            client.send_key_event(args.key)
        elif args.cmd == "text":
            client.send_text(args.text)
        elif args.cmd == "start":
            client.start_app(args.package)
        elif args.cmd == "stop":
            client.stop_app(args.package)
        elif args.cmd == "status":
            status = client.get_app_status(args.package)
            print(json.dumps({"package": args.package, "status": status.value}))
            return 0
        else:
            return 1

        print(json.dumps({"status": "ok", "command": args.cmd}))
        return 0

    except UIAutoError as e:
        print(json.dumps({
            "status": "error",
            "error": f"{type(e).__name__}: {e}",
        }, indent=2), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
