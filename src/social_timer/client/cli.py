"""Terminal watcher for the shared timer.

Shows the time since the last reset and re-renders it every tick. Type
``r`` and Enter to reset the timer, ``q`` and Enter to quit.
"""
from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import sys
import threading
from typing import TextIO

from social_timer.client.api_client import CounterApiClient, load_api_config
from social_timer.client.app import TimerClient
from social_timer.client.reset import ResetError
from social_timer.client.ticker import TickerError
from social_timer.core.logging import configure_logging
from social_timer.core.settings import settings

logger = logging.getLogger(__name__)

RESET_COMMAND = "r"
QUIT_COMMAND = "q"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Watch and reset the shared social timer")
    parser.add_argument("--url", default=None, help="Server base URL (defaults to SERVER_URL)")
    parser.add_argument(
        "--locale",
        choices=["de", "en"],
        default=settings.locale,
        help="Language of the rendered sentence",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=settings.tick_interval_seconds,
        help="Seconds between display updates",
    )
    parser.add_argument(
        "--refresh",
        type=float,
        default=settings.refresh_interval_seconds,
        help="Seconds between re-reads of the server value (0 disables)",
    )
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    return parser


def _start_line_reader(
    lines: asyncio.Queue[str], stream: TextIO | None = None
) -> threading.Thread:
    """Feed lines from ``stream`` into ``lines`` from a daemon thread.

    A blocked read never holds up interpreter shutdown, so Ctrl-C exits
    immediately. End of input is signalled with an empty string.
    """
    loop = asyncio.get_running_loop()
    source = stream if stream is not None else sys.stdin

    def pump() -> None:
        # The loop is closed once the watcher has exited.
        with contextlib.suppress(RuntimeError):
            for line in iter(source.readline, ""):
                loop.call_soon_threadsafe(lines.put_nowait, line)
            loop.call_soon_threadsafe(lines.put_nowait, "")

    reader = threading.Thread(target=pump, name="social-timer-stdin", daemon=True)
    reader.start()
    return reader


async def _read_commands(client: TimerClient, lines: asyncio.Queue[str]) -> None:
    while True:
        line = await lines.get()
        if not line:
            return
        command = line.strip().lower()
        if command == QUIT_COMMAND:
            return
        if command == RESET_COMMAND:
            try:
                await client.reset()
            except ResetError as exc:
                print(f"Reset failed: {exc}", file=sys.stderr)


async def watch(args: argparse.Namespace) -> None:
    api = CounterApiClient(load_api_config(args.url))
    client = TimerClient(
        api,
        locale=args.locale,
        tick_interval_seconds=args.interval,
        refresh_interval_seconds=args.refresh,
    )
    try:
        await client.start()
        lines: asyncio.Queue[str] = asyncio.Queue()
        _start_line_reader(lines)
        await _read_commands(client, lines)
    finally:
        await client.close()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    try:
        asyncio.run(watch(args))
    except TickerError as exc:
        print(f"[social-timer] ERROR: {exc}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
