#!/usr/bin/env python3
"""Runs a metronome against the real clock, logging each beat."""

import argparse
import collections
import logging
import math
import os
import random
from typing import Callable, Dict, List, Optional, Sequence, Tuple  # pylint: disable=unused-import

import scheduler
import util
from metronome import Metronome

LOGGER = logging.getLogger(__name__)
RUN_ID = random.randrange(999999999)

# A rate change: (offset from start in ms, new rate)
Change = Tuple[float, float]


def rate_arg(value: str) -> float:
    """Parse a rate (beats per minute) from the command line."""
    try:
        rate = float(value)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"invalid rate: {value!r}") from ex
    if math.isnan(rate) or math.isinf(rate) or rate < 1:
        raise argparse.ArgumentTypeError(f"rate must be at least 1, got: {value}")
    return rate


def change_arg(value: str) -> Change:
    """Parse a rate change of the form SECONDS:RATE from the command line."""
    offset, sep, rate = value.partition(":")
    if not sep:
        raise argparse.ArgumentTypeError(
            f"rate change must look like SECONDS:RATE, got: {value!r}")
    try:
        offset_sec = float(offset)
    except ValueError as ex:
        raise argparse.ArgumentTypeError(f"invalid offset: {offset!r}") from ex
    if not offset_sec >= 0:
        raise argparse.ArgumentTypeError(f"offset must be >= 0, got: {offset}")
    return (offset_sec * 1000, rate_arg(rate))


def run_session(dispatch: scheduler.Dispatcher,
                rate: float,
                duration: float,
                changes: Sequence[Change] = ()) -> Dict[str, int]:
    """
    Run a metronome for a fixed amount of time.

    Parameters:
        dispatch: The Dispatcher that drives the metronome
        rate: The initial rate (beats per minute)
        duration: How long to run (ms)
        changes: Rate changes to make along the way, as (offset ms, rate)

    Returns:
        The number of times each event was emitted

    """
    counts: Dict[str, int] = collections.Counter()
    metro = Metronome(dispatch)
    metro.rate = rate

    def record(name: str) -> None:
        def handler(*args: float) -> None:
            counts[name] += 1
            if name == "tick":
                LOGGER.info("tick #%d @ %s bpm", counts[name], args[0])
            else:
                LOGGER.info("%s %s", name, " ".join(str(a) for a in args))
        metro.on(name, handler)

    for name in ("start", "tick", "stop"):
        record(name)

    def change_to(new_rate: float) -> 'Callable[[], None]':
        def action() -> None:
            metro.rate = new_rate
        return action

    # Changes and the final stop are queued before the first tick, so they win
    # over a tick that is due at the same time.
    start = dispatch.now
    for offset, new_rate in sorted(changes):
        if offset < duration:
            dispatch.schedule_once(offset, change_to(new_rate))
        else:
            LOGGER.warning("ignoring rate change after end of run: %.1fs -> %s",
                           offset / 1000, new_rate)
    dispatch.schedule_once(duration, metro.stop)
    metro.start()
    dispatch.run(until=start + duration)
    return dict(counts)


def main(argv: Optional[List[str]] = None) -> None:
    """Run the metronome."""
    parser = argparse.ArgumentParser()
    parser.add_argument("-c", "--change",
                        default=[],
                        action="append",
                        type=change_arg,
                        help="Change the rate at an offset into the run, "
                        "as SECONDS:RATE (may be repeated)")
    parser.add_argument("-d", "--duration",
                        default=10,
                        type=float,
                        help="How long to run (sec)")
    parser.add_argument("-l", "--log-dir",
                        default=None,
                        type=str,
                        help="Path to use for log files")
    parser.add_argument("-r", "--rate",
                        default=Metronome.DEFAULT_RATE,
                        type=rate_arg,
                        help="Initial rate (beats per minute)")
    parser.add_argument("-v", "--verbose",
                        action="store_true",
                        help="Enable debug logging")
    cli_args = parser.parse_args(argv)

    if not cli_args.duration > 0:
        parser.error("duration must be greater than 0")

    log_dir = None
    if cli_args.log_dir is not None:
        log_dir = os.path.join(cli_args.log_dir, f'metronome-{RUN_ID}')
    util.setup_logging(log_dir, logging.DEBUG if cli_args.verbose else logging.INFO)

    LOGGER.info("starting execution-- run id: %d", RUN_ID)
    LOGGER.info("program arguments: %s", cli_args)

    counts = run_session(scheduler.Dispatcher(scheduler.WallClock()),
                         rate=cli_args.rate,
                         duration=cli_args.duration * 1000,
                         changes=cli_args.change)
    LOGGER.info("done: %d ticks, %d starts, %d stops",
                counts.get("tick", 0), counts.get("start", 0), counts.get("stop", 0))

if __name__ == '__main__':
    main()
