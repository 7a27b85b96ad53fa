#!/usr/bin/env python3
"""Pomodoro Timer CLI - alternating work/break phases with a live countdown."""

import argparse
import asyncio
import logging
import sys
import time
from dataclasses import dataclass
from typing import Callable, Optional

from pomodoro.display import Display, notify
from pomodoro.keys import read_continue
from pomodoro.runner import Interval, run_timer
from pomodoro.state import PreWork, TimedPhase

logger = logging.getLogger(__name__)


# ── Config ───────────────────────────────────────────────────────────

@dataclass(frozen=True)
class TimerConfig:
    """Durations in seconds."""
    work: float = 25 * 60
    break_: float = 5 * 60
    tick: float = 1.0


# ── Cycle ────────────────────────────────────────────────────────────

class Interrupted(Exception):
    """Ctrl+C during a timed phase. `phase` is the result of stopping it."""

    def __init__(self, phase):
        super().__init__(f"stopped, now {phase.kind.value}")
        self.phase = phase


class PomodoroCycle:
    """Runs work/break cycles until the user declines another one.

    Each timed phase gets its own event loop; the Y/n prompts run between
    them, outside any loop, so Ctrl+C at a prompt stops the program at once.
    """

    def __init__(
        self,
        config: TimerConfig,
        display: Optional[Display] = None,
        ask: Callable[[], bool] = read_continue,
        clock: Callable[[], float] = time.monotonic,
        make_interval: Optional[Callable[[float], Interval]] = None,
    ):
        self.config = config
        self.display = display or Display()
        self.ask = ask
        self.clock = clock
        self.make_interval = make_interval or (lambda period: Interval(period, clock=clock))
        self.completed_work = 0
        self.completed_breaks = 0

    def _reporter(self, label: str):
        def report(_phase: TimedPhase, remaining: float):
            self.display.status(label, remaining)
        return report

    def _run(self, phase: TimedPhase, label: str):
        try:
            return asyncio.run(
                run_timer(
                    phase,
                    self.make_interval(self.config.tick),
                    self._reporter(label),
                    clock=self.clock,
                )
            )
        except (KeyboardInterrupt, asyncio.CancelledError):
            stopped = phase.stop()
            logger.info("%s stopped early -> %s", phase.kind.value, stopped.kind.value)
            raise Interrupted(stopped)

    def run_once(self):
        """One work phase, optionally followed by a break. Returns the last phase."""
        self.display.message("Starting work")
        working = PreWork().start_working(self.config.work, self.clock())
        post_work = self._run(working, "Working")
        self.completed_work += 1
        notify("work_done")

        self.display.clear_line()
        self.display.message("Work completed. Continue with break (Y/n)?")
        if not self.ask():
            logger.debug("Break skipped")
            return post_work

        self.display.message("Starting break")
        on_break = post_work.start_break(self.config.break_, self.clock())
        complete = self._run(on_break, "Break")
        self.completed_breaks += 1
        notify("break_done")
        return complete

    def run(self):
        while True:
            self.run_once()
            self.display.clear_line()
            self.display.message("All complete! Ready for another (Y/n)?")
            if not self.ask():
                return


# ── Main ─────────────────────────────────────────────────────────────

def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Pomodoro Timer CLI")
    parser.add_argument("--work", type=float, default=25, help="Work duration in minutes (default: 25)")
    parser.add_argument("--break", dest="break_", type=float, default=5, help="Break duration in minutes (default: 5)")
    parser.add_argument("--tick", type=float, default=1, help="Countdown refresh in seconds (default: 1)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log phase transitions to stderr")
    args = parser.parse_args(argv)

    if args.work < 0 or args.break_ < 0:
        parser.error("Durations must not be negative")
    if args.tick <= 0:
        parser.error("Tick must be positive")

    return args


def config_from_args(args: argparse.Namespace) -> TimerConfig:
    return TimerConfig(work=args.work * 60, break_=args.break_ * 60, tick=args.tick)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    config = config_from_args(args)
    cycle = PomodoroCycle(config)
    start_time = time.monotonic()

    print(f"Pomodoro Timer: {args.work:g}m work / {args.break_:g}m break")
    print("Press Ctrl+C to stop.\n")

    status = 0
    try:
        cycle.run()
    except (Interrupted, KeyboardInterrupt):
        cycle.display.clear_line()
        print("\nInterrupted.")
        status = 130
    except OSError as e:
        print(f"\nError: {e}", file=sys.stderr)
        return 1

    # Summary
    elapsed_mins = int((time.monotonic() - start_time) / 60)
    print(f"\nSummary: {cycle.completed_work} work sessions and {cycle.completed_breaks} breaks completed in {elapsed_mins} minutes.")
    return status


if __name__ == "__main__":
    sys.exit(main())
