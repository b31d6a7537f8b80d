"""
Terminal Pomodoro timer that records sessions through the REST API.

    python backend/scripts/run_focus_timer.py --token <access token>

Commands: s = start, p = pause/resume, r = reset, q = quit
"""
import argparse
import asyncio
import logging
import os

from lifeos.core.config import settings
from lifeos.core.logging import setup_logging
from lifeos.focus.clock import TimerRunner
from lifeos.focus.outbox import OutboxDispatcher
from lifeos.focus.timer import FocusTimer, Phase, Transition
from lifeos.focus.writers import ApiSessionWriter

logger = logging.getLogger("focus_timer")


def _fmt(seconds: int) -> str:
    return f"{seconds // 60:02d}:{seconds % 60:02d}"


def _show(transition: Transition) -> None:
    state = transition.state
    flag = "" if state.running or state.phase is Phase.IDLE else " (paused)"
    print(f"\r[{state.phase.value:>5}] {_fmt(state.remaining_seconds)}{flag}   ", end="", flush=True)
    for record in transition.records:
        word = "completed" if record.completed else "partial"
        print(f"\n{word} session: {record.completed_duration}/{record.duration} min")


async def main(base_url: str, token: str | None) -> None:
    timer = FocusTimer()
    async with ApiSessionWriter(base_url, token) as writer:
        dispatcher = OutboxDispatcher(timer.outbox, writer)
        dispatcher.on_error(lambda err, record: print(f"\n! {err.notice}"))

        runner = TimerRunner(timer, dispatcher)
        timer.subscribe(_show)
        loop = asyncio.get_running_loop()
        commands = {"s": runner.start, "p": runner.pause, "r": runner.reset}

        print(__doc__.strip().splitlines()[-1])
        try:
            while True:
                try:
                    line = (await loop.run_in_executor(None, input)).strip().lower()
                except EOFError:
                    # stdin closed (Ctrl-D, end of piped input)
                    break
                if line == "q":
                    break
                command = commands.get(line)
                if command is None:
                    print("unknown command")
                    continue
                command()
        finally:
            await runner.close()
            if len(timer.outbox):
                # last chance for records that failed earlier
                await dispatcher.flush()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("--base-url", default=settings.BACKEND_PUBLIC_URL)
    parser.add_argument("--token", default=os.getenv("LIFEOS_ACCESS_TOKEN"))
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(args.base_url, args.token))
