# livescore/simulation/replay.py

from __future__ import annotations

import argparse
import asyncio
import json
from dataclasses import replace
from pathlib import Path
from typing import List, Dict, Any, Optional, Tuple

from livescore.chat.source import RawMessage, is_from_target
from livescore.config import Settings
from livescore.events.schema import BallEvent
from livescore.extraction.extractor import EventExtractor
from livescore.ingest.queue import IngestionQueue
from livescore.state.scorecard import Scorecard, format_scorecard


def _snapshot(state: Scorecard) -> Dict[str, Any]:
    return {
        "runs": state.runs,
        "wickets": state.wickets,
        "overs": state.overs_display(),
        "on_strike": state.on_strike,
    }


def parse_overs(value: str) -> Tuple[int, int]:
    """
    Parse an "X.Y" overs string into (completed_overs, balls_in_over).
    """
    whole, _, balls = value.partition(".")
    try:
        over_count = int(whole)
        ball_count = int(balls) if balls else 0
    except ValueError:
        raise argparse.ArgumentTypeError(f"overs must look like 19.4, got {value!r}") from None
    if over_count < 0 or not 0 <= ball_count <= 5:
        raise argparse.ArgumentTypeError(f"overs must look like 19.4, got {value!r}")
    return over_count, ball_count


def non_negative_int(value: str) -> int:
    """argparse type for counts that cannot go below zero (runs, wickets)."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value!r}")
    return number


def load_messages(path: Path, blocks: bool = False, jsonl: bool = False) -> List[RawMessage]:
    """
    Read replay input.

    Plain text: one message per non-empty line, or per blank-line separated
    block with `blocks=True`. JSON lines: one object per line with "text"
    and optional "channel_id" / "chat_id" / "user_id".
    """
    content = path.read_text(encoding="utf-8")

    if jsonl:
        messages: List[RawMessage] = []
        for line in content.splitlines():
            if not line.strip():
                continue
            obj = json.loads(line)
            messages.append(
                RawMessage(
                    text=str(obj.get("text", "")),
                    channel_id=obj.get("channel_id"),
                    chat_id=obj.get("chat_id"),
                    user_id=obj.get("user_id"),
                )
            )
        return messages

    if blocks:
        chunks = [c.strip() for c in content.split("\n\n")]
    else:
        chunks = [c.strip() for c in content.splitlines()]
    return [RawMessage(text=c) for c in chunks if c]


async def replay_messages(
    messages: List[RawMessage],
    extractor: EventExtractor,
    initial: Optional[Scorecard] = None,
    target_id: Optional[int] = None,
    wicket_modulus: Optional[int] = 11,
    delay_sec: float = 0.0,
) -> List[Dict[str, Any]]:
    """
    Feed `messages` through an IngestionQueue and return a log entry for
    every applied event.

    When `target_id` is given, messages from other peers are skipped.
    Messages are enqueued `delay_sec` apart without waiting for the
    previous one to be scored, like a live feed.
    """
    log: List[Dict[str, Any]] = []
    last_state = initial if initial is not None else Scorecard()

    def record(state: Scorecard, event: BallEvent) -> None:
        nonlocal last_state
        log.append(
            {
                "ball_index": len(log) + 1,
                "event": event.to_dict(),
                "score_before": _snapshot(last_state),
                "score_after": _snapshot(state),
            }
        )
        last_state = state

    queue = IngestionQueue(
        extractor,
        scorecard=initial,
        wicket_modulus=wicket_modulus,
        on_update=record,
    )

    for msg in messages:
        if target_id is not None and not is_from_target(msg, target_id):
            continue
        queue.enqueue(msg.text)
        if delay_sec > 0:
            await asyncio.sleep(delay_sec)

    await queue.wait_idle()
    return log


def main() -> None:
    parser = argparse.ArgumentParser(
        description=(
            "Replay recorded cricket commentary messages through the live "
            "scoring pipeline: classify each message with Gemini and update "
            "the scorecard in arrival order."
        )
    )
    parser.add_argument(
        "input",
        type=str,
        help="Path to a text file of commentary messages (or JSON lines with --jsonl).",
    )
    parser.add_argument(
        "--blocks",
        action="store_true",
        help="Treat blank-line separated blocks, not single lines, as messages.",
    )
    parser.add_argument(
        "--jsonl",
        action="store_true",
        help='Input is JSON lines: {"text": ..., "channel_id": ...}. Filtered by TARGET_CHANNEL_ID.',
    )
    parser.add_argument("--runs", type=non_negative_int, default=0, help="Runs at the start of the replay.")
    parser.add_argument(
        "--overs",
        type=parse_overs,
        default=(0, 0),
        help="Overs at the start of the replay, as X.Y (e.g. 19.4).",
    )
    parser.add_argument("--wickets", type=non_negative_int, default=0, help="Wickets at the start of the replay.")
    parser.add_argument(
        "--on-strike",
        type=int,
        choices=(0, 1),
        default=0,
        help="Which batter is on strike at the start of the replay.",
    )
    parser.add_argument(
        "--delay-sec",
        type=float,
        default=0.0,
        help="Gap between message arrivals (seconds).",
    )
    parser.add_argument(
        "--model-name",
        type=str,
        default=None,
        help="Gemini model name (default: GEMINI_MODEL_NAME or gemini-2.5-flash).",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log prompts and raw model responses.",
    )
    parser.add_argument(
        "--log-json",
        type=str,
        default=None,
        help="Optional path to write a JSON log of events and score before/after.",
    )

    args = parser.parse_args()

    settings = Settings.from_env()
    if args.model_name:
        settings = replace(settings, model_name=args.model_name)

    over_count, balls = args.overs
    initial = Scorecard(
        runs=args.runs,
        over_count=over_count,
        balls_in_current_over=balls,
        wickets=args.wickets,
        on_strike=args.on_strike,
    )

    messages = load_messages(Path(args.input), blocks=args.blocks, jsonl=args.jsonl)
    print(f"Replaying {len(messages)} messages from {format_scorecard(initial)}\n")

    extractor = EventExtractor.from_settings(settings, debug=args.debug)
    log = asyncio.run(
        replay_messages(
            messages,
            extractor,
            initial=initial,
            target_id=settings.target_channel_id if args.jsonl else None,
            wicket_modulus=settings.wicket_modulus,
            delay_sec=args.delay_sec,
        )
    )

    print("\n=== Ball-by-ball ===\n")
    for rec in log:
        ev = rec["event"]
        sb = rec["score_before"]
        sa = rec["score_after"]
        print(f"Ball {rec['ball_index']}: {ev['type']} (bat={ev['runs_off_bat']}, "
              f"extra={ev['extra_type']}+{ev['extra_runs']}, wicket={ev['wicket']})")
        print(f"  {sb['runs']}/{sb['wickets']} ({sb['overs']}) -> {sa['runs']}/{sa['wickets']} ({sa['overs']})")

    if log:
        final = log[-1]["score_after"]
        print(f"\nFinal: {final['runs']}/{final['wickets']} ({final['overs']} ov)")
    else:
        print("\nNo scoring events applied.")

    if args.log_json is not None:
        log_path = Path(args.log_json)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with log_path.open("w", encoding="utf-8") as f:
            json.dump(log, f, indent=2)
        print(f"\nWrote log with {len(log)} balls to {log_path}")


if __name__ == "__main__":
    main()
