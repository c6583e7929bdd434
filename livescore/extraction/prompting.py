from __future__ import annotations

import json
from typing import List, Dict

SYSTEM_PROMPT = (
    "You are a structured data extractor for live cricket commentary messages. "
    "You will receive raw chat messages containing cricket score updates. "
    "Your goal is to extract meaningful scoring or wicket events, extras, or free hits."
)

RESPONSE_SCHEMA = """{
  "type": "RUNS | DOT | FOUR | SIX | WICKET | EXTRA | FREE_HIT",
  "runs_off_bat": <number>,
  "extra_type": "wide | no_ball | leg_bye | bye | null",
  "extra_runs": <number>,
  "free_hit": <true/false>,
  "wicket": <true/false>,
  "ignore": <true/false>
}"""

RULES = [
    'If the message does not describe a delivery that changes the score, set "ignore": true.',
    "Ignore player names (often sent with emoji), the batter on strike, full scorecard recaps, "
    "required run rates and any other chatter.",
    "Every boundary is followed by an appreciation message such as "
    '"SIXX!!! WOW NICELY PLAYED THIS BALL" - ignore it, the boundary is already counted.',
    'If it mentions "FREE HIT", set "free_hit": true.',
    "A normal scoring ball (like 2) has extra_type = null.",
    "A wide or no ball always carries its one penalty run in extra_runs. "
    "Any further runs on a no ball come off the bat: \"no ball +3\" is runs_off_bat = 3, extra_runs = 1. "
    "Further runs on a wide are extras: \"wide +3\" is runs_off_bat = 0, extra_runs = 4.",
    "If a wide or no ball is present together with another extra, extra_type is the wide or no ball.",
    "Set wicket = true only when the message says wicket, wkt, out or similar. Never assume it.",
    "Do not calculate totals. Describe only what is visible in this message.",
]

EXAMPLE_INPUT = "NO BALL +3 FREE HIT"
EXAMPLE_OUTPUT = {
    "type": "EXTRA",
    "runs_off_bat": 3,
    "extra_type": "no_ball",
    "extra_runs": 1,
    "free_hit": True,
    "wicket": False,
    "ignore": False,
}


def build_extraction_prompt(message: str) -> List[Dict[str, str]]:
    """
    Build the single user message asking the model to classify one raw
    commentary message as a ball event.

    Returns
    -------
    messages : list[dict]
        Chat-style messages for LLMClient.agenerate().
    """
    rules = "\n".join(f"- {r}" for r in RULES)
    content = (
        "Analyze the following message from a live cricket chat.\n"
        "Extract structured information about the event in the following JSON format:\n\n"
        f"{RESPONSE_SCHEMA}\n\n"
        f"Rules:\n{rules}\n\n"
        "Example:\n"
        f'Input: "{EXAMPLE_INPUT}"\n'
        f"Output:\n{json.dumps(EXAMPLE_OUTPUT, indent=2)}\n\n"
        f'Message:\n"{message}"\n\n'
        "Respond with ONLY the JSON object, no additional text."
    )

    return [
        {
            "role": "user",
            "content": content,
        }
    ]
