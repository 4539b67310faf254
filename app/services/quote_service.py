import random
from datetime import datetime, timezone

QUOTES = (
    "Stay hungry, stay foolish.",
    "Code is like humor. When you have to explain it, it's bad.",
    "Simplicity is the soul of efficiency.",
    "First, solve the problem. Then, write the code.",
    "The best error message is the one that never shows up.",
)


def random_quote(rng: random.Random | None = None) -> dict[str, str]:
    chooser = rng or random
    return {
        "quote": chooser.choice(QUOTES),
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }
