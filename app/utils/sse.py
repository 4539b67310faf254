from __future__ import annotations


def sse(event: str, data: str) -> str:
    """Frame one server-sent event; multi-line data becomes several data fields."""
    lines = data.split("\n") if data else [""]
    body = "\n".join(f"data: {line}" for line in lines)
    return f"event: {event}\n{body}\n\n"
