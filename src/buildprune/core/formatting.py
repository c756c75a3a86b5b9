"""Formatting utilities for domain logic."""


def outcome_to_color(outcome: str) -> str:
    """Map a deletion outcome to a color name.

    Args:
        outcome: Outcome string ("deleted" or "failed")

    Returns:
        Color name string:
        - "deleted" -> "yellow"
        - "failed" -> "red"
        - invalid -> empty string
    """
    color_map = {
        "deleted": "yellow",
        "failed": "red",
    }
    return color_map.get(outcome, "")
