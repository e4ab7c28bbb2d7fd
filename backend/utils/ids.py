from typing import Optional

def parse_id(raw: str) -> Optional[int]:
    """Route ids are plain ASCII digits; anything else matches no record."""
    if raw.isascii() and raw.isdigit():
        return int(raw)
    return None
