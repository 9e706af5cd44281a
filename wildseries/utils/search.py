# wildseries/utils/search.py
from typing import Optional

LIKE_ESCAPE = "\\"


def contains_pattern(term: Optional[str]) -> Optional[str]:
    """`%term%` with LIKE wildcards escaped, or None for a blank term."""
    if term is None or not term.strip():
        return None
    escaped = (
        term.strip()
        .replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
