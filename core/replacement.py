"""Placeholder substitution for replacement templates."""
from typing import Optional, Sequence

# Templates may reference $1 through $4; no higher index exists
MAX_PLACEHOLDER = 4


def resolve(captures: Sequence[Optional[str]], template: str) -> str:
    """
    Substitute `$1`..`$4` in `template` with the matching capture groups.

    Group 0 (the full match) is never substituted. A group that is missing
    from this match, or did not participate in it, becomes an empty string.

    Examples:
        - resolve(("full", "10", "5"), "$1 $2") -> "10 5"
        - resolve(("full", "10", "5"), "$1-$4") -> "10-"
    """
    result = template
    for index in range(1, MAX_PLACEHOLDER + 1):
        value = captures[index] if index < len(captures) else None
        result = result.replace(f"${index}", value or "")
    return result
