"""Applies a single rule's pattern to an input string."""
import logging
import time
from typing import Optional, Tuple

import regex

from core.config import DEFAULT_SLOW_MATCH_THRESHOLD_SECONDS
from models.rule import Rule

logger = logging.getLogger(__name__)

# (full match, group 1, group 2, ...); groups that did not take part are None
Captures = Tuple[Optional[str], ...]


def match(
    rule: Rule,
    text: str,
    timeout: Optional[float] = None,
    slow_threshold: float = DEFAULT_SLOW_MATCH_THRESHOLD_SECONDS,
) -> Optional[Captures]:
    """
    Search `text` with the rule's compiled pattern.

    A timeout or an engine error counts as no match so one bad rule cannot
    abort the scan.

    Args:
        rule: Rule whose pattern is applied
        text: UA string to search
        timeout: Per-match budget in seconds (None disables it)
        slow_threshold: Duration in seconds above which a warning is logged

    Returns:
        Captures for the match, or None
    """
    start = time.perf_counter()
    try:
        m = rule.compiled.search(text, timeout=timeout)
    except TimeoutError:
        duration = time.perf_counter() - start
        logger.warning(f"Pattern timeout for {rule.pattern[:50]}... ({duration:.2f}s)")
        return None
    except regex.error as e:
        logger.warning(f"Pattern error for {rule.pattern[:50]}...: {e}")
        return None

    duration = time.perf_counter() - start
    if duration > slow_threshold:
        logger.warning(f"Slow pattern {rule.pattern[:50]}... took {duration:.2f}s")

    if m is None:
        return None

    groups = list(m.groups())
    # Trailing groups that did not participate are not part of this match
    while groups and groups[-1] is None:
        groups.pop()
    return (m.group(0), *groups)
