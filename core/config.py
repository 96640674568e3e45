"""Parser settings, optionally loaded from a YAML file."""
import os
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple

import yaml

from core.errors import RuleConfigError

# Hard per-match budget to stop catastrophic backtracking in untrusted rules
DEFAULT_MATCH_TIMEOUT_MS = 200
# Matches slower than this are reported so problematic patterns surface
DEFAULT_SLOW_MATCH_THRESHOLD_SECONDS = 0.1


@dataclass(frozen=True)
class ParserSettings:
    regexes_path: Optional[str] = None
    match_timeout_ms: Optional[int] = DEFAULT_MATCH_TIMEOUT_MS
    slow_match_threshold_seconds: float = DEFAULT_SLOW_MATCH_THRESHOLD_SECONDS

    @property
    def match_timeout_seconds(self) -> Optional[float]:
        """Timeout in the unit the `regex` library expects, None to disable."""
        if not self.match_timeout_ms:
            return None
        return self.match_timeout_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> "ParserSettings":
        """Copy with the given fields replaced, ignoring overrides that are None."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def load_settings(settings_file: Optional[str] = None) -> ParserSettings:
    """
    Load parser settings from a YAML file.

    A missing or empty file yields the defaults.

    Args:
        settings_file: Path to the YAML settings file

    Returns:
        ParserSettings built from the file contents
    """
    if not settings_file or not os.path.exists(settings_file):
        return ParserSettings()

    with open(settings_file, 'r') as f:
        try:
            data: Dict[str, Any] = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise RuleConfigError(f"Invalid YAML in settings file {settings_file}: {e}") from e

    if not isinstance(data, dict):
        raise RuleConfigError(f"Settings file {settings_file} must contain a mapping")

    known = {"regexes_path", "match_timeout_ms", "slow_match_threshold_seconds"}
    unknown = set(data) - known
    if unknown:
        raise RuleConfigError(f"Unknown settings in {settings_file}: {', '.join(sorted(unknown))}")

    _check_type(data, "regexes_path", (str,), settings_file)
    _check_type(data, "match_timeout_ms", (int,), settings_file)
    _check_type(data, "slow_match_threshold_seconds", (int, float), settings_file)

    return ParserSettings().with_overrides(**data)


def _check_type(data: Dict[str, Any], key: str, types: Tuple[type, ...], settings_file: str) -> None:
    value = data.get(key)
    if value is None:
        return
    # bool is an int subclass but never a valid number here
    if isinstance(value, bool) or not isinstance(value, types):
        expected = " or ".join(t.__name__ for t in types)
        raise RuleConfigError(
            f"Setting '{key}' in {settings_file} must be {expected}, got {type(value).__name__}"
        )
