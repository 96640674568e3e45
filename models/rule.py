from dataclasses import dataclass, field
from typing import Any, Optional, Tuple

import regex

from core.errors import RuleConfigError

CASE_INSENSITIVE_FLAG = "i"


@dataclass(frozen=True)
class Rule:
    """A single classification rule: a pattern plus optional replacement templates."""
    pattern: str
    regex_flag: Optional[str] = None # "i" for case-insensitive, anything else is case-sensitive
    family_replacement: Optional[str] = None
    # Field templates in domain order: agent (v1..v3), os (v1..v4), device (brand, model)
    replacements: Tuple[Optional[str], ...] = ()
    compiled: Any = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        flags = regex.IGNORECASE if self.regex_flag == CASE_INSENSITIVE_FLAG else 0
        try:
            compiled = regex.compile(self.pattern, flags)
        except regex.error as e:
            raise RuleConfigError(f"Cannot compile pattern {self.pattern!r}: {e}") from e
        object.__setattr__(self, "replacements", tuple(self.replacements))
        object.__setattr__(self, "compiled", compiled)

    def replacement(self, index: int) -> Optional[str]:
        """Template for the field at `index`, or None when the rule has none."""
        if index < len(self.replacements):
            return self.replacements[index]
        return None


@dataclass(frozen=True)
class RuleSet:
    """Ordered rule lists for the three domains. Earlier rules take priority."""
    agent_rules: Tuple[Rule, ...] = ()
    os_rules: Tuple[Rule, ...] = ()
    device_rules: Tuple[Rule, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "agent_rules", tuple(self.agent_rules))
        object.__setattr__(self, "os_rules", tuple(self.os_rules))
        object.__setattr__(self, "device_rules", tuple(self.device_rules))

    def __len__(self) -> int:
        return len(self.agent_rules) + len(self.os_rules) + len(self.device_rules)
