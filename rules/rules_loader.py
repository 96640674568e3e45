import logging
from typing import Any, Dict, List, Optional, Tuple

import yaml

from core.errors import RuleConfigError
from models.rule import Rule, RuleSet

logger = logging.getLogger(__name__)

# Section name -> (family key, field template keys in domain order)
SECTION_KEYS: Dict[str, Tuple[str, Tuple[str, ...]]] = {
    "user_agent_parsers": ("family_replacement", ("v1_replacement", "v2_replacement", "v3_replacement")),
    "os_parsers": (
        "os_replacement",
        ("os_v1_replacement", "os_v2_replacement", "os_v3_replacement", "os_v4_replacement"),
    ),
    "device_parsers": ("device_replacement", ("brand_replacement", "model_replacement")),
}


def _optional_text(entry: Dict[str, Any], key: str, where: str) -> Optional[str]:
    value = entry.get(key)
    if value is None:
        return None
    # YAML turns bare numbers like `v1_replacement: 8` into ints
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    if not isinstance(value, str):
        raise RuleConfigError(f"{where}: '{key}' must be a string, got {type(value).__name__}")
    return value


def _build_rules(section: str, entries: Any) -> List[Rule]:
    if not isinstance(entries, list):
        raise RuleConfigError(f"'{section}' must be a list of rules")

    family_key, field_keys = SECTION_KEYS[section]
    rules: List[Rule] = []
    for index, entry in enumerate(entries):
        where = f"{section}[{index}]"
        if not isinstance(entry, dict):
            raise RuleConfigError(f"{where}: rule must be a mapping")
        pattern = entry.get("regex")
        if not isinstance(pattern, str):
            raise RuleConfigError(f"{where}: missing 'regex'")

        regex_flag = _optional_text(entry, "regex_flag", where)
        family_replacement = _optional_text(entry, family_key, where)
        replacements = tuple(_optional_text(entry, key, where) for key in field_keys)
        try:
            rules.append(
                Rule(
                    pattern=pattern,
                    regex_flag=regex_flag,
                    family_replacement=family_replacement,
                    replacements=replacements,
                )
            )
        except RuleConfigError as e:
            raise RuleConfigError(f"{where}: {e}") from e
    return rules


def rule_set_from_dict(data: Any) -> RuleSet:
    """
    Builds a RuleSet from an already parsed rule document.

    Rule order within each section is preserved; it is the match priority.
    """
    if not isinstance(data, dict):
        raise RuleConfigError("Rule document must be a mapping")

    missing = [section for section in SECTION_KEYS if section not in data]
    if missing:
        raise RuleConfigError(f"Rule document is missing sections: {', '.join(missing)}")

    rule_set = RuleSet(
        agent_rules=_build_rules("user_agent_parsers", data["user_agent_parsers"]),
        os_rules=_build_rules("os_parsers", data["os_parsers"]),
        device_rules=_build_rules("device_parsers", data["device_parsers"]),
    )
    logger.info(
        f"Loaded {len(rule_set.agent_rules)} agent rules, {len(rule_set.os_rules)} os rules, "
        f"{len(rule_set.device_rules)} device rules"
    )
    return rule_set


def load_rule_set(path: str) -> RuleSet:
    """
    Loads a RuleSet from a regexes.yaml style file.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise RuleConfigError(f"Cannot read rule file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise RuleConfigError(f"Invalid YAML in rule file {path}: {e}") from e
    return rule_set_from_dict(data)
