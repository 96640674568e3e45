"""Rule scanning and the public parse API.

`Parser` works on an explicit RuleSet handle. The module-level functions use
the process-wide rule set installed with `init_rule_set`.
"""
import logging
from typing import Callable, Optional, Sequence, Union

from core.cache import get_rule_set_holder
from core.config import ParserSettings
from core.matcher import match
from core.result_builder import Domain, Result, build, default_result
from models.result import AgentResult, DeviceResult, OSResult
from models.rule import Rule, RuleSet


class Parser:
    def __init__(self, rule_set: RuleSet, settings: Optional[ParserSettings] = None):
        """Initialize the parser over an immutable rule set.

        Args:
            rule_set: Ordered rules for the agent, OS and device domains
            settings: Match timeout and slow-pattern threshold (defaults if omitted)
        """
        self.logger = logging.getLogger(__name__)
        self.rule_set = rule_set
        self.settings = settings or ParserSettings()

    def _scan(self, domain: Domain, rules: Sequence[Rule], text: str) -> Optional[Result]:
        """Return the result of the first rule that matches; later rules are never tried."""
        timeout = self.settings.match_timeout_seconds
        slow_threshold = self.settings.slow_match_threshold_seconds
        for index, rule in enumerate(rules):
            captures = match(rule, text, timeout=timeout, slow_threshold=slow_threshold)
            if captures is not None:
                self.logger.debug(f"{domain.value} rule #{index} matched {rule.pattern[:50]}")
                return build(domain, rule, captures)
        return None

    def parse_agent(self, text: str) -> Optional[AgentResult]:
        return self._scan(Domain.AGENT, self.rule_set.agent_rules, text)

    def parse_os(self, text: str) -> Optional[OSResult]:
        """Parse the OS. An empty string yields the OS default without consulting any rule."""
        if text == "":
            return default_result(Domain.OS)
        return self._scan(Domain.OS, self.rule_set.os_rules, text)

    def parse_device(self, text: str) -> Optional[DeviceResult]:
        return self._scan(Domain.DEVICE, self.rule_set.device_rules, text)

    def parse_device_lenient(self, text: str) -> DeviceResult:
        """Like parse_device, but an unmatched input gives the "Other" device."""
        result = self.parse_device(text)
        return result if result is not None else default_result(Domain.DEVICE)


def _render_version(versions: Sequence[Optional[str]]) -> str:
    parts = []
    for version in versions:
        if version is None:
            break
        parts.append(version)
    return ".".join(parts)


def agent_version(result: AgentResult) -> str:
    """
    Dotted agent version built from the leading run of present fields.

    Examples:
        - AgentResult("X", "1", "2", None) -> "1.2"
        - AgentResult("X", None, "5", None) -> ""
    """
    return _render_version(result.versions())


def os_version(result: OSResult) -> str:
    """
    Dotted OS version built from the leading run of present fields.

    Examples:
        - OSResult("X", "10", "0", None, "1") -> "10.0"
    """
    return _render_version(result.versions())


def init_rule_set(loader: Union[RuleSet, Callable[[], RuleSet]], settings: Optional[ParserSettings] = None) -> None:
    """Install the process-wide rule set (or a loader that builds it on first use)."""
    if isinstance(loader, RuleSet):
        rule_set = loader
        get_rule_set_holder().configure(lambda: rule_set, settings)
    else:
        get_rule_set_holder().configure(loader, settings)


def _shared_parser() -> Parser:
    rule_set, settings = get_rule_set_holder().get_with_settings()
    return Parser(rule_set, settings)


def parse_agent(text: str) -> Optional[AgentResult]:
    return _shared_parser().parse_agent(text)


def parse_os(text: str) -> Optional[OSResult]:
    return _shared_parser().parse_os(text)


def parse_device(text: str) -> Optional[DeviceResult]:
    return _shared_parser().parse_device(text)


def parse_device_lenient(text: str) -> DeviceResult:
    return _shared_parser().parse_device_lenient(text)
