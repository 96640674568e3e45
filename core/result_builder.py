"""Builds typed results from a rule's captures and templates.

One algorithm serves the three domains; what differs between them lives in
the DomainConfig table below.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Sequence, Tuple, Union

from core.replacement import resolve
from models.result import OTHER_FAMILY, AgentResult, DeviceResult, OSResult
from models.rule import Rule

Result = Union[AgentResult, OSResult, DeviceResult]


class Domain(Enum):
    AGENT = "agent"
    OS = "os"
    DEVICE = "device"


@dataclass(frozen=True)
class DomainConfig:
    """Per-domain knobs for field resolution."""
    version_slots: int
    default: Callable[[], Result]
    fallback_family: str = OTHER_FAMILY


DOMAIN_CONFIGS: Dict[Domain, DomainConfig] = {
    Domain.AGENT: DomainConfig(version_slots=3, default=AgentResult.default),
    Domain.OS: DomainConfig(version_slots=4, default=OSResult.default),
    Domain.DEVICE: DomainConfig(version_slots=0, default=DeviceResult.default),
}


def default_result(domain: Domain) -> Result:
    """Canonical "unknown" record for a domain."""
    return DOMAIN_CONFIGS[domain].default()


def _capture(captures: Sequence[Optional[str]], index: int) -> Optional[str]:
    if index < len(captures):
        return captures[index]
    return None


def _strip(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def resolve_family(rule: Rule, captures: Sequence[Optional[str]], config: DomainConfig) -> str:
    if rule.family_replacement is not None:
        return resolve(captures, rule.family_replacement)
    family = _capture(captures, 1)
    return family if family is not None else config.fallback_family


def resolve_versions(rule: Rule, captures: Sequence[Optional[str]], config: DomainConfig) -> Tuple[Optional[str], ...]:
    """Resolve version slots left to right; family is group 1, so slot i reads group i + 1."""
    versions = []
    for slot in range(config.version_slots):
        template = rule.replacement(slot)
        if template is not None:
            # A template that resolves to nothing leaves the slot absent
            value = resolve(captures, template) or None
        else:
            value = _capture(captures, slot + 2)
        versions.append(value)
    return tuple(versions)


def build_agent(rule: Rule, captures: Sequence[Optional[str]]) -> AgentResult:
    config = DOMAIN_CONFIGS[Domain.AGENT]
    return AgentResult(resolve_family(rule, captures, config), *resolve_versions(rule, captures, config))


def build_os(rule: Rule, captures: Sequence[Optional[str]]) -> OSResult:
    config = DOMAIN_CONFIGS[Domain.OS]
    return OSResult(resolve_family(rule, captures, config), *resolve_versions(rule, captures, config))


def build_device(rule: Rule, captures: Sequence[Optional[str]]) -> DeviceResult:
    config = DOMAIN_CONFIGS[Domain.DEVICE]
    brand_template, model_template = rule.replacement(0), rule.replacement(1)

    family = _strip(resolve_family(rule, captures, config)) or config.fallback_family

    if brand_template is not None:
        brand = resolve(captures, brand_template)
    else:
        brand = _capture(captures, 2)

    if model_template is not None:
        model = resolve(captures, model_template)
    else:
        model = _capture(captures, 3)
        if model is None:
            # Borrowed from the python ua-parser: fall back to the first capture group
            model = _capture(captures, 1)

    return DeviceResult(family=family, brand=_strip(brand), model=_strip(model))


BUILDERS: Dict[Domain, Callable[[Rule, Sequence[Optional[str]]], Result]] = {
    Domain.AGENT: build_agent,
    Domain.OS: build_os,
    Domain.DEVICE: build_device,
}


def build(domain: Domain, rule: Rule, captures: Sequence[Optional[str]]) -> Result:
    return BUILDERS[domain](rule, captures)
