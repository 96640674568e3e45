from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional

OTHER_FAMILY = "Other"


@dataclass(frozen=True)
class AgentResult:
    """Browser / agent classification."""
    family: str
    v1: Optional[str] = None
    v2: Optional[str] = None
    v3: Optional[str] = None

    @classmethod
    def default(cls) -> "AgentResult":
        return cls(family="")

    def versions(self):
        return (self.v1, self.v2, self.v3)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return _describe(self.family, self.versions())


@dataclass(frozen=True)
class OSResult:
    """Operating system classification."""
    family: str
    v1: Optional[str] = None
    v2: Optional[str] = None
    v3: Optional[str] = None
    v4: Optional[str] = None

    @classmethod
    def default(cls) -> "OSResult":
        return cls(family=OTHER_FAMILY)

    def versions(self):
        return (self.v1, self.v2, self.v3, self.v4)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return _describe(self.family, self.versions())


@dataclass(frozen=True)
class DeviceResult:
    """Device classification."""
    family: str
    brand: Optional[str] = None
    model: Optional[str] = None

    @classmethod
    def default(cls) -> "DeviceResult":
        return cls(family=OTHER_FAMILY)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        details = ", ".join(
            f"{name}={value}" for name, value in (("brand", self.brand), ("model", self.model)) if value is not None
        )
        return f"{self.family} ({details})" if details else self.family


def _describe(family: str, versions) -> str:
    """Render `family v1/v2/...`, showing absent slots as '-'."""
    if all(v is None for v in versions):
        return family
    return f"{family} " + "/".join(v if v is not None else "-" for v in versions)
