"""
Process-wide rule set, built once and shared read-only by every parse call.
"""
import logging
import threading
from typing import Callable, Optional, Tuple

from core.config import ParserSettings
from models.rule import RuleSet

logger = logging.getLogger(__name__)


class RuleSetHolder:
    """
    Holds a single RuleSet built on first use, together with the settings it
    was installed with.

    The loader runs at most once even when many threads ask at the same time.
    A loader that raises leaves the holder empty, so the failure is reported
    again on the next call instead of being cached.
    """

    def __init__(self, loader: Optional[Callable[[], RuleSet]] = None, settings: Optional[ParserSettings] = None):
        """
        Initialize the holder.

        Args:
            loader: Callable producing the rule set (can be set later via configure)
            settings: Parser settings paired with the rule set
        """
        self._loader = loader
        self._settings = settings
        # (rule set, settings) swapped as one object so readers never see a mixed pair
        self._loaded: Optional[Tuple[RuleSet, Optional[ParserSettings]]] = None
        self._lock = threading.Lock()

    def configure(self, loader: Callable[[], RuleSet], settings: Optional[ParserSettings] = None) -> None:
        """Install a loader and its settings, discarding anything built by a previous one."""
        with self._lock:
            self._loader = loader
            self._settings = settings
            self._loaded = None

    def get_with_settings(self) -> Tuple[RuleSet, Optional[ParserSettings]]:
        """
        Get the shared rule set and its settings, building the rule set on first access.

        Returns:
            (RuleSet, ParserSettings or None)

        Raises:
            RuntimeError: if no loader has been configured
        """
        loaded = self._loaded
        if loaded is not None:
            return loaded

        with self._lock:
            if self._loaded is None:
                if self._loader is None:
                    raise RuntimeError("No rule set configured; call core.engine.init_rule_set first")
                rule_set = self._loader()
                self._loaded = (rule_set, self._settings)
                logger.info(f"Built shared rule set with {len(rule_set)} rules")
            return self._loaded

    def get(self) -> RuleSet:
        """Get the shared rule set, building it on first access."""
        return self.get_with_settings()[0]

    def is_loaded(self) -> bool:
        return self._loaded is not None

    def clear(self) -> None:
        """Forget the loader, settings and rule set (useful for testing)."""
        with self._lock:
            self._loader = None
            self._settings = None
            self._loaded = None


# Global holder instance
_shared_rule_set = RuleSetHolder()


def get_rule_set_holder() -> RuleSetHolder:
    """Get the global rule set holder."""
    return _shared_rule_set
