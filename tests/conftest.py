import os
import sys
import pytest

# Ensure project root is on sys.path for imports like `core.*`
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

FIXTURES_DIR = os.path.join(os.path.dirname(__file__), "fixtures")


@pytest.fixture
def regexes_path():
    return os.path.join(FIXTURES_DIR, "regexes.yaml")


@pytest.fixture
def rule_set(regexes_path):
    from rules.rules_loader import load_rule_set
    return load_rule_set(regexes_path)


@pytest.fixture(autouse=True)
def reset_shared_rule_set():
    from core.cache import get_rule_set_holder
    get_rule_set_holder().clear()
    yield
    get_rule_set_holder().clear()
