from datetime import datetime, timezone

import pytest

from smartflow_rules.classifier import FlowClassifier
from smartflow_rules.extractor import TextExtractor
from smartflow_rules.ruleset import RulesetStore

# Fixed "now" so day counts since the last visit are reproducible.
NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(scope="session")
def store():
    """Load the full RulesetStore once for the entire test session."""
    s = RulesetStore()
    s.load()
    return s


@pytest.fixture(scope="session")
def classifier(store):
    return FlowClassifier(store)


@pytest.fixture(scope="session")
def extractor(store):
    return TextExtractor(store)


@pytest.fixture
def now():
    return NOW
