"""Pytest configuration for ruletree tests"""

import pytest

from ruletree import (
    Behavior,
    Criteria,
    MustSatisfy,
    Rule,
    RuleTree,
    reset_config,
)


@pytest.fixture(autouse=True)
def clear_config():
    """Reset the global engine configuration around each test."""
    reset_config()
    yield
    reset_config()


def build_sample_tree() -> RuleTree:
    """
    default
    ├── Behavior: cpCode            {value: {id: 1}}
    ├── Behavior: origin            {hostname: origin.example.com}
    ├── Section: Performance
    │   ├── Behavior: caching       {behavior: MAX_AGE, ttl: 1d}
    │   └── Section: JPEG Images
    │       ├── Criteria: fileExtension
    │       └── Behavior: adaptiveImageCompression
    └── Section: Offload            (criteria must satisfy ANY)
        └── Criteria: path
    """
    jpeg = Rule(
        name="JPEG Images",
        criteria=[Criteria(name="fileExtension", options={"matchOperator": "IS_ONE_OF", "values": ["jpg", "jpeg"]})],
        behaviors=[Behavior(name="adaptiveImageCompression", options={"tier1MobileCompressionValue": 80})],
    )
    performance = Rule(
        name="Performance",
        behaviors=[Behavior(name="caching", options={"behavior": "MAX_AGE", "ttl": "1d"})],
        children=[jpeg],
    )
    offload = Rule(
        name="Offload",
        criteria_must_satisfy=MustSatisfy.ANY,
        criteria=[Criteria(name="path", options={"values": ["/static/*"]})],
    )
    root = Rule(
        name="default",
        behaviors=[
            Behavior(name="cpCode", options={"value": {"id": 1}}),
            Behavior(name="origin", options={"hostname": "origin.example.com"}),
        ],
        children=[performance, offload],
    )
    return RuleTree(
        property_id="prp_1",
        property_version=3,
        contract_id="ctr_1",
        group_id="grp_1",
        rule_format="v2023-01-05",
        rules=root,
    )


@pytest.fixture
def sample_tree() -> RuleTree:
    return build_sample_tree()


@pytest.fixture
def empty_tree() -> RuleTree:
    return RuleTree.new()
