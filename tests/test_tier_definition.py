"""Tests for tier definitions and tier assignment."""

import numpy as np
import pandas as pd
import pytest

from salesdw.core.segment import InvalidTierDefinitionError, TierAssigner, TierDefinition


def test_valid_definition_keeps_declared_order():
    tiers = TierDefinition([("High Value", 0.8), ("Medium Value", 0.5), ("Low Value", 0)])

    assert tiers.labels == ["High Value", "Medium Value", "Low Value"]
    assert tiers.thresholds == [0.8, 0.5, 0.0]
    assert tiers.default_label == "Low Value"
    assert len(tiers) == 3


def test_single_catch_all_tier_is_valid():
    tiers = TierDefinition([("Everyone", 0.0)])
    assert tiers.labels == ["Everyone"]


@pytest.mark.parametrize(
    "tiers",
    [
        [],
        None,
        [("Low", 0.5), ("High", 0.6), ("Base", 0.0)],
        [("A", 0.5), ("B", 0.5), ("C", 0.0)],
        [("A", 1.2), ("B", 0.0)],
        [("A", 0.5), ("B", -0.1)],
        [("A", 0.8), ("B", 0.3)],
        [("A", 0.8), ("A", 0.0)],
        [("", 0.8), ("B", 0.0)],
        [("A", "high"), ("B", 0.0)],
        [("A", float("nan")), ("B", 0.0)],
        [("A",), ("B", 0.0)],
    ],
)
def test_invalid_definitions_are_rejected(tiers):
    with pytest.raises(InvalidTierDefinitionError):
        TierDefinition(tiers)


def test_invalid_definition_is_a_value_error():
    with pytest.raises(ValueError):
        TierDefinition([("A", 0.5), ("B", 0.6)])


def test_value_scale_allows_raw_thresholds():
    tiers = TierDefinition([("Senior", 55), ("Adult", 25), ("Youth", 5)], scale="value")

    assert tiers.scale == "value"
    assert tiers.thresholds == [55.0, 25.0, 5.0]


def test_value_scale_still_requires_decreasing_thresholds():
    with pytest.raises(InvalidTierDefinitionError):
        TierDefinition([("Youth", 0), ("Senior", 55)], scale="value")


def test_unknown_scale_is_rejected():
    with pytest.raises(InvalidTierDefinitionError):
        TierDefinition([("A", 0.0)], scale="log")


def test_from_config_reads_label_threshold_entries():
    config = {
        "tiers": [
            {"label": "Gold", "threshold": 0.9},
            {"label": "Silver", "threshold": 0.4},
            {"label": "Bronze", "threshold": 0.0},
        ]
    }
    tiers = TierDefinition.from_config(config)

    assert tiers.labels == ["Gold", "Silver", "Bronze"]
    assert tiers.scale == "percentile"


def test_from_config_scale_key_overrides_default():
    config = {"scale": "value", "tiers": [{"label": "Old", "threshold": 60}, {"label": "Young", "threshold": 0}]}
    assert TierDefinition.from_config(config).scale == "value"


@pytest.mark.parametrize("config", [{}, {"tiers": [{"label": "A"}]}, None])
def test_from_config_rejects_malformed_sections(config):
    with pytest.raises(InvalidTierDefinitionError):
        TierDefinition.from_config(config)


def test_to_dataframe_lists_tiers_in_order(value_tiers):
    df = value_tiers.to_dataframe()

    assert list(df["tier"]) == ["High Value", "Medium Value", "Low Value"]
    assert list(df["order"]) == [1, 2, 3]
    assert set(df["scale"]) == {"percentile"}


# =============================================================================
# TierAssigner
# =============================================================================

def test_assigner_uses_inclusive_lower_bounds(short_tiers):
    scores = pd.Series([0.0, 0.49, 0.5, 0.79, 0.8, 1.0])
    tiers = TierAssigner(short_tiers).assign(scores)

    assert list(tiers) == ["Low", "Low", "Medium", "Medium", "High", "High"]


def test_assigner_preserves_index(short_tiers):
    scores = pd.Series([1.0, 0.0], index=["a", "b"])
    tiers = TierAssigner(short_tiers).assign(scores)

    assert tiers.to_dict() == {"a": "High", "b": "Low"}


def test_assigner_sends_missing_scores_to_fallback():
    tiers = TierDefinition([("Senior", 55), ("Youth", 0)], scale="value")
    assigner = TierAssigner(tiers, fallback_label="Other")

    result = assigner.assign(pd.Series([70, np.nan, 10, -3]))

    assert list(result) == ["Senior", "Other", "Youth", "Youth"]


def test_assigner_without_fallback_uses_catch_all(short_tiers):
    result = TierAssigner(short_tiers).assign(pd.Series([np.nan]))
    assert list(result) == ["Low"]


def test_assigner_handles_empty_scores(short_tiers):
    result = TierAssigner(short_tiers).assign(pd.Series(dtype=float))
    assert result.empty


def test_distribution_lists_every_tier(short_tiers):
    assigner = TierAssigner(short_tiers)
    distribution = assigner.distribution(pd.Series(["Low", "Low", "High"]))

    assert list(distribution["tier"]) == ["High", "Medium", "Low"]
    assert list(distribution["Count"]) == [1, 0, 2]
    assert distribution["Percentage"].sum() == pytest.approx(100.0)
