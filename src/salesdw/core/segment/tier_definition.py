# core/segment/tier_definition.py

import pandas as pd # type: ignore
from typing import Dict, Any, List, Sequence, Tuple

from .errors import InvalidTierDefinitionError


PERCENTILE = "percentile"
VALUE = "value"


class TierDefinition:
    """
    Ordered (label, threshold) pairs used to bucket entities into tiers.

    Thresholds are inclusive lower bounds listed in strictly decreasing
    order; an entity lands in the first tier whose threshold it reaches.
    The last tier catches everything that reached no other tier.

    Two scales are supported:

    - ``"percentile"``: thresholds are percentile ranks in [0, 1] and the
      last threshold must be 0.
    - ``"value"``: thresholds are raw measure values (e.g. ages); only the
      ordering rule applies and the last tier is the catch-all whatever
      its threshold.
    """

    def __init__(self, tiers: Sequence[Tuple[str, float]], scale: str = PERCENTILE):
        if scale not in (PERCENTILE, VALUE):
            raise InvalidTierDefinitionError(
                f"❌ Unknown tier scale '{scale}'. Allowed: '{PERCENTILE}', '{VALUE}'"
            )
        self.scale = scale
        self.tiers: List[Tuple[str, float]] = [
            (label, float(threshold)) for label, threshold in self._coerce(tiers)
        ]
        self._validate()

    @staticmethod
    def _coerce(tiers) -> List[Tuple[str, Any]]:
        if tiers is None:
            raise InvalidTierDefinitionError("❌ Tier definition is empty")
        pairs = []
        for tier in tiers:
            if isinstance(tier, dict):
                if "label" not in tier or "threshold" not in tier:
                    raise InvalidTierDefinitionError(
                        f"❌ Tier entry needs 'label' and 'threshold': {tier}"
                    )
                pairs.append((tier["label"], tier["threshold"]))
                continue
            try:
                label, threshold = tier
            except (TypeError, ValueError):
                raise InvalidTierDefinitionError(
                    f"❌ Tier entry must be a (label, threshold) pair: {tier!r}"
                )
            pairs.append((label, threshold))

        for label, threshold in pairs:
            if isinstance(threshold, bool):
                raise InvalidTierDefinitionError(
                    f"❌ Threshold for '{label}' must be numeric, got {threshold!r}"
                )
            try:
                float(threshold)
            except (TypeError, ValueError):
                raise InvalidTierDefinitionError(
                    f"❌ Threshold for '{label}' must be numeric, got {threshold!r}"
                )
        return pairs

    def _validate(self) -> None:
        if not self.tiers:
            raise InvalidTierDefinitionError("❌ Tier definition is empty")

        labels = self.labels
        for label in labels:
            if not isinstance(label, str) or not label.strip():
                raise InvalidTierDefinitionError(
                    f"❌ Tier labels must be non-empty strings, got {label!r}"
                )
        if len(set(labels)) != len(labels):
            raise InvalidTierDefinitionError(f"❌ Tier labels must be unique: {labels}")

        thresholds = self.thresholds
        for label, threshold in self.tiers:
            if threshold != threshold:  # NaN
                raise InvalidTierDefinitionError(f"❌ Threshold for '{label}' is NaN")
            if self.scale == PERCENTILE and not 0.0 <= threshold <= 1.0:
                raise InvalidTierDefinitionError(
                    f"❌ Threshold for '{label}' must be within [0, 1], got {threshold}"
                )

        for (upper_label, upper), (lower_label, lower) in zip(self.tiers, self.tiers[1:]):
            if not upper > lower:
                raise InvalidTierDefinitionError(
                    "❌ Thresholds must be strictly decreasing: "
                    f"'{upper_label}' ({upper}) is not above '{lower_label}' ({lower})"
                )

        if self.scale == PERCENTILE and thresholds[-1] != 0.0:
            raise InvalidTierDefinitionError(
                f"❌ Lowest percentile tier '{labels[-1]}' must have threshold 0, "
                f"got {thresholds[-1]}"
            )

    @classmethod
    def from_config(cls, config: Dict[str, Any], scale: str = PERCENTILE) -> "TierDefinition":
        """
        Build a tier definition from a configuration section.

        Parameters
        ----------
        config : Dict[str, Any]
            Section holding a ``tiers`` list of ``{label, threshold}`` entries.
            An optional ``scale`` key overrides the ``scale`` argument.
        scale : str
            Threshold scale used when the section does not name one.
        """
        if not isinstance(config, dict) or "tiers" not in config:
            raise InvalidTierDefinitionError("❌ Tier configuration needs a 'tiers' list")
        return cls(config["tiers"], scale=config.get("scale", scale))

    @property
    def labels(self) -> List[str]:
        return [label for label, _ in self.tiers]

    @property
    def thresholds(self) -> List[float]:
        return [threshold for _, threshold in self.tiers]

    @property
    def default_label(self) -> str:
        """Label of the catch-all tier"""
        return self.tiers[-1][0]

    def __len__(self) -> int:
        return len(self.tiers)

    def __iter__(self):
        return iter(self.tiers)

    def __repr__(self) -> str:
        return f"TierDefinition({self.tiers!r}, scale={self.scale!r})"

    def to_dataframe(self) -> pd.DataFrame:
        """Convert tiers to DataFrame for easy export"""
        return pd.DataFrame([
            {'order': i + 1, 'tier': label, 'threshold': threshold, 'scale': self.scale}
            for i, (label, threshold) in enumerate(self.tiers)
        ])
