# core/segment/tier_assigner.py

import numpy as np # type: ignore
import pandas as pd # type: ignore
from typing import List, Optional

from .tier_definition import TierDefinition


class TierAssigner:
    """
    Handles tier assignment based on an ordered tier definition.
    """

    def __init__(self, tier_definition: TierDefinition, fallback_label: Optional[str] = None):
        """
        Initialize tier assigner.

        Parameters
        ----------
        tier_definition : TierDefinition
            Ordered tiers, highest threshold first
        fallback_label : str, optional
            Label for missing scores. Without one, missing scores land in
            the catch-all tier.
        """
        self.tier_definition = tier_definition
        self.labels = tier_definition.labels
        self.thresholds = tier_definition.thresholds
        self.fallback_label = fallback_label

    def assign(self, scores: pd.Series) -> pd.Series:
        """
        Assign each score to the first tier whose threshold it reaches.

        Parameters
        ----------
        scores : pd.Series
            Percentile ranks or raw values, depending on the definition scale

        Returns
        -------
        pd.Series
            Tier label per score, same index as ``scores``
        """
        if scores.empty:
            return pd.Series(dtype=object, index=scores.index)

        conditions = self._build_tier_conditions(scores)
        assigned = np.select(conditions, self.labels, default=self.tier_definition.default_label)
        tiers = pd.Series(assigned, index=scores.index, dtype=object)

        if self.fallback_label is not None:
            tiers[scores.isna()] = self.fallback_label
        return tiers

    def _build_tier_conditions(self, scores: pd.Series) -> List[np.ndarray]:
        """
        Build one inclusive lower-bound condition per tier.

        np.select takes the first true condition, which makes the tiers
        mutually exclusive in declaration order. The last tier always
        matches so that it catches everything left over.
        """
        values = scores.to_numpy(dtype=float)
        conditions = [values >= threshold for threshold in self.thresholds[:-1]]
        conditions.append(np.ones(len(values), dtype=bool))
        return conditions

    def distribution(self, tiers: pd.Series) -> pd.DataFrame:
        """
        Count and share per tier, in declaration order.

        Every declared tier is listed, including empty ones. The fallback
        label is appended when it was used.
        """
        order = list(self.labels)
        if self.fallback_label is not None and self.fallback_label not in order:
            order.append(self.fallback_label)

        counts = tiers.value_counts().reindex(order, fill_value=0)
        total = int(counts.sum())
        distribution = counts.rename_axis("tier").reset_index(name="Count")
        distribution["Percentage"] = (
            distribution["Count"] / total * 100 if total else 0.0
        )
        return distribution
