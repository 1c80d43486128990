# core/segment/calculator.py
"""
Percentile-rank segmentation of entities into configured tiers.

The calculator takes one numeric measure per entity (e.g. a customer's
lifetime sales), ranks every entity within the population, buckets the
ranks into tiers and summarises each tier. When detail records are given
it also finds, per tier, the sub-group (e.g. product category) that
contributed the most.

Usage:
------
    tiers = TierDefinition([("High", 0.8), ("Medium", 0.5), ("Low", 0.0)])
    result = SegmentationCalculator(tiers).compute(
        entities=[(1, 100.0), (2, 250.0), (3, 900.0)],
        detail_records=[(1, "Bikes", 100.0), (3, "Accessories", 900.0)],
    )
    result.to_dataframe()
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional, Union

import numpy as np  # type: ignore
import pandas as pd  # type: ignore

from .errors import DuplicateEntityError, InvalidMeasureError, InvalidTierDefinitionError
from .ranking import percent_rank, row_number
from .tier_assigner import TierAssigner
from .tier_definition import PERCENTILE, TierDefinition

logger = logging.getLogger(__name__)


ENTITY_COLUMNS = ["entity_id", "measure"]
DETAIL_COLUMNS = ["entity_id", "group_key", "amount"]


@dataclass(frozen=True)
class TierSummary:
    """Aggregate statistics for one tier."""
    label: str
    entity_count: int
    average_measure: Optional[float]
    top_group: Any = None
    top_group_amount: Optional[float] = None


@dataclass
class SegmentationDiagnostics:
    """Non-fatal findings collected during one computation."""
    unmapped_detail_records: int = 0
    unmapped_entity_ids: List[Any] = field(default_factory=list)


@dataclass
class SegmentationResult:
    """Tier summaries, per-entity assignments and diagnostics."""
    summaries: List[TierSummary]
    assignments: pd.DataFrame
    diagnostics: SegmentationDiagnostics

    def summary(self, label: str) -> TierSummary:
        for tier_summary in self.summaries:
            if tier_summary.label == label:
                return tier_summary
        raise KeyError(label)

    @property
    def total_entities(self) -> int:
        return sum(s.entity_count for s in self.summaries)

    def to_dataframe(self) -> pd.DataFrame:
        """Render the tier summaries as a DataFrame, in tier order."""
        return pd.DataFrame(
            [
                {
                    "tier": s.label,
                    "entity_count": s.entity_count,
                    "average_measure": s.average_measure,
                    "top_group": s.top_group,
                    "top_group_amount": s.top_group_amount,
                }
                for s in self.summaries
            ],
            columns=["tier", "entity_count", "average_measure", "top_group", "top_group_amount"],
        )


EntityInput = Union[pd.DataFrame, Iterable[Any]]


class SegmentationCalculator:
    """
    Ranks entities by percentile, assigns tiers and summarises each tier.

    The calculator holds no state between calls; ``compute`` is a pure
    function of its inputs.
    """

    def __init__(self, tier_definition: TierDefinition):
        if not isinstance(tier_definition, TierDefinition):
            tier_definition = TierDefinition(tier_definition)
        if tier_definition.scale != PERCENTILE:
            raise InvalidTierDefinitionError(
                "❌ SegmentationCalculator needs a percentile-scale tier definition"
            )
        self.tier_definition = tier_definition
        self.assigner = TierAssigner(tier_definition)

    def compute(
        self,
        entities: EntityInput,
        detail_records: Optional[EntityInput] = None,
        id_col: str = "entity_id",
        measure_col: str = "measure",
        group_col: str = "group_key",
        amount_col: str = "amount",
    ) -> SegmentationResult:
        """
        Run the full segmentation over one snapshot of entities.

        Parameters
        ----------
        entities : pd.DataFrame or iterable of (id, measure)
            One row per entity. DataFrame columns are named by ``id_col``
            and ``measure_col``.
        detail_records : pd.DataFrame or iterable of (id, group, amount), optional
            Rows contributing an amount to a (entity, group) pair. Records
            pointing at unknown entities are skipped and counted.

        Returns
        -------
        SegmentationResult

        Raises
        ------
        DuplicateEntityError
            If an entity id occurs more than once.
        InvalidMeasureError
            If a measure is missing or not finite, or a detail amount is not finite.
        """
        frame = self._entity_frame(entities, id_col, measure_col)
        details = (
            self._detail_frame(detail_records, id_col, group_col, amount_col)
            if detail_records is not None
            else None
        )

        assignments = self._assign(frame)
        counts = assignments.groupby("tier", sort=False)["measure"].agg(["count", "mean"])

        diagnostics = SegmentationDiagnostics()
        top_groups = {}
        if details is not None:
            top_groups = self._top_groups(assignments, details, diagnostics)

        summaries = []
        for label in self.tier_definition.labels:
            if label in counts.index:
                count = int(counts.at[label, "count"])
                average = float(counts.at[label, "mean"])
            else:
                count, average = 0, None
            top_group, top_amount = top_groups.get(label, (None, None))
            summaries.append(TierSummary(label, count, average, top_group, top_amount))

        return SegmentationResult(summaries, assignments, diagnostics)

    # ---------------- Input validation ----------------

    @staticmethod
    def _entity_frame(entities: EntityInput, id_col: str, measure_col: str) -> pd.DataFrame:
        if isinstance(entities, pd.DataFrame):
            missing = [c for c in (id_col, measure_col) if c not in entities.columns]
            if missing:
                raise ValueError(f"Missing required columns: {missing}")
            frame = entities[[id_col, measure_col]].copy()
            frame.columns = ENTITY_COLUMNS
        else:
            frame = pd.DataFrame(list(entities), columns=ENTITY_COLUMNS)

        duplicated = frame["entity_id"].duplicated(keep="first")
        if duplicated.any():
            raise DuplicateEntityError(frame.loc[duplicated, "entity_id"].unique())

        measures = pd.to_numeric(frame["measure"], errors="coerce").astype(float)
        bad = pd.Series(~np.isfinite(measures.to_numpy()), index=frame.index)
        if bad.any():
            offenders = frame.loc[bad, "entity_id"].tolist()
            raise InvalidMeasureError(
                f"❌ Measures must be finite numbers; invalid for entities {offenders[:5]}"
            )
        frame["measure"] = measures
        return frame.reset_index(drop=True)

    @staticmethod
    def _detail_frame(
        records: EntityInput, id_col: str, group_col: str, amount_col: str
    ) -> pd.DataFrame:
        if isinstance(records, pd.DataFrame):
            missing = [c for c in (id_col, group_col, amount_col) if c not in records.columns]
            if missing:
                raise ValueError(f"Missing required columns: {missing}")
            frame = records[[id_col, group_col, amount_col]].copy()
            frame.columns = DETAIL_COLUMNS
        else:
            frame = pd.DataFrame(list(records), columns=DETAIL_COLUMNS)
        amounts = pd.to_numeric(frame["amount"], errors="coerce").astype(float)
        bad = pd.Series(~np.isfinite(amounts.to_numpy()), index=frame.index)
        if bad.any():
            offenders = frame.loc[bad, "entity_id"].tolist()
            raise InvalidMeasureError(
                f"❌ Detail amounts must be finite numbers; invalid for entities {offenders[:5]}"
            )
        frame["amount"] = amounts
        return frame.reset_index(drop=True)

    # ---------------- Computation ----------------

    def _assign(self, frame: pd.DataFrame) -> pd.DataFrame:
        assignments = frame.copy()
        assignments["percent_rank"] = percent_rank(assignments["measure"])
        assignments["tier"] = self.assigner.assign(assignments["percent_rank"])
        return assignments

    @staticmethod
    def _top_groups(
        assignments: pd.DataFrame,
        details: pd.DataFrame,
        diagnostics: SegmentationDiagnostics,
    ) -> dict:
        """
        Highest-contributing group per tier.

        Groups are enumerated in first-seen order and numbered with a stable
        sort, so ties go to the group that appeared first.
        """
        tier_of = assignments.set_index("entity_id")["tier"]
        mapped = details.assign(tier=details["entity_id"].map(tier_of))

        unmapped = mapped["tier"].isna()
        if unmapped.any():
            diagnostics.unmapped_detail_records = int(unmapped.sum())
            diagnostics.unmapped_entity_ids = mapped.loc[unmapped, "entity_id"].unique().tolist()
            logger.warning(
                "Skipped %d detail record(s) referencing unknown entities: %s",
                diagnostics.unmapped_detail_records,
                diagnostics.unmapped_entity_ids[:10],
            )
        mapped = mapped[~unmapped]
        if mapped.empty:
            return {}

        contributions = (
            mapped.groupby(["tier", "group_key"], sort=False)["amount"]
            .sum()
            .reset_index()
        )
        contributions["row_number"] = row_number(contributions, "amount", group_col="tier")
        best = contributions[contributions["row_number"] == 1]
        return {
            row.tier: (row.group_key, float(row.amount))
            for row in best.itertuples(index=False)
        }
