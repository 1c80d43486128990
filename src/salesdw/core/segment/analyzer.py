# core/segment/analyzer.py

import pandas as pd # type: ignore

from .calculator import SegmentationResult


class SegmentationAnalyzer:
    """
    Provides analysis and validation tools for segmentation results.
    """

    SMALL_SEGMENT_PCT = 1
    DOMINANT_SEGMENT_PCT = 60

    def __init__(self, result: SegmentationResult, expected_total: int = None):
        """
        Initialize analyzer.

        Parameters
        ----------
        result : SegmentationResult
            Output of SegmentationCalculator.compute
        expected_total : int, optional
            Number of input entities; defaults to the assignment row count
        """
        self.result = result
        self.assignments = result.assignments
        self.expected_total = (
            expected_total if expected_total is not None else len(result.assignments)
        )

    def create_segment_summary(self) -> pd.DataFrame:
        """
        Create comprehensive segment summary table.

        Returns
        -------
        pd.DataFrame
            Summary with key statistics per segment, in tier order
        """
        total = self.result.total_entities

        summary_data = []
        for s in self.result.summaries:
            pct = (s.entity_count / total * 100) if total else 0
            summary_data.append({
                "Segment": s.label,
                "Count": s.entity_count,
                "Percentage": round(pct, 1),
                "Avg Measure": round(s.average_measure, 2) if s.average_measure is not None else None,
                "Top Group": s.top_group,
                "Top Group Amount": s.top_group_amount,
            })

        return pd.DataFrame(
            summary_data,
            columns=["Segment", "Count", "Percentage", "Avg Measure", "Top Group", "Top Group Amount"],
        )

    def validate_segmentation(self) -> bool:
        """
        Print per-segment shares and warn about unbalanced segments.

        Returns
        -------
        bool
            True when every entity was assigned exactly once
        """
        print("\n[VALIDATION] Checking segmentation quality...")

        total = self.result.total_entities
        for s in self.result.summaries:
            pct = (s.entity_count / total * 100) if total else 0
            print(f"   {s.label}: {s.entity_count:,} ({pct:.1f}%)")

            if total and pct < self.SMALL_SEGMENT_PCT:
                print(f"  ⚠️ Very small segment (<{self.SMALL_SEGMENT_PCT}%)")
            elif pct > self.DOMINANT_SEGMENT_PCT:
                print(f"  ⚠️ Dominant segment (>{self.DOMINANT_SEGMENT_PCT}%)")

        unassigned = self.assignments["tier"].isna().sum() if not self.assignments.empty else 0
        is_partition = unassigned == 0 and total == self.expected_total
        if is_partition:
            print("   ✅ All entities assigned to exactly one segment")
        else:
            print(
                f"   ❌ Segment counts ({total:,}) do not match input entities "
                f"({self.expected_total:,}); {unassigned} unassigned"
            )

        unmapped = self.result.diagnostics.unmapped_detail_records
        if unmapped:
            print(f"   ⚠️ {unmapped:,} detail records skipped (unknown entity)")

        return bool(is_partition)

    def get_rank_statistics(self) -> pd.DataFrame:
        """
        Measure and percentile-rank ranges per tier.

        Returns
        -------
        pd.DataFrame
            Min/max measure and rank for every non-empty tier
        """
        if self.assignments.empty:
            return pd.DataFrame(
                columns=["tier", "min_measure", "max_measure", "min_rank", "max_rank"]
            )
        stats = (
            self.assignments.groupby("tier", sort=False)
            .agg(
                min_measure=("measure", "min"),
                max_measure=("measure", "max"),
                min_rank=("percent_rank", "min"),
                max_rank=("percent_rank", "max"),
            )
        )
        order = [s.label for s in self.result.summaries if s.label in stats.index]
        return stats.loc[order].reset_index()
