# core/segment/data_manager.py

import os
import pandas as pd # type: ignore

from .calculator import SegmentationResult
from .tier_definition import TierDefinition


class DataManager:
    """
    Handles all data saving and export operations for segmentation results.
    """

    def __init__(self, output_dir: str):
        """
        Initialize data manager.

        Parameters
        ----------
        output_dir : str
            Directory path for saving output files
        """
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

    def save_all_results(
        self,
        result: SegmentationResult,
        tier_definition: TierDefinition,
    ) -> str:
        """
        Save all segmentation results to CSV files.

        Parameters
        ----------
        result : SegmentationResult
            Computed tier assignments and summaries
        tier_definition : TierDefinition
            Tier definition used

        Returns
        -------
        str
            Path to main assignment file
        """
        print("[STEP 3] Saving segmentation results...")

        main_path = self._save_assignments(result.assignments)
        self._save_summary(result.to_dataframe())
        self._save_tier_definition(tier_definition)

        print(f"\n💾 ALL FILES SAVED TO: {self.output_dir}")
        return main_path

    def _save_assignments(self, assignments: pd.DataFrame) -> str:
        """Save per-entity tier assignments"""
        main_path = os.path.join(self.output_dir, "tier_assignments.csv")
        assignments.to_csv(main_path, index=False)
        print(f"   ✅ Saved tier assignments: {main_path}")
        print(f"   - Entities: {len(assignments):,}")
        return main_path

    def _save_summary(self, summary: pd.DataFrame) -> None:
        """Save tier summary table"""
        summary_path = os.path.join(self.output_dir, "tier_summary.csv")
        summary.to_csv(summary_path, index=False)
        print(f"   ✅ Saved tier summary: {summary_path}")

    def _save_tier_definition(self, tier_definition: TierDefinition) -> None:
        """Save tier thresholds"""
        definition_path = os.path.join(self.output_dir, "tier_definition.csv")
        tier_definition.to_dataframe().to_csv(definition_path, index=False)
        print(f"   ✅ Saved tier definition: {definition_path}")
