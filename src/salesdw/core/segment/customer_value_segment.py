# core/segment/customer_value_segment.py

import pandas as pd # type: ignore
from typing import Dict, Any, Tuple

from salesdw.utils import default_config_file, get_path, load_yaml
from .analyzer import SegmentationAnalyzer
from .calculator import SegmentationCalculator, SegmentationResult
from .data_manager import DataManager
from .tier_definition import TierDefinition


class CustomerValueSegment:
    """
    Customer lifetime-value segmentation orchestrator.
    Coordinates:
    - Configuration loading
    - Percentile ranking and tier assignment
    - Top product category per tier
    - Analysis and data export
    """

    REQUIRED_CONFIG_SECTIONS = ["customer_value"]

    def __init__(
        self,
        entities: pd.DataFrame,
        detail_records: pd.DataFrame = None,
        config_file: str = None,
    ) -> None:
        """
        Parameters
        ----------
        entities : pd.DataFrame
            Columns entity_id (customer) and measure (lifetime sales)
        detail_records : pd.DataFrame, optional
            Columns entity_id, group_key (product category) and amount
        config_file : str, optional
            YAML configuration; defaults to config/segmentation.yaml
        """
        self.entities = entities.copy()
        self.detail_records = detail_records.copy() if detail_records is not None else None
        self.config: Dict[str, Any] = {}
        self.config_path = config_file or default_config_file
        self._load_configuration()

        # Raises InvalidTierDefinitionError on a bad tier list
        self.tier_definition = TierDefinition.from_config(self.config["customer_value"])
        self.calculator = SegmentationCalculator(self.tier_definition)

        self.result: SegmentationResult = None
        self.analyzer: SegmentationAnalyzer = None
        self.data_manager: DataManager = None

        self._print_initialization_summary()

    @classmethod
    def from_warehouse(cls, loader, config_file: str = None) -> "CustomerValueSegment":
        """Build entities and detail records from a WarehouseLoader."""
        entities = loader.customer_lifetime_sales()
        detail_records = loader.customer_category_sales()
        return cls(entities, detail_records, config_file=config_file)

    # ---------------- Configuration ----------------

    def _load_configuration(self) -> None:
        """Load segmentation configuration from YAML file."""
        try:
            self.config = load_yaml(self.config_path)

            # If YAML has a top-level 'segmentation' key, unwrap it
            if "segmentation" in self.config:
                self.config = self.config["segmentation"]

            for section in self.REQUIRED_CONFIG_SECTIONS:
                if section not in self.config:
                    raise ValueError(f"Missing required configuration section: {section}")

            print("✅ Configuration loaded successfully")

        except (FileNotFoundError, ValueError, TypeError) as e:
            print(f"❌ Failed to load configuration: {e}")
            print("⚠️ Using default configuration...")
            self._set_default_config()

    def _set_default_config(self) -> None:
        self.config = {
            "customer_value": {
                "tiers": [
                    {"label": "High Value", "threshold": 0.80},
                    {"label": "Medium Value", "threshold": 0.50},
                    {"label": "Low Value", "threshold": 0.0},
                ],
            },
        }

    def _print_initialization_summary(self) -> None:
        print("✅ CustomerValueSegment initialized")
        print(f"   - Total customers: {len(self.entities):,}")
        print(f"   - Tiers: {', '.join(self.tier_definition.labels)}")
        print(f"   - Config: {self.config_path}")

    # ---------------- Pipeline ----------------

    def run(self) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """
        Execute the segmentation.

        Returns
        -------
        Tuple[pd.DataFrame, pd.DataFrame]
            Per-customer assignments and the tier summary table
        """
        print("\n" + "=" * 80)
        print("🚀 CUSTOMER VALUE SEGMENTATION")
        print("=" * 80 + "\n")

        print("[STEP 1] Ranking customers and assigning tiers...")
        self.result = self.calculator.compute(self.entities, self.detail_records)
        self.analyzer = SegmentationAnalyzer(self.result, expected_total=len(self.entities))

        print("[STEP 2] Summarising tiers...")
        summary_df = self.summary_table()
        self._print_final_summary(summary_df)
        return self.result.assignments, summary_df

    def _print_final_summary(self, summary_df: pd.DataFrame) -> None:
        print("\n" + "=" * 80)
        print("🎉 SEGMENTATION COMPLETE!")
        print("=" * 80)
        for _, row in summary_df.iterrows():
            top = row["Top Group"] if row["Top Group"] is not None else "-"
            print(f"   - {row['Segment']}: {row['Count']:,} customers ({row['Percentage']:.1f}%), top: {top}")
        unmapped = self.result.diagnostics.unmapped_detail_records
        if unmapped:
            print(f"   ⚠️ {unmapped:,} detail records skipped (unknown customer)")
        print("=" * 80)

    # ---------------- Convenience ----------------

    def _require_result(self) -> SegmentationResult:
        if self.result is None:
            raise ValueError("Segmentation has not been run yet; call run() first")
        return self.result

    def summary_table(self) -> pd.DataFrame:
        self._require_result()
        return self.analyzer.create_segment_summary()

    def validate(self) -> bool:
        self._require_result()
        return self.analyzer.validate_segmentation()

    def save(self, output_dir: str = None) -> str:
        result = self._require_result()
        output_dir = output_dir or get_path("customer_value")
        self.data_manager = DataManager(output_dir)
        return self.data_manager.save_all_results(result, self.tier_definition)

    def segment_members(self, label: str) -> pd.DataFrame:
        """Customers assigned to one tier."""
        result = self._require_result()
        if label not in self.tier_definition.labels:
            raise ValueError(f"Unknown tier '{label}'. Allowed: {self.tier_definition.labels}")
        members = result.assignments[result.assignments["tier"] == label]
        return members.reset_index(drop=True)
