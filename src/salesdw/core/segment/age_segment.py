# core/segment/age_segment.py

import pandas as pd # type: ignore
from typing import Any, Dict, Optional

from salesdw.utils import require_columns
from .tier_assigner import TierAssigner
from .tier_definition import TierDefinition, VALUE


DEFAULT_AGE_BRACKETS = [
    ("Senior", 55),
    ("Middle-Aged", 35),
    ("Young Adult", 25),
    ("Youth", 0),
]
DEFAULT_AS_OF = "2014-01-01"


def calendar_age(birth_dates: pd.Series, as_of) -> pd.Series:
    """
    Age as the difference of calendar years between birth and ``as_of``.

    Month and day are ignored, so someone born in December 1989 is 25 on
    2014-01-01. Missing or unparsable birth dates give NaN.
    """
    births = pd.to_datetime(birth_dates, errors="coerce")
    return pd.Timestamp(as_of).year - births.dt.year


class AgeSegmenter:
    """
    Buckets customers into age brackets and totals their sales.
    """

    def __init__(
        self,
        tier_definition: Optional[TierDefinition] = None,
        as_of=DEFAULT_AS_OF,
        fallback_label: str = "Other",
    ):
        """
        Parameters
        ----------
        tier_definition : TierDefinition, optional
            Value-scale brackets, oldest first. Defaults to
            Senior / Middle-Aged / Young Adult / Youth.
        as_of : str or Timestamp
            Reference date for the age calculation
        fallback_label : str
            Segment for customers without a usable birth date
        """
        if tier_definition is None:
            tier_definition = TierDefinition(DEFAULT_AGE_BRACKETS, scale=VALUE)
        elif not isinstance(tier_definition, TierDefinition):
            tier_definition = TierDefinition(tier_definition, scale=VALUE)

        self.tier_definition = tier_definition
        self.as_of = pd.Timestamp(as_of)
        self.fallback_label = fallback_label
        self.assigner = TierAssigner(tier_definition, fallback_label=fallback_label)

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "AgeSegmenter":
        """Build from the ``age_brackets`` configuration section."""
        tier_definition = TierDefinition.from_config(config, scale=VALUE)
        return cls(
            tier_definition,
            as_of=config.get("as_of", DEFAULT_AS_OF),
            fallback_label=config.get("fallback_label", "Other"),
        )

    @property
    def segment_order(self):
        """Youngest bracket first, fallback last"""
        order = list(reversed(self.tier_definition.labels))
        if self.fallback_label not in order:
            order.append(self.fallback_label)
        return order

    def assign(self, customers: pd.DataFrame) -> pd.DataFrame:
        """
        Add ``Age`` and ``Segment`` columns to a copy of ``customers``.
        """
        require_columns(customers, ["CustomerKey", "BirthDate"], "customers")
        df = customers.copy()
        df["Age"] = calendar_age(df["BirthDate"], self.as_of)
        df["Segment"] = self.assigner.assign(df["Age"])
        return df

    def segment(self, customers: pd.DataFrame, fact: pd.DataFrame) -> pd.DataFrame:
        """
        Customer count and total sales per age segment.

        Every customer is counted, including those without sales. A
        segment with no sales has a NaN total.

        Returns
        -------
        pd.DataFrame
            Columns Segment, CustomersCount, TotalSales in bracket order
        """
        require_columns(fact, ["CustomerKey", "SalesAmount"], "fact")
        print(f"[STEP 1] Assigning age brackets as of {self.as_of.date()}...")

        assigned = self.assign(customers)
        merged = assigned[["CustomerKey", "Segment"]].merge(
            fact[["CustomerKey", "SalesAmount"]], on="CustomerKey", how="left"
        )
        grouped = merged.groupby("Segment")
        result = pd.DataFrame({
            "CustomersCount": grouped["CustomerKey"].nunique(),
            "TotalSales": grouped["SalesAmount"].sum(min_count=1),
        })
        result = result.reindex(self.segment_order)
        result["CustomersCount"] = result["CustomersCount"].fillna(0).astype(int)
        result = result.rename_axis("Segment").reset_index()

        for _, row in result.iterrows():
            print(f"   - {row['Segment']}: {row['CustomersCount']:,} customers")
        print("✅ Age segmentation complete")
        return result
