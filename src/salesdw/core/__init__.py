# src/salesdw/core/__init__.py
"""
Core module initializer for salesdw.

Provides warehouse access, segmentation and sales report components.
"""

from .processing import WarehouseLoader

from .segment import (
    TierDefinition,
    TierAssigner,
    SegmentationCalculator,
    SegmentationResult,
    TierSummary,
    SegmentationDiagnostics,
    SegmentationAnalyzer,
    DataManager,
    AgeSegmenter,
    CustomerValueSegment,
    percent_rank,
    dense_rank,
    row_number,
    top_n_per_group,
    SegmentationError,
    DuplicateEntityError,
    InvalidTierDefinitionError,
    InvalidMeasureError,
)

from .reports import (
    yearly_sales,
    customer_demographics,
    top_subcategories,
    same_month_last_year,
    city_sales,
    build_reports,
)

__all__ = [
    # Warehouse access
    "WarehouseLoader",

    # Segmentation
    "TierDefinition",
    "TierAssigner",
    "SegmentationCalculator",
    "SegmentationResult",
    "TierSummary",
    "SegmentationDiagnostics",
    "SegmentationAnalyzer",
    "DataManager",
    "AgeSegmenter",
    "CustomerValueSegment",

    # Ranking
    "percent_rank",
    "dense_rank",
    "row_number",
    "top_n_per_group",

    # Errors
    "SegmentationError",
    "DuplicateEntityError",
    "InvalidTierDefinitionError",
    "InvalidMeasureError",

    # Reports
    "yearly_sales",
    "customer_demographics",
    "top_subcategories",
    "same_month_last_year",
    "city_sales",
    "build_reports",
]
