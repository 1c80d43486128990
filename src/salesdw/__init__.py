# src/salesdw/__init__.py
"""
salesdw Package
"""
__version__ = "0.1.0"

from .db import Database
from .utils import (
    # Directory paths
    project_root,
    config_path,
    reports_path,
    get_path,

    # Config
    load_config,
    load_yaml,

    # DataFrame utilities
    to_datetime,
    require_columns,
    restore_column_case,
)

from .core import (
    # Warehouse access
    WarehouseLoader,

    # Segmentation
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

    # Ranking
    percent_rank,
    dense_rank,
    row_number,
    top_n_per_group,

    # Errors
    SegmentationError,
    DuplicateEntityError,
    InvalidTierDefinitionError,
    InvalidMeasureError,

    # Reports
    yearly_sales,
    customer_demographics,
    top_subcategories,
    same_month_last_year,
    city_sales,
    build_reports,
)


__all__ = [
    # Database
    "Database",

    # Paths
    "project_root",
    "config_path",
    "reports_path",
    "get_path",

    # Config
    "load_config",
    "load_yaml",

    # DataFrame utilities
    "to_datetime",
    "require_columns",
    "restore_column_case",

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
