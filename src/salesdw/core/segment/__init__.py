# core/segment/__init__.py

"""
Customer Segmentation Module
============================

Percentile-rank and threshold-based segmentation of warehouse entities
into configured tiers.

Main Components:
----------------
- SegmentationCalculator: Percentile ranking, tiering and tier summaries
- TierDefinition: Ordered (label, threshold) tiers
- TierAssigner: Score -> tier label
- SegmentationAnalyzer: Summary tables and validation
- DataManager: Data export operations
- AgeSegmenter: Age-bracket segmentation
- CustomerValueSegment: Lifetime-value segmentation orchestrator

Usage:
------
    from salesdw.core.segment import CustomerValueSegment

    segmenter = CustomerValueSegment(entities_df, category_sales_df)
    assignments, summary = segmenter.run()
    segmenter.validate()
    segmenter.save()
"""

from .errors import (
    SegmentationError,
    DuplicateEntityError,
    InvalidTierDefinitionError,
    InvalidMeasureError,
)
from .ranking import percent_rank, dense_rank, row_number, top_n_per_group
from .tier_definition import TierDefinition
from .tier_assigner import TierAssigner
from .calculator import (
    SegmentationCalculator,
    SegmentationResult,
    TierSummary,
    SegmentationDiagnostics,
)
from .analyzer import SegmentationAnalyzer
from .data_manager import DataManager
from .age_segment import AgeSegmenter, calendar_age
from .customer_value_segment import CustomerValueSegment

__all__ = [
    'SegmentationError',
    'DuplicateEntityError',
    'InvalidTierDefinitionError',
    'InvalidMeasureError',
    'percent_rank',
    'dense_rank',
    'row_number',
    'top_n_per_group',
    'TierDefinition',
    'TierAssigner',
    'SegmentationCalculator',
    'SegmentationResult',
    'TierSummary',
    'SegmentationDiagnostics',
    'SegmentationAnalyzer',
    'DataManager',
    'AgeSegmenter',
    'calendar_age',
    'CustomerValueSegment',
]
