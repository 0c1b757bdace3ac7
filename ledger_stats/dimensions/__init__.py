"""
Dimensions package for ledger-stats.

Re-exports the dimension interfaces and the concrete dimension classes so
downstream code can import from `ledger_stats.dimensions` directly.
"""

from ledger_stats.dimensions.abstract import AbstractDimension, Dimension
from ledger_stats.dimensions.calendar import DateDimension, MonthBucketing, MonthDimension
from ledger_stats.dimensions.domain import DomainDimension
from ledger_stats.dimensions.region import RegionDimension

__all__ = [
    # Abstracts
    "AbstractDimension",
    "Dimension",
    # Concrete dimensions
    "DateDimension",
    "DomainDimension",
    "MonthBucketing",
    "MonthDimension",
    "RegionDimension",
]
