"""Source dataset adapters producing validated PriceRecords."""

from .base_adapter import BaseAdapter
from .cpi_csv_adapter import CpiCsvAdapter

__all__ = ["BaseAdapter", "CpiCsvAdapter"]
