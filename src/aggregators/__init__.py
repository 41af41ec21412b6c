"""Aggregators module for combining crew shifts into billing summaries.

This module groups shifts from many production events by technician and
applies the payment rules to produce payable totals.
"""

from src.aggregators.billing_aggregator import (
    AggregatedTechnician,
    BillingSummary,
    ShiftSummary,
    aggregate_technicians,
    summarize_technicians,
)

__all__ = [
    "AggregatedTechnician",
    "BillingSummary",
    "ShiftSummary",
    "aggregate_technicians",
    "summarize_technicians",
]
