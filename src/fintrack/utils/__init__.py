"""Utility functions for fintrack."""

from fintrack.utils.csv_parser import parse_csv
from fintrack.utils.date_parser import parse_date, parse_smart_date
from fintrack.utils.amount_parser import parse_amount

__all__ = ["parse_csv", "parse_date", "parse_smart_date", "parse_amount"]
