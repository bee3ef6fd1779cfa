"""Utility functions for finrecon."""

from finrecon.utils.date_parser import parse_date, get_date_range
from finrecon.utils.amount_parser import parse_amount, parse_split

__all__ = ["parse_date", "get_date_range", "parse_amount", "parse_split"]
