"""Utility functions for troopfund."""

from troopfund.utils.date_parser import parse_date
from troopfund.utils.amount_parser import parse_amount
from troopfund.utils.account_resolver import resolve_account

__all__ = ["parse_date", "parse_amount", "resolve_account"]
