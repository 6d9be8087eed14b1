"""Utility functions for bizledger."""

from bizledger.utils.date_parser import parse_timestamp
from bizledger.utils.amount_parser import parse_amount
from bizledger.utils.currency import format_inr
from bizledger.utils.id_parser import parse_id

__all__ = ["parse_timestamp", "parse_amount", "format_inr", "parse_id"]
