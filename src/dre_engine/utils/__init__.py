"""Utility functions for the DRE engine."""

from dre_engine.utils.amount_parser import parse_amount
from dre_engine.utils.company_resolver import resolve_company

__all__ = ["parse_amount", "resolve_company"]
