"""Validation package."""

from finanflow.validation.validator import TransactionValidator

__all__ = ["TransactionValidator"]
