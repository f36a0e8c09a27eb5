"""
Record Validator Module
Re-checks extracted records against the invariants every stored record must hold.
"""

import logging
import math

from ..extractors.normalizers import normalize_date
from ..models import TransactionRecord

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Raised in strict mode when a record breaks an invariant."""
    pass


class TransactionValidator:
    """Validates transaction records."""

    def __init__(self, strict_mode: bool = False):
        """
        Initialize validator.

        Args:
            strict_mode: If True, raise ValidationError on the first invalid record.
                        If False, log a warning and drop invalid records.
        """
        self.strict_mode = strict_mode

        self.validation_stats = {
            "total_validated": 0,
            "valid": 0,
            "invalid": 0,
            "invalid_date": 0,
            "invalid_amount": 0,
            "invalid_description": 0
        }

    def validate_transaction(self, transaction: TransactionRecord) -> bool:
        """
        Validate a single record.

        Args:
            transaction: TransactionRecord to validate

        Returns:
            True if valid, False if invalid

        Raises:
            ValidationError: If strict_mode is True and validation fails
        """
        self.validation_stats["total_validated"] += 1

        checks = (
            ("invalid_date", self._validate_date(transaction.date), f"Invalid date: {transaction.date}"),
            ("invalid_amount", self._validate_amount(transaction.amount), f"Invalid amount: {transaction.amount}"),
            ("invalid_description", self._validate_description(transaction.description), "Invalid description: empty"),
        )

        for stat_key, passed, msg in checks:
            if passed:
                continue
            self.validation_stats[stat_key] += 1
            self.validation_stats["invalid"] += 1
            if self.strict_mode:
                raise ValidationError(msg)
            logger.warning(f"{msg} in transaction: {transaction!r}")
            return False

        self.validation_stats["valid"] += 1
        return True

    def validate_transactions(self, transactions: list[TransactionRecord]) -> list[TransactionRecord]:
        """
        Validate a list of records, keeping their order.

        Args:
            transactions: List of TransactionRecord objects

        Returns:
            List of valid records (invalid ones filtered out)
        """
        valid_transactions = [txn for txn in transactions if self.validate_transaction(txn)]

        logger.info(
            f"Validation complete: {self.validation_stats['valid']} valid, "
            f"{self.validation_stats['invalid']} invalid out of "
            f"{self.validation_stats['total_validated']} total"
        )

        return valid_transactions

    @staticmethod
    def _validate_date(date_str: str) -> bool:
        """Date must round-trip through the normalizer unchanged."""
        return bool(date_str) and normalize_date(date_str) == date_str

    @staticmethod
    def _validate_amount(amount: float) -> bool:
        # Zero is a legitimate amount; only non-numbers and non-finite values fail
        return isinstance(amount, (int, float)) and not isinstance(amount, bool) and math.isfinite(amount)

    @staticmethod
    def _validate_description(description: str) -> bool:
        return isinstance(description, str) and bool(description.strip())

    def get_stats(self) -> dict:
        """Get validation statistics."""
        return self.validation_stats.copy()


def validate_transactions(transactions: list[TransactionRecord], strict_mode: bool = False) -> list[TransactionRecord]:
    """
    Convenience function to validate a list of records.

    Args:
        transactions: List of TransactionRecord objects
        strict_mode: If True, raise exceptions on invalid data

    Returns:
        List of valid records
    """
    validator = TransactionValidator(strict_mode=strict_mode)
    return validator.validate_transactions(transactions)
