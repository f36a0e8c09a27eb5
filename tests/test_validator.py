"""Tests for the record invariant guard."""

import pytest

from statement_importer.models import TransactionRecord
from statement_importer.validators.record_validator import (
    TransactionValidator,
    ValidationError,
    validate_transactions,
)

VALID = TransactionRecord(date="2024-01-05T00:00:00.000Z", description="Coffee", amount=-4.5)


class TestTransactionValidator:

    def test_accepts_valid_record(self):
        assert TransactionValidator().validate_transaction(VALID) is True

    def test_zero_amount_is_valid(self):
        record = TransactionRecord(date="2024-01-05T00:00:00.000Z", description="Fee waived", amount=0)
        assert TransactionValidator().validate_transaction(record) is True

    @pytest.mark.parametrize("record,stat", [
        (TransactionRecord(date="garbage", description="Coffee", amount=1.0), "invalid_date"),
        (TransactionRecord(date="2024-01-05", description="Coffee", amount=1.0), "invalid_date"),
        (TransactionRecord(date="2024-01-05T00:00:00.000Z", description="   ", amount=1.0), "invalid_description"),
        (TransactionRecord(date="2024-01-05T00:00:00.000Z", description="Coffee", amount=float("inf")), "invalid_amount"),
    ])
    def test_drops_and_counts_invalid_records(self, record, stat):
        validator = TransactionValidator()

        assert validator.validate_transactions([VALID, record]) == [VALID]
        assert validator.get_stats()[stat] == 1
        assert validator.get_stats()["invalid"] == 1
        assert validator.get_stats()["valid"] == 1

    def test_strict_mode_raises(self):
        record = TransactionRecord(date="2024-01-05T00:00:00.000Z", description="", amount=1.0)
        with pytest.raises(ValidationError, match="description"):
            validate_transactions([record], strict_mode=True)

    def test_keeps_order(self):
        records = [
            TransactionRecord(date="2024-01-0%dT00:00:00.000Z" % day, description=str(day), amount=day)
            for day in (3, 1, 2)
        ]
        assert validate_transactions(records) == records
