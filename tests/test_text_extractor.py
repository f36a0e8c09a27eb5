"""Tests for line-oriented extraction from statement text."""

import pytest

from statement_importer.extractors.text_extractor import (
    TextExtractor,
    clean_lines,
    extract_transactions_from_lines,
)


class TestCleanLines:

    def test_collapses_whitespace_and_drops_empty_lines(self):
        text = "  03/15/2024   Grocery Store    $52.13  \n\n\n   \nFooter\n"
        assert clean_lines(text) == ["03/15/2024 Grocery Store $52.13", "Footer"]

    def test_empty_text(self):
        assert clean_lines("") == []


class TestLineExtraction:
    """A line needs both a date and an amount to become a transaction."""

    def test_date_description_amount_line(self):
        [record] = extract_transactions_from_lines(["03/15/2024  Grocery Store  $52.13"])

        assert record.date == "2024-03-15T00:00:00.000Z"
        assert record.description == "Grocery Store"
        assert record.amount == 52.13

    def test_line_without_amount_is_ignored(self):
        assert extract_transactions_from_lines(["Statement continued on next page"]) == []

    def test_date_without_amount_is_ignored(self):
        assert extract_transactions_from_lines(["03/15/2024 Opening balance"]) == []

    def test_amount_without_date_is_ignored(self):
        assert extract_transactions_from_lines(["Total fees $12.00"]) == []

    def test_iso_date_and_negative_amount(self):
        [record] = extract_transactions_from_lines(["2024-01-05 Coffee -4.50"])

        assert record.date == "2024-01-05T00:00:00.000Z"
        assert record.description == "Coffee"
        assert record.amount == -4.5

    def test_grouped_amount(self):
        [record] = extract_transactions_from_lines(["01/02/2024 Rent payment -1,200.00"])
        assert record.amount == -1200.0
        assert record.description == "Rent payment"

    def test_ungrouped_amount_over_a_thousand(self):
        [record] = extract_transactions_from_lines(["2024-03-01 Rent payment 1234.56"])
        assert record.amount == 1234.56
        assert record.description == "Rent payment"

    def test_negative_ungrouped_amount(self):
        [record] = extract_transactions_from_lines(["2024-03-01 Transfer out -25000.00"])
        assert record.amount == -25000.0
        assert record.description == "Transfer out"

    def test_amount_before_date(self):
        [record] = extract_transactions_from_lines(["$19.99 Streaming 2024-02-01"])
        assert record.amount == 19.99
        assert record.description == "Streaming"
        assert record.date == "2024-02-01T00:00:00.000Z"

    def test_amount_requires_two_decimals(self):
        """Whole numbers are not amounts, so the date's digits never match."""
        assert extract_transactions_from_lines(["03/15/2024 Invoice 52"]) == []

    def test_empty_description_is_dropped(self):
        assert extract_transactions_from_lines(["03/15/2024 $52.13"]) == []

    def test_unparseable_date_is_dropped(self):
        assert extract_transactions_from_lines(["99/99/9999 Mystery 10.00"]) == []

    def test_first_literal_occurrence_is_removed(self):
        [record] = extract_transactions_from_lines(["2024-01-05 Transfer 10.00 ref 10.00"])
        assert record.amount == 10.0
        assert record.description == "Transfer ref 10.00"

    def test_never_sets_category_or_account(self):
        [record] = extract_transactions_from_lines(["2024-01-05 Coffee -4.50"])
        assert record.category is None
        assert record.account is None


class TestLineSequence:

    def test_preserves_line_order(self):
        lines = [
            "2024-03-20 Rent -1,200.00",
            "Header line",
            "2024-01-05 Coffee -4.50",
            "2024-02-11 Salary 2,500.00",
        ]

        records = extract_transactions_from_lines(lines)

        assert [r.description for r in records] == ["Rent", "Coffee", "Salary"]

    def test_accepts_any_iterable(self):
        records = extract_transactions_from_lines(line for line in ["2024-01-05 Coffee -4.50"])
        assert len(records) == 1

    def test_stats(self):
        extractor = TextExtractor()
        extractor.extract_transactions([
            "2024-01-05 Coffee -4.50",
            "No match here",
            "03/15/2024 $52.13",
        ])

        stats = extractor.get_stats()

        assert stats == {
            "lines_processed": 3,
            "lines_without_match": 1,
            "lines_skipped": 1,
            "transactions_found": 1,
        }

    @pytest.mark.parametrize("line", [
        "03.15.2024 Fuel 40.00",
        "03-15-2024 Fuel 40.00",
    ])
    def test_alternative_separators_are_recognized(self, line):
        assert TextExtractor.DATE_PATTERN.search(line).group(0) == line.split()[0]
