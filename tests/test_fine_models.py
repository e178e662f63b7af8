from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from fca_fines.models.fine import FineRecord
from fca_fines.utils.slugify import firm_slug, short_hash, slugify

from tests.conftest import make_fine


def test_fine_record_accepts_consistent_dates() -> None:
    fine = make_fine("Alpha Bank", 1_500_000, date(2024, 3, 14), ["AML"])

    assert fine.year_issued == 2024
    assert fine.month_issued == 3
    assert fine.regulator == "FCA"
    assert fine.amount == Decimal("1500000")


def test_fine_record_rejects_mismatched_year() -> None:
    with pytest.raises(ValidationError, match="year_issued"):
        FineRecord(
            firm_individual="Alpha Bank",
            final_notice_url="https://www.fca.org.uk/a.pdf",
            amount=Decimal("10"),
            date_issued=date(2024, 3, 14),
            year_issued=2023,
            month_issued=3,
        )


def test_fine_record_rejects_negative_amount() -> None:
    with pytest.raises(ValidationError):
        FineRecord(
            firm_individual="Alpha Bank",
            final_notice_url="https://www.fca.org.uk/a.pdf",
            amount=Decimal("-1"),
            date_issued=date(2024, 3, 14),
            year_issued=2024,
            month_issued=3,
        )


def test_slugify_normalises_names() -> None:
    assert slugify("Barclays Bank UK PLC") == "barclays-bank-uk-plc"
    assert slugify("Coutts & Company") == "coutts-and-company"
    assert slugify("Lloyd's of London") == "lloyds-of-london"
    assert slugify("  --  ") == "item"
    assert slugify(None) == "item"


def test_firm_slug_disambiguates_similar_names() -> None:
    a = firm_slug("A & B Ltd")
    b = firm_slug("A and B Ltd")

    assert a != b
    assert a.startswith("a-and-b-ltd-")
    assert a.endswith(short_hash("A & B Ltd"))
    assert len(short_hash("anything")) == 6
    assert firm_slug("A & B Ltd") == a
