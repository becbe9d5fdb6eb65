"""Tests for receipt breakdowns and numbering."""

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

from rental_backend.core.thai_text import baht_text
from rental_backend.modules.payment_management.models import PaymentType
from rental_backend.modules.payment_management.receipts import (
    build_line_items,
    build_receipt,
    is_first_payment,
    make_receipt_number,
    split_evenly,
)


def test_first_payment_is_itemized_as_advance_rent_and_insurance():
    items = build_line_items(15000, PaymentType.RENT, deposit=10000, insurance=5000)
    assert items == [
        ("ค่าเช่าล่วงหน้า", Decimal("10000")),
        ("ค่าประกัน", Decimal("5000")),
    ]


def test_first_payment_tolerates_rounding():
    assert is_first_payment("15000.004", 10000, 5000)
    assert not is_first_payment("15000.02", 10000, 5000)


def test_first_payment_requires_deposit_and_insurance():
    assert not is_first_payment(10000, 10000, 0)
    items = build_line_items(10000, PaymentType.RENT, deposit=10000, insurance=0)
    assert items == [("ค่าเช่า", Decimal("10000"))]


def test_utility_is_split_into_electricity_and_water():
    items = build_line_items("100.01", PaymentType.UTILITY)
    assert [description for description, _ in items] == ["ค่าไฟ", "ค่าน้ำ"]
    assert sum(amount for _, amount in items) == Decimal("100.01")
    assert items[0][1] - items[1][1] == Decimal("0.01")


def test_split_evenly_even_amount():
    assert split_evenly(3000) == (Decimal("1500.00"), Decimal("1500.00"))


def test_deposit_and_other_use_their_labels():
    assert build_line_items(5000, PaymentType.DEPOSIT) == [("ค่ามัดจำ", Decimal("5000"))]
    assert build_line_items(300, PaymentType.OTHER) == [("อื่นๆ", Decimal("300"))]


def test_receipt_number_uses_paid_date_and_id_tail():
    assert make_receipt_number("0f3c-9a1-xyz", date(2024, 6, 15)) == "REC-20240615-XYZ"


def test_build_receipt():
    payment = SimpleNamespace(
        id="5b1e9d2c-aaaa-bbbb-cccc-1234567890ab",
        amount=Decimal("24000"),
        type=PaymentType.RENT,
        due_date=date(2024, 1, 2),
        paid_date=date(2024, 1, 3),
        receipt_number=None,
        receipt_date=None,
        payment_method="transfer",
    )
    contract = SimpleNamespace(
        contract_number="CT-20240102-0001",
        deposit=Decimal("8000"),
        insurance=Decimal("16000"),
    )
    asset = SimpleNamespace(
        name="คอนโดริมน้ำ",
        address="99/1 ถนนเจริญกรุง",
        district="บางรัก",
        amphoe="บางรัก",
        province="กรุงเทพมหานคร",
    )

    receipt = build_receipt(payment, contract, asset, tenant_name="วิชัย")

    assert receipt.receipt_number == "REC-20240103-0AB"
    assert receipt.receipt_date == date(2024, 1, 3)
    assert receipt.is_first_payment
    assert [line.description for line in receipt.lines] == ["ค่าเช่าล่วงหน้า", "ค่าประกัน"]
    assert receipt.total == 24000
    assert receipt.total_text == "สองหมื่นสี่พันบาทถ้วน"
    assert receipt.type_label == "ค่าเช่า"
    assert receipt.tenant_name == "วิชัย"
    assert receipt.asset_address == "99/1 ถนนเจริญกรุง, บางรัก, บางรัก, กรุงเทพมหานคร"


def test_first_payment_total_is_the_amount_paid():
    payment = SimpleNamespace(
        id="5b1e9d2c-aaaa-bbbb-cccc-1234567890ab",
        amount=Decimal("24000.004"),
        type=PaymentType.RENT,
        due_date=date(2024, 1, 2),
        paid_date=date(2024, 1, 3),
        receipt_number=None,
        receipt_date=None,
        payment_method="cash",
    )
    contract = SimpleNamespace(
        contract_number="CT-20240102-0001",
        deposit=Decimal("8000"),
        insurance=Decimal("16000"),
    )

    receipt = build_receipt(payment, contract)

    assert receipt.is_first_payment
    assert receipt.total == 24000.004
    assert receipt.total_text == baht_text(Decimal("24000.004"))


def test_build_receipt_without_asset_uses_defaults():
    payment = SimpleNamespace(
        id="abc",
        amount=Decimal("1200"),
        type=PaymentType.UTILITY,
        due_date=date(2024, 2, 1),
        paid_date=None,
        receipt_number="REC-20240201-ABC",
        receipt_date=date(2024, 2, 1),
        payment_method=None,
    )
    contract = SimpleNamespace(contract_number=None, deposit=0, insurance=0)

    receipt = build_receipt(payment, contract)

    assert receipt.receipt_number == "REC-20240201-ABC"
    assert receipt.asset_name == "ทรัพย์สิน"
    assert receipt.tenant_name == "ผู้เช่า"
    assert [line.amount for line in receipt.lines] == [600, 600]
    assert receipt.total_text == "หนึ่งพันสองร้อยบาทถ้วน"
