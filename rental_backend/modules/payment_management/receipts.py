"""Receipt formatting: itemized breakdown, receipt numbers and Thai totals.

Everything here is pure; the payment router loads the rows and hands them in.
"""

from datetime import date
from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from ...core.thai_text import baht_text
from ...core.utils import to_decimal, utc_today
from .models import PaymentType

CENT = Decimal("0.01")
FIRST_PAYMENT_TOLERANCE = Decimal("0.01")

TYPE_LABELS = {
    PaymentType.RENT: "ค่าเช่า",
    PaymentType.DEPOSIT: "ค่ามัดจำ",
    PaymentType.UTILITY: "ค่าน้ำ-ไฟ",
    PaymentType.OTHER: "อื่นๆ",
}

ADVANCE_RENT = "ค่าเช่าล่วงหน้า"
INSURANCE = "ค่าประกัน"
ELECTRICITY = "ค่าไฟ"
WATER = "ค่าน้ำ"


class ReceiptLine(BaseModel):
    description: str
    amount: float


class Receipt(BaseModel):
    """Receipt payload for a single payment."""

    receipt_number: str
    receipt_date: date
    payment_id: str
    payment_type: PaymentType
    type_label: str
    due_date: date
    paid_date: date | None = None
    payment_method: str | None = None
    contract_number: str | None = None
    tenant_name: str
    asset_name: str
    asset_address: str | None = None
    is_first_payment: bool = False
    lines: list[ReceiptLine]
    total: float
    total_text: str


def is_first_payment(amount, deposit, insurance) -> bool:
    """The payment that collects advance rent plus insurance at signing."""
    deposit = to_decimal(deposit)
    insurance = to_decimal(insurance)
    if deposit <= 0 or insurance <= 0:
        return False
    return abs(to_decimal(amount) - (deposit + insurance)) < FIRST_PAYMENT_TOLERANCE


def split_evenly(amount) -> tuple[Decimal, Decimal]:
    """Split into two halves that add back up exactly.

    The first half absorbs the odd satang.

    >>> split_evenly("100.01")
    (Decimal('50.01'), Decimal('50.00'))
    """
    total = to_decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)
    satang = int(total / CENT)
    second = Decimal(satang // 2) * CENT
    return total - second, second


def build_line_items(
    amount, payment_type: PaymentType, deposit=0, insurance=0
) -> list[tuple[str, Decimal]]:
    """Itemize a payment into (description, amount) lines.

    >>> build_line_items(15000, PaymentType.RENT, deposit=10000, insurance=5000)
    [('ค่าเช่าล่วงหน้า', Decimal('10000')), ('ค่าประกัน', Decimal('5000'))]
    """
    amount = to_decimal(amount)
    if is_first_payment(amount, deposit, insurance):
        return [(ADVANCE_RENT, to_decimal(deposit)), (INSURANCE, to_decimal(insurance))]

    if payment_type == PaymentType.UTILITY:
        electricity, water = split_evenly(amount)
        return [(ELECTRICITY, electricity), (WATER, water)]
    return [(TYPE_LABELS.get(payment_type, TYPE_LABELS[PaymentType.OTHER]), amount)]


def make_receipt_number(payment_id: str, paid_date: date | None = None) -> str:
    """``REC-YYYYMMDD-XXX`` from the paid date and the payment id's tail.

    >>> make_receipt_number("9b2f-41ac-abc", date(2024, 3, 5))
    'REC-20240305-ABC'
    """
    day = paid_date or utc_today()
    return f"REC-{day.strftime('%Y%m%d')}-{payment_id[-3:].upper()}"


def build_receipt(payment, contract, asset=None, tenant_name: str | None = None) -> Receipt:
    """Assemble the receipt for a payment of ``contract`` on ``asset``."""
    items = build_line_items(
        payment.amount, payment.type, contract.deposit, contract.insurance
    )
    # The amount actually collected, even when the lines round differently
    total = to_decimal(payment.amount)

    asset_address = None
    if asset is not None:
        parts = [asset.address, asset.district, asset.amphoe, asset.province]
        asset_address = ", ".join(part for part in parts if part) or None

    return Receipt(
        receipt_number=payment.receipt_number
        or make_receipt_number(payment.id, payment.paid_date),
        receipt_date=payment.receipt_date or payment.paid_date or utc_today(),
        payment_id=payment.id,
        payment_type=payment.type,
        type_label=TYPE_LABELS.get(payment.type, TYPE_LABELS[PaymentType.OTHER]),
        due_date=payment.due_date,
        paid_date=payment.paid_date,
        payment_method=payment.payment_method,
        contract_number=contract.contract_number,
        tenant_name=tenant_name or "ผู้เช่า",
        asset_name=asset.name if asset is not None else "ทรัพย์สิน",
        asset_address=asset_address,
        is_first_payment=is_first_payment(
            payment.amount, contract.deposit, contract.insurance
        ),
        lines=[
            ReceiptLine(description=description, amount=float(line_amount))
            for description, line_amount in items
        ],
        total=float(total),
        total_text=baht_text(total),
    )
