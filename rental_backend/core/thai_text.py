"""Thai number-to-words conversion used on receipts.

Numbers are read in groups of six digits; every complete group of six is
joined with ``ล้าน`` (million), so the conversion recurses on
``n // 1_000_000``.
"""

from decimal import ROUND_HALF_UP, Decimal

from .utils import to_decimal

DIGITS = ["ศูนย์", "หนึ่ง", "สอง", "สาม", "สี่", "ห้า", "หก", "เจ็ด", "แปด", "เก้า"]
POSITIONS = ["", "สิบ", "ร้อย", "พัน", "หมื่น", "แสน"]
MILLION = "ล้าน"


def _read_below_million(n: int, trailing_one_as_et: bool) -> str:
    """Read 0 < n < 1,000,000 without the leading-zero word."""
    words = []
    for position in range(len(POSITIONS) - 1, -1, -1):
        digit = (n // 10**position) % 10
        if digit == 0:
            continue
        if position == 1:
            if digit == 1:
                words.append("สิบ")
            elif digit == 2:
                words.append("ยี่สิบ")
            else:
                words.append(DIGITS[digit] + "สิบ")
        elif position == 0:
            if digit == 1 and trailing_one_as_et:
                words.append("เอ็ด")
            else:
                words.append(DIGITS[digit])
        else:
            words.append(DIGITS[digit] + POSITIONS[position])
    return "".join(words)


def _read_positive(n: int, has_higher_digits: bool) -> str:
    millions, remainder = divmod(n, 1_000_000)
    text = ""
    if millions:
        text = _read_positive(millions, has_higher_digits) + MILLION
    if remainder:
        # A lone trailing one is read "เอ็ด" once anything precedes it (11, 101, 1000001)
        trailing_one_as_et = has_higher_digits or millions > 0 or remainder >= 10
        text += _read_below_million(remainder, trailing_one_as_et)
    return text


def number_to_thai_words(value) -> str:
    """Convert an integer to Thai words.

    Non-integral input is truncated toward zero; input that cannot be read
    as a number is treated as zero.

    >>> number_to_thai_words(21)
    'ยี่สิบเอ็ด'
    >>> number_to_thai_words(1000000)
    'หนึ่งล้าน'
    """
    number = int(to_decimal(value))
    if number == 0:
        return DIGITS[0]
    if number < 0:
        return "ลบ" + _read_positive(-number, False)
    return _read_positive(number, False)


def baht_text(amount) -> str:
    """Spell a currency amount the way Thai receipts do.

    >>> baht_text(1500)
    'หนึ่งพันห้าร้อยบาทถ้วน'
    >>> baht_text("12.50")
    'สิบสองบาทห้าสิบสตางค์'
    """
    value = to_decimal(amount).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    prefix = ""
    if value < 0:
        prefix = "ลบ"
        value = -value
    baht = int(value)
    satang = int((value - baht) * 100)

    text = prefix + number_to_thai_words(baht) + "บาท"
    if satang == 0:
        return text + "ถ้วน"
    return text + number_to_thai_words(satang) + "สตางค์"
