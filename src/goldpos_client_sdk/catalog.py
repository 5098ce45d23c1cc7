from __future__ import annotations

import re

from .models import GoldType

_BARCODE_RE = re.compile(r"^EM-[A-Z]{2}-\d{6}-\d$")

GOLD_TYPE_LABELS = {
    GoldType.LM: "Logam Mulia (ANTAM)",
    GoldType.UBS: "UBS",
    GoldType.LOKAL: "Emas Lokal",
}

KARAT_BY_PURITY = {
    375: "9K",
    417: "10K",
    585: "14K",
    750: "18K",
    875: "21K",
    916: "22K",
    958: "23K",
    999: "24K",
}

CATEGORY_CODES = {
    "Cincin": "CN",
    "Kalung": "KL",
    "Gelang": "GL",
    "Anting": "AT",
    "Liontin": "LT",
    "Batangan": "BT",
    "Koin": "KN",
}


class InvalidBarcodeError(ValueError):
    pass


def gold_type_label(gold_type: GoldType | str) -> str:
    try:
        return GOLD_TYPE_LABELS[GoldType(gold_type)]
    except ValueError:
        return str(gold_type)


def purity_label(purity: int) -> str:
    karat = KARAT_BY_PURITY.get(purity)
    return f"{karat} ({purity})" if karat else str(purity)


def category_code(category_name: str) -> str:
    return CATEGORY_CODES.get(category_name) or category_name[:2].upper()


def luhn_check_digit(digits: str) -> int:
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return (10 - total % 10) % 10


def generate_barcode(code: str, sequence: int) -> str:
    """Build ``EM-<CAT>-<6 digit sequence>-<check digit>``.

    The check digit is the Luhn digit over the numeric part of the base code.
    """
    if sequence < 0 or sequence > 999_999:
        raise ValueError("sequence must be between 0 and 999999")
    base = f"EM-{code.upper()}-{sequence:06d}"
    return f"{base}-{luhn_check_digit(re.sub(r'[^0-9]', '', base))}"


def normalize_barcode(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip().upper()
    return trimmed or None


def is_valid_barcode(value: str | None) -> bool:
    return bool(value) and _BARCODE_RE.match(value) is not None


def validate_barcode(value: str | None) -> str:
    barcode = normalize_barcode(value)
    if barcode is None:
        raise InvalidBarcodeError("barcode is required")
    if not is_valid_barcode(barcode):
        raise InvalidBarcodeError(f"barcode must look like EM-XX-000000-0, got {barcode!r}")
    return barcode
