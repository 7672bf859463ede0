"""
Format checks for submitted card details.

The payment flow is simulated, so these checks are the only thing standing
between a request and a captured card: the number must have exactly 16
digits once separators are stripped, the CVV exactly 3 digits, the expiry
must be ``MM/YY`` and not before the current month, and the holder name at
least 3 and at most 100 characters after trimming.
"""
import re
from datetime import date

from shared.errors import InvalidCardDetails

_NON_DIGITS = re.compile(r"[^0-9]")
_CARD_NUMBER = re.compile(r"[0-9]{16}")
_CVV = re.compile(r"[0-9]{3}")
_EXPIRY = re.compile(r"([0-9]{2})/([0-9]{2})")

MIN_HOLDER_NAME_LENGTH = 3
MAX_HOLDER_NAME_LENGTH = 100


def clean_card_number(raw: str) -> str:
    return _NON_DIGITS.sub("", raw)


def mask_card_number(number: str) -> str:
    """Keep the last four digits, pad with '*' to 16 characters."""
    digits = clean_card_number(number)
    return digits[-4:].rjust(16, "*")


def expiry_to_date(expiry: str) -> date:
    """'MM/YY' -> first day of that month. Assumes a validated expiry."""
    month, year = _EXPIRY.fullmatch(expiry).groups()
    return date(2000 + int(year), int(month), 1)


def card_errors(
    card_number: str,
    expiry_date: str,
    card_holder_name: str,
    cvv: str | None = None,
    require_cvv: bool = True,
    today: date | None = None,
) -> list[str]:
    """Returns the reasons a card is rejected; empty when it is acceptable."""
    today = today or date.today()
    errors = []

    if not _CARD_NUMBER.fullmatch(clean_card_number(card_number)):
        errors.append("card number must contain exactly 16 digits")

    if require_cvv and (cvv is None or not _CVV.fullmatch(cvv)):
        errors.append("CVV must be exactly 3 digits")

    match = _EXPIRY.fullmatch(expiry_date)
    if match is None:
        errors.append("expiry date must be in MM/YY format")
    else:
        month, year = (int(part) for part in match.groups())
        current_year = today.year % 100
        if month < 1 or month > 12:
            errors.append("expiry month must be between 01 and 12")
        elif year < current_year or (year == current_year and month < today.month):
            errors.append("card has expired")

    holder_name = card_holder_name.strip()
    if len(holder_name) < MIN_HOLDER_NAME_LENGTH:
        errors.append("card holder name must be at least 3 characters")
    elif len(holder_name) > MAX_HOLDER_NAME_LENGTH:
        errors.append("card holder name must be at most 100 characters")

    return errors


def validate_card(
    card_number: str,
    expiry_date: str,
    card_holder_name: str,
    cvv: str | None = None,
    require_cvv: bool = True,
    today: date | None = None,
) -> None:
    errors = card_errors(
        card_number,
        expiry_date,
        card_holder_name,
        cvv=cvv,
        require_cvv=require_cvv,
        today=today,
    )
    if errors:
        raise InvalidCardDetails(f"Invalid card details: {'; '.join(errors)}")
