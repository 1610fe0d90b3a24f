"""Parse money amounts typed on the command line."""

import re
from decimal import Decimal, InvalidOperation

from troopfund.domain.errors import ValidationError

_CURRENCY_SYMBOLS = re.compile(r"[$€£¥]")


def parse_amount(amount_str: str) -> Decimal:
    """Turn user input such as ``"$1,234.56"`` or ``"(12.00)"`` into a Decimal.

    A leading minus sign or surrounding parentheses make the amount negative.
    Currency symbols and thousands separators are ignored. The result is not
    rounded; the ledger rejects more than two decimal places.

    Raises:
        ValidationError: If the text is empty or not a finite number
    """
    text = (amount_str or "").strip()
    if not text:
        raise ValidationError("Amount is required")

    negate = text.startswith("(") and text.endswith(")")
    if negate:
        text = text[1:-1]
    cleaned = _CURRENCY_SYMBOLS.sub("", text).replace(",", "").strip()

    try:
        amount = Decimal(cleaned)
    except InvalidOperation:
        amount = None
    if amount is None or not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str.strip()}'")
    return -amount if negate else amount
