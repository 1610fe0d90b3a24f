"""Fixed transaction category labels."""

from troopfund.domain.errors import ValidationError

TRANSFER_CATEGORY = "Transfer"

CATEGORIES = (
    "Dues",
    "Popcorn Sales",
    "Camp Fees",
    "Equipment",
    "Fundraising",
    "Other",
)


def validate_category(category: str) -> str:
    """Validate a user-selectable category label.

    ``Transfer`` is reserved for transfer legs and is rejected here.

    Args:
        category: Category label

    Returns:
        The label with surrounding whitespace removed

    Raises:
        ValidationError: If the label is empty, reserved or unknown
    """
    label = (category or "").strip()
    if not label:
        raise ValidationError("Category is required")
    if label == TRANSFER_CATEGORY:
        raise ValidationError(
            f"Category '{TRANSFER_CATEGORY}' is reserved for transfers between accounts"
        )
    if label not in CATEGORIES:
        raise ValidationError(
            f"Invalid category '{label}'. Must be one of: {', '.join(CATEGORIES)}"
        )
    return label
