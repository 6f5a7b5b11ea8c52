"""Stock keeping unit codes."""

from shared.exceptions import ValidationError


def normalize_sku(code, field="sku"):
    """Trim and upper-case a SKU code.

    Format: any non-blank text, stored upper-cased.
    E.g., " elec-phn-001 " becomes "ELEC-PHN-001"
    """
    if code is None:
        return None

    normalized = str(code).strip().upper()
    if not normalized:
        raise ValidationError({field: ["SKU must not be blank"]})
    return normalized
