from decimal import Decimal, DecimalException

from bson.decimal128 import Decimal128

from eshop.domain.errors import ValidationError


def _storable(value: Decimal) -> bool:
    # money is persisted as Decimal128: 34 significant digits, bounded exponent
    try:
        Decimal128(value)
    except DecimalException:
        return False
    return True


def validate_payment_request(request) -> None:
    """
    Fail-fast checks on a payment creation request, first violation wins.
    Raises ValidationError with a client-facing reason; no side effects.
    """
    if not request.user_id:
        raise ValidationError("UserId is required")
    if not request.currency:
        raise ValidationError("Currency is required")
    if request.amount is None or request.amount <= 0:
        raise ValidationError("Amount must be greater than 0")
    if not request.payment_method:
        raise ValidationError("PaymentMethod is required")
    if not request.items:
        raise ValidationError("Items are required")
    if not _storable(request.amount):
        raise ValidationError("Amount has too many digits")
    if any(not _storable(it.unit_price) for it in request.items):
        raise ValidationError("UnitPrice has too many digits")
