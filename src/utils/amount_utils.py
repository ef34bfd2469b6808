from decimal import Decimal, InvalidOperation, localcontext

from web3 import Web3

from core.exceptions import InvalidAmount

# Enough digits for the product of two uint256 values
_PRECISION = 200


def _to_decimal(name: str, amount) -> Decimal:
    if isinstance(amount, bool) or not isinstance(amount, (str, int, Decimal)):
        raise InvalidAmount(f"{name} must be a decimal string, got {amount!r}")
    try:
        value = Decimal(str(amount).strip())
    except InvalidOperation:
        raise InvalidAmount(f"{name} is not a decimal: {amount!r}")

    if not value.is_finite() or value < 0:
        raise InvalidAmount(f"{name} must be a non-negative decimal: {amount!r}")
    return value


def _format(value: Decimal) -> str:
    return format(value, "f")


def calculate_total_debit(value, gas_limit, gas_price) -> str:
    """Return `value + gas_limit * gas_price` as an exact decimal string.

    Senders sometimes overpay the network fee from the same wallet that funds
    the deposit, so the credited amount is the full debit and not just the
    transferred value.
    """
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        total = _to_decimal("value", value) + _to_decimal(
            "gas_limit", gas_limit
        ) * _to_decimal("gas_price", gas_price)
        return _format(total)


def to_major_unit(amount_wei) -> str:
    wei = _to_decimal("amount", amount_wei)
    if wei != wei.to_integral_value():
        raise InvalidAmount(f"amount must be a whole number of wei: {amount_wei!r}")

    ether = Decimal(Web3.from_wei(int(wei), "ether"))
    with localcontext() as ctx:
        ctx.prec = _PRECISION
        return _format(ether.normalize())
