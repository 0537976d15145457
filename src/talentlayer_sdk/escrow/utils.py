"""Fee and amount utilities for TalentLayer escrow.

All on-chain amounts are integers in the token's smallest unit; fee rates
are basis points against FEE_RATE_DIVIDER. Arithmetic is integer-only so
results match what the escrow contract computes.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Union

from ..constants import FEE_RATE_DIVIDER
from ..errors import InvalidFeeRateError


def _require_non_negative_int(value: int, field: str) -> None:
    # bool is an int subclass but never a valid amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFeeRateError(f"{field} must be an integer, got {value!r}")
    if value < 0:
        raise InvalidFeeRateError(f"{field} must be non-negative, got {value}")


def calculate_fee(amount: int, fee_rate: int, divider: int = FEE_RATE_DIVIDER) -> int:
    """Calculate one fee component, floored like Solidity integer division.

    Args:
        amount: Base amount in the token's smallest unit
        fee_rate: Fee in basis points (e.g., 500 = 5%)
        divider: Basis point divider (default: 10000)

    Returns:
        Fee amount in the token's smallest unit
    """
    _require_non_negative_int(amount, "amount")
    _require_non_negative_int(fee_rate, "fee_rate")
    _require_non_negative_int(divider, "divider")
    if divider == 0:
        raise InvalidFeeRateError("divider must be positive")
    return (amount * fee_rate) // divider


def calculate_approval_amount(
    rate_amount: int,
    origin_service_fee_rate: int,
    origin_validated_proposal_fee_rate: int,
    protocol_escrow_fee_rate: int,
    divider: int = FEE_RATE_DIVIDER,
) -> int:
    """Calculate the total amount a buyer must approve for an escrow.

    Each fee is computed against the same base ``rate_amount`` and floored
    independently; fees do not compound.

    Args:
        rate_amount: Proposal rate in the token's smallest unit
        origin_service_fee_rate: Fee of the platform the service was posted on
        origin_validated_proposal_fee_rate: Fee of the platform that validated the proposal
        protocol_escrow_fee_rate: Protocol escrow fee
        divider: Basis point divider (default: 10000)

    Returns:
        rate_amount plus the three fee components

    Raises:
        InvalidFeeRateError: If any input is negative or not an integer
    """
    _require_non_negative_int(rate_amount, "rate_amount")
    return (
        rate_amount
        + calculate_fee(rate_amount, origin_service_fee_rate, divider)
        + calculate_fee(rate_amount, origin_validated_proposal_fee_rate, divider)
        + calculate_fee(rate_amount, protocol_escrow_fee_rate, divider)
    )


def fee_rate_from_percentage(value: Union[int, float, str, Decimal]) -> int:
    """Convert a percentage (5 = 5%) to basis points (500).

    Rounds half up, matching how platform owners enter rates in the dapp.

    Raises:
        InvalidFeeRateError: If the percentage is negative, above 100 or not a number
    """
    try:
        percent = Decimal(str(value))
    except InvalidOperation:
        raise InvalidFeeRateError(f"Invalid fee percentage: {value!r}") from None
    if not percent.is_finite() or percent < 0 or percent > 100:
        raise InvalidFeeRateError(f"Fee percentage must be between 0 and 100, got {value}")
    rate = percent * FEE_RATE_DIVIDER / 100
    return int(rate.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def format_bps(bps: int) -> str:
    """Format basis points to percentage string.

    Args:
        bps: Basis points (e.g., 250 = 2.5%)

    Returns:
        Percentage string (e.g., "2.5%")
    """
    return f"{bps / 100}%"


def format_token_amount(amount: int, decimals: int = 18) -> str:
    """Format a token amount to a human readable string.

    Args:
        amount: Amount in the token's smallest unit (e.g., 1500000 with 6 decimals)
        decimals: Token decimals

    Returns:
        Human readable string without trailing zeros (e.g., "1.5")
    """
    value = Decimal(amount).scaleb(-decimals)
    text = f"{value:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def parse_token_amount(amount: Union[int, float, str, Decimal], decimals: int = 18) -> int:
    """Parse a human readable amount to the token's smallest unit.

    Args:
        amount: Human readable amount (e.g., "1.50")
        decimals: Token decimals

    Returns:
        Integer amount (e.g., 1500000 with 6 decimals)

    Raises:
        ValueError: If the amount is not a number, is negative or has more
            fractional digits than the token supports
    """
    try:
        value = Decimal(str(amount))
    except InvalidOperation:
        raise ValueError(f"Invalid amount: {amount!r}") from None
    if not value.is_finite() or value < 0:
        raise ValueError(f"Invalid amount: {amount!r}")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount} has more than {decimals} decimals")
    return int(scaled)
