"""Tests for fee and amount utilities."""

import itertools
from decimal import Decimal

import pytest

from talentlayer_sdk.constants import FEE_RATE_DIVIDER
from talentlayer_sdk.errors import InvalidFeeRateError
from talentlayer_sdk.escrow import (
    calculate_approval_amount,
    calculate_fee,
    fee_rate_from_percentage,
    format_bps,
    format_token_amount,
    parse_token_amount,
)


class TestCalculateApprovalAmount:
    """Tests for the approval amount calculation."""

    def test_reference_example(self):
        """5% service, 2% proposal and 3% protocol fee on 1 USDC."""
        amount = calculate_approval_amount(
            rate_amount=1_000_000,
            origin_service_fee_rate=500,
            origin_validated_proposal_fee_rate=200,
            protocol_escrow_fee_rate=300,
            divider=10000,
        )
        assert amount == 1_000_000 + 50_000 + 20_000 + 30_000 == 1_100_000

    def test_default_divider(self):
        """Test the default divider is the basis point divider."""
        assert FEE_RATE_DIVIDER == 10000
        assert calculate_approval_amount(1_000_000, 500, 200, 300) == 1_100_000

    def test_zero_fees_returns_rate_amount(self):
        """Test zero fee rates leave the rate amount unchanged."""
        assert calculate_approval_amount(123_456_789, 0, 0, 0) == 123_456_789

    def test_zero_rate_amount(self):
        """Test a zero rate amount needs no approval."""
        assert calculate_approval_amount(0, 500, 200, 300) == 0

    def test_each_component_floored_independently(self):
        """999 * 1 / 10000 floors to 0 for every component, not 0.2997 summed."""
        assert calculate_approval_amount(999, 1, 1, 1) == 999

        # 3333 * 3 / 10000 = 0.9999 per component
        assert calculate_approval_amount(3333, 3, 3, 3) == 3333

        # 10001 * 1 / 10000 = 1.0001 -> 1 per component
        assert calculate_approval_amount(10001, 1, 1, 1) == 10004

    def test_fees_do_not_compound(self):
        """Fees are computed on the base amount, not on the running total."""
        # Compounding 10% three times would give 1331, additive gives 1300
        assert calculate_approval_amount(1000, 1000, 1000, 1000) == 1300

    def test_matches_formula(self):
        """Test the result matches the per-component floored formula."""
        rate_amount = 7_777_777_777
        rates = (123, 4567, 89)
        expected = rate_amount + sum(rate_amount * r // 10000 for r in rates)
        assert calculate_approval_amount(rate_amount, *rates) == expected

    def test_large_on_chain_amounts_keep_precision(self):
        """18-decimal amounts must not lose precision (no float arithmetic)."""
        rate_amount = 123_456_789_123_456_789_123  # ~123k tokens in wei
        amount = calculate_approval_amount(rate_amount, 250, 250, 100)
        assert amount == rate_amount + 2 * (rate_amount * 250 // 10000) + rate_amount * 100 // 10000
        assert isinstance(amount, int)

    def test_monotonic_in_each_rate(self):
        """Test raising any one rate never lowers the amount."""
        rate_amount = 1_234_567
        steps = [0, 1, 99, 500, 2500, 10000]
        for r1, r2, r3 in itertools.product(steps, repeat=3):
            base = calculate_approval_amount(rate_amount, r1, r2, r3)
            if r1 < 10000:
                assert calculate_approval_amount(rate_amount, r1 + 1, r2, r3) >= base
            if r2 < 10000:
                assert calculate_approval_amount(rate_amount, r1, r2 + 1, r3) >= base
            if r3 < 10000:
                assert calculate_approval_amount(rate_amount, r1, r2, r3 + 1) >= base

    @pytest.mark.parametrize(
        "args",
        [
            (-1, 0, 0, 0),
            (1000, -1, 0, 0),
            (1000, 0, -1, 0),
            (1000, 0, 0, -1),
        ],
    )
    def test_negative_inputs_rejected(self, args):
        """Test negative amounts and rates are rejected."""
        with pytest.raises(InvalidFeeRateError, match="non-negative"):
            calculate_approval_amount(*args)

    @pytest.mark.parametrize(
        "args",
        [
            (1000.0, 0, 0, 0),
            (1000, 1.5, 0, 0),
            (1000, 0, "200", 0),
            (1000, 0, 0, True),
        ],
    )
    def test_non_integer_inputs_rejected(self, args):
        """Test float, string and bool inputs are rejected."""
        with pytest.raises(InvalidFeeRateError, match="integer"):
            calculate_approval_amount(*args)

    def test_zero_divider_rejected(self):
        """Test a zero divider is rejected."""
        with pytest.raises(InvalidFeeRateError, match="divider"):
            calculate_approval_amount(1000, 1, 1, 1, divider=0)

    def test_invalid_fee_rate_is_value_error(self):
        """Callers catching ValueError also see invalid fee rates."""
        with pytest.raises(ValueError):
            calculate_approval_amount(1000, -5, 0, 0)


class TestCalculateFee:
    """Tests for single fee components."""

    def test_calculate_fee(self):
        """Test single fee components floor like Solidity."""
        # 2.5% of 100 USDC
        assert calculate_fee(100_000_000, 250) == 2_500_000

        # 0.01% of 1 USDC
        assert calculate_fee(1_000_000, 1) == 100

        # Floors instead of rounding
        assert calculate_fee(19_999, 1) == 1

    def test_custom_divider(self):
        """Test a custom divider."""
        assert calculate_fee(1000, 5, divider=100) == 50


class TestFeeRateFromPercentage:
    """Tests for converting percentages to basis points."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (5, 500),
            (0, 0),
            (100, 10000),
            (2.5, 250),
            ("0.25", 25),
            (Decimal("12.34"), 1234),
            # half rounds up like the dapp input
            ("0.005", 1),
            ("0.004", 0),
        ],
    )
    def test_conversion(self, value, expected):
        """Test percentage to basis point conversion."""
        assert fee_rate_from_percentage(value) == expected

    @pytest.mark.parametrize("value", [-1, 100.01, "abc", "NaN"])
    def test_invalid_percentages(self, value):
        """Test out-of-range and non-numeric percentages."""
        with pytest.raises(InvalidFeeRateError):
            fee_rate_from_percentage(value)


class TestTokenFormatting:
    """Tests for token amount formatting helpers."""

    def test_format_bps(self):
        """Test basis point formatting."""
        assert format_bps(500) == "5.0%"
        assert format_bps(25) == "0.25%"

    def test_format_token_amount(self):
        """Test token amount formatting drops trailing zeros."""
        assert format_token_amount(1_000_000, 6) == "1"
        assert format_token_amount(1_500_000, 6) == "1.5"
        assert format_token_amount(1_234_567, 6) == "1.234567"
        assert format_token_amount(100, 6) == "0.0001"
        assert format_token_amount(0, 6) == "0"
        assert format_token_amount(10**18) == "1"

    def test_parse_token_amount(self):
        """Test parsing human readable amounts."""
        assert parse_token_amount("1", 6) == 1_000_000
        assert parse_token_amount(1.5, 6) == 1_500_000
        assert parse_token_amount("0.01", 6) == 10_000
        assert parse_token_amount(100, 6) == 100_000_000
        assert parse_token_amount("0.1") == 10**17

    def test_parse_token_amount_rejects_excess_precision(self):
        """Test amounts finer than the token decimals are rejected."""
        with pytest.raises(ValueError, match="decimals"):
            parse_token_amount("0.0000001", 6)

    @pytest.mark.parametrize("value", ["-1", "abc", "Infinity"])
    def test_parse_token_amount_rejects_invalid(self, value):
        """Test negative and non-numeric amounts are rejected."""
        with pytest.raises(ValueError):
            parse_token_amount(value, 6)
