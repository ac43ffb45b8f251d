"""Tests for amount coercion and equal-split arithmetic."""

from decimal import Decimal

import pytest

from splait import coerce, split_equally, to_wei


class TestCoerce:
    """Tests for coerce without a precision."""

    def test_string_passthrough(self) -> None:
        """Decimal strings are kept verbatim."""
        assert coerce("2.5") == "2.5"
        assert coerce("0.000100") == "0.000100"
        assert coerce("3.333333333333333333333") == "3.333333333333333333333"

    def test_string_is_stripped(self) -> None:
        """Surrounding whitespace is dropped."""
        assert coerce(" 7 ") == "7"

    def test_integers(self) -> None:
        """Integers render without a fractional part."""
        assert coerce(10) == "10"
        assert coerce(0) == "0"

    def test_floats(self) -> None:
        """Floats render in plain notation without a trailing .0."""
        assert coerce(5.0) == "5"
        assert coerce(2.5) == "2.5"
        assert coerce(0.1) == "0.1"
        assert coerce(1e-7) == "0.0000001"

    @pytest.mark.parametrize(
        "value",
        [None, True, False, [], {}, "abc", "", "1,5", float("nan"), float("inf"), "Infinity"],
    )
    def test_rejected_values(self, value: object) -> None:
        """Anything that is not a finite number yields "0"."""
        assert coerce(value) == "0"


class TestCoercePrecision:
    """Tests for coerce with a fixed precision."""

    def test_trailing_zeros_kept(self) -> None:
        """Fixed precision keeps trailing zeros."""
        assert coerce(2.5, precision=6) == "2.500000"
        assert coerce("10", precision=6) == "10.000000"

    def test_rounds_half_up(self) -> None:
        """Rounding is half-up at the last kept digit."""
        assert coerce("0.0000005", precision=6) == "0.000001"
        assert coerce("1.2345", precision=3) == "1.235"

    def test_zero_precision(self) -> None:
        """Precision 0 renders an integer."""
        assert coerce("2.5", precision=0) == "3"

    def test_rejected_value_stays_zero(self) -> None:
        """Unparseable input is "0" regardless of precision."""
        assert coerce("abc", precision=6) == "0"

    def test_wide_values(self) -> None:
        """Values wider than the default decimal context keep every digit."""
        assert coerce(1e100, precision=2) == "1" + "0" * 100 + ".00"
        assert coerce("9" * 120 + ".5", precision=0) == "1" + "0" * 120

    def test_out_of_range_exponent(self) -> None:
        """Exponents decimal cannot render become "0"."""
        assert coerce(Decimal("1e999999999"), precision=6) == "0"
        assert coerce(Decimal("1e999999999")) == "0"

    @pytest.mark.parametrize("precision", [-1, 1.5, True])
    def test_invalid_precision(self, precision: object) -> None:
        """Precision must be a non-negative integer."""
        with pytest.raises(ValueError, match="precision"):
            coerce("1", precision=precision)  # type: ignore[arg-type]


class TestSplitEqually:
    """Tests for split_equally."""

    def test_even_split(self) -> None:
        """10 / 2 is exactly 5."""
        assert split_equally("10", 2) == "5"

    def test_repeating_split_truncated_to_wei(self) -> None:
        """Repeating shares are truncated to 18 digits."""
        assert split_equally("10", 3) == "3.333333333333333333"

    def test_shares_never_exceed_total(self) -> None:
        """Truncation keeps the sum at or below the total."""
        share = Decimal(split_equally("2", 3))
        assert share * 3 <= Decimal("2")

    def test_small_amounts(self) -> None:
        """Small totals keep their precision."""
        assert split_equally("0.001", 2) == "0.0005"

    def test_fixed_precision(self) -> None:
        """A precision renders the share with trailing zeros."""
        assert split_equally("10", 2, precision=6) == "5.000000"
        assert split_equally("10", 3, precision=6) == "3.333333"

    def test_wide_total(self) -> None:
        """Totals beyond the default context width are still exact."""
        total = "1" + "0" * 120
        assert split_equally(total, 4) == "25" + "0" * 118
        assert split_equally(total, 3) == "3" * 120 + "." + "3" * 18

    def test_unrenderable_total(self) -> None:
        """Exponents decimal cannot hold are rejected as invalid totals."""
        with pytest.raises(ValueError, match="Invalid total"):
            split_equally(Decimal("1e999999999"), 2)

    def test_invalid_count(self) -> None:
        """There must be at least one recipient."""
        with pytest.raises(ValueError, match="count"):
            split_equally("10", 0)

    def test_invalid_total(self) -> None:
        """The total must be a number."""
        with pytest.raises(ValueError, match="Invalid total"):
            split_equally("ten", 2)


class TestToWei:
    """Tests for to_wei."""

    def test_whole_ether(self) -> None:
        """1 ETH is 10**18 wei."""
        assert to_wei("1") == 10**18

    def test_fractional_ether(self) -> None:
        """Fractions convert exactly."""
        assert to_wei("0.0005") == 500_000_000_000_000
        assert to_wei("3.333333333333333333") == 3_333_333_333_333_333_333

    def test_rejects_garbage(self) -> None:
        """Non-numbers cannot be converted."""
        with pytest.raises(ValueError, match="Invalid amount"):
            to_wei("abc")

    def test_rejects_negative(self) -> None:
        """Negative amounts cannot be sent."""
        with pytest.raises(ValueError, match="negative"):
            to_wei("-1")
