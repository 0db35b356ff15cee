"""Constant product quoting with a fee taken on input.

Mirrors UniswapV2Library.getAmountOut / getAmountIn exactly, including
integer floor division, so predicted values match on-chain results
bit-for-bit.
"""

# Denominator for fee basis points
BPS = 10_000

# Uniswap V2 and SushiSwap both charge 0.3% (997/1000)
DEFAULT_FEE_BPS = 30


def _check_fee(fee_bps: int) -> None:
    if not 0 <= fee_bps < BPS:
        raise ValueError(f"fee_bps must be in [0, {BPS}), got {fee_bps}")


def quote_output(
    reserve_in: int,
    reserve_out: int,
    amount_in: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> int:
    """Compute the output of an exact-in swap against a constant product pool.

    amount_in_with_fee = amount_in * (10000 - fee_bps)
    amount_out = amount_in_with_fee * reserve_out
                 // (reserve_in * 10000 + amount_in_with_fee)

    With fee_bps=30 this is the familiar 997/1000 formula.

    Args:
        reserve_in: Pool reserve of the asset being sold
        reserve_out: Pool reserve of the asset being bought
        amount_in: Exact input amount
        fee_bps: Proportional fee in basis points

    Returns:
        Output amount, strictly below reserve_out when reserve_in and
        amount_in are positive. With reserve_in == 0 and a positive
        amount_in the result degenerates to exactly reserve_out (a full
        drain); callers must treat an empty input reserve as no liquidity.

    Raises:
        ValueError: If any argument is negative or fee_bps is out of range
        ZeroDivisionError: If reserve_in and amount_in are both zero
    """
    if reserve_in < 0 or reserve_out < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve_in}, {reserve_out})")
    if amount_in < 0:
        raise ValueError(f"amount_in must be non-negative: {amount_in}")
    _check_fee(fee_bps)

    amount_in_with_fee = amount_in * (BPS - fee_bps)
    numerator = amount_in_with_fee * reserve_out
    denominator = reserve_in * BPS + amount_in_with_fee
    return numerator // denominator


def quote_input(
    reserve_in: int,
    reserve_out: int,
    amount_out: int,
    fee_bps: int = DEFAULT_FEE_BPS,
) -> int:
    """Compute the input needed for an exact-out swap.

    Rounds up by one unit the way getAmountIn does, so that
    quote_output(reserve_in, reserve_out, result) >= amount_out.
    """
    if reserve_in < 0 or reserve_out < 0:
        raise ValueError(f"Reserves must be non-negative: ({reserve_in}, {reserve_out})")
    if amount_out < 0:
        raise ValueError(f"amount_out must be non-negative: {amount_out}")
    if amount_out >= reserve_out:
        raise ValueError(
            f"Cannot drain full reserve: amount_out ({amount_out}) >= reserve_out ({reserve_out})"
        )
    _check_fee(fee_bps)

    numerator = reserve_in * amount_out * BPS
    denominator = (reserve_out - amount_out) * (BPS - fee_bps)
    return numerator // denominator + 1
