"""Best execution across candidate pairs."""

from dataclasses import dataclass
from typing import Optional, Sequence

from fee_seller.core.pair import EthPair


@dataclass(frozen=True)
class BestPair:
    """Pair offering the most ETH for a token amount."""
    pair: Optional[EthPair]
    amount_out: int


def quote_eth_out(pair: EthPair, token_amount: int) -> int:
    """ETH out for selling `token_amount`, or 0 for a pair without liquidity."""
    if not pair.has_liquidity:
        return 0
    return pair.get_eth_out(token_amount)


def get_best_pair(pairs: Sequence[EthPair], token_amount: int) -> BestPair:
    """Pick the pair with the highest ETH output.

    Earlier pairs win ties, so ordering candidates as (uniswap, sushiswap)
    prefers Uniswap when both quote the same.
    """
    best = BestPair(pair=None, amount_out=0)
    for pair in pairs:
        amount_out = quote_eth_out(pair, token_amount)
        if best.pair is None or amount_out > best.amount_out:
            best = BestPair(pair=pair, amount_out=amount_out)
    return best
