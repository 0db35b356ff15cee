"""Core pricing, pair and address components."""

from fee_seller.core.address import (
    SUSHISWAP,
    UNISWAP,
    Exchange,
    derive_pool_address,
    sort_tokens,
)
from fee_seller.core.clock import Clock
from fee_seller.core.pair import EthPair, ReservePair, TradeInfo, TradeSide
from fee_seller.core.quote import quote_input, quote_output
from fee_seller.core.units import duration, get_big_number

__all__ = [
    "SUSHISWAP",
    "UNISWAP",
    "Clock",
    "EthPair",
    "Exchange",
    "ReservePair",
    "TradeInfo",
    "TradeSide",
    "derive_pool_address",
    "duration",
    "get_big_number",
    "quote_input",
    "quote_output",
    "sort_tokens",
]
