"""Exit fee seller test harness."""

from fee_seller.core.address import derive_pool_address
from fee_seller.core.pair import EthPair, ReservePair, TradeSide
from fee_seller.core.quote import quote_output

__all__ = [
    "EthPair",
    "ReservePair",
    "TradeSide",
    "derive_pool_address",
    "quote_output",
]
