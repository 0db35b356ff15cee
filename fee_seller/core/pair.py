"""Reserve-tracking model of a constant product pair."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from fee_seller.core.clock import Clock
from fee_seller.core.quote import DEFAULT_FEE_BPS, quote_output

# UQ112x112 fixed point resolution used by the on-chain price accumulators
Q112 = 2**112
UINT256_MOD = 2**256


class TradeSide(Enum):
    """Which side of the pair the trader pays in."""
    BASE_IN = "base_in"    # Trader sells base, receives quote
    QUOTE_IN = "quote_in"  # Trader sells quote, receives base


@dataclass(frozen=True)
class TradeInfo:
    """A trade applied to a pair model."""
    side: TradeSide
    amount_in: int
    amount_out: int
    timestamp: Optional[int]
    reserve_base: int   # Post-trade base reserve
    reserve_quote: int  # Post-trade quote reserve


@dataclass(frozen=True)
class ReserveSnapshot:
    reserve_base: int
    reserve_quote: int
    price_base_cumulative: int
    price_quote_cumulative: int
    block_timestamp_last: Optional[int]


@dataclass
class ReservePair:
    """Simulates one pool's reserves across a scenario.

    Tests use it to predict the exact outputs the real pool will return
    before issuing the call on chain. Input reserves grow by the full
    nominal input (the fee stays in the pool), output reserves shrink by
    the quoted output.

    When a clock is attached the pair also maintains Uniswap V2 price
    accumulators, updated before every reserve change, which the TWAP
    oracle model reads.
    """
    base_token: Optional[str] = None
    quote_token: Optional[str] = None
    address: Optional[str] = None
    exchange: Optional[str] = None
    fee_bps: int = DEFAULT_FEE_BPS
    clock: Optional[Clock] = None
    reserve_base: int = 0
    reserve_quote: int = 0
    # Quote per base and base per quote, UQ112x112 * seconds
    price_base_cumulative: int = field(default=0, init=False)
    price_quote_cumulative: int = field(default=0, init=False)
    block_timestamp_last: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.reserve_base < 0 or self.reserve_quote < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve_base}, {self.reserve_quote})"
            )
        if self.clock is not None:
            self.block_timestamp_last = self.clock.latest()

    @property
    def has_liquidity(self) -> bool:
        return self.reserve_base > 0 and self.reserve_quote > 0

    def quote_base_to_quote(self, amount_in: int) -> int:
        """Quote output for selling `amount_in` base. Does not mutate state."""
        return quote_output(self.reserve_base, self.reserve_quote, amount_in, self.fee_bps)

    def quote_quote_to_base(self, amount_in: int) -> int:
        """Quote output for selling `amount_in` quote. Does not mutate state."""
        return quote_output(self.reserve_quote, self.reserve_base, amount_in, self.fee_bps)

    def add_liquidity(self, amount_base: int, amount_quote: int) -> None:
        if amount_base < 0 or amount_quote < 0:
            raise ValueError(f"Liquidity amounts must be non-negative: ({amount_base}, {amount_quote})")
        self._accumulate()
        self.reserve_base += amount_base
        self.reserve_quote += amount_quote

    def trade(self, side: TradeSide, amount_in: int) -> TradeInfo:
        """Apply a swap and return what happened.

        The output is computed from the pre-trade reserves.
        """
        if side is TradeSide.BASE_IN:
            amount_out = self.quote_base_to_quote(amount_in)
            self._accumulate()
            self.reserve_base += amount_in
            self.reserve_quote -= amount_out
        else:
            amount_out = self.quote_quote_to_base(amount_in)
            self._accumulate()
            self.reserve_quote += amount_in
            self.reserve_base -= amount_out

        return TradeInfo(
            side=side,
            amount_in=amount_in,
            amount_out=amount_out,
            timestamp=self.clock.latest() if self.clock is not None else None,
            reserve_base=self.reserve_base,
            reserve_quote=self.reserve_quote,
        )

    def sell_base(self, amount_in: int) -> int:
        return self.trade(TradeSide.BASE_IN, amount_in).amount_out

    def sell_quote(self, amount_in: int) -> int:
        return self.trade(TradeSide.QUOTE_IN, amount_in).amount_out

    def current_cumulative_prices(self) -> tuple[int, int]:
        """Accumulators as they would read now, including time since the last update.

        Same counterfactual as UniswapV2OracleLibrary.currentCumulativePrices.
        """
        if self.clock is None:
            raise RuntimeError("Pair has no clock attached; price accumulators are unavailable")
        base_cumulative = self.price_base_cumulative
        quote_cumulative = self.price_quote_cumulative
        elapsed = self.clock.latest() - self.block_timestamp_last
        if elapsed > 0 and self.has_liquidity:
            base_cumulative += (self.reserve_quote * Q112 // self.reserve_base) * elapsed
            quote_cumulative += (self.reserve_base * Q112 // self.reserve_quote) * elapsed
        return base_cumulative % UINT256_MOD, quote_cumulative % UINT256_MOD

    def _accumulate(self) -> None:
        if self.clock is None:
            return
        self.price_base_cumulative, self.price_quote_cumulative = self.current_cumulative_prices()
        self.block_timestamp_last = self.clock.latest()

    def snapshot(self) -> ReserveSnapshot:
        return ReserveSnapshot(
            reserve_base=self.reserve_base,
            reserve_quote=self.reserve_quote,
            price_base_cumulative=self.price_base_cumulative,
            price_quote_cumulative=self.price_quote_cumulative,
            block_timestamp_last=self.block_timestamp_last,
        )


@dataclass
class EthPair(ReservePair):
    """A token/WETH pair: base is the ERC-20 token, quote is WETH."""

    @property
    def token(self) -> Optional[str]:
        return self.base_token

    @property
    def reserve_token(self) -> int:
        return self.reserve_base

    @property
    def reserve_eth(self) -> int:
        return self.reserve_quote

    def get_eth_out(self, token_amount: int) -> int:
        return self.quote_base_to_quote(token_amount)

    def get_token_out(self, eth_amount: int) -> int:
        return self.quote_quote_to_base(eth_amount)

    def buy_token(self, eth_amount: int) -> int:
        """Swap ETH for token; returns tokens received."""
        return self.sell_quote(eth_amount)

    def sell_token(self, token_amount: int) -> int:
        """Swap token for ETH; returns ETH received."""
        return self.sell_base(token_amount)
