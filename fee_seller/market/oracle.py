"""Time-weighted average price oracle model.

Reproduces the observable behaviour of IndexedUniswapV2Oracle for
token/WETH pairs: hourly observations of the pair's cumulative price, and
averages computed between a stored observation and the current
(counterfactual) cumulative price.
"""

from dataclasses import dataclass, field
from typing import Optional

from fee_seller.core.clock import Clock
from fee_seller.core.pair import EthPair, UINT256_MOD
from fee_seller.core.units import duration
from fee_seller.market.ledger import SellerRevert

OBSERVATION_PERIOD = duration.hours(1)
MINIMUM_OBSERVATION_DELAY = duration.minutes(30)

NO_PRICE_IN_RANGE = "IndexedUniswapV2Oracle::_getTokenPrice: No price found in provided range."


class OracleError(SellerRevert):
    """No usable observation for the requested window."""


@dataclass(frozen=True)
class PriceObservation:
    timestamp: int
    price_cumulative: int  # ETH per token, UQ112x112 * seconds


@dataclass
class TwapOracle:
    """TWAP oracle over the Uniswap pair of each registered token."""
    clock: Clock
    _pairs: dict[str, EthPair] = field(default_factory=dict, init=False)
    _observations: dict[str, dict[int, PriceObservation]] = field(default_factory=dict, init=False)

    def register_pair(self, token: str, pair: EthPair) -> None:
        self._pairs[token.lower()] = pair
        self._observations.setdefault(token.lower(), {})

    def _pair(self, token: str) -> EthPair:
        try:
            return self._pairs[token.lower()]
        except KeyError:
            raise OracleError(f"No pair registered for token {token}") from None

    def latest_observation(self, token: str) -> Optional[PriceObservation]:
        observations = self._observations.get(token.lower())
        if not observations:
            return None
        return max(observations.values(), key=lambda obs: obs.timestamp)

    def update_price(self, token: str) -> bool:
        """Record an observation for the current hour.

        Returns False without recording when the previous observation is
        younger than MINIMUM_OBSERVATION_DELAY.
        """
        pair = self._pair(token)
        now = self.clock.latest()
        latest = self.latest_observation(token)
        if latest is not None and now - latest.timestamp < MINIMUM_OBSERVATION_DELAY:
            return False

        price_cumulative, _ = pair.current_cumulative_prices()
        self._observations[token.lower()][now // OBSERVATION_PERIOD] = PriceObservation(
            timestamp=now,
            price_cumulative=price_cumulative,
        )
        return True

    def _find_observation(self, token: str, min_elapsed: int, max_elapsed: int) -> PriceObservation:
        now = self.clock.latest()
        candidates = sorted(
            self._observations.get(token.lower(), {}).values(),
            key=lambda obs: obs.timestamp,
            reverse=True,
        )
        for observation in candidates:
            age = now - observation.timestamp
            if min_elapsed <= age <= max_elapsed:
                return observation
        raise OracleError(NO_PRICE_IN_RANGE)

    def compute_average_token_price(self, token: str, min_elapsed: int, max_elapsed: int) -> int:
        """Average ETH per token over the window, as a UQ112x112 integer."""
        observation = self._find_observation(token, min_elapsed, max_elapsed)
        current, _ = self._pair(token).current_cumulative_prices()
        elapsed = self.clock.latest() - observation.timestamp
        if elapsed == 0:
            raise OracleError(NO_PRICE_IN_RANGE)
        return ((current - observation.price_cumulative) % UINT256_MOD) // elapsed

    def compute_average_eth_for_tokens(
        self,
        token: str,
        token_amount: int,
        min_elapsed: int,
        max_elapsed: int,
    ) -> int:
        """Value `token_amount` in ETH at the time-weighted average price."""
        price = self.compute_average_token_price(token, min_elapsed, max_elapsed)
        return (price * token_amount) >> 112
