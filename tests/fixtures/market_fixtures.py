"""Scenario builders shared by the seller and oracle tests.

Each builder returns fresh objects: nothing is shared between tests, so
scenarios can mutate reserves, balances and time freely.

Reference values:
- 10/10 pool, 0.1 in: 98715803439706129 out (0.3% fee)
- Default seller split: 40% treasury, 60% DNDX dividends
"""

from dataclasses import dataclass

from fee_seller.core.units import duration, get_big_number
from fee_seller.market.scenario import Market, TokenPairs, create_token_with_eth_pairs
from fee_seller.market.seller import ExitFeeSellerModel

# Mainnet tokens with well-known pair addresses
USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
DAI = "0x6B175474E89094C44Da98b954EedeAC495271d0F"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"

UNI_USDC_WETH = "0xB4e16d0168e52d35CaCD2c6185b44281Ec28C9Dc"
UNI_DAI_WETH = "0xA478c2975Ab1Ea89e8196811F51A7B7Ade33eB11"
SUSHI_USDC_WETH = "0x397FF1542f962076d0BFE58eA045FfA2d347ACa0"

# A second externally owned account that does not own the seller
OTHER_WALLET = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

TEN_ETH_POOL_OUT_FOR_POINT_ONE = 98715803439706129


@dataclass
class SellerScenario:
    """Market, token pairs and a deployed seller model."""
    market: Market
    pairs: TokenPairs
    seller: ExitFeeSellerModel

    @property
    def token(self) -> str:
        return self.pairs.token

    def events_since(self, start: int):
        return self.market.ledger.events[start:]

    def prime_oracle(self) -> None:
        """Record a price observation and let three hours pass."""
        self.pairs.update_price()
        self.market.clock.advance(duration.hours(3))

    def dump_token(self, amount: int = get_big_number(5)) -> None:
        """Sell a large amount of token into both pairs."""
        self.market.sell_token(self.pairs.uni, token_amount=amount)
        self.market.sell_token(self.pairs.sushi, token_amount=amount)


def create_seller_scenario(with_uni: bool = True, with_sushi: bool = True) -> SellerScenario:
    market = Market()
    pairs = create_token_with_eth_pairs(market, with_uni=with_uni, with_sushi=with_sushi)
    seller = ExitFeeSellerModel(market=market, address=market.deploy("ExitFeeSeller"))
    return SellerScenario(market=market, pairs=pairs, seller=seller)
