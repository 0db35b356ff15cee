"""Scenario wiring: pairs, liquidity and price updates for one test run.

Everything a scenario needs is held by a `Market` that is created per
scenario and passed explicitly to the helpers and to the seller model.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

from eth_utils import keccak, to_checksum_address

from fee_seller.config import ADDRESSES, SCENARIO_SETTINGS
from fee_seller.core.address import SUSHISWAP, UNISWAP, WETH_ADDRESS, Exchange
from fee_seller.core.clock import Clock
from fee_seller.core.pair import EthPair
from fee_seller.market.ledger import MAX_UINT256, TokenLedger
from fee_seller.market.oracle import TwapOracle


@dataclass
class Market:
    """Handles shared by the models of one scenario."""
    clock: Clock = field(default_factory=Clock)
    weth: str = WETH_ADDRESS
    wallet: str = ADDRESSES.wallet
    exchanges: tuple[Exchange, ...] = (UNISWAP, SUSHISWAP)
    ledger: TokenLedger = field(init=False)
    oracle: TwapOracle = field(init=False)
    _pairs: dict[tuple[str, str], EthPair] = field(default_factory=dict, init=False)
    _nonce: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.ledger = TokenLedger(weth=self.weth)
        self.oracle = TwapOracle(clock=self.clock)

    def deploy(self, name: str = "TestERC20") -> str:
        """Allocate a fresh, deterministic contract address."""
        self._nonce += 1
        return to_checksum_address(keccak(text=f"{self.wallet}:{name}:{self._nonce}")[12:])

    def pair(self, exchange: Exchange, token: str) -> Optional[EthPair]:
        return self._pairs.get((exchange.name, token.lower()))

    def pairs_for(self, token: str) -> list[EthPair]:
        """Registered pairs for a token, in exchange priority order."""
        pairs = [self.pair(exchange, token) for exchange in self.exchanges]
        return [pair for pair in pairs if pair is not None]

    def router_for(self, pair: EthPair) -> str:
        for exchange in self.exchanges:
            if exchange.name == pair.exchange:
                return exchange.router
        raise KeyError(f"No exchange registered for pair {pair.address}")

    def create_pair(self, exchange: Exchange, token: str) -> EthPair:
        """Register an empty token/WETH pair at its CREATE2 address.

        The wallet grants the exchange router unlimited allowances on both
        tokens, so swaps can pull from it.
        """
        pair = EthPair(
            base_token=token,
            quote_token=self.weth,
            address=exchange.pair_address(token, self.weth),
            exchange=exchange.name,
            clock=self.clock,
        )
        self._pairs[(exchange.name, token.lower())] = pair
        if exchange.name == UNISWAP.name:
            self.oracle.register_pair(token, pair)
        self.ledger.approve(self.weth, self.wallet, exchange.router, MAX_UINT256)
        self.ledger.approve(token, self.wallet, exchange.router, MAX_UINT256)
        return pair

    def add_liquidity(
        self,
        pair: EthPair,
        token_amount: int = SCENARIO_SETTINGS.liquidity_token,
        eth_amount: int = SCENARIO_SETTINGS.liquidity_eth,
    ) -> None:
        self.ledger.mint_weth(self.wallet, eth_amount)
        self.ledger.transfer(self.weth, self.wallet, pair.address, eth_amount)
        self.ledger.mint(pair.token, pair.address, token_amount)
        pair.add_liquidity(token_amount, eth_amount)

    def buy_token(
        self,
        pair: EthPair,
        to: Optional[str] = None,
        eth_amount: int = SCENARIO_SETTINGS.default_trade,
    ) -> int:
        """Swap ether for token through the pair's router.

        The router wraps the ether and pays the pair, so the logs are a
        router Deposit and a router to pair WETH Transfer.
        """
        to = to or self.wallet
        router = self.router_for(pair)
        self.ledger.send_ether(self.wallet, eth_amount)
        self.ledger.send_ether(router, eth_amount, sender=self.wallet)
        self.ledger.deposit(router, eth_amount)
        self.ledger.transfer(self.weth, router, pair.address, eth_amount)
        token_out = pair.buy_token(eth_amount)
        self.ledger.transfer(pair.token, pair.address, to, token_out)
        return token_out

    def sell_token(
        self,
        pair: EthPair,
        to: Optional[str] = None,
        token_amount: int = SCENARIO_SETTINGS.default_trade,
    ) -> int:
        """Mint `token_amount` to the wallet and swap it for ether through the pair's router.

        The router pulls the token from the wallet, receives WETH from the
        pair, unwraps it and forwards the ether to `to`.
        """
        to = to or self.wallet
        router = self.router_for(pair)
        self.ledger.mint(pair.token, self.wallet, token_amount)
        self.ledger.transfer_from(pair.token, router, self.wallet, pair.address, token_amount)
        eth_out = pair.sell_token(token_amount)
        self.ledger.transfer(self.weth, pair.address, router, eth_out)
        self.ledger.withdraw(router, eth_out)
        self.ledger.send_ether(to, eth_out, sender=router)
        return eth_out


@dataclass
class TokenPairs:
    token: str
    uni: EthPair
    sushi: EthPair
    update_price: Callable[[], bool]


def create_pairs(
    market: Market,
    token: str,
    with_uni: bool = True,
    with_sushi: bool = True,
) -> tuple[EthPair, EthPair]:
    """Create both pairs for `token`, seeding liquidity on the requested ones."""
    uni = market.create_pair(UNISWAP, token)
    sushi = market.create_pair(SUSHISWAP, token)
    if with_uni:
        market.add_liquidity(uni)
    if with_sushi:
        market.add_liquidity(sushi)
    return uni, sushi


def create_token_with_eth_pairs(
    market: Market,
    with_uni: bool = True,
    with_sushi: bool = True,
) -> TokenPairs:
    """Deploy a token with WETH pairs and a price update helper.

    `update_price` buys a little token on both pools and records an oracle
    observation, returning whether the oracle accepted it.
    """
    token = market.deploy()
    uni, sushi = create_pairs(market, token, with_uni, with_sushi)

    def update_price() -> bool:
        for pair in (uni, sushi):
            if pair.has_liquidity:
                market.buy_token(pair, eth_amount=SCENARIO_SETTINGS.price_update_eth)
        return market.oracle.update_price(token)

    return TokenPairs(token=token, uni=uni, sushi=sushi, update_price=update_price)
