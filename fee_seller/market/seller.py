"""Expectation model of the ExitFeeSeller contract.

Predicts every value and revert the deployed contract produces, so a
scenario can compare the chain against it call by call.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from fee_seller.config import ADDRESSES, SELLER_SETTINGS
from fee_seller.core.address import ZERO_ADDRESS
from fee_seller.market.ledger import SellerRevert
from fee_seller.market.router import BestPair, get_best_pair
from fee_seller.market.scenario import Market

BIPS = 10_000


@dataclass(frozen=True)
class Distribution:
    """Outcome of distribute_eth()."""
    wrapped: int
    to_treasury: int
    to_dividends: int


@dataclass(frozen=True)
class Sale:
    """Outcome of a token sale."""
    token: str
    pair: str
    amount_in: int
    amount_out: int
    minimum_out: int


@dataclass
class ExitFeeSellerModel:
    """Owner-controlled seller of exit-fee tokens.

    Sells through the better of the Uniswap and SushiSwap pairs, refuses to
    sell below the discounted TWAP, and splits WETH proceeds between the
    treasury and DNDX dividends.
    """
    market: Market
    address: str
    owner: Optional[str] = None
    treasury: str = ADDRESSES.treasury
    dndx: str = ADDRESSES.dndx
    twap_discount_bips: int = SELLER_SETTINGS.twap_discount_bips
    eth_to_treasury_bips: int = SELLER_SETTINGS.eth_to_treasury_bips
    sales: list[Sale] = field(default_factory=list, init=False)

    def __post_init__(self) -> None:
        if self.owner is None:
            self.owner = self.market.wallet

    def _only_owner(self, caller: str) -> None:
        if caller.lower() != self.owner.lower():
            raise SellerRevert("Ownable: caller is not the owner")

    # ------------------------------------------------------------------
    # Owner controls
    # ------------------------------------------------------------------

    def set_twap_discount_bips(self, caller: str, bips: int) -> None:
        self._only_owner(caller)
        if bips > SELLER_SETTINGS.max_twap_discount_bips:
            raise SellerRevert("Can not set discount >= 10%")
        self.twap_discount_bips = bips

    def set_eth_to_treasury_bips(self, caller: str, bips: int) -> None:
        self._only_owner(caller)
        if bips > BIPS:
            raise SellerRevert("Can not set bips over 100%")
        self.eth_to_treasury_bips = bips

    def take_tokens_from_owner(self, tokens: Iterable[str]) -> None:
        """Pull the owner's whole balance of each token into the seller.

        Spends the allowance the owner granted the seller; reverts like
        transferFrom when it does not cover the balance.
        """
        ledger = self.market.ledger
        for token in tokens:
            balance = ledger.balance_of(token, self.owner)
            if balance > 0:
                ledger.transfer_from(token, self.address, self.owner, self.address, balance)

    def return_tokens(self, caller: str, tokens: Iterable[str]) -> None:
        """Send the seller's balances back to the owner; the zero address means ether."""
        self._only_owner(caller)
        ledger = self.market.ledger
        for token in tokens:
            if token.lower() == ZERO_ADDRESS:
                balance = ledger.eth_balance(self.address)
                if balance > 0:
                    ledger.send_ether(self.owner, balance, sender=self.address)
            else:
                balance = ledger.balance_of(token, self.address)
                if balance > 0:
                    ledger.transfer(token, self.address, self.owner, balance)

    # ------------------------------------------------------------------
    # Pricing
    # ------------------------------------------------------------------

    def get_minimum_amount_out(self, token: str, amount_in: int) -> int:
        """TWAP value of `amount_in` less the configured discount."""
        average = self.market.oracle.compute_average_eth_for_tokens(
            token,
            amount_in,
            SELLER_SETTINGS.twap_min_elapsed,
            SELLER_SETTINGS.twap_max_elapsed,
        )
        return average - average * self.twap_discount_bips // BIPS

    def get_best_pair(self, token: str, amount_in: int) -> BestPair:
        return get_best_pair(self.market.pairs_for(token), amount_in)

    # ------------------------------------------------------------------
    # Selling
    # ------------------------------------------------------------------

    def sell_token_for_eth(self, token: str) -> Sale:
        """Sell the seller's entire balance of `token`."""
        self._check_sellable(token)
        amount = self.market.ledger.balance_of(token, self.address)
        return self._sell(token, amount)

    def sell_token_amount_for_eth(self, token: str, amount: int) -> Sale:
        """Sell exactly `amount` of `token`."""
        self._check_sellable(token)
        return self._sell(token, amount)

    def _check_sellable(self, token: str) -> None:
        if token.lower() == self.market.weth.lower():
            raise SellerRevert("Can not sell WETH")

    def _sell(self, token: str, amount: int) -> Sale:
        minimum_out = self.get_minimum_amount_out(token, amount)
        best = self.get_best_pair(token, amount)
        if best.pair is None or best.amount_out < minimum_out:
            raise SellerRevert("Insufficient output")

        ledger = self.market.ledger
        pair = best.pair
        ledger.transfer(token, self.address, pair.address, amount)
        amount_out = pair.sell_token(amount)
        ledger.transfer(self.market.weth, pair.address, self.address, amount_out)

        sale = Sale(
            token=token,
            pair=pair.address,
            amount_in=amount,
            amount_out=amount_out,
            minimum_out=minimum_out,
        )
        self.sales.append(sale)
        return sale

    # ------------------------------------------------------------------
    # Distribution
    # ------------------------------------------------------------------

    def distribute_eth(self) -> Distribution:
        """Wrap held ether, then pay the treasury share and distribute the rest."""
        ledger = self.market.ledger
        weth = self.market.weth

        wrapped = ledger.eth_balance(self.address)
        if wrapped > 0:
            ledger.deposit(self.address, wrapped)

        balance = ledger.balance_of(weth, self.address)
        to_treasury = balance * self.eth_to_treasury_bips // BIPS
        to_dividends = balance - to_treasury
        if to_treasury > 0:
            ledger.transfer(weth, self.address, self.treasury, to_treasury)
        if to_dividends > 0:
            ledger.transfer(weth, self.address, self.dndx, to_dividends)
            ledger.emit("DividendsDistributed", self.dndx, self.address, to_dividends)

        return Distribution(wrapped=wrapped, to_treasury=to_treasury, to_dividends=to_dividends)
