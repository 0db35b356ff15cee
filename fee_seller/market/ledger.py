"""ERC-20 and ether balance bookkeeping with an event journal."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any

from fee_seller.core.address import ZERO_ADDRESS

MAX_UINT256 = 2**256 - 1


class SellerRevert(RuntimeError):
    """A simulated contract call reverted.

    The message is the revert string the real contract would return.
    """

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class LedgerError(SellerRevert):
    """Transfer exceeding the sender's balance."""


@dataclass(frozen=True)
class Event:
    """An emitted log: `emitter` is the contract address that logged it."""
    name: str
    emitter: str
    args: tuple[Any, ...]


@dataclass
class TokenLedger:
    """Balances of every token and of native ether, keyed by lowercase address.

    Every balance change that would emit a log on chain appends an Event,
    so scenarios can assert on the logs the deployed contracts would emit.
    """
    weth: str
    _balances: dict = field(default_factory=lambda: defaultdict(lambda: defaultdict(int)), init=False)
    _allowances: dict = field(default_factory=lambda: defaultdict(lambda: defaultdict(int)), init=False)
    _ether: dict = field(default_factory=lambda: defaultdict(int), init=False)
    events: list[Event] = field(default_factory=list, init=False)

    def balance_of(self, token: str, account: str) -> int:
        return self._balances[token.lower()][account.lower()]

    def allowance(self, token: str, owner: str, spender: str) -> int:
        return self._allowances[token.lower()][(owner.lower(), spender.lower())]

    def eth_balance(self, account: str) -> int:
        return self._ether[account.lower()]

    def emit(self, name: str, emitter: str, *args: Any) -> Event:
        event = Event(name=name, emitter=emitter, args=args)
        self.events.append(event)
        return event

    def events_named(self, name: str) -> list[Event]:
        return [event for event in self.events if event.name == name]

    def mint(self, token: str, to: str, amount: int) -> None:
        _check_amount("mint", amount)
        self._balances[token.lower()][to.lower()] += amount
        self.emit("Transfer", token, ZERO_ADDRESS, to, amount)

    def approve(self, token: str, owner: str, spender: str, amount: int) -> None:
        _check_amount("approve", amount)
        self._allowances[token.lower()][(owner.lower(), spender.lower())] = amount
        self.emit("Approval", token, owner, spender, amount)

    def transfer(self, token: str, sender: str, recipient: str, amount: int) -> None:
        _check_amount("transfer", amount)
        balances = self._balances[token.lower()]
        if balances[sender.lower()] < amount:
            raise LedgerError("ERC20: transfer amount exceeds balance")
        balances[sender.lower()] -= amount
        balances[recipient.lower()] += amount
        self.emit("Transfer", token, sender, recipient, amount)

    def transfer_from(self, token: str, spender: str, sender: str, recipient: str, amount: int) -> None:
        """Move `amount` from `sender` on behalf of `spender`, spending its allowance.

        The balance is checked before the allowance, as OpenZeppelin's
        transferFrom does. An allowance of MAX_UINT256 is never decreased.
        """
        _check_amount("transfer", amount)
        if self.balance_of(token, sender) < amount:
            raise LedgerError("ERC20: transfer amount exceeds balance")
        allowed = self.allowance(token, sender, spender)
        if allowed < amount:
            raise LedgerError("ERC20: transfer amount exceeds allowance")
        self.transfer(token, sender, recipient, amount)
        if allowed != MAX_UINT256:
            self.approve(token, sender, spender, allowed - amount)

    def send_ether(self, recipient: str, amount: int, sender: str | None = None) -> None:
        """Move native ether. Without a sender the ether is created (faucet)."""
        _check_amount("send", amount)
        if sender is not None:
            if self._ether[sender.lower()] < amount:
                raise LedgerError("Address: insufficient balance")
            self._ether[sender.lower()] -= amount
        self._ether[recipient.lower()] += amount

    def deposit(self, account: str, amount: int) -> None:
        """Wrap `amount` of the account's ether into WETH."""
        _check_amount("deposit", amount)
        if self._ether[account.lower()] < amount:
            raise LedgerError("Address: insufficient balance")
        self._ether[account.lower()] -= amount
        self._balances[self.weth.lower()][account.lower()] += amount
        self.emit("Deposit", self.weth, account, amount)

    def withdraw(self, account: str, amount: int) -> None:
        """Unwrap `amount` of the account's WETH back into ether."""
        _check_amount("withdraw", amount)
        balances = self._balances[self.weth.lower()]
        if balances[account.lower()] < amount:
            raise LedgerError("WETH: insufficient balance")
        balances[account.lower()] -= amount
        self._ether[account.lower()] += amount
        self.emit("Withdrawal", self.weth, account, amount)

    def mint_weth(self, to: str, amount: int) -> None:
        """Fund `to` with freshly wrapped WETH."""
        self.send_ether(to, amount)
        self.deposit(to, amount)


def _check_amount(action: str, amount: int) -> None:
    if amount < 0:
        raise ValueError(f"Cannot {action} a negative amount: {amount}")
