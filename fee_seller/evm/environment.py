"""Chain environment backed by pyrevm.

Provides what the scenarios need from a chain simulator: funding accounts,
acting as any address, moving block time forward, deploying contracts and
calling them.
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, Optional

from eth_utils import to_canonical_address
from pyrevm import EVM, BlockEnv

from fee_seller.config import ADDRESSES, FORK_SETTINGS, resolve_fork_url
from fee_seller.core.clock import Clock
from fee_seller.evm.compiler import ContractArtifact


def encode_uint256(value: int) -> bytes:
    """Encode a uint256 value as 32 bytes."""
    return value.to_bytes(32, byteorder="big")


def encode_address(address: str) -> bytes:
    """Encode an address as a left-padded 32 byte word."""
    return to_canonical_address(address).rjust(32, b"\x00")


def encode_arguments(args: tuple) -> bytes:
    """ABI-encode static arguments: ints as uint256, hex strings as addresses."""
    encoded = b""
    for arg in args:
        if isinstance(arg, bool):
            encoded += encode_uint256(1 if arg else 0)
        elif isinstance(arg, int):
            encoded += encode_uint256(arg)
        elif isinstance(arg, str):
            encoded += encode_address(arg)
        else:
            raise TypeError(f"Unsupported constructor argument type: {type(arg).__name__}")
    return encoded


def decode_uint256(data: bytes, offset: int = 0) -> int:
    """Decode a uint256 from bytes."""
    return int.from_bytes(data[offset : offset + 32], byteorder="big")


@dataclass
class Signer:
    """Sends deployments and calls from a fixed address."""

    chain: "ChainEnvironment"
    address: str

    def call(self, to: str, calldata: bytes = b"", value: int = 0) -> bytes:
        return self.chain.call(to, calldata, caller=self.address, value=value)

    def deploy(self, bytecode: bytes, value: int = 0) -> str:
        return self.chain.deploy(bytecode, deployer=self.address, value=value)


class ChainEnvironment:
    """pyrevm EVM wrapper used as the scenarios' chain collaborator.

    Every address can act as a sender, so impersonation only changes the
    caller used for subsequent calls. Block time is tracked by a Clock and
    pushed into the EVM's block environment whenever it moves.
    """

    GAS_LIMIT_DEPLOY = 10_000_000
    GAS_LIMIT_CALL = 1_000_000

    # Default ether top-up (100 ETH)
    DEFAULT_ETHER = 10**20

    def __init__(
        self,
        fork_url: Optional[str] = None,
        fork_block: Optional[int] = None,
        clock: Optional[Clock] = None,
        block_number: int = 1,
        wallet: str = ADDRESSES.wallet,
    ):
        """Create a fresh EVM, forked from `fork_url` when given.

        Args:
            fork_url: JSON-RPC endpoint to fork state from (optional)
            fork_block: Block number to fork at (latest when omitted)
            clock: Clock for block timestamps (a new one when omitted)
            block_number: Starting block number
            wallet: Default sender for deployments and calls
        """
        if fork_url is not None:
            self.evm = EVM(
                fork_url=fork_url,
                fork_block=hex(fork_block) if fork_block is not None else None,
            )
        else:
            self.evm = EVM()
        self.clock = clock or Clock()
        self.block_number = block_number
        self.wallet = wallet
        self.artifacts: dict[str, ContractArtifact] = {}
        self._sync_block_env()

    @classmethod
    def from_config(cls, clock: Optional[Clock] = None) -> "ChainEnvironment":
        """Fork mainnet at FORK_SETTINGS.block_number when an RPC is configured.

        Falls back to a fresh in-memory chain when neither FORK_URL nor
        ALCHEMY_API_KEY is set.
        """
        fork_url = resolve_fork_url()
        if fork_url is None:
            return cls(clock=clock)
        return cls(
            fork_url=fork_url,
            fork_block=FORK_SETTINGS.block_number,
            clock=clock,
            block_number=FORK_SETTINGS.block_number + 1,
        )

    def _sync_block_env(self) -> None:
        self.evm.set_block_env(BlockEnv(number=self.block_number, timestamp=self.clock.latest()))

    # Time

    def latest(self) -> int:
        """Timestamp of the current block."""
        return self.clock.latest()

    def advance_time_and_block(self, seconds: int) -> int:
        """Move time forward by `seconds` and mine one block."""
        self.clock.advance(seconds)
        self.block_number += 1
        self._sync_block_env()
        return self.clock.latest()

    # Accounts

    def get_balance(self, address: str) -> int:
        return self.evm.get_balance(address)

    def set_balance(self, address: str, balance: int) -> None:
        self.evm.set_balance(address, balance)

    def send_ether_to(self, address: str, amount: int = DEFAULT_ETHER) -> None:
        """Credit `address` with `amount` wei on top of its balance."""
        self.set_balance(address, self.get_balance(address) + amount)

    @contextmanager
    def impersonate(self, address: str) -> Iterator[Signer]:
        """Send calls and deployments as `address` inside the with-block."""
        yield Signer(chain=self, address=address)

    # Contracts

    def register_artifacts(self, artifacts: dict[str, ContractArtifact]) -> None:
        self.artifacts.update(artifacts)

    def deploy(self, bytecode: bytes, deployer: Optional[str] = None, value: int = 0) -> str:
        """Deploy creation bytecode and return the new contract address."""
        deployer = deployer or self.wallet
        try:
            return self.evm.deploy(
                deployer=deployer,
                code=bytecode,
                value=value,
                gas=self.GAS_LIMIT_DEPLOY,
            )
        except Exception as e:
            raise RuntimeError(f"Deployment from {deployer} failed: {e}") from e

    def deploy_contract(self, name: str, *args, deployer: Optional[str] = None) -> str:
        """Deploy a registered artifact by contract name with static constructor args."""
        if name not in self.artifacts:
            raise KeyError(f"No artifact registered for contract '{name}'")
        artifact = self.artifacts[name]
        return self.deploy(artifact.bytecode + encode_arguments(args), deployer=deployer)

    def call(
        self,
        to: str,
        calldata: bytes = b"",
        caller: Optional[str] = None,
        value: int = 0,
    ) -> bytes:
        """Execute a state-changing message call and return its output."""
        caller = caller or self.wallet
        try:
            return self.evm.message_call(
                caller=caller,
                to=to,
                calldata=calldata,
                value=value,
                gas=self.GAS_LIMIT_CALL,
            )
        except Exception as e:
            raise RuntimeError(f"Call to {to} from {caller} failed: {e}") from e
