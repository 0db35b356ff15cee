"""Deterministic (CREATE2) pair address derivation.

A Uniswap V2 style factory deploys each pair with
salt = keccak256(token0 ++ token1), so the pair address is known in
advance from the factory address and the pair's init code hash:

    address = keccak256(0xff ++ factory ++ salt ++ init_code_hash)[12:]
"""

from dataclasses import dataclass
from typing import Union

from eth_typing import ChecksumAddress
from eth_utils import decode_hex, keccak, remove_0x_prefix, to_canonical_address, to_checksum_address

Hash32 = Union[str, bytes]

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
WETH_ADDRESS = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"


def _address_bytes(address: str) -> bytes:
    """Raw address bytes, left-padded to 20 bytes."""
    return decode_hex(remove_0x_prefix(address).rjust(40, "0"))


def _hash_bytes(value: Hash32) -> bytes:
    if isinstance(value, bytes):
        return value
    return decode_hex(value)


def sort_tokens(token_a: str, token_b: str) -> tuple[str, str]:
    """Order two token addresses the way the factory does (token0 < token1)."""
    if token_a.lower() < token_b.lower():
        return token_a, token_b
    return token_b, token_a


def pair_salt(token_a: str, token_b: str) -> bytes:
    """CREATE2 salt for a pair: keccak256 of the sorted, packed addresses."""
    token0, token1 = sort_tokens(token_a, token_b)
    return keccak(_address_bytes(token0) + _address_bytes(token1))


def create2_address(deployer: str, salt: Hash32, init_code_hash: Hash32) -> ChecksumAddress:
    """Address of a contract deployed by `deployer` through CREATE2."""
    digest = keccak(
        b"\xff"
        + to_canonical_address(deployer)
        + _hash_bytes(salt)
        + _hash_bytes(init_code_hash)
    )
    return to_checksum_address(digest[12:])


def derive_pool_address(
    token_a: str,
    token_b: str,
    factory: str,
    init_code_hash: Hash32,
) -> ChecksumAddress:
    """Compute the pair address for a token pair without touching the chain.

    The result does not depend on argument order of the two tokens.
    """
    return create2_address(factory, pair_salt(token_a, token_b), init_code_hash)


@dataclass(frozen=True)
class Exchange:
    """A Uniswap V2 style exchange deployment."""
    name: str
    factory: str
    router: str
    init_code_hash: str

    def pair_address(self, token_a: str, token_b: str) -> ChecksumAddress:
        return derive_pool_address(token_a, token_b, self.factory, self.init_code_hash)


UNISWAP = Exchange(
    name="uniswap",
    factory="0x5C69bEe701ef814a2B6a3EDD4B1652CB9cc5aA6f",
    router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",
    init_code_hash="0x96e8ac4277198ff8b6f785478aa9a39f403cb768dd02cbee326c3e7da348845f",
)

SUSHISWAP = Exchange(
    name="sushiswap",
    factory="0xC0AEe478e3658e2610c5F7A4A2E1777cE9e4f2Ac",
    router="0xd9e1cE17f2641f24aE83637ab66a2cca9C378B9F",
    init_code_hash="0xe18a34eb0e04b04f7a0ac29a6e80748dca96319b42c54d679cb821dca90c6303",
)

EXCHANGES = {exchange.name: exchange for exchange in (UNISWAP, SUSHISWAP)}


def compute_uni_pair_address(token_a: str, token_b: str) -> ChecksumAddress:
    return UNISWAP.pair_address(token_a, token_b)


def compute_sushi_pair_address(token_a: str, token_b: str) -> ChecksumAddress:
    return SUSHISWAP.pair_address(token_a, token_b)
