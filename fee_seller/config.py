"""Shared settings for scenarios and the forked chain."""

from dataclasses import dataclass
import os
from typing import Optional

from fee_seller.core.units import duration, get_big_number

ALCHEMY_MAINNET_URL = "https://eth-mainnet.alchemyapi.io/v2/{key}"


@dataclass(frozen=True)
class ScenarioSettings:
    liquidity_token: int
    liquidity_eth: int
    price_update_eth: int
    default_trade: int


@dataclass(frozen=True)
class SellerSettings:
    twap_discount_bips: int
    eth_to_treasury_bips: int
    max_twap_discount_bips: int
    twap_min_elapsed: int
    twap_max_elapsed: int


@dataclass(frozen=True)
class ForkSettings:
    block_number: int


@dataclass(frozen=True)
class Addresses:
    treasury: str
    dndx: str
    oracle: str
    wallet: str


SCENARIO_SETTINGS = ScenarioSettings(
    liquidity_token=get_big_number(10),
    liquidity_eth=get_big_number(10),
    price_update_eth=get_big_number(1, 17),
    default_trade=get_big_number(1, 17),
)

SELLER_SETTINGS = SellerSettings(
    twap_discount_bips=500,
    eth_to_treasury_bips=4000,
    max_twap_discount_bips=1000,
    twap_min_elapsed=duration.minutes(30),
    twap_max_elapsed=duration.days(2),
)

FORK_SETTINGS = ForkSettings(
    block_number=13255220,
)

ADDRESSES = Addresses(
    treasury="0x78a3eF33cF033381FEB43ba4212f2Af5A5A0a2EA",
    dndx="0x262cd9ADCE436B6827C01291B84f1871FB8b95A3",
    oracle="0xFa5a44D3Ba93D666Bf29C8804a36e725ecAc659A",
    wallet="0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266",
)


def resolve_fork_url() -> Optional[str]:
    """Resolve the mainnet RPC to fork from.

    FORK_URL wins; otherwise ALCHEMY_API_KEY is expanded into the Alchemy
    mainnet URL. None means run against a fresh in-memory chain.
    """
    url = os.environ.get("FORK_URL")
    if url:
        return url
    key = os.environ.get("ALCHEMY_API_KEY")
    if key:
        return ALCHEMY_MAINNET_URL.format(key=key)
    return None
