"""Test fixtures for seller scenarios."""

from tests.fixtures.market_fixtures import (
    DAI,
    OTHER_WALLET,
    SUSHI_USDC_WETH,
    TEN_ETH_POOL_OUT_FOR_POINT_ONE,
    UNI_DAI_WETH,
    UNI_USDC_WETH,
    USDC,
    WETH,
    SellerScenario,
    create_seller_scenario,
)

__all__ = [
    "DAI",
    "OTHER_WALLET",
    "SUSHI_USDC_WETH",
    "TEN_ETH_POOL_OUT_FOR_POINT_ONE",
    "UNI_DAI_WETH",
    "UNI_USDC_WETH",
    "USDC",
    "WETH",
    "SellerScenario",
    "create_seller_scenario",
]
