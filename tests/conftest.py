"""Pytest configuration and shared fixtures.

This module provides:
- Pytest markers for test categorization
- Fixtures for fresh pairs, markets and seller scenarios
"""

import pytest

from fee_seller.core.clock import Clock
from fee_seller.core.pair import EthPair
from fee_seller.core.units import get_big_number
from fee_seller.market.scenario import Market
from tests.fixtures.market_fixtures import SellerScenario, create_seller_scenario


# ============================================================================
# Pytest Hooks
# ============================================================================


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "scenario: End-to-end seller scenarios")
    config.addinivalue_line("markers", "evm: Tests running against the pyrevm chain")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on location."""
    for item in items:
        if "test_seller" in item.nodeid:
            item.add_marker(pytest.mark.scenario)
        if "test_evm" in item.nodeid:
            item.add_marker(pytest.mark.evm)


# ============================================================================
# Pair and Market Fixtures
# ============================================================================


@pytest.fixture
def clock() -> Clock:
    return Clock()


@pytest.fixture
def empty_pair() -> EthPair:
    """Pair without liquidity or clock."""
    return EthPair()


@pytest.fixture
def ten_ten_pair() -> EthPair:
    """Pair seeded with 10 token / 10 ETH, no clock."""
    pair = EthPair()
    pair.add_liquidity(get_big_number(10), get_big_number(10))
    return pair


@pytest.fixture
def market() -> Market:
    return Market()


@pytest.fixture
def scenario() -> SellerScenario:
    """Token with liquid Uniswap and SushiSwap pairs plus a seller."""
    return create_seller_scenario()
