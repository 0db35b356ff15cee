"""Tests for shared settings and fork URL resolution."""

from fee_seller.config import ADDRESSES, SELLER_SETTINGS, resolve_fork_url
from fee_seller.core.units import duration


class TestResolveForkUrl:
    def test_no_environment(self, monkeypatch):
        monkeypatch.delenv("FORK_URL", raising=False)
        monkeypatch.delenv("ALCHEMY_API_KEY", raising=False)
        assert resolve_fork_url() is None

    def test_alchemy_key(self, monkeypatch):
        monkeypatch.delenv("FORK_URL", raising=False)
        monkeypatch.setenv("ALCHEMY_API_KEY", "abc123")
        assert resolve_fork_url() == "https://eth-mainnet.alchemyapi.io/v2/abc123"

    def test_fork_url_wins(self, monkeypatch):
        monkeypatch.setenv("FORK_URL", "http://localhost:8545")
        monkeypatch.setenv("ALCHEMY_API_KEY", "abc123")
        assert resolve_fork_url() == "http://localhost:8545"


class TestSettings:
    def test_seller_defaults(self):
        assert SELLER_SETTINGS.twap_discount_bips == 500
        assert SELLER_SETTINGS.eth_to_treasury_bips == 4000
        assert SELLER_SETTINGS.twap_min_elapsed == duration.minutes(30)
        assert SELLER_SETTINGS.twap_max_elapsed == duration.days(2)

    def test_addresses_are_checksummed(self):
        for address in (ADDRESSES.treasury, ADDRESSES.dndx, ADDRESSES.oracle, ADDRESSES.wallet):
            assert address.startswith("0x") and len(address) == 42
