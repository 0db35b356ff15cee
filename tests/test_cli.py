"""Tests for the fee-seller command line."""

import argparse

import pytest

from fee_seller.cli import _format_ether, _parse_ether, main
from tests.fixtures import (
    SUSHI_USDC_WETH,
    TEN_ETH_POOL_OUT_FOR_POINT_ONE,
    UNI_USDC_WETH,
    USDC,
    WETH,
)


class TestQuoteCommand:
    def test_prints_amount_out(self, capsys):
        exit_code = main(["quote", str(10**19), str(10**19), str(10**17)])

        assert exit_code == 0
        assert capsys.readouterr().out.strip() == str(TEN_ETH_POOL_OUT_FOR_POINT_ONE)

    def test_custom_fee(self, capsys):
        assert main(["quote", "1000", "1000", "100", "--fee-bps", "100"]) == 0
        assert capsys.readouterr().out.strip() == "90"

    def test_empty_pool_is_an_error(self, capsys):
        assert main(["quote", "0", "0", "0"]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_invalid_fee_is_an_error(self, capsys):
        assert main(["quote", "10", "10", "1", "--fee-bps", "10000"]) == 1
        assert "fee_bps" in capsys.readouterr().out


class TestPairAddressCommand:
    def test_uniswap_default(self, capsys):
        assert main(["pair-address", USDC, WETH]) == 0
        assert capsys.readouterr().out.strip() == UNI_USDC_WETH

    def test_sushiswap(self, capsys):
        assert main(["pair-address", WETH, USDC, "--exchange", "sushiswap"]) == 0
        assert capsys.readouterr().out.strip() == SUSHI_USDC_WETH

    def test_invalid_token(self, capsys):
        assert main(["pair-address", "0xnothex", WETH]) == 1
        assert capsys.readouterr().out.startswith("Error:")

    def test_unknown_exchange(self):
        with pytest.raises(SystemExit):
            main(["pair-address", USDC, WETH, "--exchange", "curve"])


class TestScenarioCommand:
    def test_default_sale_succeeds(self, capsys):
        assert main(["scenario"]) == 0

        out = capsys.readouterr().out
        assert "Sold 0.1 token via" in out
        assert "Treasury:" in out
        assert "Dividends:" in out

    def test_dump_makes_sale_revert(self, capsys):
        assert main(["scenario", "--trade", "1", "--dump", "5"]) == 1
        assert "Sale reverted: Insufficient output" in capsys.readouterr().out


class TestArguments:
    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_parse_ether(self):
        assert _parse_ether("0.1") == 10**17
        assert _parse_ether("5") == 5 * 10**18

    @pytest.mark.parametrize("value", ["abc", "-1", "0.0000000000000000001"])
    def test_parse_ether_rejects(self, value):
        with pytest.raises(argparse.ArgumentTypeError):
            _parse_ether(value)

    def test_format_ether(self):
        assert _format_ether(10**17) == "0.1"
        assert _format_ether(12 * 10**17) == "1.2"
