"""Command-line interface for quoting, pair addresses and seller scenarios."""

import argparse
import sys
from decimal import Decimal, InvalidOperation

from fee_seller.config import SCENARIO_SETTINGS
from fee_seller.core.address import EXCHANGES, WETH_ADDRESS
from fee_seller.core.quote import DEFAULT_FEE_BPS, quote_output
from fee_seller.core.units import ETHER, duration
from fee_seller.market.ledger import SellerRevert
from fee_seller.market.scenario import Market, create_token_with_eth_pairs
from fee_seller.market.seller import ExitFeeSellerModel


def _parse_ether(value: str) -> int:
    """Parse a decimal ether amount ("0.1") into wei."""
    try:
        wei = Decimal(value) * ETHER
    except InvalidOperation:
        raise argparse.ArgumentTypeError(f"invalid amount: {value}") from None
    if wei < 0 or wei != wei.to_integral_value():
        raise argparse.ArgumentTypeError(f"invalid amount: {value}")
    return int(wei)


def _format_ether(wei: int) -> str:
    return f"{Decimal(wei) / ETHER:f}"


def quote_command(args: argparse.Namespace) -> int:
    """Print the output of an exact-in swap."""
    try:
        amount_out = quote_output(args.reserve_in, args.reserve_out, args.amount_in, args.fee_bps)
    except (ValueError, ZeroDivisionError) as e:
        print(f"Error: {e}")
        return 1
    print(amount_out)
    return 0


def pair_address_command(args: argparse.Namespace) -> int:
    """Print the CREATE2 pair address for two tokens."""
    exchange = EXCHANGES[args.exchange]
    try:
        address = exchange.pair_address(args.token_a, args.token_b)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    print(address)
    return 0


def scenario_command(args: argparse.Namespace) -> int:
    """Run the standard sale scenario offline and report expected values."""
    market = Market()
    pairs = create_token_with_eth_pairs(market)
    seller = ExitFeeSellerModel(market=market, address=market.deploy("ExitFeeSeller"))

    print(f"Token: {pairs.token}")
    print(f"  uniswap pair:   {pairs.uni.address}")
    print(f"  sushiswap pair: {pairs.sushi.address}")

    pairs.update_price()
    market.clock.advance(duration.hours(3))
    if args.dump:
        for pair in (pairs.uni, pairs.sushi):
            market.sell_token(pair, token_amount=args.dump)

    market.ledger.mint(pairs.token, seller.address, args.trade)
    try:
        sale = seller.sell_token_for_eth(pairs.token)
    except SellerRevert as e:
        print(f"Sale reverted: {e.reason}")
        return 1

    print(f"Sold {_format_ether(sale.amount_in)} token via {sale.pair}")
    print(f"  minimum out: {_format_ether(sale.minimum_out)} ETH")
    print(f"  amount out:  {_format_ether(sale.amount_out)} ETH")

    distribution = seller.distribute_eth()
    print(f"Treasury: {_format_ether(distribution.to_treasury)} WETH")
    print(f"Dividends: {_format_ether(distribution.to_dividends)} WETH")
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description="Exit fee seller harness - quotes, pair addresses and sale scenarios",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  fee-seller quote 10000000000000000000 10000000000000000000 100000000000000000
  fee-seller pair-address 0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48 {weth}
  fee-seller scenario --trade 0.1 --dump 5
        """.format(weth=WETH_ADDRESS),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    quote_parser = subparsers.add_parser("quote", help="Quote an exact-in constant product swap")
    quote_parser.add_argument("reserve_in", type=int, help="Reserve of the input asset (base units)")
    quote_parser.add_argument("reserve_out", type=int, help="Reserve of the output asset (base units)")
    quote_parser.add_argument("amount_in", type=int, help="Input amount (base units)")
    quote_parser.add_argument(
        "--fee-bps",
        type=int,
        default=DEFAULT_FEE_BPS,
        help=f"Pool fee in basis points (default: {DEFAULT_FEE_BPS})",
    )
    quote_parser.set_defaults(func=quote_command)

    address_parser = subparsers.add_parser("pair-address", help="Compute a pair's CREATE2 address")
    address_parser.add_argument("token_a", help="First token address")
    address_parser.add_argument("token_b", help="Second token address")
    address_parser.add_argument(
        "--exchange",
        choices=sorted(EXCHANGES),
        default="uniswap",
        help="Exchange whose factory deploys the pair (default: uniswap)",
    )
    address_parser.set_defaults(func=pair_address_command)

    scenario_parser = subparsers.add_parser(
        "scenario", help="Simulate a token sale and proceeds distribution"
    )
    scenario_parser.add_argument(
        "--trade",
        type=_parse_ether,
        default=SCENARIO_SETTINGS.default_trade,
        help="Tokens held by the seller, in whole tokens (default: 0.1)",
    )
    scenario_parser.add_argument(
        "--dump",
        type=_parse_ether,
        default=0,
        help="Tokens dumped into each pair before the sale (default: 0)",
    )
    scenario_parser.set_defaults(func=scenario_command)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
