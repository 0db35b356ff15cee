"""Market models: ledger, oracle, routing, the seller and scenario wiring."""

from fee_seller.market.ledger import Event, LedgerError, SellerRevert, TokenLedger
from fee_seller.market.oracle import OracleError, TwapOracle
from fee_seller.market.router import BestPair, get_best_pair
from fee_seller.market.scenario import Market, TokenPairs, create_pairs, create_token_with_eth_pairs
from fee_seller.market.seller import Distribution, ExitFeeSellerModel, Sale

__all__ = [
    "BestPair",
    "Distribution",
    "Event",
    "ExitFeeSellerModel",
    "LedgerError",
    "Market",
    "OracleError",
    "Sale",
    "SellerRevert",
    "TokenLedger",
    "TokenPairs",
    "TwapOracle",
    "create_pairs",
    "create_token_with_eth_pairs",
    "get_best_pair",
]
