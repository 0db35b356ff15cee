"""Chain collaborator module.

This module provides:
- ChainEnvironment: pyrevm-backed chain with time travel and impersonation
- SolidityCompiler: Compiles harness contracts using py-solc-x
"""

from fee_seller.evm.compiler import CompilationResult, ContractArtifact, SolidityCompiler
from fee_seller.evm.environment import ChainEnvironment, Signer

__all__ = [
    "ChainEnvironment",
    "CompilationResult",
    "ContractArtifact",
    "Signer",
    "SolidityCompiler",
]
