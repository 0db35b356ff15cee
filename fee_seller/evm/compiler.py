"""Solidity compilation service using py-solc-x."""

import solcx
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ContractArtifact:
    """Compiled output for one contract."""

    name: str
    abi: list
    bytecode: bytes
    deployed_bytecode: bytes = b""


@dataclass
class CompilationResult:
    """Result of Solidity compilation."""

    success: bool
    artifacts: dict[str, ContractArtifact] = field(default_factory=dict)
    errors: Optional[list[str]] = None
    warnings: Optional[list[str]] = None

    def artifact(self, name: str) -> ContractArtifact:
        if name not in self.artifacts:
            available = sorted(self.artifacts)
            raise KeyError(f"Contract '{name}' not found. Available contracts: {available}")
        return self.artifacts[name]


class SolidityCompiler:
    """Compiles the harness contracts (test tokens, SendEth, the seller) with py-solc-x.

    Sources are passed inline through the standard JSON interface; imports
    resolve against `base_path` when one is given.
    """

    SOLC_VERSION = "0.7.6"

    def __init__(
        self,
        solc_version: str = SOLC_VERSION,
        base_path: Optional[Path] = None,
        optimizer_runs: int = 200,
    ):
        """Initialize the compiler and ensure solc is installed.

        Args:
            solc_version: Exact solc release to compile with
            base_path: Root for resolving imports (optional)
            optimizer_runs: Optimizer `runs` setting
        """
        self.solc_version = solc_version
        self.base_path = base_path
        self.optimizer_runs = optimizer_runs
        self._ensure_solc_installed()

    def _ensure_solc_installed(self) -> None:
        """Install solc if not already installed."""
        installed = [str(v) for v in solcx.get_installed_solc_versions()]
        if self.solc_version not in installed:
            solcx.install_solc(self.solc_version)

    def _standard_input(self, sources: dict[str, str]) -> dict:
        return {
            "language": "Solidity",
            "sources": {name: {"content": content} for name, content in sources.items()},
            "settings": {
                "optimizer": {
                    "enabled": True,
                    "runs": self.optimizer_runs,
                },
                "outputSelection": {
                    "*": {
                        "*": [
                            "abi",
                            "evm.bytecode.object",
                            "evm.deployedBytecode.object",
                        ],
                    },
                },
            },
        }

    def compile_sources(self, sources: dict[str, str]) -> CompilationResult:
        """Compile a set of inline sources.

        Args:
            sources: Mapping of source unit name to Solidity source

        Returns:
            CompilationResult with one artifact per contract that has bytecode
        """
        errors: list[str] = []
        warnings: list[str] = []

        kwargs = {}
        if self.base_path is not None:
            kwargs["base_path"] = str(self.base_path)
            kwargs["allow_paths"] = str(self.base_path)

        try:
            output = solcx.compile_standard(
                self._standard_input(sources),
                solc_version=self.solc_version,
                **kwargs,
            )
        except solcx.exceptions.SolcError as e:
            return CompilationResult(
                success=False,
                errors=[f"Solidity compilation error: {str(e)}"],
            )

        for err in output.get("errors", []):
            severity = err.get("severity", "error")
            message = err.get("formattedMessage", err.get("message", "Unknown error"))
            if severity == "error":
                errors.append(message)
            elif severity == "warning":
                warnings.append(message)

        if errors:
            return CompilationResult(success=False, errors=errors, warnings=warnings)

        artifacts: dict[str, ContractArtifact] = {}
        for contracts in output.get("contracts", {}).values():
            for name, contract_output in contracts.items():
                evm = contract_output.get("evm", {})
                bytecode_hex = evm.get("bytecode", {}).get("object", "")
                # Interfaces and abstract contracts have no bytecode
                if not bytecode_hex:
                    continue
                deployed_hex = evm.get("deployedBytecode", {}).get("object", "")
                artifacts[name] = ContractArtifact(
                    name=name,
                    abi=contract_output.get("abi", []),
                    bytecode=bytes.fromhex(bytecode_hex),
                    deployed_bytecode=bytes.fromhex(deployed_hex) if deployed_hex else b"",
                )

        return CompilationResult(success=True, artifacts=artifacts, warnings=warnings)

    def compile_directory(self, directory: Path) -> CompilationResult:
        """Compile every .sol file under `directory`."""
        directory = Path(directory)
        sources = {
            str(path.relative_to(directory)): path.read_text()
            for path in sorted(directory.rglob("*.sol"))
        }
        if not sources:
            return CompilationResult(success=False, errors=[f"No Solidity sources in {directory}"])
        return self.compile_sources(sources)
