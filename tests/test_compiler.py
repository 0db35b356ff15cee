"""Tests for the py-solc-x compilation service.

solcx is patched so the tests never download or run solc.
"""

import pytest
import solcx
from solcx.exceptions import SolcError

from fee_seller.evm.compiler import CompilationResult, ContractArtifact, SolidityCompiler

TOKEN_SOURCE = "pragma solidity =0.7.6; contract TestERC20 {}"


def contract_output(bytecode: str, deployed: str = "") -> dict:
    return {
        "abi": [{"type": "constructor", "inputs": []}],
        "evm": {"bytecode": {"object": bytecode}, "deployedBytecode": {"object": deployed}},
    }


@pytest.fixture
def installed(monkeypatch):
    """Pretend 0.7.6 is installed and record install requests."""
    requested = []
    monkeypatch.setattr(solcx, "get_installed_solc_versions", lambda: ["0.7.6"])
    monkeypatch.setattr(solcx, "install_solc", lambda version: requested.append(version))
    return requested


@pytest.fixture
def compile_with(monkeypatch):
    """Make compile_standard return a canned output and capture its input."""
    calls = []

    def install(output):
        def fake_compile_standard(standard_input, **kwargs):
            calls.append((standard_input, kwargs))
            if isinstance(output, Exception):
                raise output
            return output

        monkeypatch.setattr(solcx, "compile_standard", fake_compile_standard)
        return calls

    return install


class TestInstallation:
    def test_installed_version_is_not_reinstalled(self, installed):
        SolidityCompiler()
        assert installed == []

    def test_missing_version_is_installed(self, installed):
        SolidityCompiler(solc_version="0.8.20")
        assert installed == ["0.8.20"]


class TestCompileSources:
    def test_artifacts_built_from_output(self, installed, compile_with):
        calls = compile_with({
            "contracts": {
                "TestERC20.sol": {
                    "TestERC20": contract_output("6080", "6001"),
                    "IERC20": contract_output(""),
                }
            }
        })

        result = SolidityCompiler().compile_sources({"TestERC20.sol": TOKEN_SOURCE})

        assert result.success
        assert list(result.artifacts) == ["TestERC20"]
        artifact = result.artifact("TestERC20")
        assert artifact.bytecode == bytes.fromhex("6080")
        assert artifact.deployed_bytecode == bytes.fromhex("6001")

        standard_input, kwargs = calls[0]
        assert standard_input["sources"]["TestERC20.sol"]["content"] == TOKEN_SOURCE
        assert standard_input["settings"]["optimizer"] == {"enabled": True, "runs": 200}
        assert kwargs["solc_version"] == "0.7.6"

    def test_errors_fail_compilation(self, installed, compile_with):
        compile_with({
            "errors": [
                {"severity": "warning", "formattedMessage": "unused variable"},
                {"severity": "error", "formattedMessage": "undeclared identifier"},
            ]
        })

        result = SolidityCompiler().compile_sources({"Bad.sol": "contract Bad {"})

        assert not result.success
        assert result.errors == ["undeclared identifier"]
        assert result.warnings == ["unused variable"]

    def test_warnings_kept_on_success(self, installed, compile_with):
        compile_with({
            "errors": [{"severity": "warning", "message": "shadowing"}],
            "contracts": {"A.sol": {"A": contract_output("00")}},
        })

        result = SolidityCompiler().compile_sources({"A.sol": "contract A {}"})

        assert result.success
        assert result.warnings == ["shadowing"]

    def test_solc_error_is_reported(self, installed, compile_with):
        compile_with(SolcError(
            message="solc crashed",
            command=["solc"],
            return_code=1,
            stdin_data="",
            stdout_data="",
            stderr_data="solc crashed",
        ))

        result = SolidityCompiler().compile_sources({"A.sol": "contract A {}"})

        assert not result.success
        assert result.errors[0].startswith("Solidity compilation error")

    def test_base_path_passed_through(self, installed, compile_with, tmp_path):
        calls = compile_with({"contracts": {}})

        SolidityCompiler(base_path=tmp_path).compile_sources({"A.sol": "contract A {}"})

        _, kwargs = calls[0]
        assert kwargs["base_path"] == str(tmp_path)
        assert kwargs["allow_paths"] == str(tmp_path)


class TestCompileDirectory:
    def test_collects_sol_files(self, installed, compile_with, tmp_path):
        (tmp_path / "tokens").mkdir()
        (tmp_path / "tokens" / "TestERC20.sol").write_text(TOKEN_SOURCE)
        (tmp_path / "README.md").write_text("not solidity")
        calls = compile_with({"contracts": {}})

        SolidityCompiler().compile_directory(tmp_path)

        standard_input, _ = calls[0]
        assert list(standard_input["sources"]) == ["tokens/TestERC20.sol"]

    def test_empty_directory(self, installed, tmp_path):
        result = SolidityCompiler().compile_directory(tmp_path)
        assert not result.success
        assert "No Solidity sources" in result.errors[0]


class TestCompilationResult:
    def test_missing_artifact_lists_available(self):
        result = CompilationResult(
            success=True,
            artifacts={"A": ContractArtifact(name="A", abi=[], bytecode=b"\x00")},
        )
        with pytest.raises(KeyError, match="Available contracts"):
            result.artifact("B")
