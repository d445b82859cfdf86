"""Shared test fixtures."""

import pytest
from hypothesis import settings
from web3 import Web3

from lp_router.routers.axelar_evm import AxelarEVMRouter, AxelarEVMRouterConfig
from lp_router.routers.evm import EVMDomain, FeeValues
from lp_router.testing import RecordingSubmissionMechanism

# Encoding is fast, but CI machines are not
settings.register_profile("no_deadline", deadline=None)
settings.load_profile("no_deadline")

#: Deployed bytecode of our pretend Axelar gateway
GATEWAY_CODE = bytes.fromhex("6080604052348015600f57600080fd5b50")

#: Moonbeam LiquidityPools contract used across tests
LP_CONTRACT = bytes.fromhex("00" * 19 + "0a")


@pytest.fixture()
def evm_domain() -> EVMDomain:
    return EVMDomain(
        target_contract_address="0x4F4495243837681061C4743b74B3eEdf548D56A5",
        target_contract_hash=Web3.keccak(GATEWAY_CODE),
        fee_values=FeeValues(value=0, gas_limit=500_000, gas_price=10 * 10**9),
    )


@pytest.fixture()
def axelar_config(evm_domain) -> AxelarEVMRouterConfig:
    return AxelarEVMRouterConfig(
        evm_domain=evm_domain,
        evm_chain=b"Moonbeam",
        liquidity_pools_contract_address=LP_CONTRACT,
    )


@pytest.fixture()
def submission() -> RecordingSubmissionMechanism:
    return RecordingSubmissionMechanism()


@pytest.fixture()
def axelar_router(axelar_config, submission) -> AxelarEVMRouter:
    return AxelarEVMRouter(axelar_config, submission=submission)


@pytest.fixture()
def sender() -> bytes:
    """32-byte account id, maps to EVM address 0x1111...1111."""
    return bytes.fromhex("11" * 20 + "22" * 12)
