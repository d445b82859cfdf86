"""EVM router.

Submits call data as a plain EVM transaction to a fixed target contract,
with fee values taken from configuration rather than from the gas market.

Used directly for EVM domains the Liquidity Pools contracts live on, and as
the submission mechanism of :py:class:`~lp_router.routers.axelar_evm.AxelarEVMRouter`,
in which case the target contract is the Axelar gateway.

Example::

    from lp_router.routers.evm import EVMDomain, EVMRouter, FeeValues

    evm_domain = EVMDomain(
        target_contract_address=axelar_gateway_address,
        target_contract_hash=Web3.keccak(web3.eth.get_code(axelar_gateway_address)),
        fee_values=FeeValues(value=0, gas_limit=500_000, gas_price=10 * 10**9),
    )
    router = EVMRouter(web3, evm_domain, signer=hot_wallet_account)
    router.initialize()
"""

import logging
from dataclasses import dataclass

from eth_account.signers.local import LocalAccount
from hexbytes import HexBytes
from web3 import Web3
from web3.exceptions import Web3Exception
from web3.types import TxParams

from lp_router.constants import CODE_HASH_SIZE, MAX_UINT256
from lp_router.exceptions import RouterConfigError, RouterInitialisationFailed, SubmissionFailed
from lp_router.routers.base import Router, Sender, SubmissionMechanism, SubmissionReceipt
from lp_router.utils import sender_to_evm_address, to_address_bytes

logger = logging.getLogger(__name__)

#: How long we wait for a submitted transaction to be mined
DEFAULT_RECEIPT_TIMEOUT = 120.0


@dataclass(slots=True, frozen=True)
class FeeValues:
    """Fixed fee values attached to every router transaction."""

    #: Native token value sent with the call, in wei
    value: int

    #: Transaction gas limit
    gas_limit: int

    #: Legacy gas price, in wei
    gas_price: int

    def __post_init__(self):
        for name in ("value", "gas_limit", "gas_price"):
            v = getattr(self, name)
            if type(v) is not int or not 0 <= v <= MAX_UINT256:
                raise RouterConfigError(f"Fee {name} must be an unsigned 256-bit integer, got {v!r}")


@dataclass(slots=True, frozen=True)
class EVMDomain:
    """Target contract of an :class:`EVMRouter`."""

    #: Contract receiving the transactions, raw 20 bytes
    target_contract_address: bytes

    #: Keccak-256 hash of the target contract deployed bytecode
    target_contract_hash: bytes

    #: Fee values for each transaction
    fee_values: FeeValues

    def __post_init__(self):
        object.__setattr__(self, "target_contract_address", to_address_bytes(self.target_contract_address))
        code_hash = bytes(self.target_contract_hash)
        if len(code_hash) != CODE_HASH_SIZE:
            raise RouterConfigError(f"Target contract hash must be {CODE_HASH_SIZE} bytes, got {len(code_hash)}")
        object.__setattr__(self, "target_contract_hash", code_hash)

    @property
    def target_contract_checksum_address(self) -> str:
        return Web3.to_checksum_address(self.target_contract_address)


class EVMRouter(Router, SubmissionMechanism):
    """Submit call data to the target contract of an :class:`EVMDomain`.

    - With ``signer`` the transaction is signed locally and broadcast
      with ``eth_sendRawTransaction``. The sender must then be the signer.

    - Without ``signer`` we use ``eth_sendTransaction``, which needs the
      node to hold the sender account unlocked (e.g. Anvil).
    """

    def __init__(
        self,
        web3: Web3,
        evm_domain: EVMDomain,
        signer: LocalAccount | None = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        self.web3 = web3
        self.evm_domain = evm_domain
        self.signer = signer
        self.receipt_timeout = receipt_timeout

    def __repr__(self):
        return f"<EVMRouter target:{self.evm_domain.target_contract_checksum_address}>"

    def initialize(self) -> None:
        """Check that the target contract is the one we expect.

        :raise RouterInitialisationFailed:
            Deployed bytecode does not hash to the configured code hash.
        """
        address = self.evm_domain.target_contract_checksum_address
        code = self.web3.eth.get_code(address)
        code_hash = Web3.keccak(code)
        if code_hash != self.evm_domain.target_contract_hash:
            logger.warning(
                "Contract %s code hash %s, expected %s",
                address,
                code_hash.hex(),
                self.evm_domain.target_contract_hash.hex(),
            )
            raise RouterInitialisationFailed("target contract code does not match")

        logger.info("EVM router initialised for contract %s", address)

    def dispatch(self, sender: Sender, call_data: bytes) -> SubmissionReceipt:
        """Submit call data to the target contract and wait for the receipt.

        :param sender:
            Sender identity, see :py:func:`~lp_router.utils.sender_to_evm_address`.

        :param call_data:
            Encoded contract call.

        :raise SubmissionFailed:
            The node rejected the transaction or it reverted.
        """
        try:
            from_address = sender_to_evm_address(sender)
        except ValueError as e:
            raise SubmissionFailed(f"invalid sender: {e}") from e

        fees = self.evm_domain.fee_values

        tx: TxParams = {
            "from": from_address,
            "to": self.evm_domain.target_contract_checksum_address,
            "value": fees.value,
            "gas": fees.gas_limit,
            "gasPrice": fees.gas_price,
            "data": HexBytes(call_data),
        }

        logger.info(
            "Submitting %d bytes of call data from %s to %s, gas limit %d",
            len(call_data),
            from_address,
            tx["to"],
            fees.gas_limit,
        )

        try:
            tx_hash = self._submit(tx)
            receipt = self.web3.eth.wait_for_transaction_receipt(tx_hash, timeout=self.receipt_timeout)
        except (Web3Exception, ValueError) as e:
            raise SubmissionFailed(f"transaction submission failed: {e}") from e

        if receipt["status"] != 1:
            raise SubmissionFailed(f"transaction {HexBytes(tx_hash).hex()} reverted")

        logger.info("Transaction %s included, gas used %d", HexBytes(tx_hash).hex(), receipt["gasUsed"])

        return SubmissionReceipt(
            transaction_hash=HexBytes(tx_hash),
            gas_used=receipt["gasUsed"],
            success=True,
        )

    def send(self, sender: Sender, message: bytes) -> SubmissionReceipt:
        """Send the message as-is as the call data of the target contract."""
        return self.dispatch(sender, message)

    def _submit(self, tx: TxParams) -> HexBytes:
        if self.signer is None:
            return self.web3.eth.send_transaction(tx)

        if self.signer.address != tx["from"]:
            raise SubmissionFailed(f"sender {tx['from']} does not match signer {self.signer.address}")

        tx["nonce"] = self.web3.eth.get_transaction_count(self.signer.address)
        tx["chainId"] = self.web3.eth.chain_id
        signed_tx = self.signer.sign_transaction(tx)
        return self.web3.eth.send_raw_transaction(signed_tx.raw_transaction)
