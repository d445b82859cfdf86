"""Axelar over EVM router.

Liquidity Pools messages bound for an EVM chain behind Axelar are wrapped in
an ``AxelarGateway.callContract()`` call, which in turn calls the
LiquidityPools contract on the destination chain with the serialised message
as ``payload``. The wrapped call is then submitted by an EVM router on the
source side.

- Axelar contract call:
  https://github.com/axelarnetwork/axelar-cgp-solidity/blob/v4.3.2/contracts/AxelarGateway.sol#L78

- LiquidityPools contract call:
  https://github.com/centrifuge/liquidity-pools/blob/383d279f809a01ab979faf45f31bf9dc3ce6a74a/src/routers/Gateway.sol#L276

Example::

    from lp_router.routers.axelar_evm import AxelarEVMRouter, AxelarEVMRouterConfig

    config = AxelarEVMRouterConfig(
        evm_domain=evm_domain,
        evm_chain=b"Moonbeam",
        liquidity_pools_contract_address="0x5c8657b827a138d52a4e3f03683a28b1faac93e3",
    )
    router = AxelarEVMRouter(config, submission=EVMRouter(web3, evm_domain))
    router.initialize()
    receipt = router.send(sender, lp_message)
"""

import logging
from dataclasses import dataclass

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError, EncodingError
from eth_utils import function_signature_to_4byte_selector, to_checksum_address

from lp_router.constants import (
    AXELAR_DESTINATION_CHAIN_PARAM,
    AXELAR_DESTINATION_CONTRACT_ADDRESS_PARAM,
    AXELAR_FUNCTION_NAME,
    AXELAR_PAYLOAD_PARAM,
    EVM_ADDRESS_SIZE,
    MAX_AXELAR_EVM_CHAIN_SIZE,
)
from lp_router.exceptions import (
    ArgumentEncodingFailed,
    EncodeError,
    FunctionDescriptorUnavailable,
    InvalidChainIdEncoding,
    MessageEncodingFailed,
    RouterConfigError,
)
from lp_router.routers.base import Router, Sender, SubmissionMechanism, SubmissionReceipt
from lp_router.routers.evm import EVMDomain, FeeValues
from lp_router.utils import to_address_bytes

logger = logging.getLogger(__name__)

#: Axelar gateway ABI, only the function we call
AXELAR_GATEWAY_ABI: list[dict] = [
    {
        "type": "function",
        "name": AXELAR_FUNCTION_NAME,
        "inputs": [
            {"name": AXELAR_DESTINATION_CHAIN_PARAM, "type": "string"},
            {"name": AXELAR_DESTINATION_CONTRACT_ADDRESS_PARAM, "type": "string"},
            {"name": AXELAR_PAYLOAD_PARAM, "type": "bytes"},
        ],
        "outputs": [],
        "stateMutability": "nonpayable",
    },
]


@dataclass(slots=True, frozen=True)
class FunctionDescriptor:
    """Resolved ABI function, computed once per process."""

    #: Function name
    name: str

    #: Canonical signature, e.g. ``callContract(string,string,bytes)``
    signature: str

    #: Ordered ABI input types
    input_types: tuple[str, ...]

    #: First four bytes of ``keccak256(signature)``
    selector: bytes


def _build_function_descriptors(abi: list[dict]) -> dict[str, FunctionDescriptor]:
    descriptors = {}
    for entry in abi:
        if entry.get("type") != "function":
            continue
        input_types = tuple(i["type"] for i in entry["inputs"])
        signature = f"{entry['name']}({','.join(input_types)})"
        descriptors[entry["name"]] = FunctionDescriptor(
            name=entry["name"],
            signature=signature,
            input_types=input_types,
            selector=function_signature_to_4byte_selector(signature),
        )
    return descriptors


_FUNCTION_DESCRIPTORS = _build_function_descriptors(AXELAR_GATEWAY_ABI)


def get_axelar_function_descriptor() -> FunctionDescriptor:
    """Get the ``callContract`` descriptor.

    :raise FunctionDescriptorUnavailable:
        If the module level ABI does not define the function.
    """
    try:
        return _FUNCTION_DESCRIPTORS[AXELAR_FUNCTION_NAME]
    except KeyError as e:
        raise FunctionDescriptorUnavailable() from e


def encode_axelar_call(
    payload: bytes,
    target_chain: bytes,
    target_contract: bytes,
) -> bytes:
    """Encode a message as an ``AxelarGateway.callContract()`` call.

    The output is ``selector || abi.encode(string, string, bytes)`` with the
    chain name, the ``0x`` lowercase hex address of the target contract and
    the message payload. The result depends only on the arguments.

    :param payload:
        Serialised Liquidity Pools message.

    :param target_chain:
        Axelar name of the destination chain as UTF-8 bytes, e.g. ``b"Moonbeam"``.

    :param target_contract:
        Raw 20-byte address of the LiquidityPools contract on the destination chain.

    :return:
        Call data for the Axelar gateway.

    :raise EncodeError:
        One of :py:class:`~lp_router.exceptions.FunctionDescriptorUnavailable`,
        :py:class:`~lp_router.exceptions.InvalidChainIdEncoding` or
        :py:class:`~lp_router.exceptions.ArgumentEncodingFailed`.
    """
    descriptor = get_axelar_function_descriptor()

    if not isinstance(target_chain, (bytes, bytearray)):
        raise InvalidChainIdEncoding()

    try:
        chain_name = bytes(target_chain).decode("utf-8")
    except UnicodeDecodeError as e:
        raise InvalidChainIdEncoding() from e

    if not isinstance(target_contract, (bytes, bytearray)) or len(target_contract) != EVM_ADDRESS_SIZE:
        raise ArgumentEncodingFailed()
    target_contract = bytes(target_contract)

    # Always 0x plus the full 40 lowercase hex digits, never a checksummed or shortened form
    contract_hex = "0x" + target_contract.hex()

    try:
        args = encode(list(descriptor.input_types), [chain_name, contract_hex, payload])
    except (EncodingError, TypeError, ValueError) as e:
        raise ArgumentEncodingFailed() from e

    return descriptor.selector + args


def decode_axelar_call(call_data: bytes) -> tuple[str, str, bytes]:
    """Decode ``callContract()`` call data back into its arguments.

    :return:
        Tuple of (destination chain, destination contract address, payload).

    :raise ValueError:
        If the call data targets another function or is malformed.
    """
    descriptor = get_axelar_function_descriptor()
    selector, args = call_data[:4], call_data[4:]
    if selector != descriptor.selector:
        raise ValueError(f"Call data selector 0x{selector.hex()} does not match {descriptor.signature}")

    try:
        chain_name, contract_hex, payload = decode(list(descriptor.input_types), args)
    except DecodingError as e:
        raise ValueError(f"Cannot decode {descriptor.signature} arguments: {e}") from e

    return chain_name, contract_hex, payload


@dataclass(slots=True, frozen=True)
class AxelarEVMRouterConfig:
    """Immutable configuration of an :class:`AxelarEVMRouter`.

    To change a route, build a new config and router and point the
    gateway to it.
    """

    #: EVM domain of the Axelar gateway on the source side
    evm_domain: EVMDomain

    #: Axelar name of the destination chain, UTF-8 bytes
    evm_chain: bytes

    #: LiquidityPools contract on the destination chain
    liquidity_pools_contract_address: bytes

    def __post_init__(self):
        if not isinstance(self.evm_chain, (bytes, bytearray)):
            raise RouterConfigError(f"EVM chain name must be bytes, got {type(self.evm_chain)}")
        evm_chain = bytes(self.evm_chain)
        if len(evm_chain) > MAX_AXELAR_EVM_CHAIN_SIZE:
            raise RouterConfigError(f"EVM chain name is {len(evm_chain)} bytes, maximum is {MAX_AXELAR_EVM_CHAIN_SIZE}")
        object.__setattr__(self, "evm_chain", evm_chain)
        object.__setattr__(self, "liquidity_pools_contract_address", to_address_bytes(self.liquidity_pools_contract_address))

    #: Static ABI layout used by :py:meth:`encode`
    STORAGE_TYPES = ("address", "bytes32", "uint256", "uint256", "uint256", "uint8", f"bytes{MAX_AXELAR_EVM_CHAIN_SIZE}", "address")

    @classmethod
    def max_encoded_size(cls) -> int:
        """Size of :py:meth:`encode` output in bytes.

        Every storage field is a static ABI type, so each takes one 32-byte word.
        """
        return 32 * len(cls.STORAGE_TYPES)

    def encode(self) -> bytes:
        """Serialise the config for fixed-capacity storage."""
        fees = self.evm_domain.fee_values
        return encode(
            list(self.STORAGE_TYPES),
            [
                to_checksum_address(self.evm_domain.target_contract_address),
                self.evm_domain.target_contract_hash,
                fees.value,
                fees.gas_limit,
                fees.gas_price,
                len(self.evm_chain),
                self.evm_chain.ljust(MAX_AXELAR_EVM_CHAIN_SIZE, b"\x00"),
                to_checksum_address(self.liquidity_pools_contract_address),
            ],
        )

    @classmethod
    def decode(cls, data: bytes) -> "AxelarEVMRouterConfig":
        """Restore a config written by :py:meth:`encode`.

        :raise RouterConfigError:
            If the data is not a valid stored config.
        """
        if len(data) != cls.max_encoded_size():
            raise RouterConfigError(f"Stored router config must be {cls.max_encoded_size()} bytes, got {len(data)}")

        try:
            (target_address, code_hash, value, gas_limit, gas_price, chain_len, chain, lp_address) = decode(list(cls.STORAGE_TYPES), data)
        except DecodingError as e:
            raise RouterConfigError(f"Cannot decode stored router config: {e}") from e

        if chain_len > MAX_AXELAR_EVM_CHAIN_SIZE:
            raise RouterConfigError(f"Stored EVM chain name length {chain_len} exceeds {MAX_AXELAR_EVM_CHAIN_SIZE}")

        if any(chain[chain_len:]):
            raise RouterConfigError("Stored EVM chain name has non-zero padding")

        return cls(
            evm_domain=EVMDomain(
                target_contract_address=target_address,
                target_contract_hash=code_hash,
                fee_values=FeeValues(value=value, gas_limit=gas_limit, gas_price=gas_price),
            ),
            evm_chain=chain[:chain_len],
            liquidity_pools_contract_address=lp_address,
        )


class AxelarEVMRouter(Router):
    """Send Liquidity Pools messages to an EVM chain through Axelar.

    Encodes the message as an Axelar ``callContract()`` call and passes the
    result to the submission mechanism, normally an
    :py:class:`~lp_router.routers.evm.EVMRouter` targeting the Axelar gateway.
    If encoding fails the submission mechanism is never called.
    """

    def __init__(self, config: AxelarEVMRouterConfig, submission: SubmissionMechanism):
        if not isinstance(config, AxelarEVMRouterConfig):
            raise RouterConfigError(f"Expected AxelarEVMRouterConfig, got {type(config)}")
        self.config = config
        self.submission = submission

    def __repr__(self):
        return f"<AxelarEVMRouter chain:{self.config.evm_chain!r} contract:0x{self.config.liquidity_pools_contract_address.hex()}>"

    def initialize(self) -> None:
        """Initialise the underlying submission mechanism."""
        logger.info("Initialising Axelar EVM router for chain %r", self.config.evm_chain)
        self.submission.initialize()

    def send(self, sender: Sender, message: bytes) -> SubmissionReceipt:
        """Encode and submit a message.

        :param sender:
            Account on whose behalf the transaction is submitted.

        :param message:
            Serialised Liquidity Pools message.

        :raise MessageEncodingFailed:
            The message could not be encoded. Nothing was submitted.

        :raise SendError:
            Whatever the submission mechanism raised.
        """
        try:
            call_data = encode_axelar_call(
                message,
                self.config.evm_chain,
                self.config.liquidity_pools_contract_address,
            )
        except EncodeError as e:
            logger.warning("Axelar message for chain %r not sent: %s", self.config.evm_chain, e.reason)
            raise MessageEncodingFailed(e.reason) from e

        logger.debug("Encoded %d byte message into %d bytes of Axelar call data", len(message), len(call_data))
        return self.submission.dispatch(sender, call_data)
