"""Print the Axelar ``callContract()`` call data for a Liquidity Pools message.

Useful for comparing the router output against what the Axelar gateway
expects, e.g. with ``cast calldata-decode``.

Environment variables
---------------------
- ``EVM_CHAIN``: Axelar name of the destination chain, e.g. ``Moonbeam`` (required).
- ``CONTRACT_ADDRESS``: LiquidityPools contract on the destination chain (required).
- ``PAYLOAD``: Message as ``0x`` hex (required).
- ``LOG_LEVEL``: Logging level (default: ``info``).

Usage::

    EVM_CHAIN=Moonbeam \
    CONTRACT_ADDRESS=0x000000000000000000000000000000000000000a \
    PAYLOAD=0xaabb \
    poetry run python scripts/axelar/encode-axelar-call.py
"""

import logging
import os

from eth_utils import to_bytes
from tabulate import tabulate

from lp_router.routers.axelar_evm import decode_axelar_call, encode_axelar_call, get_axelar_function_descriptor
from lp_router.utils import setup_console_logging, to_address_bytes

logger = logging.getLogger(__name__)


def main():
    log_level = os.environ.get("LOG_LEVEL", "info")
    setup_console_logging(default_log_level=log_level)

    evm_chain = os.environ.get("EVM_CHAIN")
    assert evm_chain, "EVM_CHAIN environment variable required"

    contract_address = os.environ.get("CONTRACT_ADDRESS")
    assert contract_address, "CONTRACT_ADDRESS environment variable required"

    payload = os.environ.get("PAYLOAD")
    assert payload, "PAYLOAD environment variable required"

    call_data = encode_axelar_call(
        to_bytes(hexstr=payload),
        evm_chain.encode("utf-8"),
        to_address_bytes(contract_address),
    )

    descriptor = get_axelar_function_descriptor()
    chain_name, contract_hex, decoded_payload = decode_axelar_call(call_data)

    rows = [
        ["Function", descriptor.signature],
        ["Selector", "0x" + descriptor.selector.hex()],
        ["destinationChain", chain_name],
        ["destinationContractAddress", contract_hex],
        ["payload", "0x" + decoded_payload.hex()],
        ["Call data size", f"{len(call_data)} bytes"],
    ]
    print(tabulate(rows, tablefmt="simple"))
    print()
    print("0x" + call_data.hex())


if __name__ == "__main__":
    main()
