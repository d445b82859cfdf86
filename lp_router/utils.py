"""Address helpers and logging setup."""

import logging
import os

from eth_typing import ChecksumAddress, HexAddress
from eth_utils import is_hex_address, to_bytes, to_checksum_address

from lp_router.constants import ACCOUNT_ID_SIZE, EVM_ADDRESS_SIZE
from lp_router.exceptions import RouterConfigError

logger = logging.getLogger(__name__)


def to_address_bytes(address: bytes | str | HexAddress) -> bytes:
    """Normalise an EVM address to its raw 20 bytes.

    Accepts raw bytes or a ``0x`` hex string in any casing. Checksums
    are not enforced, the destination chain does not see them.

    :raise RouterConfigError:
        If the value is not an EVM address.
    """
    if isinstance(address, str):
        if not is_hex_address(address):
            raise RouterConfigError(f"Not a hex EVM address: {address}")
        return to_bytes(hexstr=address)

    if isinstance(address, (bytes, bytearray)):
        if len(address) != EVM_ADDRESS_SIZE:
            raise RouterConfigError(f"EVM address must be {EVM_ADDRESS_SIZE} bytes, got {len(address)}")
        return bytes(address)

    raise RouterConfigError(f"Unsupported EVM address type: {type(address)}")


def sender_to_evm_address(sender: bytes | str) -> ChecksumAddress:
    """Map a sender identity to the EVM address that signs the transaction.

    A 32-byte account id maps to its first 20 bytes, which is how
    Substrate chains with an EVM derive the account of an EVM origin.

    :param sender:
        32-byte account id, 20-byte address, or either as ``0x`` hex.
    """
    if isinstance(sender, str):
        raw = to_bytes(hexstr=sender)
    elif isinstance(sender, (bytes, bytearray)):
        raw = bytes(sender)
    else:
        raise ValueError(f"Unsupported sender type: {type(sender)}")

    if len(raw) == ACCOUNT_ID_SIZE:
        raw = raw[:EVM_ADDRESS_SIZE]

    if len(raw) != EVM_ADDRESS_SIZE:
        raise ValueError(f"Sender must be a {ACCOUNT_ID_SIZE}-byte account id or {EVM_ADDRESS_SIZE}-byte address, got {len(raw)} bytes")

    return to_checksum_address(raw)


def setup_console_logging(default_log_level="warning") -> logging.Logger:
    """Set up coloured log output for scripts.

    - Log level comes from ``LOG_LEVEL`` environment variable,
      ``default_log_level`` otherwise

    - Tune down noisy ``web3`` and ``urllib3`` logging

    :return:
        Root logger
    """

    level = os.environ.get("LOG_LEVEL", default_log_level).upper()
    numeric_level = getattr(logging, level, None)
    assert numeric_level, f"No level: {level}"

    fmt = "%(asctime)s %(name)-44s %(message)s"
    date_fmt = "%Y-%m-%d %H:%M:%S"

    try:
        import coloredlogs

        coloredlogs.install(level=numeric_level, fmt=fmt, date_fmt=date_fmt)
    except ImportError:
        # non-ANSI e.g. Docker
        logging.basicConfig(level=numeric_level, format=fmt, datefmt=date_fmt)

    # Mute noise
    logging.getLogger("web3.providers.HTTPProvider").setLevel(logging.WARNING)
    logging.getLogger("web3.RequestManager").setLevel(logging.WARNING)
    logging.getLogger("urllib3.connectionpool").setLevel(logging.WARNING)
    return logging.getLogger()
