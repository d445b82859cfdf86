"""Axelar ``callContract()`` call data encoding.

Pure logic, no chain needed. The expected bytes in the Moonbeam test are
laid out by hand following the contract ABI rules, so they do not depend
on ``eth_abi`` agreeing with itself.
"""

import pytest
from eth_abi import decode
from eth_utils import function_signature_to_4byte_selector, keccak
from hypothesis import given
from hypothesis import strategies as st

from lp_router.constants import MAX_AXELAR_EVM_CHAIN_SIZE
from lp_router.exceptions import ArgumentEncodingFailed, EncodeError, FunctionDescriptorUnavailable, InvalidChainIdEncoding
from lp_router.routers import axelar_evm
from lp_router.routers.axelar_evm import decode_axelar_call, encode_axelar_call, get_axelar_function_descriptor

MOONBEAM_LP_CONTRACT = bytes.fromhex("00" * 19 + "0a")

CALL_CONTRACT_SELECTOR = keccak(text="callContract(string,string,bytes)")[:4]

chain_names = st.text(max_size=MAX_AXELAR_EVM_CHAIN_SIZE).filter(lambda s: len(s.encode("utf-8")) <= MAX_AXELAR_EVM_CHAIN_SIZE)
addresses = st.binary(min_size=20, max_size=20)
payloads = st.binary(max_size=1024)

# 0xff never appears in UTF-8
invalid_chain_names = st.tuples(st.binary(max_size=7), st.binary(max_size=8)).map(lambda parts: parts[0] + b"\xff" + parts[1])


def _word(n: int) -> bytes:
    return n.to_bytes(32, "big")


def test_descriptor():
    """The fixed descriptor matches the Axelar gateway interface."""
    descriptor = get_axelar_function_descriptor()
    assert descriptor.name == "callContract"
    assert descriptor.signature == "callContract(string,string,bytes)"
    assert descriptor.input_types == ("string", "string", "bytes")
    assert descriptor.selector == CALL_CONTRACT_SELECTOR
    assert descriptor.selector == function_signature_to_4byte_selector("callContract(string,string,bytes)")


def test_encode_moonbeam_bit_exact():
    """Encode a message for Moonbeam and compare to a hand built layout."""
    call_data = encode_axelar_call(b"\xaa\xbb", b"Moonbeam", MOONBEAM_LP_CONTRACT)

    address_str = b"0x000000000000000000000000000000000000000a"
    assert len(address_str) == 42

    expected = (
        CALL_CONTRACT_SELECTOR
        # Head: offsets of the three dynamic arguments
        + _word(0x60)
        + _word(0xA0)
        + _word(0x100)
        # destinationChain
        + _word(8)
        + b"Moonbeam".ljust(32, b"\x00")
        # destinationContractAddress
        + _word(42)
        + address_str.ljust(64, b"\x00")
        # payload
        + _word(2)
        + b"\xaa\xbb".ljust(32, b"\x00")
    )

    assert call_data == expected
    assert decode_axelar_call(call_data) == ("Moonbeam", "0x000000000000000000000000000000000000000a", b"\xaa\xbb")

    # Same input, same bytes
    assert encode_axelar_call(b"\xaa\xbb", b"Moonbeam", MOONBEAM_LP_CONTRACT) == call_data


def test_encode_address_is_lowercase_hex():
    """Mixed case hex digits come out lowercase, not checksummed."""
    address = bytes.fromhex("5c8657b827a138d52a4e3f03683a28b1faac93e3")
    _, contract_hex, _ = decode_axelar_call(encode_axelar_call(b"", b"Ethereum", address))
    assert contract_hex == "0x5c8657b827a138d52a4e3f03683a28b1faac93e3"


def test_encode_empty_payload_and_chain():
    """Empty strings and bytes are valid arguments."""
    call_data = encode_axelar_call(b"", b"", MOONBEAM_LP_CONTRACT)
    chain_name, _, payload = decode_axelar_call(call_data)
    assert chain_name == ""
    assert payload == b""


def test_encode_invalid_utf8_chain():
    """A chain name that is not UTF-8 is rejected with a stable reason."""
    with pytest.raises(InvalidChainIdEncoding) as exc_info:
        encode_axelar_call(b"\xaa", b"Moon\xc3\x28beam", MOONBEAM_LP_CONTRACT)

    assert exc_info.value.reason == "target chain conversion error"
    assert isinstance(exc_info.value, EncodeError)


def test_encode_bad_payload_type():
    """eth_abi refusing the arguments is reported, not raised raw."""
    with pytest.raises(ArgumentEncodingFailed) as exc_info:
        encode_axelar_call("not bytes", b"Moonbeam", MOONBEAM_LP_CONTRACT)

    assert exc_info.value.reason == "cannot encode input for Axelar contract function"


def test_encode_short_address():
    """Addresses must be exactly 20 bytes."""
    with pytest.raises(ArgumentEncodingFailed):
        encode_axelar_call(b"\xaa", b"Moonbeam", b"\x0a" * 19)


@pytest.mark.parametrize("address", [20, 0, "0x000000000000000000000000000000000000000a", None])
def test_encode_address_must_be_bytes(address):
    """Integers and hex strings are not silently turned into an address."""
    with pytest.raises(ArgumentEncodingFailed) as exc_info:
        encode_axelar_call(b"\xaa", b"Moonbeam", address)

    assert exc_info.value.reason == "cannot encode input for Axelar contract function"


@pytest.mark.parametrize("chain", ["Moonbeam", None, 8])
def test_encode_chain_must_be_bytes(chain):
    with pytest.raises(InvalidChainIdEncoding) as exc_info:
        encode_axelar_call(b"\xaa", chain, MOONBEAM_LP_CONTRACT)

    assert exc_info.value.reason == "target chain conversion error"


def test_encode_descriptor_unavailable(monkeypatch):
    """Missing ABI entry is reported before any argument is looked at."""
    monkeypatch.setattr(axelar_evm, "_FUNCTION_DESCRIPTORS", {})

    with pytest.raises(FunctionDescriptorUnavailable) as exc_info:
        encode_axelar_call(b"\xaa", b"Moonbeam", MOONBEAM_LP_CONTRACT)

    assert exc_info.value.reason == "cannot retrieve Axelar contract function"
    assert isinstance(exc_info.value, EncodeError)


def test_decode_foreign_selector():
    """Call data for another function does not decode."""
    call_data = encode_axelar_call(b"\xaa", b"Moonbeam", MOONBEAM_LP_CONTRACT)
    with pytest.raises(ValueError, match="does not match"):
        decode_axelar_call(b"\x00\x00\x00\x00" + call_data[4:])


@given(chain_name=chain_names, address=addresses, payload=payloads)
def test_encode_round_trip(chain_name: str, address: bytes, payload: bytes):
    """Any valid input decodes back to the original arguments."""
    call_data = encode_axelar_call(payload, chain_name.encode("utf-8"), address)

    assert call_data[:4] == CALL_CONTRACT_SELECTOR
    decoded = decode(["string", "string", "bytes"], call_data[4:])
    assert decoded == (chain_name, "0x" + address.hex(), payload)


@given(chain_name=chain_names, address=addresses, payload=payloads)
def test_encode_deterministic(chain_name: str, address: bytes, payload: bytes):
    """Encoding twice gives identical bytes."""
    chain_id = chain_name.encode("utf-8")
    assert encode_axelar_call(payload, chain_id, address) == encode_axelar_call(payload, chain_id, address)


@given(chain_id=invalid_chain_names, address=addresses, payload=payloads)
def test_encode_rejects_any_invalid_utf8(chain_id: bytes, address: bytes, payload: bytes):
    """Invalid UTF-8 always gives InvalidChainIdEncoding."""
    with pytest.raises(InvalidChainIdEncoding):
        encode_axelar_call(payload, chain_id, address)
