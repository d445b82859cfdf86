"""Protocol constants shared with the remote contracts.

The Axelar names must match the ``AxelarGateway.callContract()`` interface:
https://github.com/axelarnetwork/axelar-cgp-solidity/blob/v4.3.2/contracts/AxelarGateway.sol#L78
"""

#: Axelar gateway function used to forward a payload to a remote contract
AXELAR_FUNCTION_NAME = "callContract"

#: First ``callContract`` parameter, the Axelar name of the remote chain
AXELAR_DESTINATION_CHAIN_PARAM = "destinationChain"

#: Second ``callContract`` parameter, the ``0x`` hex address of the receiving contract
AXELAR_DESTINATION_CONTRACT_ADDRESS_PARAM = "destinationContractAddress"

#: Third ``callContract`` parameter, the serialised Liquidity Pools message
AXELAR_PAYLOAD_PARAM = "payload"

#: Longest Axelar EVM chain name we store, in bytes
MAX_AXELAR_EVM_CHAIN_SIZE = 16

#: Raw EVM address length
EVM_ADDRESS_SIZE = 20

#: Raw Substrate account id length, senders may be given in this form
ACCOUNT_ID_SIZE = 32

#: Keccak-256 code hash length
CODE_HASH_SIZE = 32

#: Largest value accepted for 256-bit fee fields
MAX_UINT256 = 2**256 - 1
