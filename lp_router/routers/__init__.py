"""Outbound message routers.

Router variants, all implementing :class:`Router`:

- :class:`EVMRouter` — submit the message as call data to a fixed EVM contract
- :class:`AxelarEVMRouter` — wrap the message in an Axelar ``callContract()``
  call and submit it through an EVM router

Building blocks:

- :class:`SubmissionMechanism` — injectable transaction submission interface
- :class:`SubmissionReceipt` — result of a submitted transaction
- :class:`EVMDomain`, :class:`FeeValues` — EVM router configuration
- :class:`AxelarEVMRouterConfig` — Axelar router configuration
- :func:`encode_axelar_call`, :func:`decode_axelar_call` — Axelar call data codec
"""

from lp_router.routers.axelar_evm import AxelarEVMRouter, AxelarEVMRouterConfig, decode_axelar_call, encode_axelar_call
from lp_router.routers.base import Router, SubmissionMechanism, SubmissionReceipt
from lp_router.routers.evm import EVMDomain, EVMRouter, FeeValues

__all__ = [
    "AxelarEVMRouter",
    "AxelarEVMRouterConfig",
    "EVMDomain",
    "EVMRouter",
    "FeeValues",
    "Router",
    "SubmissionMechanism",
    "SubmissionReceipt",
    "decode_axelar_call",
    "encode_axelar_call",
]
