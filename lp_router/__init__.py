"""Outbound cross-chain message routing for Liquidity Pools.

Turns opaque Liquidity Pools messages into the exact call data a remote
domain expects and submits them through an EVM transaction.

See :py:mod:`lp_router.routers` for the available transports and
:py:mod:`lp_router.gateway` for the per-domain routing table.
"""
