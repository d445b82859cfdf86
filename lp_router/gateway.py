"""Outbound gateway routing table.

The gateway owns one router per destination domain. Routers and their
configs are immutable, so changing a route means building a new router
and pointing the domain to it with :py:meth:`OutboundGateway.set_domain_router`.
"""

import logging
from dataclasses import dataclass

from lp_router.exceptions import RouterConfigError, RouterNotFound
from lp_router.routers.base import Router, Sender, SubmissionReceipt

logger = logging.getLogger(__name__)

#: EVM chain ids are stored as u64
MAX_EVM_CHAIN_ID = 2**64 - 1


@dataclass(slots=True, frozen=True)
class Domain:
    """EVM destination domain, keyed by EVM chain id."""

    #: EIP-155 chain id of the destination chain
    chain_id: int

    def __post_init__(self):
        if type(self.chain_id) is not int or not 0 < self.chain_id <= MAX_EVM_CHAIN_ID:
            raise RouterConfigError(f"EVM chain id must be a positive u64, got {self.chain_id!r}")

    def __str__(self):
        return f"EVM({self.chain_id})"


class OutboundGateway:
    """Dispatch outbound messages to the router of their destination domain."""

    def __init__(self):
        self._routers: dict[Domain, Router] = {}

    def set_domain_router(self, domain: Domain, router: Router) -> None:
        """Set or replace the router for a domain.

        The new router is not initialised, call :py:meth:`initialize_router`.
        """
        previous = self._routers.get(domain)
        self._routers[domain] = router
        if previous is None:
            logger.info("Router for %s set to %s", domain, router)
        else:
            logger.info("Router for %s replaced: %s -> %s", domain, previous, router)

    def remove_domain_router(self, domain: Domain) -> Router:
        """Remove the route for a domain.

        :return:
            The removed router.
        """
        router = self.get_domain_router(domain)
        del self._routers[domain]
        logger.info("Router for %s removed", domain)
        return router

    def get_domain_router(self, domain: Domain) -> Router:
        try:
            return self._routers[domain]
        except KeyError as e:
            raise RouterNotFound(f"no router for domain {domain}") from e

    def initialize_router(self, domain: Domain) -> None:
        self.get_domain_router(domain).initialize()

    def send(self, domain: Domain, sender: Sender, message: bytes) -> SubmissionReceipt:
        """Send a message to a domain.

        A single attempt. Any :py:class:`~lp_router.exceptions.SendError`
        is propagated and retrying is up to the caller.
        """
        router = self.get_domain_router(domain)
        logger.info("Sending %d byte message to %s via %s", len(message), domain, router)
        return router.send(sender, message)
