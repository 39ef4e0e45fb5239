"""
Tenant Resolver.

Maps an inbound hostname to one of CentralAdmin, IdentityHandoff,
TenantScoped(tenant) or NotFound, and builds origin URLs for each kind.

    barida.xyz, www.barida.xyz, admin.barida.xyz  -> CentralAdmin
    identity.barida.xyz                           -> IdentityHandoff
    acme.barida.xyz                               -> TenantScoped(acme) / NotFound
"""

import ipaddress
import logging
from typing import Optional

from .interfaces import ITenantRepository
from .models import SUBDOMAIN_PATTERN, OriginKind, Resolution

logger = logging.getLogger(__name__)

_CENTRAL = Resolution(kind=OriginKind.CENTRAL_ADMIN)
_NOT_FOUND = Resolution(kind=OriginKind.NOT_FOUND)


def normalize_host(host: str) -> str:
    """Lowercase a Host header value and strip its port and trailing dot."""
    host = host.strip().lower()
    if host.startswith("["):
        # Bracketed IPv6 literal, possibly with a port
        return host[1:].split("]", 1)[0]
    if host.count(":") == 1:
        host = host.split(":", 1)[0]
    return host.rstrip(".")


def _is_local(host: str) -> bool:
    if host == "localhost":
        return True
    try:
        ipaddress.ip_address(host)
    except ValueError:
        return False
    return True


class TenantResolver:
    """
    Classifies request origins.

    Inactive tenants resolve to TENANT_SCOPED like active ones; whether to
    serve them is the caller's decision.
    """

    def __init__(
        self,
        tenants: ITenantRepository,
        root_domain: str = "barida.xyz",
        identity_subdomain: str = "identity",
        central_subdomains: tuple[str, ...] | list[str] = ("www", "admin"),
        scheme: str = "https",
    ):
        self._tenants = tenants
        self.root_domain = root_domain.lower()
        self.identity_subdomain = identity_subdomain.lower()
        self.central_subdomains = frozenset(s.lower() for s in central_subdomains)
        self.scheme = scheme

    @property
    def reserved_subdomains(self) -> frozenset[str]:
        """Labels that can never be assigned to a tenant."""
        return self.central_subdomains | {self.identity_subdomain}

    async def resolve(self, host: str) -> Resolution:
        """
        Resolve a hostname (as sent in the Host header).

        localhost and raw IP addresses resolve to CentralAdmin so local
        development works without DNS. Hosts outside the root domain, and
        hosts more than one label below it, resolve to NotFound.
        """
        host = normalize_host(host)

        if not host or _is_local(host) or host == self.root_domain:
            return _CENTRAL

        suffix = "." + self.root_domain
        if not host.endswith(suffix):
            logger.debug(f"Host outside root domain: {host}")
            return _NOT_FOUND

        label = host[: -len(suffix)]
        if "." in label:
            return _NOT_FOUND

        return await self.resolve_subdomain(label)

    async def resolve_subdomain(self, label: Optional[str]) -> Resolution:
        """
        Resolve a bare subdomain label, as submitted by a login form.

        An empty label means the root domain.
        """
        label = (label or "").strip().lower()

        if not label or label in self.central_subdomains:
            return _CENTRAL

        if label == self.identity_subdomain:
            return Resolution(kind=OriginKind.IDENTITY_HANDOFF, subdomain=label)

        if not SUBDOMAIN_PATTERN.match(label):
            return _NOT_FOUND

        tenant = await self._tenants.get_by_subdomain(label)
        if tenant is None:
            logger.debug(f"No tenant for subdomain: {label}")
            return _NOT_FOUND

        return Resolution(kind=OriginKind.TENANT_SCOPED, tenant=tenant, subdomain=label)

    # -------------------------------------------------------------------------
    # Origin builders
    # -------------------------------------------------------------------------

    def central_origin(self) -> str:
        return f"{self.scheme}://{self.root_domain}"

    def identity_origin(self) -> str:
        return f"{self.scheme}://{self.identity_subdomain}.{self.root_domain}"

    def tenant_origin(self, subdomain: str) -> str:
        return f"{self.scheme}://{subdomain}.{self.root_domain}"
