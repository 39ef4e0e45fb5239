"""Tests for the Tenant Resolver."""

import pytest

from modules.tenants import (
    InMemoryTenantRepository,
    OriginKind,
    Tenant,
    TenantResolver,
    TenantStatus,
    normalize_host,
)


@pytest.fixture
def repo() -> InMemoryTenantRepository:
    return InMemoryTenantRepository()


@pytest.fixture
def resolver(repo) -> TenantResolver:
    return TenantResolver(repo, root_domain="barida.xyz")


async def _add(repo, subdomain: str, status: TenantStatus = TenantStatus.ACTIVE) -> Tenant:
    return await repo.create(
        Tenant(id=f"tenant-{subdomain}", name=subdomain.title(), subdomain=subdomain, status=status)
    )


class TestNormalizeHost:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("ACME.Barida.xyz", "acme.barida.xyz"),
            ("acme.barida.xyz:8443", "acme.barida.xyz"),
            ("barida.xyz.", "barida.xyz"),
            ("[::1]:8000", "::1"),
            (" localhost ", "localhost"),
        ],
    )
    def test_normalize(self, raw, expected):
        assert normalize_host(raw) == expected


class TestResolve:
    @pytest.mark.asyncio
    async def test_tenant_subdomain_resolves_to_tenant(self, repo, resolver):
        acme = await _add(repo, "acme")
        resolution = await resolver.resolve("acme.barida.xyz")
        assert resolution.kind == OriginKind.TENANT_SCOPED
        assert resolution.tenant == acme

    @pytest.mark.asyncio
    async def test_unknown_subdomain_is_not_found(self, resolver):
        resolution = await resolver.resolve("acme.barida.xyz")
        assert resolution.kind == OriginKind.NOT_FOUND
        assert resolution.tenant is None

    @pytest.mark.asyncio
    async def test_identity_is_handoff_regardless_of_tenants(self, repo, resolver):
        # A tenant row named identity cannot shadow the handoff origin
        await _add(repo, "identity")
        resolution = await resolver.resolve("identity.barida.xyz")
        assert resolution.kind == OriginKind.IDENTITY_HANDOFF
        assert resolution.tenant is None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "host",
        ["barida.xyz", "www.barida.xyz", "admin.barida.xyz", "localhost:5173", "127.0.0.1", "[::1]"],
    )
    async def test_central_hosts(self, resolver, host):
        assert (await resolver.resolve(host)).kind == OriginKind.CENTRAL_ADMIN

    @pytest.mark.asyncio
    @pytest.mark.parametrize("host", ["acme.example.com", "a.b.barida.xyz", "evilbarida.xyz"])
    async def test_foreign_or_nested_hosts_are_not_found(self, repo, resolver, host):
        await _add(repo, "acme")
        assert (await resolver.resolve(host)).kind == OriginKind.NOT_FOUND

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", [TenantStatus.INACTIVE, TenantStatus.MAINTENANCE])
    async def test_inactive_tenant_still_resolves(self, repo, resolver, status):
        await _add(repo, "sleepy", status)
        resolution = await resolver.resolve("sleepy.barida.xyz")
        assert resolution.kind == OriginKind.TENANT_SCOPED
        assert not resolution.tenant.is_active

    @pytest.mark.asyncio
    async def test_host_is_case_insensitive(self, repo, resolver):
        await _add(repo, "acme")
        assert (await resolver.resolve("ACME.BARIDA.XYZ:443")).is_tenant_scoped


class TestResolveSubdomain:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("label", [None, "", "www", "admin"])
    async def test_central_labels(self, resolver, label):
        assert (await resolver.resolve_subdomain(label)).kind == OriginKind.CENTRAL_ADMIN

    @pytest.mark.asyncio
    async def test_malformed_label_is_not_found(self, resolver):
        assert (await resolver.resolve_subdomain("bad_label!")).kind == OriginKind.NOT_FOUND


class TestOrigins:
    def test_origin_builders(self, resolver):
        assert resolver.central_origin() == "https://barida.xyz"
        assert resolver.identity_origin() == "https://identity.barida.xyz"
        assert resolver.tenant_origin("acme") == "https://acme.barida.xyz"

    def test_reserved_subdomains(self, resolver):
        assert resolver.reserved_subdomains == {"www", "admin", "identity"}
