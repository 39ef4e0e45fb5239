"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Storage is chosen by settings.storage_backend: in-memory repositories by
default, Supabase tables when configured.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings
from shared.locks import KeyedLocks

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.accounts.interfaces import IUserRepository
    from modules.admin.interfaces import IAdminService
    from modules.auth.interfaces import IAuthService
    from modules.auth.sessions import SessionCodec
    from modules.authz import RoleAuthorizer
    from modules.tenants.interfaces import ITenantRepository
    from modules.tenants.resolver import TenantResolver
    from modules.tenants.service import TenantService
    from modules.verification.interfaces import (
        IVerificationService,
        IVerificationTokenStore,
    )


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container, and all
    of them share one KeyedLocks so per-user exclusion holds across
    services. Use reset() to clear all cached services for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self.locks = KeyedLocks()
        self._users: "IUserRepository | None" = None
        self._tenants: "ITenantRepository | None" = None
        self._tokens: "IVerificationTokenStore | None" = None
        self._resolver: "TenantResolver | None" = None
        self._codec: "SessionCodec | None" = None
        self._authorizer: "RoleAuthorizer | None" = None
        self._auth_service: "IAuthService | None" = None
        self._tenant_service: "TenantService | None" = None
        self._verification_service: "IVerificationService | None" = None
        self._admin_service: "IAdminService | None" = None

    @property
    def _use_supabase(self) -> bool:
        return self.settings.storage_backend == "supabase"

    # -------------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------------

    @property
    def users(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._users is None:
            if self._use_supabase:
                from modules.accounts.repository import SupabaseUserRepository
                from shared.database import get_supabase_client
                self._users = SupabaseUserRepository(get_supabase_client())
            else:
                from modules.accounts.repository import InMemoryUserRepository
                self._users = InMemoryUserRepository()
        return self._users

    @property
    def tenants(self) -> "ITenantRepository":
        """Get the tenant repository instance."""
        if self._tenants is None:
            if self._use_supabase:
                from modules.tenants.repository import SupabaseTenantRepository
                from shared.database import get_supabase_client
                self._tenants = SupabaseTenantRepository(get_supabase_client())
            else:
                from modules.tenants.repository import InMemoryTenantRepository
                self._tenants = InMemoryTenantRepository()
        return self._tenants

    @property
    def tokens(self) -> "IVerificationTokenStore":
        """Get the verification token store instance."""
        if self._tokens is None:
            if self._use_supabase:
                from modules.verification.store import SupabaseVerificationTokenStore
                from shared.database import get_supabase_client
                self._tokens = SupabaseVerificationTokenStore(get_supabase_client())
            else:
                from modules.verification.store import InMemoryVerificationTokenStore
                self._tokens = InMemoryVerificationTokenStore()
        return self._tokens

    # -------------------------------------------------------------------------
    # Building blocks
    # -------------------------------------------------------------------------

    @property
    def resolver(self) -> "TenantResolver":
        if self._resolver is None:
            from modules.tenants.resolver import TenantResolver
            self._resolver = TenantResolver(
                self.tenants,
                root_domain=self.settings.root_domain,
                identity_subdomain=self.settings.identity_subdomain,
                central_subdomains=self.settings.central_subdomains,
                scheme=self.settings.url_scheme,
            )
        return self._resolver

    @property
    def codec(self) -> "SessionCodec":
        if self._codec is None:
            from modules.auth.sessions import SessionCodec
            self._codec = SessionCodec(
                secret=self.settings.session_secret,
                algorithm=self.settings.session_algorithm,
                audience=self.settings.session_audience,
                issuer=self.settings.session_issuer,
                ttl=timedelta(hours=self.settings.session_ttl_hours),
            )
        return self._codec

    @property
    def authorizer(self) -> "RoleAuthorizer":
        if self._authorizer is None:
            from modules.authz import RoleAuthorizer
            self._authorizer = RoleAuthorizer(quota=self.settings.sub_admin_user_quota)
        return self._authorizer

    # -------------------------------------------------------------------------
    # Services
    # -------------------------------------------------------------------------

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.redirect import RedirectBridge
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                users=self.users,
                tenants=self.tenants,
                resolver=self.resolver,
                codec=self.codec,
                bridge=RedirectBridge(self.settings.bootstrap_path),
            )
        return self._auth_service

    @property
    def tenant_service(self) -> "TenantService":
        """Get the tenant service instance."""
        if self._tenant_service is None:
            from modules.tenants.service import TenantService
            self._tenant_service = TenantService(
                self.tenants, self.resolver, self.users, locks=self.locks
            )
        return self._tenant_service

    @property
    def verification(self) -> "IVerificationService":
        """Get the verification service instance."""
        if self._verification_service is None:
            from modules.verification.service import VerificationService
            self._verification_service = VerificationService(
                users=self.users,
                store=self.tokens,
                authorizer=self.authorizer,
                identity_origin=self.resolver.identity_origin(),
                token_ttl=timedelta(seconds=self.settings.verification_token_ttl_seconds),
                locks=self.locks,
            )
        return self._verification_service

    @property
    def admin(self) -> "IAdminService":
        """Get the admin service instance."""
        if self._admin_service is None:
            from modules.admin.service import AdminService
            self._admin_service = AdminService(
                users=self.users,
                tenants=self.tenants,
                authorizer=self.authorizer,
                verification=self.verification,
                tokens=self.tokens,
                locks=self.locks,
            )
        return self._admin_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self.__init__(self.settings)


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_tenant_service() -> "TenantService":
    """FastAPI dependency for tenant service."""
    return get_container().tenant_service


def get_verification_service() -> "IVerificationService":
    """FastAPI dependency for verification service."""
    return get_container().verification


def get_admin_service() -> "IAdminService":
    """FastAPI dependency for admin service."""
    return get_container().admin
