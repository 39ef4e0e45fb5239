"""
Session Issuer.

Authenticates credentials against the Credential Store, checks the
user against the origin the login came from, and issues the session
credential. Logins on the wrong origin are answered with a Redirect
Bridge URL instead of a failure.
"""

import asyncio
import logging

from modules.accounts import (
    DUMMY_HASH,
    IUserRepository,
    User,
    UserSummary,
    VerificationState,
    verify_password,
)
from modules.authz import Role
from modules.tenants import (
    ITenantRepository,
    OriginKind,
    Resolution,
    TenantInactiveError,
    TenantNotFoundError,
    TenantResolver,
)
from shared.models import AuthenticatedUser

from .exceptions import (
    InvalidCredentialsError,
    InvalidSessionError,
    WorkspaceAccessDeniedError,
    WrongOriginError,
)
from .interfaces import IAuthService
from .models import LoginRequest, LoginResponse
from .redirect import RedirectBridge
from .sessions import SessionCodec

logger = logging.getLogger(__name__)


def requires_biometric(user: User) -> bool:
    """Whether a user must complete biometric verification after login."""
    return (
        user.requires_verification_on_next_login
        and user.verification_state != VerificationState.VERIFIED
        and user.role != Role.ADMIN
    )


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Sessions are stateless: validate_session trusts the signature and
    expiry of the credential and never consults storage.
    """

    def __init__(
        self,
        users: IUserRepository,
        tenants: ITenantRepository,
        resolver: TenantResolver,
        codec: SessionCodec,
        bridge: RedirectBridge,
    ):
        self._users = users
        self._tenants = tenants
        self._resolver = resolver
        self._codec = codec
        self._bridge = bridge

    async def authenticate(self, username: str, password: str) -> User:
        """
        Check a username and password.

        Unknown usernames are compared against a dummy hash so both failure
        paths cost the same.

        Raises:
            InvalidCredentialsError: If either is wrong
        """
        user = await self._users.get_by_username(username)
        stored_hash = user.password_hash if user else DUMMY_HASH
        matches = await asyncio.to_thread(verify_password, password, stored_hash)
        if user is None or not matches:
            logger.warning(f"Failed login for username '{username}'")
            raise InvalidCredentialsError()
        return user

    async def login(self, request: LoginRequest, host: str = "") -> LoginResponse:
        """
        Authenticate a user on the origin they submitted from.

        The origin is the subdomain in the request body when present,
        otherwise the Host header.

        Raises:
            InvalidCredentialsError: If the credentials are wrong
            TenantNotFoundError: If the origin names no workspace
            WorkspaceAccessDeniedError: If the user is not a member of the workspace
            TenantInactiveError: If the user's workspace is not active
        """
        user = await self.authenticate(request.username, request.password)

        if request.subdomain is not None:
            resolution = await self._resolver.resolve_subdomain(request.subdomain)
        else:
            resolution = await self._resolver.resolve(host)

        try:
            await self._check_origin(user, resolution)
        except WrongOriginError as e:
            return self._redirect_home(user, e.home_origin)

        session = self._codec.issue(user)
        logger.info(
            f"Login: {user.username} ({user.role.value}) on {resolution.kind.value}"
        )
        return LoginResponse(
            session_credential=session.token,
            user=UserSummary.from_user(user),
            requires_biometric=requires_biometric(user),
        )

    async def _check_origin(self, user: User, resolution: Resolution) -> None:
        if resolution.kind == OriginKind.NOT_FOUND:
            raise TenantNotFoundError()

        if resolution.kind == OriginKind.TENANT_SCOPED:
            tenant = resolution.tenant
            if user.role == Role.ADMIN:
                return
            if tenant is None or user.tenant_ref != tenant.id:
                logger.warning(
                    f"Workspace access denied: {user.username} on {resolution.subdomain}"
                )
                raise WorkspaceAccessDeniedError()
            if not tenant.is_active:
                raise TenantInactiveError(tenant.status.value)
            return

        if resolution.kind == OriginKind.CENTRAL_ADMIN and user.role == Role.ADMIN:
            return

        # Central origin for a tenant user, or the identity origin for anyone
        raise WrongOriginError(await self.home_origin(user))

    def _redirect_home(self, user: User, home: str) -> LoginResponse:
        session = self._codec.issue(user)
        needs_biometric = requires_biometric(user)
        redirect_url = self._bridge.build(home, session, user, needs_biometric)
        logger.info(f"Login: {user.username} redirected to {home}")
        return LoginResponse(
            session_credential=session.token,
            user=UserSummary.from_user(user),
            requires_biometric=needs_biometric,
            redirect_url=redirect_url,
        )

    async def home_origin(self, user: User) -> str:
        """
        The origin a user should work on.

        Raises:
            WorkspaceAccessDeniedError: If the user's tenant no longer exists
        """
        if user.role == Role.ADMIN or user.tenant_ref is None:
            return self._resolver.central_origin()
        tenant = await self._tenants.get_by_id(user.tenant_ref)
        if tenant is None:
            logger.warning(f"User {user.username} references a missing tenant")
            raise WorkspaceAccessDeniedError()
        return self._resolver.tenant_origin(tenant.subdomain)

    async def validate_session(self, token: str) -> AuthenticatedUser:
        """Verify a session credential and return the caller it proves."""
        claims = self._codec.decode(token)
        return AuthenticatedUser(
            id=claims.sub,
            username=claims.username,
            role=claims.role,
            tenant_ref=claims.tenant_ref,
        )

    async def get_me(self, caller: AuthenticatedUser) -> UserSummary:
        """
        Load the caller's current stored summary.

        Raises:
            InvalidSessionError: If the user was deleted after the session was issued
        """
        user = await self._users.get_by_id(caller.id)
        if user is None:
            raise InvalidSessionError("Session user no longer exists")
        return UserSummary.from_user(user)
