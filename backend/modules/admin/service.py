"""
User administration service.

Loads the target, asks the Role Authorizer, then applies the change.
A sub_admin's creations are serialized per workspace so two concurrent
requests cannot both slip under the quota.
"""

import asyncio
import logging
from typing import Optional

from modules.accounts import (
    IUserRepository,
    User,
    UserNotFoundError,
    UserSummary,
    UsernameTakenError,
    hash_password,
    new_user,
    validate_tenant_assignment,
)
from modules.authz import (
    Action,
    InsufficientPermissionsError,
    MANAGER_ROLES,
    Role,
    RoleAuthorizer,
    error_for,
)
from modules.tenants import ITenantRepository, TenantNotFoundError
from modules.verification import IVerificationService, IVerificationTokenStore
from shared.locks import KeyedLocks
from shared.models import AuthenticatedUser

from .interfaces import IAdminService
from .models import CreateUserRequest, UserListResponse

logger = logging.getLogger(__name__)


class AdminService(IAdminService):
    """Implementation of user administration."""

    def __init__(
        self,
        users: IUserRepository,
        tenants: ITenantRepository,
        authorizer: RoleAuthorizer,
        verification: IVerificationService,
        tokens: IVerificationTokenStore,
        locks: Optional[KeyedLocks] = None,
    ):
        self._users = users
        self._tenants = tenants
        self._authorizer = authorizer
        self._verification = verification
        self._tokens = tokens
        self._locks = locks or KeyedLocks()

    async def _load(self, user_id: str) -> User:
        user = await self._users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    async def _require_tenant(self, tenant_ref: Optional[str]) -> None:
        if tenant_ref is not None and await self._tenants.get_by_id(tenant_ref) is None:
            raise TenantNotFoundError()

    def _authorize(
        self, caller: AuthenticatedUser, target: User, action: Action, **kwargs
    ) -> None:
        decision = self._authorizer.check(
            Role(caller.role),
            caller.tenant_ref,
            target.role,
            target.tenant_ref,
            action,
            is_self=caller.id == target.id,
            **kwargs,
        )
        if not decision.allowed:
            logger.warning(
                f"{action.value} denied: {caller.username} on {target.username} "
                f"({decision.reason.value})"
            )
            raise error_for(decision)

    async def create_user(
        self, caller: AuthenticatedUser, request: CreateUserRequest
    ) -> UserSummary:
        caller_role = Role(caller.role)
        tenant_ref = request.tenant_ref
        if tenant_ref is None and caller_role == Role.SUB_ADMIN:
            tenant_ref = caller.tenant_ref

        async with self._locks.hold(f"tenant:{tenant_ref}"):
            population = None
            if caller_role == Role.SUB_ADMIN and caller.tenant_ref is not None:
                population = await self._users.count_in_tenant(
                    caller.tenant_ref, exclude_user_id=caller.id
                )

            decision = self._authorizer.check(
                caller_role,
                caller.tenant_ref,
                request.role,
                tenant_ref,
                Action.CREATE,
                tenant_population=population,
            )
            if not decision.allowed:
                logger.warning(
                    f"create denied: {caller.username} creating {request.username} "
                    f"({decision.reason.value})"
                )
                raise error_for(decision)

            validate_tenant_assignment(request.role, tenant_ref)
            await self._require_tenant(tenant_ref)
            if await self._users.get_by_username(request.username) is not None:
                raise UsernameTakenError(request.username)

            record = await asyncio.to_thread(
                new_user, request.username, request.password, request.role, tenant_ref
            )
            user = await self._users.create(record)

        logger.info(
            f"User created: {user.username} ({user.role.value}) by {caller.username}"
        )
        return UserSummary.from_user(user)

    async def list_users(self, caller: AuthenticatedUser) -> UserListResponse:
        caller_role = Role(caller.role)
        if caller_role not in MANAGER_ROLES:
            raise InsufficientPermissionsError(Role.SUB_ADMIN.value, caller.role)

        tenant_filter = None if caller_role == Role.ADMIN else caller.tenant_ref
        users = await self._users.list(tenant_ref=tenant_filter)
        return UserListResponse(
            users=[UserSummary.from_user(u) for u in users],
            total=len(users),
        )

    async def change_role(
        self, caller: AuthenticatedUser, user_id: str, role: Role
    ) -> UserSummary:
        target = await self._load(user_id)
        self._authorize(caller, target, Action.CHANGE_ROLE, new_role=role)

        tenant_ref = None if role == Role.ADMIN else target.tenant_ref
        validate_tenant_assignment(role, tenant_ref)

        user = await self._users.update(target.id, {"role": role, "tenant_ref": tenant_ref})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(
            f"Role of {user.username} changed {target.role.value} -> {role.value} "
            f"by {caller.username}"
        )
        return UserSummary.from_user(user)

    async def change_tenant(
        self, caller: AuthenticatedUser, user_id: str, tenant_ref: str
    ) -> UserSummary:
        target = await self._load(user_id)
        self._authorize(caller, target, Action.CHANGE_TENANT, new_tenant=tenant_ref)

        validate_tenant_assignment(target.role, tenant_ref)

        async with self._locks.hold(f"tenant:{tenant_ref}"):
            await self._require_tenant(tenant_ref)
            user = await self._users.update(target.id, {"tenant_ref": tenant_ref})
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"{user.username} moved to tenant {tenant_ref} by {caller.username}")
        return UserSummary.from_user(user)

    async def delete_user(self, caller: AuthenticatedUser, user_id: str) -> None:
        target = await self._load(user_id)
        self._authorize(caller, target, Action.DELETE)

        async with self._locks.hold(target.id):
            await self._tokens.supersede_open(target.id)
            if not await self._users.delete(target.id):
                raise UserNotFoundError(user_id)
        logger.info(f"User deleted: {target.username} by {caller.username}")

    async def reset_password(
        self, caller: AuthenticatedUser, user_id: str, password: str
    ) -> UserSummary:
        target = await self._load(user_id)
        self._authorize(caller, target, Action.RESET_PASSWORD)

        password_hash = await asyncio.to_thread(hash_password, password)
        async with self._locks.hold(target.id):
            user = await self._users.update(
                target.id,
                {
                    "password_hash": password_hash,
                    "requires_verification_on_next_login": True,
                },
            )
        if user is None:
            raise UserNotFoundError(user_id)
        logger.info(f"Password reset for {user.username} by {caller.username}")
        return UserSummary.from_user(user)

    async def reset_biometric(
        self, caller: AuthenticatedUser, user_id: str
    ) -> UserSummary:
        return await self._verification.reset_verification(caller, user_id)
