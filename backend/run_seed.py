#!/usr/bin/env python
"""
Create the initial global admin account.

The password is never hard-coded: pass --password or set
BARIDA_SEED_ADMIN_PASSWORD.

Usage:
    python run_seed.py --password 's3cret'
    python run_seed.py --username root --workspace "Acme Plant:acme"
"""

import argparse
import asyncio
import os
import sys
from typing import Optional

from rich.console import Console

from api.dependencies import ServiceContainer
from modules.accounts import IUserRepository, User, new_user
from modules.authz import Role
from modules.tenants import ITenantRepository, Tenant
from shared.config import get_settings

console = Console()

PASSWORD_ENV = "BARIDA_SEED_ADMIN_PASSWORD"


async def seed_admin(users: IUserRepository, username: str, password: str) -> Optional[User]:
    """Create the admin unless the username already exists. Returns the new user."""
    if await users.get_by_username(username) is not None:
        return None
    return await users.create(new_user(username, password, role=Role.ADMIN))


async def seed_workspace(
    tenants: ITenantRepository, name: str, subdomain: str, created_by: str
) -> Optional[Tenant]:
    """Create a workspace unless the subdomain is taken. Returns the new tenant."""
    if await tenants.get_by_subdomain(subdomain) is not None:
        return None
    return await tenants.create(
        Tenant(id="", name=name, subdomain=subdomain, created_by=created_by)
    )


async def run(username: str, password: str, workspace: Optional[str]) -> None:
    container = ServiceContainer(get_settings())

    admin = await seed_admin(container.users, username, password)
    if admin is None:
        console.print(f"[yellow]User '{username}' already exists, skipped[/yellow]")
        admin = await container.users.get_by_username(username)
    else:
        console.print(f"[green]✓[/green] Created admin '{username}'")

    if workspace:
        name, _, subdomain = workspace.rpartition(":")
        container.tenant_service.validate_subdomain(subdomain)
        tenant = await seed_workspace(container.tenants, name or subdomain, subdomain, admin.id)
        if tenant is None:
            console.print(f"[yellow]Workspace '{subdomain}' already exists, skipped[/yellow]")
        else:
            console.print(f"[green]✓[/green] Created workspace '{subdomain}'")


def main():
    parser = argparse.ArgumentParser(description="Seed the Barida identity store")
    parser.add_argument("--username", default="admin", help="Admin username")
    parser.add_argument("--password", help=f"Admin password (or set {PASSWORD_ENV})")
    parser.add_argument("--workspace", metavar="NAME:SUBDOMAIN", help="Also create a workspace")
    args = parser.parse_args()

    password = args.password or os.environ.get(PASSWORD_ENV)
    if not password:
        console.print(f"[red]Error:[/red] pass --password or set {PASSWORD_ENV}")
        sys.exit(1)

    if get_settings().storage_backend == "memory":
        console.print("[yellow]Warning:[/yellow] memory storage; seeded data is discarded on exit")

    asyncio.run(run(args.username, password, args.workspace))


if __name__ == "__main__":
    main()
