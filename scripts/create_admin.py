#!/usr/bin/env python3
"""
CLI script to create a helpdesk admin user.

Usage (interactive):
    python scripts/create_admin.py

Usage (non-interactive):
    python scripts/create_admin.py --email admin@example.com --password secret123 --name "Site Admin"
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add the project root to the path
sys.path.insert(0, str(Path(__file__).parent.parent))

from getpass import getpass
from sqlalchemy import select

from helpdesk.database import async_session_factory, engine
from helpdesk.models import User
from helpdesk.models.user import Role
from helpdesk.schemas.auth import PASSWORD_PATTERN
from helpdesk.utils.security import hash_password

MIN_PASSWORD_LENGTH = 8


def password_problem(password: str) -> str | None:
    """Return why a password is unacceptable, or None."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters."
    if not PASSWORD_PATTERN.match(password):
        return "Password must contain at least one letter and one digit."
    return None


async def create_admin(
    email: str | None = None,
    password: str | None = None,
    name: str | None = None,
    interactive: bool = True,
    force: bool = False,
):
    """Create an admin user."""
    print("\n" + "=" * 50)
    print("Helpdesk - Admin Setup")
    print("=" * 50 + "\n")

    # Get email
    if not email:
        while True:
            email = input("Enter email address: ").strip().lower()
            if "@" in email and "." in email:
                break
            print("Please enter a valid email address.")
    else:
        email = email.strip().lower()
        if "@" not in email or "." not in email:
            print("Invalid email address.")
            return False

    # Get password
    if not password:
        while True:
            password = getpass(f"Enter password (min {MIN_PASSWORD_LENGTH} characters, letters and digits): ")
            problem = password_problem(password)
            if problem is None:
                break
            print(problem)

        password_confirm = getpass("Confirm password: ")
        if password != password_confirm:
            print("\nPasswords do not match. Aborting.")
            return False
    else:
        problem = password_problem(password)
        if problem:
            print(problem)
            return False

    # Get name
    if not name:
        name = input("Enter display name: ").strip() if interactive else ""
        if not name:
            name = "Admin"

    async with async_session_factory() as session:
        result = await session.execute(
            select(User).where(User.role == Role.ADMIN.value).limit(1)
        )
        existing = result.scalar_one_or_none()

        if existing and not force:
            print(f"\nAn admin already exists: {existing.email}")
            if interactive:
                confirm = input("Create another admin? (y/n): ").strip().lower()
                if confirm != "y":
                    print("Aborting.")
                    return False
            else:
                print("Use --force to create another admin.")
                return False

        result = await session.execute(select(User).where(User.email == email))
        if result.scalar_one_or_none():
            print(f"\nUser with email {email} already exists.")
            return False

        user = User(
            email=email,
            password_hash=hash_password(password),
            name=name,
            role=Role.ADMIN.value,
            is_active=True,
        )

        session.add(user)
        await session.commit()
        await session.refresh(user)

        print("\n" + "=" * 50)
        print("Admin Created Successfully!")
        print("=" * 50)
        print(f"  Email: {user.email}")
        print(f"  Name: {user.name}")
        print(f"  ID: {user.id}")
        print("=" * 50 + "\n")

        return True


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Create a helpdesk admin user")
    parser.add_argument("--email", "-e", help="Admin email address")
    parser.add_argument("--password", "-p", help=f"Admin password (min {MIN_PASSWORD_LENGTH} chars)")
    parser.add_argument("--name", "-n", help="Display name")
    parser.add_argument("--force", action="store_true", help="Create even if an admin already exists")

    args = parser.parse_args()

    # Determine if running interactively
    interactive = not (args.email and args.password)

    try:
        success = await create_admin(
            email=args.email,
            password=args.password,
            name=args.name,
            interactive=interactive,
            force=args.force,
        )
        sys.exit(0 if success else 1)
    except KeyboardInterrupt:
        print("\n\nAborted by user.")
        sys.exit(1)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())
