#!/usr/bin/env python3
"""
Container startup script.
Runs migrations, creates the first admin if configured, then serves the API.
"""

import os
import subprocess
import sys


def run_command(cmd: list[str], description: str) -> bool:
    """Run a command and return success status."""
    print(f"\n=== {description} ===")
    try:
        subprocess.run(cmd, check=True)
        return True
    except subprocess.CalledProcessError as e:
        print(f"Warning: {description} failed with code {e.returncode}")
        return False


def main():
    print("\n" + "=" * 50)
    print("Helpdesk Startup Script")
    print("=" * 50)

    if not run_command(["alembic", "upgrade", "head"], "Running database migrations"):
        sys.exit(1)

    # Create admin if environment variables are set
    email = os.environ.get("ADMIN_EMAIL", "").strip()
    password = os.environ.get("ADMIN_PASSWORD", "").strip()

    if email and password:
        name = os.environ.get("ADMIN_NAME", "Admin").strip()

        print("\n=== Creating Admin ===")
        result = subprocess.run([
            sys.executable, "scripts/create_admin.py",
            "--email", email,
            "--password", password,
            "--name", name,
        ])
        # Don't fail if an admin already exists
        if result.returncode != 0:
            print("Note: Admin creation returned non-zero (may already exist)")
    else:
        print("\nSkipping admin creation (ADMIN_EMAIL/ADMIN_PASSWORD not set)")

    port = os.environ.get("PORT", "8000")
    print(f"\n=== Starting uvicorn on port {port} ===\n")

    os.execvp("uvicorn", [
        "uvicorn",
        "helpdesk.main:app",
        "--host", "0.0.0.0",
        "--port", port,
    ])


if __name__ == "__main__":
    main()
