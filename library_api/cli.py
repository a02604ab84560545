"""Developer commands exposed as console scripts.

Usage (from project root):
  library-runserver --host=0.0.0.0 --port=8000 --no-reload
  library-run-tests -k auth      # extra args go to pytest
  library-migrate                 # defaults to `alembic upgrade head`
  library-init-env                # copies .env.example -> .env if missing
  library-create-admin --email=admin@example.com --username=admin --password=...
"""
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Dict, List

ROOT = Path(__file__).resolve().parents[1]


def _flags(argv: List[str]) -> Dict[str, str]:
    """Parse ``--key=value`` and bare ``--flag`` arguments."""
    parsed = {}
    for arg in argv:
        if not arg.startswith("--"):
            continue
        key, _, value = arg[2:].partition("=")
        parsed[key] = value if value else "true"
    return parsed


def runserver() -> None:
    """Serve the app with uvicorn (reload on by default)."""
    import uvicorn

    flags = _flags(sys.argv[1:])
    host = flags.get("host", "127.0.0.1")
    port = int(flags.get("port", 8000))
    reload = "no-reload" not in flags
    print(f"Starting uvicorn on {host}:{port} (reload={reload})")
    uvicorn.run("library_api.main:app", host=host, port=port, reload=reload)


def run_tests() -> None:
    subprocess.run(["pytest", *sys.argv[1:]], check=True, cwd=ROOT)


def run_migrations() -> None:
    args = sys.argv[1:] or ["upgrade", "head"]
    subprocess.run(["alembic", *args], check=True, cwd=ROOT)


def init_env() -> None:
    src = ROOT / ".env.example"
    dst = ROOT / ".env"
    if dst.exists():
        print(f".env already exists at {dst}")
        return
    if not src.exists():
        print(f".env.example not found at {src}")
        return
    shutil.copy(src, dst)
    print(f"Created .env from .env.example at {dst}")


def create_admin() -> None:
    """Create an active admin account, or promote an existing one by email."""
    from library_api.core.config import settings
    from library_api.core.constants import UserRole, UserStatus
    from library_api.core.database import SessionLocal
    from library_api.core.security import PasswordHasher
    from library_api.models.user import User

    flags = _flags(sys.argv[1:])
    missing = [key for key in ("email", "username", "password") if not flags.get(key)]
    if missing:
        print(f"Missing required flags: {', '.join('--' + key for key in missing)}")
        sys.exit(2)

    passwords = PasswordHasher(settings.password)
    strength = passwords.validate_strength(flags["password"])
    if not strength.is_valid:
        print("; ".join(strength.errors))
        sys.exit(2)

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.email == flags["email"]).first()
        if user:
            user.role = UserRole.ADMIN
            user.status = UserStatus.ACTIVE
            user.is_active = True
            action = "Promoted"
        else:
            user = User(
                username=flags["username"],
                email=flags["email"],
                password_hash=passwords.hash(flags["password"]),
                role=UserRole.ADMIN,
                status=UserStatus.ACTIVE,
                is_active=True,
            )
            db.add(user)
            action = "Created"
        db.commit()
        print(f"{action} admin {user.email} (id: {user.id})")
    finally:
        db.close()


if __name__ == "__main__":
    # Allow running the helpers directly: python -m library_api.cli runserver
    commands = {
        "runserver": runserver,
        "run-tests": run_tests,
        "migrate": run_migrations,
        "init-env": init_env,
        "create-admin": create_admin,
    }
    if len(sys.argv) <= 1 or sys.argv[1] not in commands:
        print(__doc__)
        sys.exit(0 if len(sys.argv) <= 1 else 1)
    command = commands[sys.argv.pop(1)]
    command()
