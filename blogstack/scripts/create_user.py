"""
Provision a user and print a bearer token for it.

Usage:
    python -m blogstack.scripts.create_user --login user --email user@localhost
    python -m blogstack.scripts.create_user --login user --token-only

Users are normally provisioned by the identity provider in front of this
service. This script covers local development: it inserts the user (or reuses
an existing one with ``--token-only``) and prints an access token that the
``/api`` endpoints accept.
"""

from argparse import ArgumentParser, Namespace, RawDescriptionHelpFormatter
from asyncio import run as asyncio_run
from dataclasses import dataclass
from datetime import timedelta
from sys import exit as sys_exit

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from blogstack.db.database import close_db, init_db, transaction
from blogstack.errors import DatabaseError
from blogstack.managers import create_access_token
from blogstack.models import UserDB
from blogstack.repositories import UserRepository


@dataclass(frozen=True)
class UserData:
    """
    User data container.

    Attributes
    ----------
    login : str
        Unique login, becomes the token subject.
    email : str | None
        Optional unique email.
    """

    login: str
    email: str | None = None


async def create_user(user_data: UserData) -> UserDB:
    """
    Insert a user.

    Parameters
    ----------
    user_data : UserData
        User data container.

    Returns
    -------
    UserDB
        Created user.

    Raises
    ------
    ValueError
        If the login or email is already taken.
    """
    async with transaction() as session:
        if await UserRepository(session).get_by_login(user_data.login):
            msg = f"User with login '{user_data.login}' already exists"
            raise ValueError(msg)

        if user_data.email:
            existing_email = await session.execute(
                select(UserDB).where(UserDB.email == user_data.email),
            )
            if existing_email.scalar_one_or_none():
                msg = f"User with email '{user_data.email}' already exists"
                raise ValueError(msg)

        user = UserDB(login=user_data.login, email=user_data.email)
        session.add(user)
        await session.commit()
        await session.refresh(user)
        return user


async def get_user(login: str) -> UserDB:
    """
    Load an existing user by login.

    Raises
    ------
    ValueError
        If no user has this login.
    """
    async with transaction() as session:
        user = await UserRepository(session).get_by_login(login)
    if user is None:
        msg = f"User with login '{login}' not found"
        raise ValueError(msg)
    return user


def issue_token(user: UserDB, expires_minutes: int | None = None) -> str:
    """Sign an access token for ``user``."""
    expires_delta = timedelta(minutes=expires_minutes) if expires_minutes else None
    return create_access_token(user_id=user.id, login=user.login, expires_delta=expires_delta)


def display_token(user: UserDB, token: str) -> None:
    print(f"\n✅ User ready: {user.login} (ID {user.id})")
    print("\nUse the token as a bearer credential:")
    print("  curl 'http://localhost:8000/api/blogs' \\")
    print(f"    -H 'Authorization: Bearer {token}'")


def parse_args(argv: list[str] | None = None) -> Namespace:
    """
    Parse command line arguments.

    Returns
    -------
    argparse.Namespace
        Parsed arguments.
    """
    parser = ArgumentParser(
        description="Create a user and print an access token for it.",
        formatter_class=RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # New user
  python -m blogstack.scripts.create_user -l user -e user@localhost

  # Fresh token for an existing user, valid for a day
  python -m blogstack.scripts.create_user -l user --token-only --expires 1440
        """,
    )

    parser.add_argument("-l", "--login", required=True, help="User login")
    parser.add_argument("-e", "--email", default=None, help="User email (optional)")
    parser.add_argument(
        "--token-only",
        "-t",
        action="store_true",
        help="Do not create the user, only issue a token for an existing one",
    )
    parser.add_argument(
        "--expires",
        type=int,
        default=None,
        help="Token lifetime in minutes (default: ACCESS_TOKEN_EXPIRE_MINUTES)",
    )

    return parser.parse_args(argv)


async def main(argv: list[str] | None = None) -> int:
    """
    Run the provisioning process.

    Returns
    -------
    int
        Exit code (0 for success, 1 for error).
    """
    args = parse_args(argv)

    try:
        await init_db()
        if args.token_only:
            user = await get_user(args.login)
        else:
            user = await create_user(UserData(login=args.login, email=args.email))
        display_token(user, issue_token(user, args.expires))
        return 0

    except ValueError as e:
        print(f"\n❌ Error: {e}")
        return 1
    except (SQLAlchemyError, DatabaseError) as e:
        print(f"\n❌ Database error: {e}")
        return 1
    finally:
        await close_db()


if __name__ == "__main__":
    exit_code = asyncio_run(main())
    sys_exit(exit_code)
