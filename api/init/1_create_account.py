"""
Script to create an account with a given role.

Registration through the API only creates client accounts; operators and
operator managers are created here.

Usage:
    python init/1_create_account.py <username> <password> --role operator-manager
"""
import sys
import argparse
import logging
from pathlib import Path
from sqlmodel import Session

# Add the api directory to Python path so we can import from app
script_dir = Path(__file__).parent
api_dir = script_dir.parent
sys.path.insert(0, str(api_dir))

from app.core.database import engine, init_db
from app.core.security import Role
from app.services.account_service import create_account

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Create an account with a given role")
    parser.add_argument("username", help="Username of the new account")
    parser.add_argument("password", help="Password of the new account")
    parser.add_argument(
        "--role",
        choices=[role.value for role in Role],
        default=Role.OPERATOR.value,
        help="Account role (default: operator)",
    )
    args = parser.parse_args()

    init_db()
    with Session(engine) as session:
        account = create_account(session, args.username, args.password, Role(args.role))
    logger.info(f"Account {account.username} created with id {account.id} and role {account.role}")


if __name__ == "__main__":
    try:
        main()
    except Exception as e:
        logger.error("Error creating account: %s", e, exc_info=True)
        sys.exit(1)
