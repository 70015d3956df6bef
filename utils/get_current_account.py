from fastapi import Request, HTTPException, Depends
from sqlalchemy.orm import Session

from core.auth import get_auth_provider
from db.session import get_db
from models import Account, AccountRole


def get_current_account(
    request: Request,
    db: Session = Depends(get_db)
) -> Account:
    """Get the currently authenticated account.

    Args:
        request: FastAPI request object
        db: Database session

    Returns:
        Account object for the authenticated user

    Raises:
        HTTPException: If authentication fails or account not found
    """
    auth_header = request.headers.get("Authorization")

    if not auth_header or not auth_header.startswith("Bearer "):
        raise HTTPException(
            status_code=401,
            detail="Missing or invalid Authorization header"
        )

    token = auth_header.replace("Bearer ", "")

    provider = get_auth_provider()
    decoded = provider.validate_token(token)

    sub = decoded.get("sub")
    if not sub or not str(sub).isdigit():
        raise HTTPException(status_code=401, detail="Invalid token payload")

    account = db.get(Account, int(sub))
    if not account or account.suspended:
        raise HTTPException(status_code=401, detail="Account not found")

    return account


def get_current_account_admin(
    account: Account = Depends(get_current_account)
) -> Account:
    """Get the currently authenticated account and verify admin role.

    Raises:
        HTTPException: If account is not admin (403)
    """
    if account.role != AccountRole.ADMIN:
        raise HTTPException(
            status_code=403,
            detail="Admin access required"
        )
    return account
