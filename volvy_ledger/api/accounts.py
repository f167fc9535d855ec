"""
Client account API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from volvy_ledger.models.base import get_db
from volvy_ledger.services.account_service import AccountService
from volvy_ledger.schemas.account import (
    ClientAccountOpen,
    ClientAccountResponse,
)

router = APIRouter(tags=["Accounts"])


@router.post("/accounts", response_model=ClientAccountResponse, status_code=201)
def open_account(
    request: ClientAccountOpen,
    db: Session = Depends(get_db),
):
    """Open a client account with an optional starting balance."""
    service = AccountService(db)
    try:
        account = service.open_account(request)
        db.commit()
        return account
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))


@router.get(
    "/clients/{client_id}/accounts",
    response_model=list[ClientAccountResponse],
)
def get_client_accounts(
    client_id: str,
    db: Session = Depends(get_db),
):
    """Get all accounts for a client."""
    return AccountService(db).get_client_accounts(client_id)


@router.get(
    "/clients/{client_id}/accounts/{account_id}",
    response_model=ClientAccountResponse,
)
def get_account(
    client_id: str,
    account_id: str,
    db: Session = Depends(get_db),
):
    """Get an account and its current balance."""
    service = AccountService(db)
    try:
        return service.get_account(client_id, account_id)
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))
