"""
Transaction API endpoints.

The API layer is thin. It maps ledger errors to status codes
and delegates everything else to the LedgerService.
"""

from fastapi import APIRouter, Depends, HTTPException, Response

from volvy_ledger.api.deps import get_ledger
from volvy_ledger.exceptions import (
    LedgerUnavailable,
    SnapshotError,
    TransferFailed,
)
from volvy_ledger.services.ledger_service import LedgerService
from volvy_ledger.schemas.transaction import (
    Transaction,
    TransactionCreate,
    TransferRequest,
    TransferResponse,
    LedgerStatusResponse,
)

router = APIRouter(tags=["Transactions"])


def _status(ledger: LedgerService) -> LedgerStatusResponse:
    return LedgerStatusResponse(
        ready=ledger.ready,
        loading=ledger.loading,
        error=ledger.error,
        transaction_count=len(ledger.list_transactions()) if ledger.ready else 0,
    )


@router.get("/transactions", response_model=list[Transaction])
def list_transactions(ledger: LedgerService = Depends(get_ledger)):
    """Get every transaction in the order it was recorded."""
    try:
        return ledger.list_transactions()
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/transactions", response_model=Transaction, status_code=201)
async def add_transaction(
    request: TransactionCreate,
    ledger: LedgerService = Depends(get_ledger),
):
    """Record a deposit or withdrawal."""
    try:
        return await ledger.add_transaction(request)
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except SnapshotError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post(
    "/transactions/transfer",
    response_model=TransferResponse,
    status_code=201,
)
async def transfer_funds(
    request: TransferRequest,
    ledger: LedgerService = Depends(get_ledger),
):
    """Transfer money between two accounts."""
    try:
        outgoing, incoming = await ledger.transfer_funds(request)
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except SnapshotError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except TransferFailed as e:
        raise HTTPException(status_code=400, detail=str(e))
    return TransferResponse(outgoing=outgoing, incoming=incoming)


@router.get("/transactions/{transaction_id}", response_model=Transaction)
def get_transaction(
    transaction_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """Get a single transaction."""
    try:
        transaction = ledger.get_transaction(transaction_id)
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if transaction is None:
        raise HTTPException(
            status_code=404, detail=f"Transaction {transaction_id} not found"
        )
    return transaction


@router.delete("/transactions/{transaction_id}", status_code=204)
async def delete_transaction(
    transaction_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """
    Delete a transaction and reverse its balance effect.

    Deleting an unknown id succeeds without doing anything.
    """
    try:
        await ledger.delete_transaction(transaction_id)
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    except SnapshotError as e:
        raise HTTPException(status_code=500, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return Response(status_code=204)


@router.get(
    "/clients/{client_id}/transactions",
    response_model=list[Transaction],
)
def get_client_transactions(
    client_id: str,
    ledger: LedgerService = Depends(get_ledger),
):
    """Get a client's transactions in the order they were recorded."""
    try:
        return ledger.get_client_transactions(client_id)
    except LedgerUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.get("/ledger/status", response_model=LedgerStatusResponse)
def ledger_status(ledger: LedgerService = Depends(get_ledger)):
    """Report whether the ledger is loaded."""
    return _status(ledger)


@router.post("/ledger/reload", response_model=LedgerStatusResponse)
async def reload_ledger(ledger: LedgerService = Depends(get_ledger)):
    """
    Load the ledger again from its snapshot.

    This is how the service recovers from a failed startup load.
    """
    try:
        await ledger.load()
    except SnapshotError as e:
        raise HTTPException(status_code=500, detail=str(e))
    if not ledger.ready:
        raise HTTPException(status_code=503, detail=ledger.error)
    return _status(ledger)
