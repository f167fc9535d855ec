"""
Account service: client accounts and their stored balances.

This is the balance store the ledger adjusts. The ledger
never reads these balances; it only tells this store to
credit or debit an account. SqlBalanceAdjuster is the
adapter the ledger is given.
"""

import logging
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from volvy_ledger.models.client_account import ClientAccount
from volvy_ledger.schemas.account import ClientAccountOpen
from volvy_ledger.services.collaborators import BalanceAdjuster

logger = logging.getLogger(__name__)


class AccountService:
    """
    Client account operations on a caller-provided session.

    The caller controls the transaction boundary; they decide
    when to commit or rollback.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find(self, client_id: str, account_id: str) -> ClientAccount | None:
        return self.db.execute(
            select(ClientAccount).where(
                ClientAccount.client_id == client_id,
                ClientAccount.account_id == account_id,
            )
        ).scalar_one_or_none()

    def open_account(self, request: ClientAccountOpen) -> ClientAccount:
        """
        Open a client account.

        Raises ValueError if the client already has an account
        with this id.
        """
        if self._find(request.client_id, request.account_id):
            raise ValueError(
                f"Account '{request.account_id}' already exists "
                f"for client '{request.client_id}'"
            )

        account = ClientAccount(
            client_id=request.client_id,
            account_id=request.account_id,
            currency=request.currency,
            balance=request.initial_balance,
        )
        self.db.add(account)
        self.db.flush()
        return account

    def get_account(self, client_id: str, account_id: str) -> ClientAccount:
        """Get a client's account."""
        account = self._find(client_id, account_id)
        if not account:
            raise ValueError(
                f"Account '{account_id}' not found for client '{client_id}'"
            )
        return account

    def get_client_accounts(self, client_id: str) -> list[ClientAccount]:
        """Get all accounts for a client."""
        accounts = self.db.execute(
            select(ClientAccount)
            .where(ClientAccount.client_id == client_id)
            .order_by(ClientAccount.id)
        ).scalars().all()
        return list(accounts)

    def apply_adjustment(
        self,
        client_id: str,
        account_id: str,
        amount: Decimal,
        is_credit: bool,
    ) -> ClientAccount | None:
        """
        Add the amount to the balance, or subtract it for a debit.

        No overdraft check: the balance may go negative.
        An unknown account is left alone and None is returned.
        """
        account = self._find(client_id, account_id)
        if account is None:
            return None
        delta = amount if is_credit else -amount
        account.balance = account.balance + delta
        self.db.flush()
        return account


class SqlBalanceAdjuster(BalanceAdjuster):
    """
    Balance adjuster backed by the client_accounts table.

    Each adjustment runs in its own committed session, so one
    call is all-or-nothing but two calls are independent.
    """

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    async def adjust(
        self,
        client_id: str,
        account_id: str,
        amount: Decimal,
        is_credit: bool,
    ) -> None:
        with self.session_factory() as db:
            try:
                account = AccountService(db).apply_adjustment(
                    client_id, account_id, amount, is_credit
                )
                if account is None:
                    logger.warning(
                        "No stored balance for %s/%s, adjustment of %s skipped",
                        client_id, account_id, amount,
                    )
                    return
                balance = account.balance
                db.commit()
            except SQLAlchemyError:
                db.rollback()
                raise

        logger.debug(
            "%s %s on %s/%s, balance now %s",
            "Credited" if is_credit else "Debited",
            amount, client_id, account_id, balance,
        )
