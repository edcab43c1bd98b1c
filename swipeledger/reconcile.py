import logging
from dataclasses import dataclass

from .base import TOLERANCE, Amount, Numeric, round_money, to_amount
from .config import Designations
from .ledger import BalanceEngine, Poster, Transaction, TransactionMetadata
from .rates import Wallet
from .workflows import WalletAdjustment

logger = logging.getLogger(__name__)


@dataclass
class Reconciler:
    """Post a correcting transaction when wallet books differ from actual balance."""

    wallets: dict[str, Wallet]
    engine: BalanceEngine
    poster: Poster
    accounts: Designations

    def difference(self, wallet: Wallet, actual_balance: Numeric) -> Amount:
        """Actual balance less balance in the books."""
        system_balance = self.engine.get_account_balance(wallet.ledger_account_id)
        return to_amount(actual_balance) - system_balance

    def reconcile(self, wallet_id: str, actual_balance: Numeric) -> Transaction | None:
        """Return posted transaction or None if there was nothing to post."""
        wallet = self.wallets.get(wallet_id)
        if wallet is None:
            logger.warning("Cannot reconcile unknown wallet %s", wallet_id)
            return None
        difference = self.difference(wallet, actual_balance)
        if abs(difference) < TOLERANCE:
            logger.debug("Wallet %s already reconciled", wallet_id)
            return None
        adjustment = WalletAdjustment(wallet.ledger_account_id, round_money(difference))
        kind = "Shortage" if adjustment.is_shortage else "Surplus"
        transaction = self.poster.post(
            f"Reconciliation: {kind} - {wallet.name}",
            adjustment.type,
            adjustment.to_entries(self.accounts),
            TransactionMetadata(wallet_id=wallet.id),
        )
        logger.info(
            "Reconciled wallet %s: %s %s", wallet_id, kind.lower(), abs(difference)
        )
        return transaction
