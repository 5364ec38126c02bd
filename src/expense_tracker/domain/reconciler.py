"""Keep the balance identity intact when an account's initial balance is edited."""

import logging
from decimal import Decimal

logger = logging.getLogger(__name__)


class AccountInvariantReconciler:
    """Shift the current balance by the same amount the initial balance moved.

    Given ``current_balance == initial_balance - total_spent``, changing only
    ``initial_balance`` by ``diff`` keeps the identity when ``current_balance``
    moves by ``diff`` too. The spend total is left alone.
    """

    def reconcile_on_initial_balance_change(
        self,
        account_id: int,
        old_initial_balance: Decimal,
        old_current_balance: Decimal,
        new_initial_balance: Decimal,
    ) -> Decimal:
        """Return the current balance to persist alongside the new initial balance.

        Args:
            account_id: Account being edited (for logging only)
            old_initial_balance: Stored initial balance
            old_current_balance: Stored current balance
            new_initial_balance: Requested initial balance

        Returns:
            New current balance; ``old_current_balance`` itself when the initial
            balance does not change
        """
        if new_initial_balance == old_initial_balance:
            return old_current_balance

        diff = new_initial_balance - old_initial_balance
        logger.debug(
            "Account %s initial balance %s -> %s, shifting current balance by %s",
            account_id,
            old_initial_balance,
            new_initial_balance,
            diff,
        )
        return old_current_balance + diff
