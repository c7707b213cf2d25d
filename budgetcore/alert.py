import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from budgetcore.domain import Number, non_negative_amount

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlertTriggered:
    threshold: Decimal
    total: Decimal


@dataclass(frozen=True)
class AlertChange:
    previous: Decimal
    current: Decimal

    @property
    def removed(self) -> bool:
        return self.current == 0

    @property
    def replaced(self) -> bool:
        return self.previous > 0 and self.current > 0


class AlertThreshold:
    """Global spending threshold. An amount of 0 means the alert is disabled."""

    def __init__(self):
        self._amount = Decimal("0")

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def enabled(self) -> bool:
        return self._amount > 0

    def set_alert(self, amount: Number) -> AlertChange:
        previous = self._amount
        self._amount = non_negative_amount(amount)
        logger.info("Alert threshold changed from %s to %s", previous, self._amount)
        return AlertChange(previous=previous, current=self._amount)

    def remove(self) -> AlertChange:
        return self.set_alert(0)

    def check_alert(self, total_expenses: Decimal) -> Optional[AlertTriggered]:
        # no suppression: every qualifying check warns again
        if self.enabled and total_expenses > self._amount:
            logger.warning("Total expenses %s exceed alert threshold %s", total_expenses, self._amount)
            return AlertTriggered(threshold=self._amount, total=total_expenses)
        return None
