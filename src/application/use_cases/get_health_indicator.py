"""Use case to classify the health of a projection."""

from datetime import datetime, timezone
from typing import Iterable

from src.domain.constants import STALE_THRESHOLD_DAYS
from src.domain.models.entities import BankAccount, CreditCard
from src.domain.models.health import HealthIndicator
from src.domain.models.projection import CashflowProjection
from src.domain.services.health import classify_projection_health
from src.infrastructure.logging.logger import get_app_logger


class GetHealthIndicatorUseCase:
    """Classify a projection as good, caution, warning, or danger."""

    def __init__(
        self,
        logger=None,
        stale_threshold_days: int = STALE_THRESHOLD_DAYS,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            stale_threshold_days: Age after which a balance is stale.
        """
        self._logger = logger or get_app_logger()
        self._stale_threshold_days = stale_threshold_days

    def execute(
        self,
        projection: CashflowProjection,
        accounts: Iterable[BankAccount],
        cards: Iterable[CreditCard],
        now: datetime | None = None,
    ) -> HealthIndicator:
        """Return the health indicator of a projection.

        Args:
            projection: Computed projection.
            accounts: Accounts the projection started from.
            cards: Credit cards charged in the projection.
            now: Current moment; defaults to the current UTC time.

        Returns:
            HealthIndicator: Tier, message, and stale entities.
        """
        indicator = classify_projection_health(
            projection,
            list(accounts),
            list(cards),
            now or datetime.now(timezone.utc),
            threshold_days=self._stale_threshold_days,
        )
        self._logger.info(
            f"Health classified as {indicator.status.value}: {indicator.message}"
        )
        if indicator.stale_entities:
            names = ", ".join(entity.name for entity in indicator.stale_entities)
            self._logger.warning(f"Stale balances: {names}")
        return indicator


__all__ = ["GetHealthIndicatorUseCase"]
