"""Use case to project daily balances from the user's entities."""

from dataclasses import dataclass
from datetime import date

from src.application.use_cases.projection_cache import ProjectionCache
from src.domain.models.projection import CashflowProjection
from src.domain.models.snapshot import SnapshotInputState
from src.domain.services.estimate import (
    EstimatedTodayBalance,
    calculate_estimated_today_balance,
    rebase_projection_from_estimated_today,
)
from src.domain.services.simulation import simulate_cashflow
from src.domain.services.validation import (
    validate_inputs,
    validate_projection_days,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.decimal_utils import format_major


@dataclass(frozen=True)
class RebasedProjection:
    """Projection anchored on today's estimated balance.

    Attributes:
        estimate: Estimated balances for today and how they were derived.
        projection: Projection whose day 0 is today.
    """

    estimate: EstimatedTodayBalance
    projection: CashflowProjection


class ProjectCashflowUseCase:
    """Validate inputs and simulate optimistic and pessimistic balances."""

    def __init__(
        self,
        logger=None,
        cache: ProjectionCache | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            logger: Optional logger compatible with logging.Logger-like API.
            cache: Optional projection cache shared across calls.
        """
        self._logger = logger or get_app_logger()
        self._cache = cache

    def execute(
        self,
        inputs: SnapshotInputState,
        projection_days: int | None = None,
        start_date: date | None = None,
    ) -> CashflowProjection:
        """Return the projection of the given inputs.

        Args:
            inputs: User entities.
            projection_days: Horizon; defaults to ``inputs.projection_days``.
            start_date: First projected day; defaults to today.

        Returns:
            CashflowProjection: Daily snapshots and scenario summaries.

        Raises:
            CashflowValidationError: If the inputs or horizon are invalid.
        """
        days = projection_days or inputs.projection_days
        start = start_date or date.today()
        validate_projection_days(days)
        validate_inputs(inputs)

        key = None
        if self._cache is not None:
            key = ProjectionCache.build_key(inputs, days, start)
            cached = self._cache.get(key)
            if cached is not None:
                self._logger.debug(f"Projection cache hit: {key[:12]}")
                return cached

        projection = simulate_cashflow(inputs, start, days)
        self._log_projection(projection)

        if self._cache is not None and key is not None:
            self._cache.put(key, projection)
        return projection

    def execute_from_today(
        self,
        inputs: SnapshotInputState,
        today: date,
        time_zone: str,
        projection_days: int | None = None,
    ) -> RebasedProjection:
        """Project from today's estimated balance instead of the stored one.

        Args:
            inputs: User entities.
            today: Current calendar day in ``time_zone``.
            time_zone: IANA zone used to read balance update timestamps.
            projection_days: Horizon; defaults to ``inputs.projection_days``.

        Returns:
            RebasedProjection: Today's estimate and the rebased projection.
        """
        days = projection_days or inputs.projection_days
        validate_projection_days(days)
        validate_inputs(inputs)

        estimate = calculate_estimated_today_balance(inputs, today, time_zone)
        if estimate.base_failure_reason:
            self._logger.warning(
                f"Cannot estimate today's balance: {estimate.base_failure_reason}"
            )
        elif estimate.is_estimated:
            self._logger.info(
                f"Estimated today's balance from {estimate.base.earliest}: "
                f"optimistic={format_major(estimate.optimistic_cents)}, "
                f"pessimistic={format_major(estimate.pessimistic_cents)}"
            )

        projection = rebase_projection_from_estimated_today(
            inputs,
            estimate,
            days,
        )
        self._log_projection(projection)
        return RebasedProjection(estimate=estimate, projection=projection)

    def _log_projection(self, projection: CashflowProjection) -> None:
        self._logger.info(
            f"Projection computed: {len(projection.days)} days from "
            f"{projection.start_date}, "
            f"optimistic_end={format_major(projection.optimistic.end_balance)}, "
            f"pessimistic_end={format_major(projection.pessimistic.end_balance)}, "
            f"danger_days={projection.optimistic.danger_day_count}/"
            f"{projection.pessimistic.danger_day_count}"
        )


__all__ = ["ProjectCashflowUseCase", "RebasedProjection"]
