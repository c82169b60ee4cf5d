"""Route matching orchestrator.

Runs the pipeline for one request: validate, order by time, sample, split
into batches, then walk the strategy cascade until one produces geometry.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from core.exceptions import ConfigurationException, RouteMatchingException
from core.http.mapbox import DEFAULT_BASE_URL, MapboxClient
from route_matching.batching import split_into_batches
from route_matching.models import AggregateResult, Fix, MatchingSettings
from route_matching.normalizer import require_minimum_fixes, sort_by_timestamp
from route_matching.sampling import sample_by_time
from route_matching.state import MatchingState, MatchingStateMachine
from route_matching.strategies import (
    DirectionsStrategy,
    MapMatchingStrategy,
    MatchContext,
    MatchStrategy,
    SimpleLineStrategy,
)

logger = logging.getLogger(__name__)

_CASCADE_ORDER = list(MatchingState)


def default_strategies(client: MapboxClient) -> list[MatchStrategy]:
    """Map matching, then directions, then a straight-line path."""
    return [
        MapMatchingStrategy(client),
        DirectionsStrategy(client),
        SimpleLineStrategy(),
    ]


def _check_cascade_order(strategies: Sequence[MatchStrategy]) -> None:
    """Reject strategy lists that would move the state machine backwards."""
    positions = [_CASCADE_ORDER.index(strategy.state) for strategy in strategies]
    if any(later < earlier for earlier, later in zip(positions, positions[1:])):
        msg = "Strategies must follow cascade order"
        raise ConfigurationException(
            msg,
            {"strategies": [strategy.name for strategy in strategies]},
        )


class RouteMatchingService:
    """Turn a set of fixes into one road-aligned route geometry."""

    def __init__(
        self,
        access_token: str | None = None,
        *,
        settings: MatchingSettings | None = None,
        client: MapboxClient | None = None,
        strategies: Sequence[MatchStrategy] | None = None,
        base_url: str = DEFAULT_BASE_URL,
        profile: str = "driving",
    ) -> None:
        """
        Initialize the service.

        Args:
            access_token: Mapbox access token; required unless a client or
                an explicit strategy list is supplied
            settings: Sampling, batching, and fallback tunables
            client: Preconfigured Mapbox client (tests inject fakes here)
            strategies: Explicit cascade, e.g. to cap it at fewer rungs
            base_url: Mapbox API root
            profile: Mapbox routing profile

        Raises:
            ConfigurationException: Strategies are not in cascade order
        """
        self.settings = settings or MatchingSettings()
        self._access_token = access_token
        self._client = client
        self._strategies = list(strategies) if strategies is not None else None
        if self._strategies is not None:
            _check_cascade_order(self._strategies)
        self._base_url = base_url
        self._profile = profile

    def _resolve_strategies(self) -> list[MatchStrategy]:
        if self._strategies is not None:
            return self._strategies
        if self._client is None:
            if not self._access_token:
                msg = "Mapbox access token not configured"
                raise ConfigurationException(msg)
            self._client = MapboxClient(
                self._access_token,
                base_url=self._base_url,
                profile=self._profile,
            )
        return default_strategies(self._client)

    async def match(
        self,
        fixes: Sequence[Fix],
        *,
        timeout: float | None = None,
    ) -> AggregateResult:
        """
        Produce a single route geometry for the given fixes.

        Args:
            fixes: Every fix of the route, in any order
            timeout: Optional overall deadline in seconds; once it passes,
                outstanding batch calls count as failed and remaining
                service-backed strategies are skipped

        Returns:
            The first successful strategy's merged result

        Raises:
            ConfigurationException: No access token is available
            ValidationException: Fewer than two fixes were supplied
            RouteMatchingException: No strategy produced geometry
        """
        strategies = self._resolve_strategies()
        require_minimum_fixes(fixes)

        settings = self.settings
        ordered = sort_by_timestamp(fixes)
        sampled = sample_by_time(ordered, settings.max_sampled_points)
        batches = split_into_batches(sampled, settings.max_request_points)
        logger.info(
            "Matching %d fixes: %d after sampling, %d batch(es)",
            len(fixes),
            len(sampled),
            len(batches),
        )

        machine = MatchingStateMachine()
        if not batches:
            reason = "No matchable batches after splitting"
            machine.set_state(MatchingState.DONE, error=reason)
            raise RouteMatchingException(reason, machine.get_status())

        deadline = None
        if timeout is not None:
            deadline = asyncio.get_running_loop().time() + timeout

        context = MatchContext(
            fixes=tuple(ordered),
            sampled=tuple(sampled),
            batches=tuple(batches),
            settings=settings,
            deadline=deadline,
        )

        attempted: list[str] = []
        for strategy in strategies:
            machine.set_state(strategy.state)
            if strategy.requires_service and context.expired():
                logger.warning("Deadline passed; skipping %s", strategy.name)
                continue

            attempted.append(strategy.name)
            result = await strategy(context)
            if result is not None:
                machine.set_state(MatchingState.DONE)
                logger.info("Cascade history: %s", machine.state_history)
                logger.info(
                    "Route produced by %s (confidence=%s, %d vertices)",
                    strategy.name,
                    result.confidence,
                    len(result.geometry),
                )
                return result.model_copy(update={"strategies_attempted": attempted})

            logger.info("Strategy %s produced no geometry", strategy.name)

        reason = "No matching strategy produced a route geometry"
        machine.set_state(MatchingState.DONE, error=reason)
        logger.warning("Cascade history: %s", machine.state_history)
        raise RouteMatchingException(
            reason,
            {"strategies_attempted": attempted, **machine.get_status()},
        )
