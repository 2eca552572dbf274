"""
Networking Analysis Pass

Runs the stats, health and follow-up aggregators over one contact snapshot and
synthesizes the networking report.
"""

import asyncio
import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict

from networkcrm.models.entities import Contact, ContactSnapshot
from networkcrm.models.followup import FollowUpMetrics, compute_follow_up
from networkcrm.models.health import RelationshipHealthData, compute_health
from networkcrm.models.scoring import ScoreBreakdown, synthesize
from networkcrm.models.stats import NetworkingStats, compute_stats
from networkcrm.utils.clock import Clock, SystemClock
from networkcrm.utils.config import Config

logger = logging.getLogger(__name__)


class NetworkingReport(BaseModel):
    """Result of one analysis pass. Replaced on every run, never updated."""
    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    stats: NetworkingStats
    health: RelationshipHealthData
    follow_up: FollowUpMetrics
    score: ScoreBreakdown
    grade: str
    insights: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        """Plain JSON-compatible representation."""
        return self.model_dump(mode="json")


class NetworkAnalyzer:
    """Produces a NetworkingReport from a contact snapshot."""

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize analyzer.

        Args:
            config: Analysis configuration (defaults if omitted)
            clock: Source of "now" (system clock if omitted)
        """
        self.config = config or Config()
        self.clock = clock or SystemClock()

    def _stats(self, contacts: Sequence[Contact], now: datetime) -> NetworkingStats:
        return compute_stats(contacts, now, self.config.stats)

    def _health(self, contacts: Sequence[Contact], now: datetime) -> RelationshipHealthData:
        return compute_health(contacts, now, self.config.relationship)

    def _follow_up(self, contacts: Sequence[Contact], now: datetime) -> FollowUpMetrics:
        return compute_follow_up(contacts, now, self.config.follow_up)

    def _build_report(
        self,
        now: datetime,
        stats: NetworkingStats,
        health: RelationshipHealthData,
        follow_up: FollowUpMetrics,
    ) -> NetworkingReport:
        score, grade, insights = synthesize(
            stats,
            health,
            follow_up,
            scoring=self.config.scoring,
            insights=self.config.insights,
        )

        logger.info(
            f"Analyzed {stats.total_contacts} contacts: "
            f"score {score.total} ({grade})"
        )

        return NetworkingReport(
            generated_at=now,
            stats=stats,
            health=health,
            follow_up=follow_up,
            score=score,
            grade=grade,
            insights=tuple(insights),
        )

    async def analyze_async(
        self,
        contacts: Union[ContactSnapshot, Sequence[Contact]],
    ) -> NetworkingReport:
        """Run the three aggregators concurrently, then synthesize."""
        frozen = _freeze(contacts)
        now = self.clock.now()

        stats, health, follow_up = await asyncio.gather(
            asyncio.to_thread(self._stats, frozen, now),
            asyncio.to_thread(self._health, frozen, now),
            asyncio.to_thread(self._follow_up, frozen, now),
        )
        return self._build_report(now, stats, health, follow_up)

    def analyze(
        self,
        contacts: Union[ContactSnapshot, Sequence[Contact]],
        parallel: Optional[bool] = None,
    ) -> NetworkingReport:
        """Analyze a contact snapshot.

        Args:
            contacts: Snapshot or sequence of contacts; copied before analysis
            parallel: Run aggregators concurrently (config default if None)

        Returns:
            NetworkingReport for the clock's current instant
        """
        if parallel is None:
            parallel = self.config.processing.parallel

        if parallel:
            return asyncio.run(self.analyze_async(contacts))

        frozen = _freeze(contacts)
        now = self.clock.now()
        return self._build_report(
            now,
            self._stats(frozen, now),
            self._health(frozen, now),
            self._follow_up(frozen, now),
        )


def _freeze(contacts: Union[ContactSnapshot, Sequence[Contact]]) -> tuple[Contact, ...]:
    if isinstance(contacts, ContactSnapshot):
        return contacts.contacts
    return tuple(contacts)


def analyze_network(
    contacts: Union[ContactSnapshot, Sequence[Contact]],
    clock: Optional[Clock] = None,
    config: Optional[Config] = None,
    parallel: Optional[bool] = None,
) -> NetworkingReport:
    """Convenience function to run one analysis pass.

    Args:
        contacts: Snapshot or sequence of contacts
        clock: Source of "now" (system clock if omitted)
        config: Analysis configuration
        parallel: Run aggregators concurrently

    Returns:
        NetworkingReport
    """
    return NetworkAnalyzer(config=config, clock=clock).analyze(contacts, parallel=parallel)
