"""
Tag-gated batch capacity updater for Aurora Serverless v2 clusters.

One pass:
1. List every DB cluster
2. Keep clusters that carry a ServerlessV2ScalingConfiguration
3. Keep those whose tags match the predicate
4. Set their min/max ACU, applied immediately

A failed modify call is recorded for that cluster and the pass moves on.
Listing and tag lookups are not isolated; their errors end the pass.
"""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from botocore.exceptions import BotoCoreError, ClientError

from aurora_scaler.modes import CapacitySetting, TagPredicate
from aurora_scaler.utils.decorators import log_execution_time

logger = logging.getLogger(__name__)

SCALING_CONFIGURATION_KEY = 'ServerlessV2ScalingConfiguration'


class ClusterOutcome(Enum):
    SKIPPED = "skipped"        # no Serverless v2 scaling configuration
    UNTAGGED = "untagged"      # Serverless v2, but predicate did not match
    UPDATED = "updated"
    DRY_RUN = "dry_run"
    FAILED = "failed"


@dataclass
class ClusterResult:
    cluster_id: str
    outcome: ClusterOutcome
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {'cluster_id': self.cluster_id, 'outcome': self.outcome.value}
        if self.error:
            data['error'] = self.error
        return data


@dataclass
class PassSummary:
    """Everything one pass inspected and what happened to each cluster."""
    predicate: TagPredicate
    setting: CapacitySetting
    results: List[ClusterResult] = field(default_factory=list)

    @property
    def updated(self) -> List[str]:
        return [r.cluster_id for r in self.results if r.outcome is ClusterOutcome.UPDATED]

    @property
    def failed(self) -> List[ClusterResult]:
        return [r for r in self.results if r.outcome is ClusterOutcome.FAILED]

    def counts(self) -> Dict[str, int]:
        counts = {outcome.value: 0 for outcome in ClusterOutcome}
        for result in self.results:
            counts[result.outcome.value] += 1
        counts['inspected'] = len(self.results)
        return counts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'tag': str(self.predicate),
            'setting': self.setting.to_dict(),
            'counts': self.counts(),
            'clusters': [r.to_dict() for r in self.results],
        }


def describe_error(error: Exception) -> str:
    """Render a boto error as 'Code: message' when the service supplied one."""
    if isinstance(error, ClientError):
        details = error.response.get('Error', {})
        code = details.get('Code', 'Unknown')
        message = details.get('Message', str(error))
        return f"{code}: {message}"
    return str(error)


class CapacityUpdater:
    """Applies a capacity setting to every opted-in Serverless v2 cluster.

    Args:
        gateway: object exposing list_clusters(), list_tags(arn) and
            modify_capacity(cluster_id, min_capacity, max_capacity)
        dry_run: when True, matching clusters are logged but never modified
    """

    def __init__(self, gateway: Any, dry_run: bool = False):
        self.gateway = gateway
        self.dry_run = dry_run

    @log_execution_time
    def run(self, predicate: TagPredicate, setting: CapacitySetting) -> PassSummary:
        summary = PassSummary(predicate=predicate, setting=setting)

        for cluster in self.gateway.list_clusters():
            summary.results.append(self._process_cluster(cluster, predicate, setting))

        counts = summary.counts()
        logger.info(
            f"Pass for {predicate} finished: {counts['inspected']} inspected, "
            f"{counts['updated']} updated, {counts['failed']} failed, "
            f"{counts['dry_run']} dry-run"
        )
        return summary

    def _process_cluster(self, cluster: Dict[str, Any], predicate: TagPredicate,
                         setting: CapacitySetting) -> ClusterResult:
        cluster_id = cluster['DBClusterIdentifier']
        logger.info(f"Cluster ID: {cluster_id}, Engine: {cluster.get('Engine', 'unknown')}")

        if SCALING_CONFIGURATION_KEY not in cluster:
            return ClusterResult(cluster_id, ClusterOutcome.SKIPPED)

        logger.info(f"Found Serverless V2 cluster: {cluster_id}")
        tags = self.gateway.list_tags(cluster['DBClusterArn'])
        if not predicate.matches(tags):
            logger.debug(f"{cluster_id} is not tagged {predicate}, leaving it unchanged")
            return ClusterResult(cluster_id, ClusterOutcome.UNTAGGED)

        if self.dry_run:
            logger.info(
                f"[dry-run] Would set {cluster_id} to MinCapacity: {setting.min_capacity} "
                f"and MaxCapacity: {setting.max_capacity}"
            )
            return ClusterResult(cluster_id, ClusterOutcome.DRY_RUN)

        try:
            self.gateway.modify_capacity(cluster_id, setting.min_capacity, setting.max_capacity)
        except (ClientError, BotoCoreError) as e:
            error = describe_error(e)
            logger.error(
                f"Failed to set {cluster_id} to MinCapacity: {setting.min_capacity} "
                f"and MaxCapacity: {setting.max_capacity}: {error}"
            )
            return ClusterResult(cluster_id, ClusterOutcome.FAILED, error=error)

        logger.info(
            f"Configured Serverless V2 scaling for {cluster_id} to MinCapacity: "
            f"{setting.min_capacity} and MaxCapacity: {setting.max_capacity}"
        )
        return ClusterResult(cluster_id, ClusterOutcome.UPDATED)
