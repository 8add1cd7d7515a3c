"""Read-only report of Serverless v2 clusters and their scheduling tags."""
import logging
from typing import Any, Dict, List

from aurora_scaler.capacity import SCALING_CONFIGURATION_KEY
from aurora_scaler.modes import ScalingMode

logger = logging.getLogger(__name__)


def fleet_status(gateway: Any) -> List[Dict[str, Any]]:
    """Get current capacity range and opt-in tags for every Serverless v2 cluster."""
    report = []
    for cluster in gateway.list_clusters():
        scaling = cluster.get(SCALING_CONFIGURATION_KEY)
        if scaling is None:
            continue

        tags = gateway.list_tags(cluster['DBClusterArn'])
        entry = {
            'cluster_id': cluster['DBClusterIdentifier'],
            'engine': cluster.get('Engine'),
            'status': cluster.get('Status'),
            'min_capacity': scaling.get('MinCapacity'),
            'max_capacity': scaling.get('MaxCapacity'),
        }
        for mode in ScalingMode:
            entry[mode.value] = mode.predicate.matches(tags)
        report.append(entry)

    logger.debug(f"Found {len(report)} Serverless v2 cluster(s)")
    return report
