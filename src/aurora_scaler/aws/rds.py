"""RDS cluster gateway: the three remote calls the scaler depends on."""
import logging
from typing import Any, Dict, Iterator, Optional

from aurora_scaler.aws.clients import get_rds_client

logger = logging.getLogger(__name__)


class RdsClusterGateway:
    """Thin wrapper over a boto3 RDS client.

    The capacity updater only talks to this class, so tests can substitute an
    in-memory double with the same three methods.
    """

    def __init__(self, client: Any):
        self.client = client

    def list_clusters(self) -> Iterator[Dict[str, Any]]:
        """Yield every DB cluster in the region, across all pages."""
        paginator = self.client.get_paginator('describe_db_clusters')
        page_count = 0
        for page in paginator.paginate():
            page_count += 1
            for cluster in page.get('DBClusters', []):
                yield cluster
        logger.debug(f"Listed DB clusters across {page_count} page(s)")

    def list_tags(self, resource_arn: str) -> Dict[str, str]:
        """Return the tags of one cluster as a plain key/value mapping."""
        response = self.client.list_tags_for_resource(ResourceName=resource_arn)
        return {tag['Key']: tag['Value'] for tag in response.get('TagList', [])}

    def modify_capacity(self, cluster_id: str, min_capacity: int, max_capacity: int) -> Dict[str, Any]:
        """Set the Serverless v2 capacity range, applied immediately."""
        response = self.client.modify_db_cluster(
            DBClusterIdentifier=cluster_id,
            ServerlessV2ScalingConfiguration={
                'MinCapacity': min_capacity,
                'MaxCapacity': max_capacity
            },
            ApplyImmediately=True
        )
        return response.get('DBCluster', {})


def get_rds_gateway(client: Optional[Any] = None) -> RdsClusterGateway:
    """Build a gateway around the given client, or the cached settings-based one."""
    return RdsClusterGateway(client if client is not None else get_rds_client())
