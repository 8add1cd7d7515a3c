import boto3
import pytest
from botocore.exceptions import ClientError
from botocore.stub import Stubber

from aurora_scaler.aws.rds import RdsClusterGateway
from aurora_scaler.capacity import CapacityUpdater, ClusterOutcome
from aurora_scaler.modes import CapacitySetting, ScalingMode
from tests.consts import TEST_REGION
from tests.fixtures.rds_fixtures import cluster_arn, make_cluster


@pytest.fixture
def rds_client():
    return boto3.client(
        "rds",
        region_name=TEST_REGION,
        aws_access_key_id="testing",
        aws_secret_access_key="testing",
    )


def test_list_clusters_follows_markers(rds_client):
    stubber = Stubber(rds_client)
    stubber.add_response(
        "describe_db_clusters",
        {"DBClusters": [make_cluster("page-one")], "Marker": "next-page"},
        {},
    )
    stubber.add_response(
        "describe_db_clusters",
        {"DBClusters": [make_cluster("page-two", serverless=False)]},
        {"Marker": "next-page"},
    )

    with stubber:
        clusters = list(RdsClusterGateway(rds_client).list_clusters())

    assert [c["DBClusterIdentifier"] for c in clusters] == ["page-one", "page-two"]
    stubber.assert_no_pending_responses()


def test_list_tags_flattens_tag_list(rds_client):
    arn = cluster_arn("orders")
    stubber = Stubber(rds_client)
    stubber.add_response(
        "list_tags_for_resource",
        {"TagList": [{"Key": "prewarm", "Value": "yes"}, {"Key": "team", "Value": "orders"}]},
        {"ResourceName": arn},
    )

    with stubber:
        tags = RdsClusterGateway(rds_client).list_tags(arn)

    assert tags == {"prewarm": "yes", "team": "orders"}


def test_modify_capacity_applies_immediately(rds_client):
    stubber = Stubber(rds_client)
    stubber.add_response(
        "modify_db_cluster",
        {"DBCluster": {"DBClusterIdentifier": "orders"}},
        {
            "DBClusterIdentifier": "orders",
            "ServerlessV2ScalingConfiguration": {"MinCapacity": 8, "MaxCapacity": 64},
            "ApplyImmediately": True,
        },
    )

    with stubber:
        result = RdsClusterGateway(rds_client).modify_capacity("orders", 8, 64)

    assert result == {"DBClusterIdentifier": "orders"}
    stubber.assert_no_pending_responses()


def test_modify_capacity_raises_client_error(rds_client):
    stubber = Stubber(rds_client)
    stubber.add_client_error(
        "modify_db_cluster",
        service_error_code="InvalidDBClusterStateFault",
        service_message="Cluster is not available",
        http_status_code=400,
    )

    with stubber, pytest.raises(ClientError):
        RdsClusterGateway(rds_client).modify_capacity("orders", 2, 32)


def test_full_pass_over_boto_client(rds_client):
    stubber = Stubber(rds_client)
    stubber.add_response(
        "describe_db_clusters",
        {"DBClusters": [
            make_cluster("busy"),
            make_cluster("legacy", serverless=False),
            make_cluster("reporting"),
        ]},
        {},
    )
    stubber.add_response(
        "list_tags_for_resource",
        {"TagList": [{"Key": "cooldown", "Value": "yes"}]},
        {"ResourceName": cluster_arn("busy")},
    )
    stubber.add_client_error(
        "modify_db_cluster",
        service_error_code="InvalidDBClusterStateFault",
        service_message="DbCluster busy is not in available state",
        http_status_code=400,
    )
    stubber.add_response(
        "list_tags_for_resource",
        {"TagList": [{"Key": "cooldown", "Value": "yes"}]},
        {"ResourceName": cluster_arn("reporting")},
    )
    stubber.add_response(
        "modify_db_cluster",
        {"DBCluster": {"DBClusterIdentifier": "reporting"}},
        {
            "DBClusterIdentifier": "reporting",
            "ServerlessV2ScalingConfiguration": {"MinCapacity": 2, "MaxCapacity": 32},
            "ApplyImmediately": True,
        },
    )

    with stubber:
        summary = CapacityUpdater(RdsClusterGateway(rds_client)).run(
            ScalingMode.COOLDOWN.predicate, CapacitySetting(2, 32)
        )

    stubber.assert_no_pending_responses()
    assert summary.updated == ["reporting"]
    assert summary.failed[0].cluster_id == "busy"
    assert summary.failed[0].error.startswith("InvalidDBClusterStateFault")
    assert {r.cluster_id: r.outcome for r in summary.results}["legacy"] is ClusterOutcome.SKIPPED
