from aurora_scaler.status import fleet_status


def test_fleet_status_reports_serverless_clusters_only(gateway):
    gateway.add_cluster("orders", tags={"prewarm": "yes", "cooldown": "yes"},
                        min_capacity=8.0, max_capacity=64.0)
    gateway.add_cluster("reporting", engine="aurora-mysql")
    gateway.add_cluster("legacy", serverless=False, tags={"prewarm": "yes"})

    report = fleet_status(gateway)

    assert report == [
        {
            "cluster_id": "orders",
            "engine": "aurora-postgresql",
            "status": "available",
            "min_capacity": 8.0,
            "max_capacity": 64.0,
            "prewarm": True,
            "cooldown": True,
        },
        {
            "cluster_id": "reporting",
            "engine": "aurora-mysql",
            "status": "available",
            "min_capacity": 0.5,
            "max_capacity": 16.0,
            "prewarm": False,
            "cooldown": False,
        },
    ]
    assert gateway.modify_calls == []
    assert len(gateway.tag_lookups) == 2
