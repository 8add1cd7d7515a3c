"""
AWS access layer.

- clients: settings-aware boto3 client creation and caching
- rds: the RDS cluster gateway used by the capacity updater
"""
