"""AWS client management."""
import boto3
import logging
from typing import Any, Dict

from aurora_scaler.config.settings import get_settings

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Singleton manager for AWS service clients."""
    _instance = None
    _clients: Dict[str, Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(AWSClientManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the client manager with settings."""
        self.settings = get_settings()

        self.region = self.settings.aws_region
        self.endpoint_url = self.settings.aws_endpoint_url
        self.mode = self.settings.deployment_mode

        logger.info(f"Initializing AWSClientManager ({self.mode}, region {self.region})")
        if self.mode == 'aws-mock':
            logger.info(f"  Endpoint: {self.endpoint_url}")

    def get_client(self, service_name: str) -> Any:
        """Get or create an AWS service client.

        Credentials fall through to the default boto3 chain (execution role,
        AWS_PROFILE) unless settings carry explicit keys.
        """
        if service_name in self._clients:
            return self._clients[service_name]

        client_kwargs = {
            'region_name': self.region
        }
        if self.settings.aws_access_key_id:
            client_kwargs['aws_access_key_id'] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            client_kwargs['aws_secret_access_key'] = self.settings.aws_secret_access_key

        if self.endpoint_url and self.mode == 'aws-mock':
            client_kwargs['endpoint_url'] = self.endpoint_url

        try:
            client = boto3.client(service_name, **client_kwargs)
        except Exception as e:
            logger.error(f"Error creating {service_name} client: {str(e)}")
            raise
        self._clients[service_name] = client
        logger.debug(f"Created {service_name} client")
        return client

    @classmethod
    def reset(cls):
        """Drop the singleton and its clients so the next use re-reads settings."""
        cls._clients.clear()
        cls._instance = None


def get_rds_client():
    """Get the RDS client."""
    return AWSClientManager().get_client('rds')
