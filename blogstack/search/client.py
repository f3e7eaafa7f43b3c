"""
Elasticsearch client singleton.

Usage:
    es = ElasticsearchClient.get_instance()
    await es.index(index="blog", id="1", document={...})
    ...
    await ElasticsearchClient.close()
"""

from typing import Any

from elasticsearch import AsyncElasticsearch

from blogstack.configs import Settings, settings
from blogstack.errors.search import SearchConfigurationError
from blogstack.monitoring.logging import get_logger

logger = get_logger(__name__)


def client_config(config: Settings) -> dict[str, Any]:
    """
    Build ``AsyncElasticsearch`` keyword arguments from settings.

    API key authentication wins over basic authentication when both are set.
    """
    if not config.ELASTICSEARCH_URL:
        raise SearchConfigurationError(detail="ELASTICSEARCH_URL is required")

    options: dict[str, Any] = {
        "hosts": [config.ELASTICSEARCH_URL],
        "request_timeout": config.ELASTICSEARCH_TIMEOUT,
        "max_retries": config.ELASTICSEARCH_MAX_RETRIES,
        "retry_on_timeout": True,
        "verify_certs": config.ELASTICSEARCH_VERIFY_CERTS,
    }

    if config.ELASTICSEARCH_API_KEY:
        options["api_key"] = config.ELASTICSEARCH_API_KEY
        logger.info(f"Using API key authentication for ES: {config.ELASTICSEARCH_URL}")
    elif config.ELASTICSEARCH_USERNAME and config.ELASTICSEARCH_PASSWORD:
        options["basic_auth"] = (
            config.ELASTICSEARCH_USERNAME,
            config.ELASTICSEARCH_PASSWORD.get_secret_value(),
        )
        logger.info(f"Using basic authentication for ES: {config.ELASTICSEARCH_URL}")
    else:
        logger.info(f"Connecting to ES without authentication: {config.ELASTICSEARCH_URL}")

    return options


class ElasticsearchClient:
    """Process-wide ``AsyncElasticsearch`` instance."""

    _instance: AsyncElasticsearch | None = None

    @classmethod
    def get_instance(cls, config: Settings = settings) -> AsyncElasticsearch:
        """
        Get or create the client.

        Raises:
            SearchConfigurationError: If the configuration is incomplete
        """
        if cls._instance is None:
            cls._instance = AsyncElasticsearch(**client_config(config))
        return cls._instance

    @classmethod
    async def is_healthy(cls) -> bool:
        if cls._instance is None:
            return False
        return bool(await cls._instance.ping())

    @classmethod
    async def close(cls) -> None:
        if cls._instance is not None:
            await cls._instance.close()
            cls._instance = None
            logger.info("Elasticsearch client closed")
