"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.
Provides dependency injection factory for FastAPI and the startup
check for required keys.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from ragchat.configs.azure_openai import AzureOpenAISettings
from ragchat.configs.base import BaseSettings
from ragchat.configs.blob_storage import BlobStorageSettings
from ragchat.configs.chat import ChatSettings
from ragchat.configs.search import SearchSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    azure_openai: AzureOpenAISettings = Field(default_factory=AzureOpenAISettings)
    blob_storage: BlobStorageSettings = Field(default_factory=BlobStorageSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)
    chat: ChatSettings = Field(default_factory=ChatSettings)


# (env var name, settings group, attribute)
REQUIRED_SETTINGS: tuple[tuple[str, str, str], ...] = (
    ("AZURE_OPENAI_API_KEY", "azure_openai", "api_key"),
    ("AZURE_OPENAI_ENDPOINT", "azure_openai", "endpoint"),
    ("AZURE_OPENAI_DEPLOYMENT", "azure_openai", "deployment"),
    ("AZURE_BLOB_CONNECTION_STRING", "blob_storage", "connection_string"),
    ("SEARCH_SERVICE", "search", "service"),
    ("SEARCH_API_KEY", "search", "api_key"),
    ("SEARCH_INDEX", "search", "index"),
)


def missing_required_settings(settings: Settings) -> list[str]:
    """
    List required environment variables that are unset or blank.

    Args:
        settings: Settings instance to inspect

    Returns:
        list[str]: Environment variable names, in declaration order
    """
    missing = []
    for env_name, group, attribute in REQUIRED_SETTINGS:
        value = getattr(getattr(settings, group), attribute)
        if not value or not str(value).strip():
            missing.append(env_name)
    return missing


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Returns Settings instance, cached for dependency injection.
    Environment variables loaded once at startup.

    Returns:
        Settings: Application settings instance

    Usage:
        from ragchat.configs import get_settings
        settings = get_settings()
    """
    return Settings()
