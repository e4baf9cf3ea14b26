"""
Azure OpenAI configuration.

Settings for the chat completion deployment used to answer questions.

Dependencies: pydantic_settings
System role: Language model configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureOpenAISettings(BaseSettings):
    """Settings for the Azure OpenAI chat deployment."""

    model_config = SettingsConfigDict(
        env_prefix="AZURE_OPENAI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    api_key: str = Field(default="", description="Azure OpenAI API key")
    endpoint: str = Field(
        default="",
        description="Azure OpenAI resource endpoint, e.g. https://<name>.openai.azure.com/",
    )
    deployment: str = Field(default="", description="Chat model deployment name")
    api_version: str = Field(
        default="2024-02-15-preview",
        description="Azure OpenAI REST API version",
    )
    temperature: float = Field(
        default=0.0,
        description="Sampling temperature (0 for deterministic answers)",
    )
    max_tokens: int = Field(
        default=700,
        description="Maximum tokens generated per reply",
    )
    timeout: float = Field(
        default=60.0,
        description="Request timeout in seconds for completion calls",
    )
