"""
App Configuration.

This module defines the global application settings using Pydantic Settings.
It loads configuration variables from environment variables and/or a .env file,
ensuring typed and validated settings for the application.

Attributes:
    settings: The global instance of the Settings class, ready to be imported and used.
"""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application Settings.

    This class defines the configuration for the application, validating
    environment variables against the specified types.

    Attributes:
        PROJECT_NAME: The name of the project (default: "AI Maintainer").
        DATABASE_URL: The connection string for the review audit database.
        OPENAI_API_KEY: The API key for accessing OpenAI services.
        GITHUB_TOKEN: Token used for every GitHub REST call.
        GITHUB_WEBHOOK_SECRET: Shared secret for X-Hub-Signature-256 checks.
        REPOSITORY_OWNER / REPOSITORY_NAME: The repository being maintained.
        ALLOWLISTED_PATHS: Path prefixes eligible for unattended merging.
    """

    # Core
    PROJECT_NAME: str = "AI Maintainer"
    DATABASE_URL: str
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"

    # AI / Model Providers
    OPENAI_API_KEY: str
    OPENAI_MODEL: str = "gpt-4"
    OPENAI_TEMPERATURE: float = 0.1
    OPENAI_MAX_TOKENS: int = 150
    OPENAI_TIMEOUT_SECONDS: float = 60.0

    # GitHub
    GITHUB_TOKEN: str
    GITHUB_WEBHOOK_SECRET: str
    GITHUB_API_URL: str = "https://api.github.com"
    GITHUB_TIMEOUT_SECONDS: float = 30.0
    REPOSITORY_OWNER: str
    REPOSITORY_NAME: str

    # Review policy
    ALLOWLISTED_PATHS: List[str] = [
        "resources/",
        "docs/",
        "README.md",
        ".github/workflows/",
    ]

    model_config = SettingsConfigDict(
        env_file=".env", env_ignore_empty=True, extra="ignore"
    )


settings = Settings()
