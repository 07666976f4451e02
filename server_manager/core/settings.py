"""
Configuration settings for the Server Manager.
"""
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from typing import List, Literal, Optional


DEFAULT_UPDATE_SCRIPT = "/home/project/scripts/update-system.sh"


class ServerManagerSettings(BaseSettings):
    """Server Manager configuration loaded from environment variables."""

    # HTTP listener (PORT is honoured without prefix for container platforms)
    host: str = "0.0.0.0"
    port: int = Field(3001, validation_alias=AliasChoices("PORT", "SERVER_MANAGER_PORT"))

    # Update command
    update_script: str = DEFAULT_UPDATE_SCRIPT
    use_sudo: bool = True
    sudo_command: str = "sudo"
    update_timeout: Optional[float] = None  # seconds; None waits forever
    update_concurrency: Literal["reject", "queue"] = "reject"

    # HTTP surface
    allowed_origins: List[str] = ["*"]
    log_level: str = "INFO"

    # Dashboard side
    api_url: str = "http://localhost:3001"

    class Config:
        env_file = ".env"
        env_prefix = "SERVER_MANAGER_"
        case_sensitive = False


def get_settings() -> ServerManagerSettings:
    """Build a fresh settings object from the current environment."""
    return ServerManagerSettings()
