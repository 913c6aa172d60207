"""
Configuration module for ephemdata search paths, network access and logging.
"""

import os
from pathlib import Path
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings using Pydantic for validation
    and environment variable support.
    """

    # Search path for the default providers
    data_path: str = Field(
        default="",
        description="Directories and archives to crawl, separated by os.pathsep",
    )

    providers_file: Optional[Path] = Field(
        default=None, description="YAML file describing the data providers"
    )

    # Network settings
    request_timeout: int = Field(default=300, description="Request timeout in seconds")

    download_chunk_size: int = Field(
        default=8192, description="Download chunk size in bytes"
    )

    # General settings
    log_level: str = Field(default="INFO", description="Logging level")

    model_config = {
        "env_prefix": "EPHEMDATA_",
        "case_sensitive": False,
    }

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("request_timeout", "download_chunk_size")
    @classmethod
    def check_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("value must be strictly positive")
        return v

    def search_path_entries(self) -> List[str]:
        """
        Split the data path into its non-empty segments.

        Consecutive separators are tolerated and never produce empty entries.
        """
        return [entry for entry in self.data_path.split(os.pathsep) if entry.strip()]


settings = Settings()
