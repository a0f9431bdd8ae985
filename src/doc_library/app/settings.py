from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MAX_UPLOAD_BYTES = 50 * 1024 * 1024


class AppSettings(BaseSettings):
    name: str = "Document Library"
    version: str = "0.1.0"

    model_config = SettingsConfigDict(
        env_prefix="APP_",            # APP_NAME, APP_VERSION
        extra="ignore",
    )


class LibrarySettings(BaseSettings):
    """
    Storage and upload policy.

    Env: DOCLIB_STORAGE_ROOT, DOCLIB_MAX_UPLOAD_BYTES, DOCLIB_SEED_SAMPLE_DATA, ...
    """

    storage_backend: Literal["local", "memory"] = Field(default="local")
    storage_root: str = Field(default="uploads")
    max_upload_bytes: int = Field(default=MAX_UPLOAD_BYTES, gt=0)
    chunk_size: int = Field(default=64 * 1024, gt=0)
    # multipart boundaries and form fields on top of the file itself
    request_overhead_bytes: int = Field(default=1024 * 1024, ge=0)
    seed_sample_data: bool = Field(default=False)
    prune_orphans_on_startup: bool = Field(default=False)
    cors_origins: str = Field(default="http://localhost:3000")

    model_config = SettingsConfigDict(
        env_prefix="DOCLIB_",
        env_file=".env",
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


@lru_cache
def get_app_settings(**kwargs) -> AppSettings:
    # Only include kwargs that are not None, so defaults in AppSettings are used
    filtered_kwargs = {k: v for k, v in kwargs.items() if v is not None}
    return AppSettings(**filtered_kwargs)


@lru_cache
def get_library_settings(**kwargs) -> LibrarySettings:
    filtered = {k: v for k, v in kwargs.items() if v is not None}
    return LibrarySettings(**filtered)
