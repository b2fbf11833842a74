from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Callable, List, Optional

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..infra.db import StorageBackend
from ..loaders import AssetLoader, DirectoryAssetLoader, PackageAssetLoader, RemoteAssetLoader
from .errors import MissingConfigurationError
from .flatten import JsonMapper
from .locale import DefaultType, Locale, LocaleSource, system_locale

# Load .env file explicitly
ENV_FILE_NAME = ".env"
load_dotenv(Path.cwd() / ENV_FILE_NAME, override=False)


def _split_csv(v: Any) -> List[str]:
    if v in (None, "", []):
        return []
    if isinstance(v, str):
        return [x.strip() for x in v.split(",") if x.strip()]
    return [str(x).strip() for x in v]


class Settings(BaseSettings):
    STORAGE_PATH: str = "./data"
    STORAGE_BACKEND: StorageBackend = StorageBackend.FILE
    DATABASE_URL: str = ""  # Overrides STORAGE_PATH/STORAGE_BACKEND when set
    DEFAULT_TYPE: DefaultType = DefaultType.DEVICE
    SUPPORTED_LANGUAGE_CODES: Annotated[List[str], NoDecode] = ["en"]
    LOCALES_PACKAGE: str = "localize.locales"
    LOCALES_DIR: str = ""  # Optional fallback source on disk
    REMOTE_LOCALES_URL: str = ""  # Optional fallback source over HTTP
    REMOTE_LOCALE_FILES: Annotated[List[str], NoDecode] = []
    DEBUG: bool = False
    LOG_FILE: bool = False
    LOG_CONFIG: str = ""  # dictConfig JSON file replacing the built-in layout

    @field_validator("SUPPORTED_LANGUAGE_CODES", "REMOTE_LOCALE_FILES", mode="before")
    @classmethod
    def parse_csv(cls, v):  # type: ignore
        return _split_csv(v)

    @field_validator("DEFAULT_TYPE", mode="before")
    @classmethod
    def parse_default_type(cls, v):  # type: ignore
        return DefaultType.parse(v)

    @field_validator("STORAGE_BACKEND", mode="before")
    @classmethod
    def parse_storage_backend(cls, v):  # type: ignore
        return StorageBackend.parse(v)

    model_config = SettingsConfigDict(
        env_file=ENV_FILE_NAME,
        env_file_encoding="utf-8",
        env_prefix="LOCALIZE_",
        extra="ignore",
    )


settings = Settings()


@dataclass
class InitOptions:
    asset_loader: AssetLoader
    asset_loaders_extra: List[AssetLoader] = field(default_factory=list)
    supported_locales: Optional[List[Locale]] = None
    supported_language_codes: Optional[List[str]] = None
    default_type: DefaultType = DefaultType.DEVICE
    storage_path: Optional[str] = None
    storage_backend: StorageBackend = StorageBackend.FILE
    database_url: Optional[str] = None
    json_mapper: Optional[JsonMapper] = None
    locale_source: LocaleSource = system_locale
    on_change: Optional[Callable[[], None]] = None

    def resolve_supported_locales(self) -> List[Locale]:
        if self.supported_locales is not None:
            locales = list(self.supported_locales)
        elif self.supported_language_codes is not None:
            locales = [Locale(code) for code in self.supported_language_codes]
        else:
            raise MissingConfigurationError("Locales not provided")
        if not locales:
            raise MissingConfigurationError("Supported locale list is empty")
        return locales

    @classmethod
    def from_settings(cls, cfg: Optional[Settings] = None, **overrides: Any) -> "InitOptions":
        """Build options from environment settings; keyword arguments win."""
        cfg = cfg or settings
        extra: List[AssetLoader] = []
        if cfg.LOCALES_DIR:
            extra.append(DirectoryAssetLoader(cfg.LOCALES_DIR))
        if cfg.REMOTE_LOCALES_URL:
            extra.append(RemoteAssetLoader(cfg.REMOTE_LOCALES_URL, cfg.REMOTE_LOCALE_FILES))

        values: dict[str, Any] = dict(
            asset_loader=PackageAssetLoader(cfg.LOCALES_PACKAGE),
            asset_loaders_extra=extra,
            supported_language_codes=list(cfg.SUPPORTED_LANGUAGE_CODES),
            default_type=cfg.DEFAULT_TYPE,
            storage_path=cfg.STORAGE_PATH,
            storage_backend=cfg.STORAGE_BACKEND,
            database_url=cfg.DATABASE_URL or None,
        )
        values.update(overrides)
        return cls(**values)
