from __future__ import annotations

import re
from datetime import timedelta
from pathlib import Path
from typing import Annotated, Literal, TypeAlias

from pydantic import BaseModel, RedisDsn
from pydantic.functional_validators import AfterValidator, BeforeValidator
from pydantic_settings import BaseSettings, SettingsConfigDict

_BASE_DIR = Path(__file__).absolute().resolve().parent.parent

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB

_SIZE_UNITS = {"b": 1, "kb": _KB, "mb": _MB, "gb": _GB}
_SIZE_RE = re.compile(r"(?P<amount>\d+(?:\.\d+)?)(?P<unit>[kmg]?b)")
_SIZE_ERR = 'string in a valid format required (e.g. "1KB", "1.5GB")'

_TTL_UNITS = {"d": "days", "h": "hours", "m": "minutes", "s": "seconds"}
_TTL_RE = re.compile(r"(?:(?P<d>\d+)d)?(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s)?")
_TTL_ERR = 'string in a valid format required (e.g. "30d", "1d12h", "15m")'


def _as_absolute_path(value: str | None) -> str | None:
    """Resolves a relative path against the project root."""
    if value is None or Path(value).is_absolute():
        return value
    return str(_BASE_DIR / value)


def _parse_bytes_size(value):
    """Converts strings like '5MB' or '1.5kb' to a number of bytes."""
    if not isinstance(value, str):
        return value

    text = value.strip().lower()
    if text.isdigit():
        return int(text)

    match = _SIZE_RE.fullmatch(text)
    if match is None:
        raise ValueError(_SIZE_ERR)
    return int(float(match["amount"]) * _SIZE_UNITS[match["unit"]])


def _parse_timedelta_from_str(value):
    """Converts strings like '30d' or '1d12h30m' to a timedelta."""
    if not isinstance(value, str):
        return value

    match = _TTL_RE.fullmatch(value.strip().lower())
    if match is None:
        raise ValueError(_TTL_ERR)

    parts = {
        _TTL_UNITS[unit]: int(amount)
        for unit, amount in match.groupdict().items()
        if amount is not None
    }
    if not parts:
        raise ValueError(_TTL_ERR)
    return timedelta(**parts)


AbsPath = Annotated[str, AfterValidator(_as_absolute_path)]
BytesSize = Annotated[int, BeforeValidator(_parse_bytes_size)]
TTL = Annotated[timedelta, BeforeValidator(_parse_timedelta_from_str)]


class AuthConfig(BaseModel):
    # superadmin endpoints reject every request when the token is not set
    superadmin_token: str | None = None


class CacheConfig(BaseModel):
    # locks and registry changes are seen by other processes only with redis
    backend_dsn: Literal["mem://"] | RedisDsn = "mem://"


class CORSConfig(BaseModel):
    allowed_origins: list[str] = []
    allowed_methods: list[str] = ["*"]
    allowed_headers: list[str] = ["*"]


class FeatureConfig(BaseModel):
    retention_period: TTL = timedelta(days=30)
    upload_file_max_size: BytesSize = 5 * _MB
    upload_max_files: int = 10


class FileSystemDatabaseConfig(BaseModel):
    fs_location: AbsPath = str(_BASE_DIR / "data" / "namespaces")


class FileSystemStorageConfig(BaseModel):
    fs_location: AbsPath = str(_BASE_DIR / "data" / "uploads")


class SentryConfig(BaseModel):
    dsn: str | None = None
    environment: str | None = None


class ARQWorkerConfig(BaseModel):
    broker_dsn: Annotated[str, RedisDsn] = "redis://localhost:6379"


DatabaseConfig: TypeAlias = FileSystemDatabaseConfig

StorageConfig: TypeAlias = FileSystemStorageConfig

WorkerConfig: TypeAlias = ARQWorkerConfig


class AppConfig(BaseSettings):
    app_name: str = "LogoVote"
    app_version: str = "dev"
    app_debug: bool = False

    auth: AuthConfig = AuthConfig()
    cache: CacheConfig = CacheConfig()
    cors: CORSConfig = CORSConfig()
    database: DatabaseConfig = DatabaseConfig()
    features: FeatureConfig = FeatureConfig()
    sentry: SentryConfig = SentryConfig()
    storage: StorageConfig = StorageConfig()
    worker: WorkerConfig = WorkerConfig()

    model_config = SettingsConfigDict(
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
    )


config = AppConfig()
