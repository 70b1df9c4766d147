"""Environment-driven configuration for the ConstructionWire MCP server."""

import os
from dataclasses import dataclass, field
from typing import List, Optional

DEFAULT_API_BASE_URL = "https://api.constructionwire.com/v1"

AUTH_MODE_BASIC = "basic"
AUTH_MODE_BEARER = "bearer"


@dataclass(frozen=True)
class LogShippingConfig:
    enabled: bool = False
    endpoint: str = ""
    api_key: Optional[str] = None
    require_api_key: bool = False
    batch_size: int = 500
    flush_interval: int = 5000
    max_retries: int = 3
    log_level: str = "ERROR"


@dataclass(frozen=True)
class ConstructionWireConfig:
    auth_mode: str = AUTH_MODE_BASIC
    username: Optional[str] = None
    password: Optional[str] = None
    email: Optional[str] = None
    api_base_url: str = DEFAULT_API_BASE_URL
    timeout: float = 30.0
    rate_limit: Optional[int] = None
    max_retries: int = 3


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server settings loaded from environment variables."""

    constructionwire: ConstructionWireConfig
    log_shipping: LogShippingConfig = field(default_factory=LogShippingConfig)
    name: str = "constructionwire-mcp"


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {value!r}")


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return default
    try:
        return float(value)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {value!r}")


def load_config() -> ServerConfig:
    """Build a :class:`ServerConfig` from the current environment"""
    log_shipping = LogShippingConfig(
        enabled=_env_bool("LOG_SHIPPING_ENABLED"),
        endpoint=os.getenv("LOG_INGESTION_URL", ""),
        api_key=os.getenv("LOG_INGESTION_API_KEY") or None,
        require_api_key=_env_bool("LOG_SHIPPING_REQUIRE_API_KEY"),
        batch_size=_env_int("LOG_SHIPPING_BATCH_SIZE", 500),
        flush_interval=_env_int("LOG_SHIPPING_INTERVAL", 5000),
        max_retries=_env_int("LOG_SHIPPING_MAX_RETRIES", 3),
        log_level=os.getenv("LOG_LEVEL", "ERROR").upper(),
    )

    constructionwire = ConstructionWireConfig(
        auth_mode=os.getenv("CONSTRUCTIONWIRE_AUTH_MODE", AUTH_MODE_BASIC).strip().lower(),
        username=os.getenv("CONSTRUCTIONWIRE_USERNAME") or None,
        password=os.getenv("CONSTRUCTIONWIRE_PASSWORD") or None,
        email=os.getenv("CONSTRUCTIONWIRE_EMAIL") or None,
        api_base_url=os.getenv("CONSTRUCTIONWIRE_API_BASE_URL") or DEFAULT_API_BASE_URL,
        timeout=_env_float("CONSTRUCTIONWIRE_TIMEOUT", 30.0),
        rate_limit=_env_int("CONSTRUCTIONWIRE_RATE_LIMIT", None),
        max_retries=_env_int("CONSTRUCTIONWIRE_MAX_RETRIES", 3),
    )

    return ServerConfig(constructionwire=constructionwire, log_shipping=log_shipping)


def validate_config(config: ServerConfig) -> ValidationResult:
    """Collect every configuration problem instead of stopping at the first"""
    result = ValidationResult()
    cw = config.constructionwire

    if cw.auth_mode == AUTH_MODE_BASIC:
        if not cw.username:
            result.errors.append(
                "CONSTRUCTIONWIRE_USERNAME environment variable is required for ConstructionWire basic authentication"
            )
        if not cw.password:
            result.errors.append(
                "CONSTRUCTIONWIRE_PASSWORD environment variable is required for ConstructionWire basic authentication"
            )
    elif cw.auth_mode == AUTH_MODE_BEARER:
        if not cw.email:
            result.errors.append(
                "CONSTRUCTIONWIRE_EMAIL environment variable is required for ConstructionWire basic+bearer authentication"
            )
        if not cw.password:
            result.errors.append(
                "CONSTRUCTIONWIRE_PASSWORD environment variable is required for ConstructionWire basic+bearer authentication"
            )
    else:
        result.errors.append(
            f"CONSTRUCTIONWIRE_AUTH_MODE must be 'basic' or 'bearer', got {cw.auth_mode!r}"
        )

    if not cw.api_base_url.startswith(("http://", "https://")):
        result.errors.append("CONSTRUCTIONWIRE_API_BASE_URL must be an absolute http(s) URL")
    if cw.timeout <= 0:
        result.errors.append("CONSTRUCTIONWIRE_TIMEOUT must be greater than 0")
    if cw.rate_limit is not None and cw.rate_limit <= 0:
        result.errors.append("CONSTRUCTIONWIRE_RATE_LIMIT must be greater than 0")
    if cw.max_retries < 0:
        result.errors.append("CONSTRUCTIONWIRE_MAX_RETRIES must not be negative")

    shipping = config.log_shipping
    if shipping.enabled:
        if not shipping.endpoint:
            result.errors.append("LOG_INGESTION_URL environment variable is required when log shipping is enabled")
        elif not shipping.endpoint.startswith("https://"):
            result.errors.append("LOG_INGESTION_URL must use HTTPS protocol")
        if shipping.require_api_key and not shipping.api_key:
            result.errors.append(
                "LOG_INGESTION_API_KEY environment variable is required when LOG_SHIPPING_REQUIRE_API_KEY is true"
            )
        if not 1 <= shipping.batch_size <= 1000:
            result.errors.append("LOG_SHIPPING_BATCH_SIZE must be between 1 and 1000")
        if shipping.flush_interval < 1000:
            result.errors.append("LOG_SHIPPING_INTERVAL must be at least 1000ms")
        if shipping.max_retries < 0:
            result.errors.append("LOG_SHIPPING_MAX_RETRIES must not be negative")

    return result


__all__ = [
    "DEFAULT_API_BASE_URL",
    "AUTH_MODE_BASIC",
    "AUTH_MODE_BEARER",
    "LogShippingConfig",
    "ConstructionWireConfig",
    "ServerConfig",
    "ValidationResult",
    "load_config",
    "validate_config",
]
