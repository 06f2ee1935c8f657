"""Configuration system using pydantic-settings with environment variable loading."""

from typing import Literal

from pydantic import BaseModel, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

SourceKind = Literal["http", "exchange", "redis"]


class SignerSettings(BaseSettings):
    """Attestation signing key.

    The key is a hex-encoded secp256k1 private key, with or without the 0x prefix.
    An empty value is a fatal startup condition.
    """

    model_config = SettingsConfigDict(env_prefix="ORACLE_")

    private_key: SecretStr = SecretStr("")


class HttpSourceSettings(BaseSettings):
    """Upstream HTTP price source returning {symbol, price, timestamp}."""

    model_config = SettingsConfigDict(env_prefix="UPSTREAM_HTTP_")

    url_template: str = "http://localhost:8081/v1/price/{symbol}"
    timeout_seconds: float = 5.0
    price_field: str = "price"
    timestamp_field: str = "timestamp"


class ExchangeSourceSettings(BaseSettings):
    """Exchange ticker source via ccxt (public endpoints only)."""

    model_config = SettingsConfigDict(env_prefix="UPSTREAM_EXCHANGE_")

    exchange_id: str = "binance"
    timeout_ms: int = 5000


class RedisSourceSettings(BaseSettings):
    """Redis market hash source (HGET <key> <field>)."""

    model_config = SettingsConfigDict(env_prefix="REDIS_")

    host: str = "localhost"
    port: int = 6379
    password: SecretStr = SecretStr("")
    tls: bool = False
    key_template: str = "markets:{symbol}"
    field: str = "close"


class ServerSettings(BaseSettings):
    """HTTP server configuration."""

    model_config = SettingsConfigDict(env_prefix="SERVER_")

    host: str = "0.0.0.0"
    port: int = 8080
    request_timeout: float = 10.0  # seconds a request waits on an in-flight refresh


class MintSettings(BaseSettings):
    """KYC mint-authorization signing.

    Disabled by default. Authorization policy belongs to the deploying system;
    the only built-in registry is an explicit allowlist.
    """

    model_config = SettingsConfigDict(env_prefix="MINT_")

    enabled: bool = False
    validity_seconds: int = 300
    allowlist: list[str] = Field(default_factory=list)


class FeedDefinition(BaseModel):
    """A single attested price feed."""

    feed_id: str
    asset_pair: str  # hashed into the digest, e.g. "MORPHER:ETH_USD"
    symbol: str  # upstream symbol passed to the quote source
    decimals: int = Field(default=18, ge=0, le=77)
    ttl_ms: int = Field(default=5000, gt=0)
    source: SourceKind = "http"


def _default_feeds() -> list[FeedDefinition]:
    return [
        FeedDefinition(
            feed_id="eth-usd",
            asset_pair="MORPHER:ETH_USD",
            symbol="ETHUSD",
        ),
    ]


class AppSettings(BaseSettings):
    """Root application settings, composing all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
    )

    log_level: str = "INFO"
    signer: SignerSettings = Field(default_factory=SignerSettings)
    http_source: HttpSourceSettings = Field(default_factory=HttpSourceSettings)
    exchange_source: ExchangeSourceSettings = Field(default_factory=ExchangeSourceSettings)
    redis: RedisSourceSettings = Field(default_factory=RedisSourceSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)
    mint: MintSettings = Field(default_factory=MintSettings)
    feeds: list[FeedDefinition] = Field(default_factory=_default_feeds)
