"""Configuration for enginoor."""

from dataclasses import dataclass, field

from .engine.client import DEFAULT_JWT_EXPIRY, DEFAULT_TIMEOUT
from .engine.exceptions import ConfigError


@dataclass
class Config:
    """Client configuration.

    The JWT secret comes either from ``jwt_secret`` (raw string, used as the
    HMAC key bytes as-is) or from ``jwt_secret_path`` (hex-encoded file, the
    format execution clients write). The raw value wins when both are set.
    """

    engine_api_url: str = "http://localhost:8551"
    jwt_secret_raw: str = field(default="", repr=False)
    jwt_secret_path: str = ""
    timeout: float = DEFAULT_TIMEOUT
    jwt_expiry: int = DEFAULT_JWT_EXPIRY
    log_level: str = "INFO"

    @property
    def jwt_secret(self) -> bytes:
        if self.jwt_secret_raw:
            return self.jwt_secret_raw.encode()
        if not self.jwt_secret_path:
            raise ConfigError("JWT secret is not set (use JWT_SECRET or --jwt-secret-file)")
        try:
            with open(self.jwt_secret_path, "rb") as f:
                secret = bytes.fromhex(f.read().decode().strip().replace("0x", ""))
        except OSError as e:
            raise ConfigError(f"cannot read JWT secret file {self.jwt_secret_path}: {e}") from e
        except ValueError as e:
            raise ConfigError(f"JWT secret file {self.jwt_secret_path} is not valid hex: {e}") from e
        if not secret:
            raise ConfigError(f"JWT secret file {self.jwt_secret_path} is empty")
        return secret

    def validate(self) -> bytes:
        """Raise ConfigError if the configuration cannot produce a working client.

        Returns the JWT secret, so callers load it only once.
        """
        if not self.engine_api_url:
            raise ConfigError("Engine API URL is not set")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")
        if self.jwt_expiry <= 0:
            raise ConfigError(f"JWT expiry must be positive, got {self.jwt_expiry}")
        secret = self.jwt_secret
        if not secret:
            raise ConfigError("JWT secret is empty")
        return secret
