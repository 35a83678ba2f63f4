"""Value normalization applied after defaulting."""

from __future__ import annotations

from .schema import Config

# rediss:// implies TLS. It is stripped like redis:// and enables nothing.
CACHE_SCHEMES: tuple[str, ...] = ("redis://", "rediss://")


def normalize_cache_address(address: str) -> str:
    """
    Reduce a cache address to a bare ``host:port``.

    Strips surrounding whitespace and a known URL scheme. Unknown schemes
    are left alone; a malformed address is the cache client's problem.

    Examples:
        >>> normalize_cache_address("redis://cache:6379")
        'cache:6379'
        >>> normalize_cache_address(" rediss://cache:6379 ")
        'cache:6379'
        >>> normalize_cache_address("http://cache:6379")
        'http://cache:6379'
    """
    current = address
    while True:
        stripped = current.strip()
        for scheme in CACHE_SCHEMES:
            if stripped.startswith(scheme):
                stripped = stripped[len(scheme) :]
                break
        # Repeat until stable so normalizing twice changes nothing
        if stripped == current:
            return stripped
        current = stripped


def normalize_origins(origins: tuple[str, ...]) -> tuple[str, ...]:
    """Trim each CORS origin and drop empty entries."""
    return tuple(origin.strip() for origin in origins if origin.strip())


def normalize_config(config: Config) -> Config:
    """Return a new Config with section-specific post-processing applied."""
    redis = config.redis
    if redis.address:
        redis = redis.model_copy(update={"address": normalize_cache_address(redis.address)})

    server = config.server.model_copy(
        update={"cors_allowed_origins": normalize_origins(config.server.cors_allowed_origins)}
    )
    return config.model_copy(update={"redis": redis, "server": server})
