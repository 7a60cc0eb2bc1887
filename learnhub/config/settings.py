# learnhub/config/settings.py
import os
import logging
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

PAGINATION_POLICIES = ("reject", "coerce")


def _env_int(name: str, default: int, minimum: int = 1) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} no es un entero, se usa {default}")
        return default
    if value < minimum:
        logger.warning(f"{name}={value} es menor a {minimum}, se usa {default}")
        return default
    return value


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"{name}={raw!r} no es numérico, se usa {default}")
        return default


@dataclass(frozen=True)
class Settings:
    """Configuración inmutable de la API y del cliente."""

    default_page_size: int = 10
    max_page_size: int = 50
    # "reject" -> 400 ante page/pageSize inválidos; "coerce" -> se usa el default
    pagination_policy: str = "reject"

    api_url: str = "http://localhost:8000/api/v1"
    http_timeout: float = 10.0

    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Crear configuración desde variables de entorno (.env incluido)."""
        max_page_size = _env_int("LEARNHUB_MAX_PAGE_SIZE", cls.max_page_size)
        default_page_size = _env_int("LEARNHUB_DEFAULT_PAGE_SIZE", cls.default_page_size)
        if default_page_size > max_page_size:
            logger.warning(
                f"LEARNHUB_DEFAULT_PAGE_SIZE={default_page_size} supera el máximo {max_page_size}, se recorta"
            )
            default_page_size = max_page_size

        policy = (os.getenv("LEARNHUB_PAGINATION_POLICY") or cls.pagination_policy).strip().lower()
        if policy not in PAGINATION_POLICIES:
            logger.warning(f"LEARNHUB_PAGINATION_POLICY={policy!r} desconocida, se usa 'reject'")
            policy = "reject"

        return cls(
            default_page_size=default_page_size,
            max_page_size=max_page_size,
            pagination_policy=policy,
            api_url=(os.getenv("LEARNHUB_API_URL") or cls.api_url).rstrip("/"),
            http_timeout=_env_float("LEARNHUB_HTTP_TIMEOUT", cls.http_timeout),
            port=_env_int("LEARNHUB_PORT", cls.port),
            log_level=(os.getenv("LEARNHUB_LOG_LEVEL") or cls.log_level).upper(),
        )


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Instancia única, leída del entorno la primera vez."""
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings


def reset_settings() -> None:
    """Olvida la instancia cacheada (útil en tests que cambian el entorno)."""
    global _settings
    _settings = None
