from dataclasses import dataclass
from typing import Optional
import os
from dotenv import load_dotenv

from photocritic.constants import (
    BACKEND_ANTHROPIC,
    BACKEND_OPENAI,
    DEFAULT_AWS_REGION,
    DEFAULT_HOST,
    DEFAULT_LOG_LEVEL,
    DEFAULT_PORT,
    DEFAULT_VISION_BACKEND,
    DEFAULT_VISION_MAX_RETRIES,
    DEFAULT_VISION_MODELS,
    DEFAULT_VISION_TIMEOUT,
    VISION_BACKENDS,
)


@dataclass(frozen=True)
class Config:
    aws_region: str
    host: str
    port: int
    log_level: str
    vision_backend: str
    vision_model: str
    vision_timeout: int
    vision_max_retries: int
    anthropic_api_key: Optional[str] = None
    openai_api_key: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        load_dotenv()

        backend = os.getenv("VISION_BACKEND", DEFAULT_VISION_BACKEND).strip().lower()
        port = os.getenv("PORT") or str(DEFAULT_PORT)
        timeout = os.getenv("VISION_TIMEOUT") or str(DEFAULT_VISION_TIMEOUT)
        retries = os.getenv("VISION_MAX_RETRIES") or str(DEFAULT_VISION_MAX_RETRIES)

        return cls._validate(
            aws_region=os.getenv("AWS_REGION") or DEFAULT_AWS_REGION,
            host=os.getenv("HOST") or DEFAULT_HOST,
            port=port,
            log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL),
            vision_backend=backend,
            vision_model=os.getenv("VISION_MODEL") or None,
            vision_timeout=timeout,
            vision_max_retries=retries,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
        )

    @staticmethod
    def _validate(
        aws_region: str,
        host: str,
        port: str,
        log_level: str,
        vision_backend: str,
        vision_model: Optional[str],
        vision_timeout: str,
        vision_max_retries: str,
        anthropic_api_key: Optional[str],
        openai_api_key: Optional[str],
    ) -> "Config":
        match vision_backend:
            case b if b in VISION_BACKENDS:
                pass
            case _:
                raise ValueError(
                    f"VISION_BACKEND must be one of {', '.join(VISION_BACKENDS)}"
                )

        match (vision_backend, anthropic_api_key, openai_api_key):
            case (b, None, _) if b == BACKEND_ANTHROPIC:
                raise ValueError("ANTHROPIC_API_KEY must be set for the anthropic backend")
            case (b, _, None) if b == BACKEND_OPENAI:
                raise ValueError("OPENAI_API_KEY must be set for the openai backend")
            case _:
                pass

        try:
            port_number = int(port)
            timeout_seconds = int(vision_timeout)
            max_retries = int(vision_max_retries)
        except ValueError as exc:
            raise ValueError(f"PORT, VISION_TIMEOUT and VISION_MAX_RETRIES must be integers ({exc})") from exc

        match max_retries:
            case n if n < 0:
                raise ValueError("VISION_MAX_RETRIES must be >= 0")
            case _:
                pass

        return Config(
            aws_region=aws_region,
            host=host,
            port=port_number,
            log_level=log_level,
            vision_backend=vision_backend,
            vision_model=vision_model or DEFAULT_VISION_MODELS[vision_backend],
            vision_timeout=timeout_seconds,
            vision_max_retries=max_retries,
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
        )
