"""Entry point — wires Config → VisionClient → PhotoAnalyzer → FastAPI app."""
import logging

import uvicorn
from rich.logging import RichHandler

from photocritic.config import Config
from photocritic.constants import BACKEND_ANTHROPIC, BACKEND_BEDROCK, MSG_SERVER_STARTING
from photocritic.pipeline import PhotoAnalyzer
from photocritic.server import create_app
from photocritic.vision.claude import ClaudeVisionClient
from photocritic.vision.client import VisionClient
from photocritic.vision.openai import OpenAIVisionClient


def setup_logging(level: str) -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    list(map(root.removeHandler, root.handlers[:]))
    root.addHandler(RichHandler(rich_tracebacks=True))


def build_vision_client(config: Config) -> VisionClient:
    """Create the process-wide inference client once, at startup."""
    options = {"timeout": config.vision_timeout, "max_retries": config.vision_max_retries}
    match config.vision_backend:
        case b if b == BACKEND_BEDROCK:
            return ClaudeVisionClient.for_bedrock(config.aws_region, config.vision_model, **options)
        case b if b == BACKEND_ANTHROPIC:
            return ClaudeVisionClient.from_api_key(
                config.anthropic_api_key, config.vision_model, **options
            )
        case _:
            return OpenAIVisionClient.from_api_key(
                config.openai_api_key, config.vision_model, **options
            )


def main() -> None:
    config = Config.from_env()
    setup_logging(config.log_level)

    logger = logging.getLogger(__name__)
    logger.info(
        MSG_SERVER_STARTING, config.host, config.port, config.vision_backend, config.vision_model
    )

    app = create_app(PhotoAnalyzer(build_vision_client(config)))
    uvicorn.run(app, host=config.host, port=config.port, log_config=None)


if __name__ == "__main__":
    main()
