import logging

import uvicorn

from backend.core.logging import setup_logging
from generator.config import load_generator_config

logger = logging.getLogger("springyaml.run")


def main() -> None:
    setup_logging()
    config = load_generator_config()
    logger.info(f"🚀 Starting Spring YAML Generator on {config.server.host}:{config.server.port}...")
    uvicorn.run("backend.main:app", host=config.server.host, port=config.server.port)


if __name__ == "__main__":
    main()
