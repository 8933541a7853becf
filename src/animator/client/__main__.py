"""Run the upload UI with uvicorn."""

import uvicorn

from ..logging import configure_logging
from .client_app import create_client_app
from .client_config import load_client_config


def main() -> None:
    configure_logging()
    config = load_client_config()
    uvicorn.run(create_client_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
