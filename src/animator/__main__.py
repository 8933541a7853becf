"""Run the relay service with uvicorn."""

import uvicorn

from .config import load_config
from .main import create_app


def main() -> None:
    config = load_config()
    app = create_app(config)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
