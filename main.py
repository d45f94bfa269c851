"""Process entry point: serve the chat assistant API with uvicorn."""

import uvicorn

from chatbot.config import load_app_config


def main() -> None:
    config = load_app_config()
    uvicorn.run(
        "backend.app:build_server_app",
        factory=True,
        host="0.0.0.0",
        port=config.port,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
