"""Main application entry point"""

import uvicorn

from .api.app import create_app
from .core import load_config


app = create_app()


def main():
    """Run the application with the configured server settings"""
    server = load_config().server

    uvicorn.run(
        "chat_toolkit.main:app",
        host=server.host,
        port=server.port,
        reload=False,
        log_level=server.log_level.lower()
    )


if __name__ == "__main__":
    main()
