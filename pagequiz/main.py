import uvicorn

from pagequiz.config.settings import Settings
from pagequiz.logging.logger import Log
from pagequiz.server.app import create_app


def main() -> None:
    """Entry point: load settings -> configure logging -> serve the generation endpoint."""
    settings = Settings()
    Log.configure(settings.log_level, server=True)
    app = create_app(settings)
    Log.info(
        f"Starting generation endpoint on {settings.server_host}:{settings.server_port} "
        f"(provider={settings.completion_provider})"
    )
    uvicorn.run(
        app,
        host=settings.server_host,
        port=settings.server_port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
