"""ASGI entry point: `uvicorn portfolio_site.main:app` or the `portfolio-site` script."""

from pathlib import Path

from dotenv import load_dotenv

from portfolio_site.config import get_settings
from portfolio_site.core.app_factory import create_app
from portfolio_site.logging_config import setup_logging

# .env must be loaded before the settings singleton is first built
load_dotenv(Path(__file__).parent.parent / ".env")

settings = get_settings()
setup_logging(settings.log_level, settings.log_dir)

app = create_app()


def run() -> None:
    """Serve the app with uvicorn on the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run("portfolio_site.main:app", host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    run()
