import uvicorn

from app.core.config import settings


def main():
    """Serve the API with uvicorn using the configured host and port."""
    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
