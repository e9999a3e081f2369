"""Run the API server: `python -m taskboard`."""
import uvicorn

from taskboard.config import settings


def main() -> None:
    uvicorn.run(
        "taskboard.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
