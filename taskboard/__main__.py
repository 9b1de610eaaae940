"""
Run the API server:

  python -m taskboard

Binds to HOST:PORT from settings; reload is enabled in the dev environment.
"""

import uvicorn

from taskboard.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "taskboard.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
        reload=settings.APP_ENV == "dev",
    )


if __name__ == "__main__":
    main()
