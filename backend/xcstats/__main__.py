"""
Run the API server.

Usage:
    python -m xcstats
    xcstats            # console script
"""

import uvicorn

from xcstats.config import settings


def main():
    uvicorn.run(
        "xcstats.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
