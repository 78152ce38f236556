"""Run the Note Service with uvicorn: python -m ournotes"""

import uvicorn

from ournotes.config import settings


def main() -> None:
    uvicorn.run(
        "ournotes.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
