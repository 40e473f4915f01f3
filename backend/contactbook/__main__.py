"""Process entry point: `python -m contactbook`.

Exits non-zero when the store is unreachable at startup (uvicorn aborts on a
failed lifespan).
"""

import uvicorn

from contactbook.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "contactbook.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
