import logging

import uvicorn

from .core.config import settings


def main() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run("sitewright.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
