"""Run the API with uvicorn: python -m boutique"""

import uvicorn

from boutique.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("boutique.main:app", host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
