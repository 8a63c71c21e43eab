"""Run the API with uvicorn on the configured port: python -m remix.server"""

import uvicorn

from remix.core.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run("remix.main:app", host="0.0.0.0", port=settings.PORT, reload=settings.APP_ENV == "dev")


if __name__ == "__main__":
    main()
