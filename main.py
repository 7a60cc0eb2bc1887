# main.py (raíz)
import logging

import uvicorn

from learnhub.api.app import create_app
from learnhub.config.settings import get_settings

settings = get_settings()

logging.basicConfig(level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

app = create_app(settings=settings)


if __name__ == "__main__":
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
