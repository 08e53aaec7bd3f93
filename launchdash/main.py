from prometheus_fastapi_instrumentator import Instrumentator

from launchdash import create_app
from launchdash.core.config import get_settings
from launchdash.core.logging import configure_logging

settings = get_settings()
configure_logging(settings)
app = create_app(settings)
Instrumentator().instrument(app).expose(app, include_in_schema=False)


def run() -> None:
    import uvicorn

    uvicorn.run("launchdash.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
