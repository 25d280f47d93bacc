import logging

import uvicorn

from searchcrawl.api.server import create_app
from searchcrawl.container import Container

logger = logging.getLogger(__name__)


def main(container: Container = None):
    """Start the SearchCrawl API server.

    A pre-built container can be injected for testing.
    """
    if container is None:
        container = Container()

    cfg = container.config()
    logging.basicConfig(
        level=getattr(logging, str(cfg.get("LOG_LEVEL") or "INFO").upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(container)
    host = cfg.get("HOST") or "0.0.0.0"
    port = int(cfg.get("PORT") or 3000)
    logger.info("SearchCrawl listening on http://%s:%s", host, port)
    uvicorn.run(app, host=host, port=port)


if __name__ == '__main__':
    main()
