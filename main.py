"""log-insight server — serves the category log store over HTTP."""

import logging
import sys

from log_insight.config import load_config
from log_insight.errors import IOFailure
from log_insight.service import LogService
from log_insight.web import create_app

logger = logging.getLogger(__name__)


def main():
    config = load_config()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s [log-insight] %(levelname)s %(message)s",
        stream=sys.stderr,
    )
    logger.info(
        "Config: log_dir=%s, host=%s, port=%d, max_page_size=%d, audit_requests=%s",
        config.log_dir, config.host, config.port, config.max_page_size, config.audit_requests,
    )

    service = LogService(config)
    app = create_app(service, config)
    try:
        service.writer("app").info(f"Server running on port {config.port}", port=config.port, host=config.host)
    except IOFailure as exc:
        logger.warning("Could not record startup in app log: %s", exc)
    app.run(host=config.host, port=config.port)


if __name__ == "__main__":
    main()
