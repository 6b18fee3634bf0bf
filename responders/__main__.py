"""Run the responders service: `python -m responders`."""
from __future__ import annotations

import uvicorn

from responders.config import load_settings
from responders.logging_conf import setup_logging


def main() -> None:
    setup_logging()
    settings = load_settings()

    from responders.main import create_app

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,  # keep the JSON handlers installed by setup_logging
    )


if __name__ == "__main__":
    main()
