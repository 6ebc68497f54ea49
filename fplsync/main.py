"""Entry point for the fplsync feed monitor."""

from __future__ import annotations

import logging


def main() -> None:
    from fplsync.config import load_settings
    from fplsync.ui.app import FeedMonitorApp

    settings = load_settings()
    logging.basicConfig(
        filename=settings.log_file,
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = FeedMonitorApp(settings)
    app.run()


if __name__ == "__main__":
    main()
