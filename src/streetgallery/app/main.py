"""
Run with: python -m streetgallery
"""
from __future__ import annotations

import sys

from streetgallery.app.application import create_app
from streetgallery.app.location import LocationManager
from streetgallery.app.ui.main_window import MapWindow
from streetgallery.config import load_settings


def main() -> int:
    """Main entry point for the application."""
    app = create_app()
    location_manager = LocationManager()
    win = MapWindow(location_manager, settings=load_settings())
    win.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
