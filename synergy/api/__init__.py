"""Synergy HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application serving the inner-source portal.

Usage
-----
Create and run the application::

    from synergy.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # full mode with portal endpoints

"""

from synergy.api.app import AppDependencies, create_app

__all__ = ["AppDependencies", "create_app"]
