"""HTTP API for the spec context and search engine.

Example:
    >>> from speckeep.server import create_app
    >>> app = create_app(build_services(Config.load()))
"""

from speckeep.server._app import create_app

__all__ = ["create_app"]
