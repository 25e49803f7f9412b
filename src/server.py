"""Protean Engine runner for the storefront domain.

In production (``PROTEAN_ENV=production``) domain events are processed
asynchronously; the Engine drains them for any registered handlers.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine


def main():
    from storefront.domain import storefront

    storefront.init()
    engine = Engine(storefront)
    asyncio.run(engine.run())


if __name__ == "__main__":
    main()
