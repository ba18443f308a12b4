"""Protean Engine runner for the canteen domain.

Only needed when events are processed asynchronously (PROTEAN_ENV=production):
the Engine picks up OrderPlaced/OrderStatusChanged events and runs the
notification handlers outside the request cycle.

Usage:
    python src/server.py
"""

import asyncio

from protean.server.engine import Engine

from canteen.domain import canteen


async def run():
    canteen.init()
    await Engine(canteen).run()


def main():
    asyncio.run(run())


if __name__ == "__main__":
    main()
