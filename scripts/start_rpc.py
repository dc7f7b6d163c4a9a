#!/usr/bin/env python3
"""Start the broker RPC worker."""

import asyncio
import signal
import sys

import logfire
import redis.asyncio as redis

from remark.config import RpcSettings, Settings
from remark.interface.rpc import RpcServer
from remark.util.di.container import create_container
from remark.util.logging import setup_logging
from remark.util.observability import configure_logfire, instrument_redis


async def serve() -> None:
    """Run the RPC server until SIGINT or SIGTERM."""
    container = create_container(with_fastapi=False)
    try:
        server = RpcServer(
            container=container,
            client=await container.get(redis.Redis),
            settings=await container.get(RpcSettings),
        )

        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, server.stop)

        await server.run()
    finally:
        # Drains pending events and closes connections
        await container.close()


def main() -> int:
    """Start the worker and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings, service_name="remark-rpc")
    instrument_redis()

    try:
        logfire.info("Starting RPC worker", queue_prefix=settings.rpc.queue_prefix)
        asyncio.run(serve())
        return 0

    except Exception as e:
        logfire.error(
            "RPC worker failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
