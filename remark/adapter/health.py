"""Readiness probing of backing services."""

from collections.abc import Awaitable, Callable

Probe = Callable[[], Awaitable[bool]]


class ReadinessChecker:
    """Runs named probes against the services a process depends on."""

    def __init__(self, probes: dict[str, Probe]) -> None:
        self.probes = probes

    async def check(self) -> dict[str, bool]:
        """Run every probe.

        Returns:
            Probe name to result
        """
        return {name: await probe() for name, probe in self.probes.items()}
