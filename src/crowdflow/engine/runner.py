"""
Live Update Runner
==================

Fixed-cadence driver that ticks a simulator while live updates are on.

Rules:
    - One tick per interval while ``enabled`` is True
    - While disabled, ticks are skipped and LOST (no backlog, no catch-up)
    - A failing tick is logged and counted; the loop keeps running
    - Cancellation or stop() ends the loop cleanly
"""

import asyncio
import logging

from crowdflow.engine.simulator import CrowdSimulator


logger = logging.getLogger(__name__)


class LiveUpdateRunner:
    """
    Periodic tick driver for a CrowdSimulator.

    Attributes:
        simulator: Simulator to advance
        interval_seconds: Delay between ticks
        enabled: Live-update flag

    Example:
        runner = LiveUpdateRunner(simulator, interval_seconds=3.0)
        task = asyncio.create_task(runner.run())
        runner.enabled = False    # pause, skipped ticks are dropped
    """

    def __init__(
        self,
        simulator: CrowdSimulator,
        interval_seconds: float = 3.0,
        enabled: bool = True,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")

        self.simulator = simulator
        self.interval_seconds = interval_seconds
        self.enabled = enabled

        self._running = False
        self._ticks_run: int = 0
        self._ticks_skipped: int = 0
        self._error_count: int = 0

        logger.info(
            f"LiveUpdateRunner initialized: interval={interval_seconds}s, "
            f"enabled={enabled}"
        )

    def step(self) -> bool:
        """
        Run one scheduled step.

        Returns:
            True if the simulator ticked, False if live updates are off
        """
        if not self.enabled:
            self._ticks_skipped += 1
            logger.debug("Live updates disabled, tick skipped")
            return False

        self.simulator.tick()
        self._ticks_run += 1
        return True

    async def run(self) -> None:
        """Tick every interval until stopped or cancelled."""
        self._running = True
        logger.info("Live update loop started")

        try:
            while self._running:
                await asyncio.sleep(self.interval_seconds)
                try:
                    self.step()
                except Exception as e:
                    self._error_count += 1
                    logger.error(f"Tick failed: {e}")
        except asyncio.CancelledError:
            logger.info("Live update loop cancelled")
            raise
        finally:
            self._running = False
            logger.info("Live update loop stopped")

    def stop(self) -> None:
        """Ask the loop to exit after the current interval."""
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def metrics(self) -> dict:
        """Runner counters for observability."""
        return {
            "enabled": self.enabled,
            "interval_seconds": self.interval_seconds,
            "ticks_run": self._ticks_run,
            "ticks_skipped": self._ticks_skipped,
            "errors": self._error_count,
        }
