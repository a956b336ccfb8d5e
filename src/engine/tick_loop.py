"""
TickLoop - host clock driving the transition engine

Runs an asyncio task at a target rate and calls the tick callback exactly
once per cycle with the wall time elapsed since the previous tick, in
milliseconds. A tick is awaited to completion before the next one starts.
Supports pause/step/FPS control for debugging.
"""

from __future__ import annotations
import asyncio
import time
from collections import deque
from typing import Awaitable, Callable, Deque, Dict, Optional

from models.enums import LogCategory
from utils.logger import get_logger

log = get_logger().for_category(LogCategory.LIFECYCLE)

TickCallback = Callable[[float], Awaitable[None]]


class TickLoop:
    """
    Fixed-rate async tick driver

    Example:
        loop = TickLoop(service.tick, fps=60)
        await loop.start()
        ...
        await loop.stop()
    """

    def __init__(self, tick: TickCallback, fps: int = 60):
        """
        Args:
            tick: Coroutine function receiving elapsed milliseconds
            fps: Target tick frequency (1-240, default 60)
        """
        self._tick = tick
        self.fps = max(1, min(fps, 240))

        self.running = False
        self.paused = False
        self.step_requested = False
        self.task: Optional[asyncio.Task] = None

        self.last_tick_time: Optional[float] = None
        self.tick_durations: Deque[float] = deque(maxlen=300)
        self.ticks_run = 0
        self.tick_errors = 0

    # === Control API ===

    def pause(self) -> None:
        self.paused = True
        # Time spent paused is not fed to the engine
        self.last_tick_time = None

    def resume(self) -> None:
        self.paused = False

    def step(self) -> None:
        """Run a single tick while paused"""
        self.step_requested = True

    def set_fps(self, fps: int) -> None:
        self.fps = max(1, min(fps, 240))
        log.info(f"Tick rate set to {self.fps} FPS")

    # === Lifecycle ===

    async def start(self) -> None:
        if self.running:
            log.warn("Tick loop already running")
            return

        self.running = True
        self.last_tick_time = None
        self.task = asyncio.create_task(self._loop())
        log.info(f"Tick loop started @ {self.fps} FPS")

    async def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        if self.task:
            self.task.cancel()
            try:
                await self.task
            except asyncio.CancelledError:
                pass
            self.task = None

        log.info("Tick loop stopped", ticks_run=self.ticks_run, tick_errors=self.tick_errors)

    # === Core ===

    async def run_once(self, elapsed_ms: Optional[float] = None) -> float:
        """
        Run one tick

        Args:
            elapsed_ms: Elapsed time to feed; measured with perf_counter when omitted

        Returns:
            Elapsed milliseconds passed to the tick callback
        """
        now = time.perf_counter()
        if elapsed_ms is None:
            elapsed_ms = 0.0 if self.last_tick_time is None else (now - self.last_tick_time) * 1000.0
        self.last_tick_time = now

        try:
            await self._tick(elapsed_ms)
        except Exception as e:
            self.tick_errors += 1
            log.error(f"Tick error: {e}")
        finally:
            self.ticks_run += 1
            self.tick_durations.append((time.perf_counter() - now) * 1000.0)

        return elapsed_ms

    async def _loop(self) -> None:
        frame_delay = 1.0 / self.fps

        while self.running:
            if self.paused and not self.step_requested:
                await asyncio.sleep(0.01)
                continue

            if self.step_requested:
                # One step advances by exactly one nominal frame
                await self.run_once(frame_delay * 1000.0)
                self.step_requested = False
                self.last_tick_time = None
            else:
                await self.run_once()

            await asyncio.sleep(frame_delay)
            frame_delay = 1.0 / self.fps

    # === Metrics ===

    def average_tick_ms(self) -> float:
        if not self.tick_durations:
            return 0.0
        return sum(self.tick_durations) / len(self.tick_durations)

    def get_metrics(self) -> Dict:
        return {
            "fps_target": self.fps,
            "running": self.running,
            "paused": self.paused,
            "ticks_run": self.ticks_run,
            "tick_errors": self.tick_errors,
            "average_tick_ms": round(self.average_tick_ms(), 4),
        }
