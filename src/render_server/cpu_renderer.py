"""
CpuRenderer: multi-threaded path tracer with a pollable snapshot interface.

The host owns its own event loop. It calls render_async() once, then polls
is_complete() and copy_snapshot() as often as it likes:

    renderer = CpuRenderer(world, cam)
    renderer.render_async()
    while not renderer.is_complete():
        image = renderer.copy_snapshot()   # PIL RGBA image of current progress
        ...

Scheduling: one work item per pixel, shuffled so partial snapshots fill in
evenly across the frame, drained by a fixed pool of worker threads. Two locks
guard shared state and are never held together: the work lock covers popping
a single item, the buffer lock covers writing a single pixel and reading the
framebuffer for a snapshot.
"""

import logging
import os
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import List, Optional

import numpy as np
from PIL import Image

from core.camera import camera
from core.hittable import hittable
from render_server.base_renderer import BaseRenderer, PathStatistics, RenderError, RenderState
from util.color import color, to_rgba8
from util.sampling import pixel_seeds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class WorkItem:
    """One pixel's worth of rendering, consumed exactly once by one worker"""
    x: int
    y: int
    seed: int


class CpuRenderer(BaseRenderer):
    """Thread pool renderer implementing the render_async / copy_snapshot contract"""

    def __init__(self, world: hittable, cam: camera, num_workers: Optional[int] = None,
                 seed: Optional[int] = None, shuffle: bool = True):
        """
        Args:
            world: Scene to render; a private copy is taken
            cam: Camera configuration; a private copy is taken and initialized
            num_workers: Worker thread count (default: one per CPU)
            seed: Entropy for all random streams; None draws fresh entropy
            shuffle: Dispatch pixels in random order (affects preview only, never the result)
        """
        super().__init__(world, cam)

        if num_workers is None:
            num_workers = os.cpu_count() or 4
        if num_workers < 1:
            raise ValueError(f"num_workers must be >= 1, got {num_workers}")
        self.num_workers = num_workers
        self.seed = seed
        self.shuffle = shuffle

        self._state = RenderState.SETUP
        self._state_lock = threading.Lock()

        self._work_items: List[WorkItem] = []
        self._work_lock = threading.Lock()

        self._buffer_lock = threading.Lock()
        self._write_counts = np.zeros((self.height, self.width), dtype=np.int32)
        self._pixels_written = 0

        self._final_image: Optional[Image.Image] = None
        self._cancel = threading.Event()
        self._coordinator: Optional[threading.Thread] = None
        self._error: Optional[BaseException] = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> RenderState:
        return self._state

    def _set_state(self, new_state: RenderState):
        with self._state_lock:
            if new_state.value != self._state.value + 1:
                raise RenderError(f"illegal state transition {self._state.name} -> {new_state.name}")
            self._state = new_state

    def is_complete(self) -> bool:
        return self._state is RenderState.COMPLETE and self._final_image is not None

    def progress(self) -> float:
        """Fraction of pixels written so far"""
        return self._pixels_written / (self.width * self.height)

    def pixel_write_counts(self) -> np.ndarray:
        with self._buffer_lock:
            return self._write_counts.copy()

    def get_statistics(self) -> dict:
        with self._buffer_lock:
            return super().get_statistics()

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def render_async(self):
        with self._state_lock:
            if self._state is not RenderState.SETUP:
                logger.debug("render_async ignored in state %s", self._state.name)
                return
            self._state = RenderState.ACTIVE

        with self._buffer_lock:
            self.framebuffer.fill(0.0)
            self._write_counts.fill(0)
            self._pixels_written = 0

        entropy, seeds = pixel_seeds(self.seed, self.width * self.height)
        self.seed = entropy

        items = [WorkItem(x, y, seeds[y * self.width + x])
                 for y in range(self.height)
                 for x in range(self.width)]
        if self.shuffle:
            random.Random(entropy).shuffle(items)

        with self._work_lock:
            self._work_items = items

        logger.info("Rendering %dx%d, %d spp, depth %d on %d workers (seed %d)",
                    self.width, self.height, self.cam.samples_per_pixel, self.max_depth,
                    self.num_workers, entropy)

        self._coordinator = threading.Thread(target=self._run, name="render-coordinator", daemon=True)
        self._coordinator.start()

    def _run(self):
        with ThreadPoolExecutor(max_workers=self.num_workers,
                                thread_name_prefix="render-worker") as pool:
            futures = [pool.submit(self._worker_loop) for _ in range(self.num_workers)]
            try:
                for future in futures:
                    future.result()
            except Exception as exc:
                # Stop the remaining workers; the render can never complete now
                self._cancel.set()
                self._error = exc
                logger.exception("Render worker failed")

        if self._error is not None:
            return

        if self._cancel.is_set():
            logger.info("Render cancelled with %.1f%% of pixels written", self.progress() * 100)
            return

        counts = self.pixel_write_counts()
        if not (counts == 1).all():
            self._error = RenderError(
                f"{int((counts == 0).sum())} pixels missing, {int((counts > 1).sum())} written more than once")
            logger.critical("%s", self._error)
            return

        self._set_state(RenderState.COMPLETE)
        logger.info("Render complete")

    def _pop_work_item(self) -> Optional[WorkItem]:
        with self._work_lock:
            if not self._work_items:
                return None
            return self._work_items.pop()

    def _worker_loop(self):
        while not self._cancel.is_set():
            item = self._pop_work_item()
            if item is None:
                return

            stats = PathStatistics()
            rng = random.Random(item.seed)
            pixel = self.sample_pixel(item.x, item.y, rng, stats)

            self._write_pixel(item, pixel, stats)

    def _write_pixel(self, item: WorkItem, pixel: color, stats: PathStatistics):
        with self._buffer_lock:
            self.framebuffer[item.y, item.x] = pixel.to_tuple()
            self._write_counts[item.y, item.x] += 1
            self._pixels_written += 1
            self.statistics.merge(stats)

    # ------------------------------------------------------------------
    # Host interface
    # ------------------------------------------------------------------

    def copy_snapshot(self) -> Image.Image:
        if self.is_complete():
            return self._final_image.copy()

        # Read the state before the buffer: COMPLETE guarantees every pixel is already written
        was_complete = self._state is RenderState.COMPLETE

        with self._buffer_lock:
            rgba = to_rgba8(self.framebuffer)
        image = Image.fromarray(rgba)

        if was_complete:
            with self._state_lock:
                if self._final_image is None:
                    self._final_image = image
        return image.copy()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the background render stops.

        Returns True if it finished (completed or cancelled) within timeout.
        Raises RenderError if a worker failed.
        """
        if self._coordinator is not None:
            self._coordinator.join(timeout)
            if self._coordinator.is_alive():
                return False

        if self._error is not None:
            if isinstance(self._error, RenderError):
                raise self._error
            raise RenderError("render failed") from self._error
        return True

    def cancel(self, wait: bool = True):
        """Ask workers to stop after their current pixel. The state stays ACTIVE."""
        self._cancel.set()
        if wait and self._coordinator is not None:
            self._coordinator.join()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.cancel()
        return False
