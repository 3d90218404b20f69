"""Drag gesture state machine: pointer/touch events in, one reorder out.

Drags may only start on a card's drag handle. Presses elsewhere on the card
(image, title, action buttons) are not drag candidates and stay free for
taps and scrolling. Once pressed on the handle the gesture has to pass an
activation constraint before it counts as a drag:

  mouse / pen   moved more than ``mouse_distance`` px from the press point
  touch         held ``touch_delay`` seconds without moving more than
                ``touch_tolerance`` px (moving further first aborts: scroll)

While dragging, the card under the floating rect is tracked with a
closest-center rule. On release over a different card the engine calls
``reorder(origin_index, target_index)`` exactly once.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, Optional

from loguru import logger

from .errors import NotFoundError

MOUSE_DISTANCE = 5.0
TOUCH_DELAY = 0.1
TOUCH_TOLERANCE = 5.0


class PointerKind(str, Enum):
    MOUSE = "mouse"
    PEN = "pen"
    TOUCH = "touch"


class Region(str, Enum):
    HANDLE = "handle"
    BODY = "body"
    CONTROL = "control"


class DragState(Enum):
    IDLE = "idle"
    PENDING = "pending"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class Point:
    x: float
    y: float

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    left: float
    top: float
    width: float
    height: float

    @property
    def right(self):
        return self.left + self.width

    @property
    def bottom(self):
        return self.top + self.height

    @property
    def center(self) -> Point:
        return Point(self.left + self.width / 2, self.top + self.height / 2)

    def translated(self, dx, dy) -> Rect:
        return Rect(self.left + dx, self.top + dy, self.width, self.height)

    def intersects(self, other: Rect) -> bool:
        return (self.left < other.right and other.left < self.right
                and self.top < other.bottom and other.top < self.bottom)


@dataclass(frozen=True)
class ReorderInstruction:
    item_id: str
    source_index: int
    dest_index: int


def closest_target(floating: Rect, layout: Mapping[str, Rect]) -> Optional[str]:
    """Id of the card nearest to ``floating``.

    Cards overlapping the floating rect win over cards that don't; among the
    candidates the closest center wins, ties go to the earlier card.
    """
    if not layout:
        return None
    overlapping = [(iid, r) for iid, r in layout.items() if r.intersects(floating)]
    candidates = overlapping or list(layout.items())
    center = floating.center
    best_id, best_dist = None, None
    for iid, rect in candidates:
        d = center.distance_to(rect.center)
        if best_dist is None or d < best_dist:
            best_id, best_dist = iid, d
    return best_id


class DragReorderEngine:
    def __init__(self, store, on_reorder: Optional[Callable[[int, int], object]] = None,
                 mouse_distance=MOUSE_DISTANCE, touch_delay=TOUCH_DELAY,
                 touch_tolerance=TOUCH_TOLERANCE, clock=time.monotonic):
        self.store = store
        self.on_reorder = on_reorder or store.reorder
        self.mouse_distance = mouse_distance
        self.touch_delay = touch_delay
        self.touch_tolerance = touch_tolerance
        self._clock = clock
        self._reset()

    def _reset(self):
        self.state = DragState.IDLE
        self.active_id = None
        self.over_id = None
        self._kind = None
        self._layout = {}
        self._start = None
        self._start_time = None
        self._point = None

    # ----------------------------
    # Gesture events
    # ----------------------------
    def press(self, item_id, point: Point, kind=PointerKind.MOUSE, region=Region.HANDLE,
              layout: Optional[Mapping[str, Rect]] = None, timestamp=None) -> bool:
        """Start a drag candidate. Returns False when the press is not one."""
        if self.state is not DragState.IDLE:
            logger.debug("Press during an active gesture; dropping both")
            self._reset()
            return False
        try:
            region = Region(region)
            kind = PointerKind(kind)
        except ValueError as e:
            logger.debug("Ignoring press: {}", e)
            return False
        if region is not Region.HANDLE:
            return False
        layout = dict(layout or {})
        if item_id not in layout:
            logger.debug("Press on {} which is not in the current layout", item_id)
            return False
        self.state = DragState.PENDING
        self.active_id = item_id
        self._kind = kind
        self._layout = layout
        self._start = self._point = point
        self._start_time = self._now(timestamp)
        return True

    def move(self, point: Point, timestamp=None):
        if self.state is DragState.IDLE:
            return
        now = self._now(timestamp)
        if self.state is DragState.PENDING:
            if not self._try_activate(point, now):
                return
        self._point = point
        self._track()

    def tick(self, timestamp=None):
        """Let a touch hold activate without further movement."""
        if self.state is DragState.PENDING and self._kind is PointerKind.TOUCH:
            if self._now(timestamp) - self._start_time >= self.touch_delay:
                self._activate()

    def release(self, point: Optional[Point] = None, timestamp=None) -> Optional[ReorderInstruction]:
        if self.state is DragState.IDLE:
            return None
        if point is not None:
            self.move(point, timestamp)
        if self.state is not DragState.DRAGGING:
            # press without activation: a tap on the handle
            self._reset()
            return None
        active_id, over_id = self.active_id, self.over_id
        self._reset()
        if over_id is None or over_id == active_id:
            return None
        return self._emit(active_id, over_id)

    def cancel(self):
        if self.state is not DragState.IDLE:
            logger.debug("Drag of {} cancelled", self.active_id)
        self._reset()

    def update_layout(self, layout: Mapping[str, Rect]):
        if self.state is DragState.IDLE:
            return
        self._layout = dict(layout)
        if self.active_id not in self._layout:
            logger.debug("Dragged card {} left the layout; cancelling", self.active_id)
            self._reset()
            return
        if self.state is DragState.DRAGGING:
            self._track()

    def drop(self, active_id, over_id) -> Optional[ReorderInstruction]:
        """Apply a gesture already recognised by the UI's drag library."""
        self._reset()
        if over_id is None or active_id == over_id:
            return None
        return self._emit(active_id, over_id)

    # ----------------------------
    # Internals
    # ----------------------------
    def _now(self, timestamp):
        return self._clock() if timestamp is None else timestamp

    def _try_activate(self, point, now) -> bool:
        moved = self._start.distance_to(point)
        if self._kind is PointerKind.TOUCH:
            if now - self._start_time >= self.touch_delay:
                self._activate()
                return True
            if moved > self.touch_tolerance:
                logger.debug("Touch moved {:.1f}px before the hold delay; treating as scroll", moved)
                self._reset()
            return False
        if moved > self.mouse_distance:
            self._activate()
            return True
        return False

    def _activate(self):
        self.state = DragState.DRAGGING
        self.over_id = self.active_id
        logger.debug("Dragging {}", self.active_id)

    def _track(self):
        origin = self._layout[self.active_id]
        floating = origin.translated(self._point.x - self._start.x, self._point.y - self._start.y)
        self.over_id = closest_target(floating, self._layout)

    def _emit(self, active_id, over_id):
        try:
            src = self.store.index_of(active_id)
            dst = self.store.index_of(over_id)
        except NotFoundError as e:
            logger.warning("Ignoring drop with stale id: {}", e)
            return None
        if src == dst:
            return None
        self.on_reorder(src, dst)
        return ReorderInstruction(active_id, src, dst)
