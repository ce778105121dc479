"""Pointer, wheel and touch interaction that pans and zooms an axis."""

from __future__ import annotations

import math
from collections.abc import Sequence
from enum import IntEnum

from chartcore.axis import Axis, AxisType, Point, Rect, _div
from chartcore.domain import Signal


class Mode(IntEnum):
    MARKER = 0
    ZOOMING = 1
    INACTION = 2


class MouseButton(IntEnum):
    NO_BUTTON = 0
    LEFT = 1
    RIGHT = 2
    MIDDLE = 4


class TouchPhase(IntEnum):
    BEGIN = 0
    UPDATE = 1
    END = 2
    CANCEL = 3


class AxisDragHandler:
    """Turns pointer gestures over an axis into moves and zooms of its domain."""

    def __init__(self, target: Axis | None = None) -> None:
        self._enable = True
        self._target: Axis | None = None
        self._mode = Mode.ZOOMING
        self._button = MouseButton.NO_BUTTON
        self._press_position: Point = (0.0, 0.0)
        self._move_position: Point = (0.0, 0.0)
        self._pressed = False

        self._zooming = False
        self._start_dist: Point = (0.0, 0.0)
        self._accumulated_scale: Point = (1.0, 1.0)

        self.moved = Signal()
        self.pressed = Signal()
        self.clicked = Signal()
        self.released = Signal()
        self.pressed_changed = Signal()
        self.press_position_changed = Signal()
        self.move_position_changed = Signal()
        self.target_changed = Signal()
        self.mode_changed = Signal()
        self.button_changed = Signal()
        self.enable_changed = Signal()

        if target is not None:
            self.target = target

    @property
    def target(self) -> Axis | None:
        return self._target

    @target.setter
    def target(self, value: Axis | None) -> None:
        self._target = value
        if value is None:
            return
        self.target_changed.emit()

    @property
    def enable(self) -> bool:
        return self._enable

    @enable.setter
    def enable(self, value: bool) -> None:
        if self._enable != value:
            self._enable = value
            self.enable_changed.emit()

    @property
    def mode(self) -> Mode:
        return self._mode

    @mode.setter
    def mode(self, value: Mode) -> None:
        value = Mode(value)
        if self._mode == value:
            return
        self._mode = value
        self.mode_changed.emit()
        if self._target is not None:
            self._target.enabled = value != Mode.INACTION

    @property
    def button(self) -> MouseButton:
        return self._button

    def _set_button(self, value: MouseButton) -> None:
        if self._button != value:
            self._button = MouseButton(value)
            self.button_changed.emit()

    @property
    def press_position(self) -> Point:
        return self._press_position

    def _set_press_position(self, value: Point) -> None:
        if self._press_position != value:
            self._press_position = value
            self.press_position_changed.emit()

    @property
    def move_position(self) -> Point:
        return self._move_position

    def _set_move_position(self, value: Point) -> None:
        if self._move_position != value:
            self._move_position = value
            self.move_position_changed.emit()

    @property
    def is_pressed(self) -> bool:
        return self._pressed

    def _set_pressed(self, value: bool) -> None:
        if self._pressed != value:
            self._pressed = value
            self.pressed_changed.emit()

    def _is_log(self) -> bool:
        return self._target.type == AxisType.LOG_VALUE

    def set_values(self, min_x: float, max_x: float, min_y: float, max_y: float) -> None:
        """Drop any transform and show the given range."""
        if self._target is None:
            return
        self.reset_transform()
        self._target.domain.set_range(min_x, max_x, min_y, max_y)

    def reset_transform(self) -> None:
        if self._target is None:
            return
        self._target.domain.reset_transform()

    def mouse_press(self, point: Point, button: MouseButton = MouseButton.LEFT) -> None:
        if not self._enable or self._pressed:
            return
        self._set_button(button)
        self.press_event(point, button)

    def mouse_move(self, point: Point) -> None:
        self.move_event(point, self._button)

    def mouse_release(self, point: Point, button: MouseButton = MouseButton.LEFT) -> None:
        if not self._pressed:
            return
        self._set_button(MouseButton.NO_BUTTON)
        self.release_event(point, button)

    def wheel(self, delta_y: float) -> None:
        """Zoom in for a positive wheel delta, out otherwise; log axes are left alone."""
        if self._target is None or self._is_log():
            return
        if delta_y > 0:
            self._target.domain.zoom_in()
        else:
            self._target.domain.zoom_out()

    def touch(self, phase: TouchPhase, points: Sequence[Point]) -> None:
        """Handle a touch event: one finger drags, two fingers pinch to scale."""
        if self._target is None:
            return
        domain = self._target.domain
        phase = TouchPhase(phase)

        if phase == TouchPhase.BEGIN:
            if not self._enable:
                return
            if len(points) == 1:
                self.press_event(points[0])
        elif phase == TouchPhase.UPDATE:
            if len(points) == 1:
                if self._zooming:
                    return
                self.move_event(points[0])
            elif len(points) == 2:
                (x1, y1), (x2, y2) = points
                current = (abs(x1 - x2), abs(y1 - y2))
                if not self._zooming:
                    self._start_dist = current
                    self._accumulated_scale = (domain.scale_x, domain.scale_y)
                    self._zooming = True
                    return
                vx, vy = x1 - x2, y1 - y2
                angle = math.acos(vx / (1 + math.hypot(vx, vy))) * 180 / 3.1415926
                if angle > 90:
                    angle = 180 - angle
                active_x = _div(current[0] * self._accumulated_scale[0], self._start_dist[0])
                active_y = _div(current[1] * self._accumulated_scale[1], self._start_dist[1])
                if angle < 30:
                    domain.set_scale(active_x, domain.scale_y)
                elif angle > 60:
                    domain.set_scale(domain.scale_x, active_y)
                else:
                    domain.set_scale(active_x, active_y)
        elif phase == TouchPhase.END:
            self._zooming = False
            if len(points) == 1:
                self.release_event(points[0])
            elif len(points) != 2:
                self.release_event()

    def press_event(self, point: Point, button: MouseButton = MouseButton.NO_BUTTON) -> None:
        if self._target is None or not self._target.plot_area.contains(point):
            return
        self.pressed.emit(point, button)
        self._set_pressed(True)
        self._set_press_position(point)
        self._set_move_position(point)

    def move_event(self, point: Point, button: MouseButton = MouseButton.NO_BUTTON) -> None:
        if not self._pressed or self._target is None:
            return
        if not self._target.plot_area.contains(point):
            return
        self.moved.emit(point, button)

        manhattan = abs(point[0] - self._press_position[0]) + abs(point[1] - self._press_position[1])
        if math.sqrt(manhattan) < 3:
            return

        if (
            self._mode == Mode.ZOOMING
            and not self._is_log()
            and button in (MouseButton.NO_BUTTON, MouseButton.LEFT)
        ):
            dx = point[0] - self._move_position[0]
            dy = point[1] - self._move_position[1]
            self.shift_axis(dx, dy)

        self._set_move_position(point)

    def release_event(self, point: Point | None = None, button: MouseButton = MouseButton.NO_BUTTON) -> None:
        """Finish a press; with a point, emit clicked or zoom to the dragged rectangle."""
        if point is not None:
            if self._press_position == point:
                self.clicked.emit(point, button)
            if (
                self._mode == Mode.ZOOMING
                and self._target is not None
                and not self._is_log()
                and button == MouseButton.RIGHT
            ):
                px, py = self._press_position
                self.zoom(Rect(px, py, point[0] - px, point[1] - py))
        self.released.emit()
        self._set_pressed(False)

    def zoom(self, rect: Rect) -> None:
        """Zoom the domain to a rectangle given in item coordinates."""
        if self._target is None:
            return
        if abs(rect.width) < 1 and abs(rect.height) < 1:
            return
        d = self._target.domain
        area = self._target.plot_area

        left = rect.x + rect.width if rect.width < 0 else rect.x
        top = rect.y + rect.height if rect.height < 0 else rect.y
        fixed = Rect(left - area.x, top - area.y, abs(rect.width), abs(rect.height))

        span_x = d.max_x - d.min_x
        span_y = d.max_y - d.min_y
        dx = _div(span_x, area.width)
        dy = _div(span_y, area.height)

        max_x = d.min_x + dx * fixed.right
        min_x = d.min_x + dx * fixed.left
        min_y = d.max_y - dy * fixed.bottom
        max_y = d.max_y - dy * fixed.top

        if max_x - min_x == span_x:
            min_x, max_x = d.min_x, d.max_x
        if max_y - min_y == span_y:
            min_y, max_y = d.min_y, d.max_y

        d.zoom(min_x, max_x, min_y, max_y)

    def shift_axis(self, dx: float, dy: float) -> None:
        """Move the domain by a pixel offset, truncated to whole pixels."""
        if self._target is None:
            return
        d = self._target.domain
        area = self._target.plot_area
        step_x = _div(d.max_x - d.min_x, area.width)
        step_y = _div(d.max_y - d.min_y, area.height)
        d.move(step_x * int(dx), step_y * int(dy))