"""Raw device state and the binary inputs derived from it."""

from __future__ import annotations

import abc
import enum
import math
from typing import List, Optional, Sequence

from meez3d.constants import RENDER_HEIGHT, RENDER_WIDTH
from meez3d.geometry import Point
from meez3d.smallint import SmallIntMap

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_i32(value: float) -> int:
    """Truncate a float toward zero, saturating at the 32-bit range."""
    if math.isnan(value):
        return 0
    if value >= _I32_MAX:
        return _I32_MAX
    if value <= _I32_MIN:
        return _I32_MIN
    return int(value)


class KeyboardKey(enum.IntEnum):
    ESCAPE = 0
    SPACE = 1
    ENTER = 2
    W = 3
    A = 4
    S = 5
    D = 6
    Q = 7
    E = 8
    UP = 9
    DOWN = 10
    LEFT = 11
    RIGHT = 12


class JoystickButton(enum.IntEnum):
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    NORTH = 4
    SOUTH = 5
    EAST = 6
    WEST = 7


class JoystickAxis(enum.IntEnum):
    PRIMARY_VERTICAL = 0
    PRIMARY_HORIZONTAL = 1
    SECONDARY_VERTICAL = 2
    SECONDARY_HORIZONTAL = 3


class MouseButton(enum.IntEnum):
    LEFT = 0


class InputState:
    """Current state of keys, gamepad buttons and axes, and the mouse."""

    def __init__(
        self, window_width: int, window_height: int, adjust_mouse_position: bool
    ) -> None:
        self._keys_down: SmallIntMap[KeyboardKey, bool] = SmallIntMap()
        self._joystick_buttons_down: SmallIntMap[JoystickButton, bool] = SmallIntMap()
        self._joy_axes: SmallIntMap[JoystickAxis, float] = SmallIntMap()
        self._mouse_buttons_down: SmallIntMap[MouseButton, bool] = SmallIntMap()
        self.mouse_position: Point = Point.zero()
        self.adjust_mouse_position = adjust_mouse_position
        self.window_width = window_width
        self.window_height = window_height

    def set_key_down(self, key: KeyboardKey) -> None:
        self._keys_down.insert(key, True)

    def set_key_up(self, key: KeyboardKey) -> None:
        self._keys_down.insert(key, False)

    def is_key_down(self, key: KeyboardKey) -> bool:
        return self._keys_down.get(key, False)

    def set_joystick_button_down(self, button: JoystickButton) -> None:
        self._joystick_buttons_down.insert(button, True)

    def set_joystick_button_up(self, button: JoystickButton) -> None:
        self._joystick_buttons_down.insert(button, False)

    def is_joystick_button_down(self, button: JoystickButton) -> bool:
        return self._joystick_buttons_down.get(button, False)

    def set_joy_axis(self, axis: JoystickAxis, value: float) -> None:
        self._joy_axes.insert(axis, value)

    def joy_axis(self, axis: JoystickAxis) -> Optional[float]:
        """The last value reported for the axis, or None if never set."""
        return self._joy_axes.get(axis)

    def set_mouse_button_down(self, button: MouseButton) -> None:
        self._mouse_buttons_down.insert(button, True)

    def set_mouse_button_up(self, button: MouseButton) -> None:
        self._mouse_buttons_down.insert(button, False)

    def is_mouse_button_down(self, button: MouseButton) -> bool:
        return self._mouse_buttons_down.get(button, False)

    def set_window_size(self, width: int, height: int) -> None:
        self.window_width = width
        self.window_height = height

    def set_mouse_position(self, x: int, y: int) -> None:
        """Record the mouse position, scaled to render space if configured."""
        if self.adjust_mouse_position:
            self.mouse_position = self._adjusted(x, y)
        else:
            self.mouse_position = Point(x, y)

    def _adjusted(self, x: int, y: int) -> Point:
        fx = _ratio(x, self.window_width) * RENDER_WIDTH
        fy = _ratio(y, self.window_height) * RENDER_HEIGHT
        return Point(_to_i32(fx), _to_i32(fy))


def _ratio(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0:
            return math.nan
        return math.copysign(math.inf, numerator)
    return numerator / denominator


class TransientInput(abc.ABC):
    """A condition read directly from the current input state."""

    @abc.abstractmethod
    def is_on(self, state: InputState) -> bool:
        """Whether the condition holds in this state."""


class StatefulInput(abc.ABC):
    """An input that is updated once per frame and then queried."""

    @abc.abstractmethod
    def update(self, state: InputState) -> None:
        """Refresh from the current input state."""

    @abc.abstractmethod
    def is_on(self) -> bool:
        """Whether the input was on at the last update."""


class KeyInput(TransientInput):
    def __init__(self, key: KeyboardKey) -> None:
        self.key = key

    def is_on(self, state: InputState) -> bool:
        return state.is_key_down(self.key)


class JoystickButtonInput(TransientInput):
    def __init__(self, button: JoystickButton) -> None:
        self.button = button

    def is_on(self, state: InputState) -> bool:
        return state.is_joystick_button_down(self.button)


class JoystickThresholdInput(TransientInput):
    """On when an axis is below the low or above the high threshold."""

    def __init__(
        self,
        axis: JoystickAxis,
        low: Optional[float] = None,
        high: Optional[float] = None,
    ) -> None:
        self.axis = axis
        self.low_threshold = low
        self.high_threshold = high

    def is_on(self, state: InputState) -> bool:
        value = state.joy_axis(self.axis)
        if value is None:
            return False
        if self.low_threshold is not None and value < self.low_threshold:
            return True
        if self.high_threshold is not None and value > self.high_threshold:
            return True
        return False


class MouseButtonInput(TransientInput):
    def __init__(self, button: MouseButton) -> None:
        self.button = button

    def is_on(self, state: InputState) -> bool:
        return state.is_mouse_button_down(self.button)


class CachedInput(StatefulInput):
    """Holds the value of a transient input as of the last update."""

    def __init__(self, inner: TransientInput) -> None:
        self.inner = inner
        self._on = False

    def update(self, state: InputState) -> None:
        self._on = self.inner.is_on(state)

    def is_on(self) -> bool:
        return self._on


class TriggerInput(StatefulInput):
    """On only for the first update after the inner input turns on."""

    def __init__(self, inner: TransientInput) -> None:
        self.inner = inner
        self._already_pressed = False
        self._on = False

    def update(self, state: InputState) -> None:
        if self.inner.is_on(state):
            self._on = not self._already_pressed
            self._already_pressed = True
        else:
            self._already_pressed = False
            self._on = False

    def is_on(self) -> bool:
        return self._on


class AnyOfInput(StatefulInput):
    """On when any of its inputs is on."""

    def __init__(self, inputs: Sequence[StatefulInput]) -> None:
        self.inputs: List[StatefulInput] = list(inputs)

    def update(self, state: InputState) -> None:
        for item in self.inputs:
            item.update(state)

    def is_on(self) -> bool:
        return any(item.is_on() for item in self.inputs)


class BinaryInput(enum.IntEnum):
    OK_TRIGGER = 0
    OK_DOWN = 1
    CANCEL = 2
    PLAYER_MOVE_FORWARD = 3
    PLAYER_MOVE_BACKWARD = 4
    PLAYER_STRAFE_LEFT = 5
    PLAYER_STRAFE_RIGHT = 6
    PLAYER_TURN_LEFT = 7
    PLAYER_TURN_RIGHT = 8
    MENU_DOWN = 9
    MENU_UP = 10
    MENU_LEFT = 11
    MENU_RIGHT = 12
    MOUSE_BUTTON_LEFT = 13


def _key(key: KeyboardKey) -> StatefulInput:
    return CachedInput(KeyInput(key))


def _key_trigger(key: KeyboardKey) -> StatefulInput:
    return TriggerInput(KeyInput(key))


def _button(button: JoystickButton) -> StatefulInput:
    return CachedInput(JoystickButtonInput(button))


def _button_trigger(button: JoystickButton) -> StatefulInput:
    return TriggerInput(JoystickButtonInput(button))


def _threshold(
    axis: JoystickAxis, low: Optional[float] = None, high: Optional[float] = None
) -> StatefulInput:
    return CachedInput(JoystickThresholdInput(axis, low, high))


def _threshold_trigger(
    axis: JoystickAxis, low: Optional[float] = None, high: Optional[float] = None
) -> StatefulInput:
    return TriggerInput(JoystickThresholdInput(axis, low, high))


def create_input(binary_input: BinaryInput) -> AnyOfInput:
    """Build the set of device inputs bound to a logical binary input."""
    K, J, A = KeyboardKey, JoystickButton, JoystickAxis
    B = BinaryInput
    if binary_input is B.OK_TRIGGER:
        inputs = [_key_trigger(K.ENTER), _button_trigger(J.SOUTH)]
    elif binary_input is B.OK_DOWN:
        inputs = [_key(K.ENTER), _button(J.SOUTH)]
    elif binary_input is B.CANCEL:
        inputs = [_key_trigger(K.ESCAPE), _button_trigger(J.WEST)]
    elif binary_input is B.PLAYER_MOVE_FORWARD:
        inputs = [
            _key(K.UP),
            _key(K.W),
            _button(J.UP),
            _threshold(A.PRIMARY_VERTICAL, low=-0.5),
        ]
    elif binary_input is B.PLAYER_MOVE_BACKWARD:
        inputs = [
            _key(K.DOWN),
            _key(K.S),
            _button(J.DOWN),
            _threshold(A.PRIMARY_VERTICAL, high=0.5),
        ]
    elif binary_input is B.PLAYER_STRAFE_LEFT:
        inputs = [
            _key(K.A),
            _button(J.LEFT),
            _threshold(A.PRIMARY_HORIZONTAL, low=-0.5),
        ]
    elif binary_input is B.PLAYER_STRAFE_RIGHT:
        inputs = [
            _key(K.D),
            _button(J.RIGHT),
            _threshold(A.PRIMARY_HORIZONTAL, high=0.5),
        ]
    elif binary_input is B.PLAYER_TURN_LEFT:
        inputs = [
            _key(K.LEFT),
            _key(K.Q),
            _threshold(A.SECONDARY_HORIZONTAL, low=-0.5),
        ]
    elif binary_input is B.PLAYER_TURN_RIGHT:
        inputs = [
            _key(K.RIGHT),
            _key(K.E),
            _threshold(A.SECONDARY_HORIZONTAL, high=0.5),
        ]
    elif binary_input is B.MENU_DOWN:
        inputs = [
            _key_trigger(K.DOWN),
            _key_trigger(K.S),
            _button_trigger(J.DOWN),
            _threshold_trigger(A.PRIMARY_VERTICAL, high=0.5),
        ]
    elif binary_input is B.MENU_UP:
        inputs = [
            _key_trigger(K.W),
            _key_trigger(K.UP),
            _button_trigger(J.UP),
            _threshold_trigger(A.PRIMARY_VERTICAL, low=-0.5),
        ]
    elif binary_input is B.MENU_LEFT:
        inputs = [
            _key_trigger(K.LEFT),
            _key_trigger(K.A),
            _button_trigger(J.LEFT),
            _threshold_trigger(A.PRIMARY_HORIZONTAL, low=-0.5),
        ]
    elif binary_input is B.MENU_RIGHT:
        inputs = [
            _key_trigger(K.D),
            _key_trigger(K.RIGHT),
            _button_trigger(J.RIGHT),
            _threshold_trigger(A.PRIMARY_HORIZONTAL, high=0.5),
        ]
    elif binary_input is B.MOUSE_BUTTON_LEFT:
        inputs = [CachedInput(MouseButtonInput(MouseButton.LEFT))]
    else:
        raise ValueError(f"unknown binary input: {binary_input!r}")
    return AnyOfInput(inputs)