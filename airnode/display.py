"""Status screen for the air-quality node: readings, toggle buttons and icons."""

from __future__ import annotations

import math
import time
from enum import Enum, IntEnum
from typing import Any, Callable

FIRST_LINE_X = 0
FIRST_LINE_Y = 2
TEXT_SIZE = 2
LINE_WIDTH = 22
CHAR_WIDTH = 12
CHAR_HEIGHT = 16
BUTTON_OFFSET_X = 238
BUTTON_WIDTH = 25
BUTTON_HEIGHT = 17
BUTTON_CORNER = 3
ROTATION = 1
TOUCH_DEBOUNCE = 0.3
FIRST_ICON_X = 295
FIRST_ICON_Y = 40
ICON_SPACING = 50
ICON_RADIUS = 20
ICON_BORDER_WIDTH = 2
NOTIFICATION_CHARS = 25


class Component(IntEnum):
    """Rows of the reading table, in screen order."""

    TEMPERATURE = 0
    HUMIDITY = 1
    LATITUDE = 2
    LONGITUDE = 3
    TIME_GPS = 4
    PM1_0 = 5
    PM2_5 = 6
    PM10 = 7
    CARBON_MONOXIDE = 8
    SOUND = 9


TITLES = {
    Component.TEMPERATURE: "Temp: ",
    Component.HUMIDITY: "Hum: ",
    Component.LATITUDE: "Lat: ",
    Component.LONGITUDE: "Long: ",
    Component.TIME_GPS: "Time: ",
    Component.PM1_0: "PM1.0: ",
    Component.PM2_5: "PM2.5: ",
    Component.PM10: "PM10: ",
    Component.CARBON_MONOXIDE: "CO: ",
    Component.SOUND: "Sound: ",
}


class FunctionIcon(IntEnum):
    """Round function icons down the right edge, top to bottom."""

    WIFI = 0
    LTE = 1
    SMS = 2
    CALL = 3


class Color(IntEnum):
    """RGB565 colours used on the screen."""

    BLACK = 0x0000
    BLUE = 0x001F
    RED = 0xF800
    GREEN = 0x07E0
    YELLOW = 0xFFE0
    WHITE = 0xFFFF
    DARKGREY = 0x7BEF


ICON_BORDER_COLOR = Color.WHITE
ICON_COLOR_ENABLED = Color.BLUE
ICON_COLOR_DISABLED = Color.DARKGREY


def color_for(value: float, component: Component) -> Color:
    """Return the colour a reading is shown in, based on its thresholds."""
    component = Component(component)
    if component is Component.TEMPERATURE:
        return Color.YELLOW if value > 25 else Color.GREEN
    if component is Component.HUMIDITY:
        if value < 20:
            return Color.RED
        if value < 80:
            return Color.YELLOW
        return Color.GREEN
    if component in (
        Component.PM1_0,
        Component.PM2_5,
        Component.PM10,
        Component.CARBON_MONOXIDE,
    ):
        if value < 50:
            return Color.GREEN
        if value < 100:
            return Color.YELLOW
        return Color.RED
    if component is Component.SOUND:
        return Color.YELLOW if value > 55 else Color.GREEN
    return Color.WHITE


class RecordingCanvas:
    """A canvas that keeps every drawing operation it receives."""

    def __init__(self):
        self.operations: list[tuple[str, tuple[Any, ...]]] = []

    def draw(self, operation: str, *args: Any) -> None:
        """Record one operation with its arguments."""
        self.operations.append((operation, args))


class _Icon(Enum):
    pass


def _icon_center(icon: FunctionIcon) -> tuple[int, int]:
    return FIRST_ICON_X, FIRST_ICON_Y + ICON_SPACING * int(icon)


def _row_y(component: Component) -> int:
    return FIRST_LINE_Y + int(component) * LINE_WIDTH


class Display:
    """Draws sensor readings and handles touches on a canvas.

    The canvas needs a ``draw(operation, *args)`` method. The text cursor
    is tracked here so that stale text can be blanked after a title.
    """

    def __init__(self, canvas=None, clock: Callable[[], float] = time.monotonic):
        self.canvas = canvas if canvas is not None else RecordingCanvas()
        self._clock = clock
        self._components = {component: True for component in Component}
        self._icons = {icon: False for icon in FunctionIcon}
        self._icons[FunctionIcon.WIFI] = True
        self._last_touch = 0.0
        self.cursor = (0, 0)
        self._text_size = TEXT_SIZE

    # Text primitives

    def _set_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)
        self.canvas.draw("set_cursor", x, y)

    def _set_text_color(self, color: Color) -> None:
        self.canvas.draw("set_text_color", Color(color))

    def _set_text_size(self, size: int) -> None:
        self._text_size = size
        self.canvas.draw("set_text_size", size)

    def _print(self, text: str) -> None:
        self.canvas.draw("print", text)
        x, y = self.cursor
        self.cursor = (x + CHAR_WIDTH // TEXT_SIZE * self._text_size * len(text), y)

    def _println(self, text: str) -> None:
        self.canvas.draw("println", text)
        _, y = self.cursor
        self.cursor = (0, y + CHAR_HEIGHT // TEXT_SIZE * self._text_size)

    def _blank(self, num_chars: int, color: Color) -> None:
        x, y = self.cursor
        self.canvas.draw("fill_rect", x, y, CHAR_WIDTH * num_chars, CHAR_HEIGHT, Color(color))

    def _show_row(self, component: Component, value: float, blank: int, text: str) -> None:
        self._set_text_color(color_for(value, component))
        self._set_cursor(FIRST_LINE_X, _row_y(component))
        self._print(TITLES[component])
        self._blank(blank, Color.BLACK)
        self._print(text)

    # Screen set-up

    def begin(self) -> None:
        """Reset all states and prepare the screen."""
        self._components = {component: True for component in Component}
        self._icons = {icon: False for icon in FunctionIcon}
        self._icons[FunctionIcon.WIFI] = True
        self.canvas.draw("begin")
        self.canvas.draw("fill_screen", Color.BLACK)
        self.canvas.draw("set_rotation", ROTATION)
        self._set_text_size(TEXT_SIZE)

    def background(self) -> None:
        """Draw the titles, their buttons and the function icons."""
        for component in Component:
            self._set_cursor(FIRST_LINE_X, _row_y(component))
            self._println(TITLES[component])
            self.draw_button(
                FIRST_LINE_X + BUTTON_OFFSET_X,
                _row_y(component),
                BUTTON_WIDTH,
                BUTTON_HEIGHT,
                Color.GREEN,
            )
        for icon in FunctionIcon:
            self._draw_icon(icon)

    # Readings

    def show_notification(self, text: str) -> None:
        """Show a message on the line below the readings."""
        self._set_text_color(Color.WHITE)
        self._set_cursor(FIRST_LINE_X, FIRST_LINE_Y + len(Component) * LINE_WIDTH)
        self._blank(NOTIFICATION_CHARS, Color.BLACK)
        self._print(text)

    def show_sht(self, temperature: float, humidity: float) -> None:
        """Show temperature (degrees C) and relative humidity (percent)."""
        self._show_row(Component.TEMPERATURE, temperature, 9, f"{temperature:4.2f} oC")
        self._show_row(Component.HUMIDITY, humidity, 8, f"{humidity:4.2f} ")
        self._print("%")

    def show_pm(self, pm1_0: float, pm2_5: float, pm10: float) -> None:
        """Show the three particulate matter concentrations."""
        self._show_row(Component.PM1_0, pm1_0, 12, f"{pm1_0:4.2f} ug/m3")
        self._show_row(Component.PM2_5, pm2_5, 12, f"{pm2_5:4.2f} ug/m3")
        self._show_row(Component.PM10, pm10, 12, f"{pm10:4.2f} ug/m3")

    def show_co(self, co_ppm: float) -> None:
        """Show the carbon monoxide concentration."""
        self._show_row(Component.CARBON_MONOXIDE, co_ppm, 13, f"{co_ppm:4.2f} ppm   ")

    def show_gps(self, latitude: float, longitude: float, time: str) -> None:
        """Show the position and the local time text."""
        self._show_row(Component.LATITUDE, latitude, 7, f"{latitude:10.6f}")
        self._show_row(Component.LONGITUDE, longitude, 6, f"{longitude:4.6f}")
        self._show_row(Component.TIME_GPS, 0, 12, time)

    def show_sound(self, sound: float) -> None:
        """Show the sound level in dBA."""
        self._show_row(Component.SOUND, sound, 10, f"{sound:4.2f} dBA")

    # Touch handling

    def process_touch(self, x: int | None, y: int | None) -> bool:
        """Handle a touch at (x, y); ``None`` means no touch.

        Touches closer than the debounce time to the last accepted one are
        ignored. Returns True when a button or icon was toggled.
        """
        if x is None or y is None:
            return False
        now = self._clock()
        if now - self._last_touch <= TOUCH_DEBOUNCE:
            return False

        toggled = False
        button_x = FIRST_LINE_X + BUTTON_OFFSET_X
        for component in Component:
            button_y = _row_y(component)
            if button_x < x < button_x + BUTTON_WIDTH and button_y < y < button_y + BUTTON_HEIGHT:
                self._components[component] = not self._components[component]
                self._last_touch = now
                toggled = True
                self.draw_button(
                    button_x,
                    button_y,
                    BUTTON_WIDTH,
                    BUTTON_HEIGHT,
                    Color.GREEN if self._components[component] else Color.RED,
                )

        for icon in FunctionIcon:
            cx, cy = _icon_center(icon)
            if cx - ICON_RADIUS < x < cx + ICON_RADIUS and cy - ICON_RADIUS < y < cy + ICON_RADIUS:
                self._last_touch = now
                self._icons[icon] = not self._icons[icon]
                toggled = True
                self._draw_icon(icon)
        return toggled

    def icon_state(self, icon: FunctionIcon) -> bool:
        """Return whether a function icon is switched on."""
        return self._icons[FunctionIcon(icon)]

    def set_icon_state(self, icon: FunctionIcon, state: bool) -> None:
        """Switch a function icon on or off without redrawing it."""
        self._icons[FunctionIcon(icon)] = bool(state)

    def component_state(self, component: Component) -> bool:
        """Return whether a reading row's button is switched on."""
        return self._components[Component(component)]

    # Drawing

    def _draw_icon(self, icon: FunctionIcon) -> None:
        x, y = _icon_center(icon)
        drawers = {
            FunctionIcon.WIFI: self.draw_wifi_icon,
            FunctionIcon.LTE: self.draw_4g_icon,
            FunctionIcon.SMS: self.draw_sms_icon,
            FunctionIcon.CALL: self.draw_call_icon,
        }
        drawers[icon](x, y, ICON_RADIUS, self._icons[icon])

    def _icon_base(self, x: int, y: int, radius: int, active: bool) -> Color:
        color = ICON_COLOR_ENABLED if active else ICON_COLOR_DISABLED
        self.canvas.draw("draw_smooth_circle", x, y, radius, ICON_BORDER_COLOR, color)
        self.canvas.draw("fill_circle", x, y, radius - ICON_BORDER_WIDTH, color)
        return color

    def draw_button(self, x: int, y: int, width: int, height: int, color: Color) -> None:
        """Draw a rounded button with a white border."""
        self.canvas.draw("fill_round_rect", x, y, width, height, BUTTON_CORNER, Color(color))
        self.canvas.draw("draw_round_rect", x, y, width, height, BUTTON_CORNER, Color.WHITE)

    def draw_wifi_icon(self, x: int, y: int, radius: int, active: bool) -> None:
        """Draw the WiFi icon: three concentric arcs."""
        color = self._icon_base(x, y, radius, active)
        arc_y = y + radius // 3 + 3
        for outer in (radius - 3, radius - 9, radius - 15):
            self.canvas.draw("draw_arc", x, arc_y, outer, outer - 3, 135, 225, ICON_BORDER_COLOR, color)

    def draw_4g_icon(self, x: int, y: int, radius: int, active: bool) -> None:
        """Draw the 4G icon: the text "4G" centred in a circle."""
        self._icon_base(x, y, radius, active)
        self.canvas.draw("set_text_datum", "MC")
        self._set_text_color(ICON_BORDER_COLOR)
        self.canvas.draw("draw_string", "4G", x, y)

    def draw_sms_icon(self, x: int, y: int, radius: int, active: bool) -> None:
        """Draw the SMS icon: an envelope."""
        self._icon_base(x, y, radius, active)
        half = radius // 2
        third = radius // 3
        top = y - 2 - third
        bottom = y - 2 + half
        left = x - half
        right = x + half
        lines = [
            (left, bottom, right, bottom),
            (left, top, right, top),
            (left, top, left, bottom),
            (right, top, right, bottom),
            (left, top, x, y - 2),
            (right, top, x, y - 2),
        ]
        for line in lines:
            self.canvas.draw("draw_line", *line, ICON_BORDER_COLOR)

    def draw_call_icon(self, x: int, y: int, radius: int, active: bool) -> None:
        """Draw the call icon: a handset arc with two ear pieces."""
        color = self._icon_base(x, y, radius, active)
        half = radius // 2
        self.canvas.draw(
            "draw_arc", x, y + radius // 3 - 2, half, half - 4, 120, 240, ICON_BORDER_COLOR, color
        )
        # The angle is given to cos/sin in radians, as the icon layout expects.
        dx = half * math.cos(30)
        top = int(y - (half * math.sin(30) - 4 * math.sin(30)) - 5)
        self.canvas.draw("fill_rect", int(x - dx - 8), top, 7, 6, ICON_BORDER_COLOR)
        self.canvas.draw("fill_rect", int(x + dx + 3), top, 7, 6, ICON_BORDER_COLOR)

    def draw_battery_icon(self, x: int, y: int, w: int, h: int, percent: float) -> None:
        """Draw a battery outline filled according to ``percent`` (0..1)."""
        self._set_text_size(1)
        self.canvas.draw("draw_string", "52%", x - 15, y + 5)
        self._set_text_size(TEXT_SIZE)
        if percent >= 1:
            self.canvas.draw("fill_rect", x - 4, y + h // 4, 4, h // 2, Color.GREEN)
        self.canvas.draw("draw_rect", x - 4, y + h // 4, 4, h // 2, ICON_BORDER_COLOR)
        self.canvas.draw("fill_rect", int(x + w * percent), y, int(w * percent), h, Color.GREEN)
        self.canvas.draw("draw_rect", x, y, w, h, ICON_BORDER_COLOR)

    def draw_sim_signal_icon(self, x: int, y: int, percent: float) -> None:
        """Draw five signal bars of rising height."""
        for bar, height in enumerate((2, 4, 6, 8, 10)):
            self.canvas.draw("fill_rect", x + 5 * bar, y + 10 - height, 4, height, ICON_BORDER_COLOR)