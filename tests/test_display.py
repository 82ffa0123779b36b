import pytest

from airnode.display import (
    Color,
    Component,
    Display,
    FunctionIcon,
    RecordingCanvas,
    color_for,
)


class FakeClock:
    def __init__(self, now=10.0):
        self.now = now

    def __call__(self):
        return self.now


def make_display(now=10.0):
    clock = FakeClock(now)
    canvas = RecordingCanvas()
    display = Display(canvas, clock)
    display.begin()
    canvas.operations.clear()
    return display, canvas, clock


def ops(canvas, name):
    return [args for op, args in canvas.operations if op == name]


def test_recording_canvas_keeps_operations_in_order():
    canvas = RecordingCanvas()
    canvas.draw("a", 1, 2)
    canvas.draw("b")
    assert canvas.operations == [("a", (1, 2)), ("b", ())]


def test_colour_values_are_rgb565():
    assert color_for(150, Component.PM10) == 0xF800
    assert color_for(10, Component.PM2_5) == 0x07E0
    assert color_for(0, Component.TIME_GPS) == 0xFFFF


@pytest.mark.parametrize(
    "value, component, expected",
    [
        (25, Component.TEMPERATURE, Color.GREEN),
        (26, Component.TEMPERATURE, Color.YELLOW),
        (35, Component.TEMPERATURE, Color.YELLOW),
        (19, Component.HUMIDITY, Color.RED),
        (20, Component.HUMIDITY, Color.YELLOW),
        (80, Component.HUMIDITY, Color.GREEN),
        (49, Component.PM2_5, Color.GREEN),
        (50, Component.PM10, Color.YELLOW),
        (100, Component.PM1_0, Color.RED),
        (99, Component.CARBON_MONOXIDE, Color.YELLOW),
        (55, Component.SOUND, Color.GREEN),
        (56, Component.SOUND, Color.YELLOW),
        (21.0, Component.LATITUDE, Color.WHITE),
        (0, Component.TIME_GPS, Color.WHITE),
    ],
)
def test_color_thresholds(value, component, expected):
    assert color_for(value, component) is expected


def test_begin_sets_default_states():
    display = Display(RecordingCanvas(), FakeClock())
    display.begin()
    assert display.icon_state(FunctionIcon.WIFI) is True
    assert all(not display.icon_state(icon) for icon in FunctionIcon if icon is not FunctionIcon.WIFI)
    assert all(display.component_state(c) for c in Component)
    assert ("fill_screen", (Color.BLACK,)) in display.canvas.operations


def test_set_icon_state_round_trip():
    display, _, _ = make_display()
    display.set_icon_state(FunctionIcon.SMS, True)
    assert display.icon_state(FunctionIcon.SMS) is True
    display.set_icon_state(FunctionIcon.SMS, False)
    assert display.icon_state(FunctionIcon.SMS) is False


def test_background_draws_a_green_button_per_row():
    display, canvas, _ = make_display()
    display.background()
    buttons = ops(canvas, "fill_round_rect")
    assert len(buttons) == len(Component)
    assert all(args[-1] is Color.GREEN for args in buttons)
    assert [args[1] for args in buttons] == [2 + 22 * c for c in Component]
    assert len(ops(canvas, "draw_smooth_circle")) == len(FunctionIcon)


def test_show_sht_prints_title_and_blanks_at_cursor():
    display, canvas, _ = make_display()
    display.show_sht(23.5, 50.0)
    prints = [args[0] for args in ops(canvas, "print")]
    assert prints[0] == "Temp: "
    assert prints[1] == "23.50 oC"
    assert prints[-1] == "%"
    cursors = ops(canvas, "set_cursor")
    blanks = ops(canvas, "fill_rect")
    assert [b[1] for b in blanks] == [c[1] for c in cursors]
    assert ops(canvas, "set_text_color")[1] == (Color.YELLOW,)


def test_show_pm_uses_thresholds_per_value():
    display, canvas, _ = make_display()
    display.show_pm(10, 60, 150)
    colors = [args[0] for args in ops(canvas, "set_text_color")]
    assert colors == [Color.GREEN, Color.YELLOW, Color.RED]
    assert sum(1 for args in ops(canvas, "print") if args[0].endswith("ug/m3")) == 3


def test_show_gps_prints_time_text():
    display, canvas, _ = make_display()
    display.show_gps(21.0, 105.8, "10:20:30")
    prints = [args[0] for args in ops(canvas, "print")]
    assert prints[-1] == "10:20:30"
    assert "Lat: " in prints and "Long: " in prints


def test_touch_on_wifi_icon_toggles_it():
    display, canvas, _ = make_display()
    assert display.process_touch(295, 40) is True
    assert display.icon_state(FunctionIcon.WIFI) is False
    assert ops(canvas, "fill_circle")[-1][-1] is Color.DARKGREY


def test_touch_is_debounced():
    display, _, clock = make_display()
    assert display.process_touch(295, 90) is True
    clock.now += 0.1
    assert display.process_touch(295, 90) is False
    assert display.icon_state(FunctionIcon.LTE) is True
    clock.now += 1.0
    assert display.process_touch(295, 90) is True
    assert display.icon_state(FunctionIcon.LTE) is False


def test_touch_on_button_toggles_component_and_redraws_red():
    display, canvas, _ = make_display()
    y = 2 + 22 * Component.HUMIDITY + 5
    assert display.process_touch(240, y) is True
    assert display.component_state(Component.HUMIDITY) is False
    assert ops(canvas, "fill_round_rect")[-1][-1] is Color.RED


def test_touch_outside_targets_and_no_touch():
    display, canvas, _ = make_display()
    assert display.process_touch(100, 100) is False
    assert display.process_touch(None, None) is False
    assert canvas.operations == []


def test_sim_signal_bars_rise():
    display, canvas, _ = make_display()
    display.draw_sim_signal_icon(0, 0, 0.5)
    heights = [args[3] for args in ops(canvas, "fill_rect")]
    assert heights == sorted(heights)
    assert len(heights) == 5


def test_battery_full_draws_tip():
    display, canvas, _ = make_display()
    display.draw_battery_icon(275, 225, 20, 10, 1.0)
    assert ("draw_string", ("52%", 260, 230)) in canvas.operations
    assert any(args[-1] is Color.GREEN and args[2] == 4 for args in ops(canvas, "fill_rect"))