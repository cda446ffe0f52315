#UI Module

import logging

import dearpygui.dearpygui as dpg

from physics import (
    ANGLE_RANGE,
    FORCE_RANGE,
    FRICTION_RANGE,
    MASS_RANGE,
    Direction,
    SurfaceKind,
    SystemDirection,
    SystemKind,
)

log = logging.getLogger(__name__)

PANEL_W = 340
WRAP_W = 320

SYSTEM_LABELS = {
    SystemKind.PULLEY_TABLE_HANGING: "Block A + Hanging Block B",
    SystemKind.INCLINE_HANGING: "Inclined Plane + Hanging Mass",
    SystemKind.TWO_ON_TABLE: "Two Blocks on Table",
}
SINGLE_PREDICTIONS = [
    ("<- Left", Direction.LEFT),
    ("No Motion", Direction.NONE),
    ("Right ->", Direction.RIGHT),
]
CONNECTED_PREDICTIONS = [
    ("A -> / B down", SystemDirection.A_RIGHT_B_DOWN),
    ("No Motion", SystemDirection.NONE),
    ("A <- / B up", SystemDirection.A_LEFT_B_UP),
]
TONE_COLORS = {
    "positive": (34, 197, 94, 255),
    "negative": (239, 68, 68, 255),
    "zero": (160, 160, 160, 255),
}


def build_ui(app, canvas_w: int, canvas_h: int):
    # ---------- Left panel ----------
    with dpg.window(label="Controls", pos=(10, 10), width=PANEL_W, height=canvas_h,
                    no_close=True, no_title_bar=True, no_move=True, no_resize=True,
                    tag="controls_win"):
        dpg.add_text("Newton's Second Law of Motion", color=(59, 130, 246, 255), wrap=WRAP_W)
        dpg.add_radio_button(
            [c.label for c in app.chapters],
            default_value=app.chapter.label,
            callback=lambda s, a: app.on_chapter_change(a),
            tag="chapter_radio",
        )
        dpg.add_separator()
        dpg.add_group(tag="scene_controls")

    # ---------- Main viewport window ----------
    with dpg.window(label="Viewport", pos=(PANEL_W + 20, 10), width=canvas_w + 16, height=canvas_h + 16,
                    no_close=True, no_title_bar=True, no_move=True, no_resize=True, no_scrollbar=True,
                    tag="viewport_win"):
        dpg.add_drawlist(width=canvas_w, height=canvas_h, tag="main_canvas")

    with dpg.theme(tag="canvas_theme"):
        with dpg.theme_component(dpg.mvAll):
            dpg.add_theme_color(dpg.mvThemeCol_WindowBg, (250, 250, 252, 255))
            dpg.add_theme_style(dpg.mvStyleVar_WindowPadding, 0, 0)
    dpg.bind_item_theme("viewport_win", "canvas_theme")


def _slider(app, label, key, value, bounds, step_fmt="%.0f", integer=False, tag=None):
    lo, hi = bounds
    with dpg.group(parent="scene_controls", tag=tag or 0):
        dpg.add_text(label)
        if integer:
            dpg.add_slider_int(default_value=int(value), min_value=int(lo), max_value=int(hi),
                               width=WRAP_W - 20, clamped=True,
                               callback=lambda s, a: app.on_param(key, float(a)))
        else:
            dpg.add_slider_float(default_value=float(value), min_value=lo, max_value=hi,
                                 width=WRAP_W - 20, format=step_fmt, clamped=True,
                                 callback=lambda s, a: app.on_param(key, float(a)))


def _prediction_section(app, question, options):
    parent = "scene_controls"
    dpg.add_separator(parent=parent)
    dpg.add_text("Predict Direction", parent=parent, color=(200, 200, 220, 255))
    dpg.add_text(question, parent=parent, wrap=WRAP_W)
    with dpg.group(horizontal=True, parent=parent):
        for label, value in options:
            dpg.add_button(label=label, user_data=value,
                           callback=lambda s, a, u: app.on_predict(u))
    dpg.add_text("", parent=parent, wrap=WRAP_W, tag="feedback_text")


def _results_section(app, keys):
    parent = "scene_controls"
    dpg.add_separator(parent=parent)
    dpg.add_text("Results", parent=parent, color=(200, 200, 220, 255))
    for i, key in enumerate(keys):
        dpg.add_text(f"{key}: ", parent=parent, tag=f"readout_{i}")


def build_single_controls(app, scene):
    p = scene.params
    dpg.add_text("Surface Type", parent="scene_controls")
    dpg.add_radio_button(
        [k.value for k in SurfaceKind],
        default_value=p.surface.value,
        horizontal=True,
        parent="scene_controls",
        callback=lambda s, a: app.on_param("surface", SurfaceKind(a)),
    )
    _slider(app, "Applied Force (F), N", "applied_force", p.applied_force, FORCE_RANGE, integer=True)
    _slider(app, "Force Angle (theta), deg  0 = horizontal", "force_angle", p.force_angle, ANGLE_RANGE)
    _slider(app, "Friction (mu), kinetic", "friction", p.friction, FRICTION_RANGE, "%.2f",
            tag="friction_row")
    _slider(app, "Mass (m), kg", "mass", p.mass, MASS_RANGE, integer=True)
    _prediction_section(app, "Which way will the block accelerate?", SINGLE_PREDICTIONS)
    _results_section(app, scene.readout())
    sync_controls(scene)


def build_connected_controls(app, scene):
    p = scene.params
    dpg.add_text("System Type", parent="scene_controls")
    labels = {v: k for k, v in SYSTEM_LABELS.items()}
    dpg.add_radio_button(
        list(SYSTEM_LABELS.values()),
        default_value=SYSTEM_LABELS[p.system],
        parent="scene_controls",
        callback=lambda s, a: app.on_param("system", labels[a]),
    )
    _slider(app, "Mass A (m1), kg", "mass_a", p.mass_a, MASS_RANGE, integer=True)
    _slider(app, "Mass B (m2), kg", "mass_b", p.mass_b, MASS_RANGE, integer=True)
    _slider(app, "Incline Angle (theta), deg", "incline_angle", p.incline_angle, ANGLE_RANGE,
            tag="incline_row")
    _slider(app, "Friction (mu)", "friction", p.friction, FRICTION_RANGE, "%.2f")
    _prediction_section(app, "Which way will the system accelerate?", CONNECTED_PREDICTIONS)
    _results_section(app, scene.readout())
    dpg.add_text("Because the cable is light and inextensible, both blocks share "
                 "the same acceleration magnitude.", parent="scene_controls", wrap=WRAP_W)
    sync_controls(scene)


def clear_controls():
    try:
        dpg.delete_item("scene_controls", children_only=True)
    except Exception as e:
        log.warning("Could not clear scene controls: %s", e)


def sync_controls(scene):
    """Show or hide optional rows and refresh the results readout."""
    try:
        params = scene.params
        if dpg.does_item_exist("friction_row"):
            dpg.configure_item("friction_row", show=getattr(params, "surface", None) is not SurfaceKind.SMOOTH)
        if dpg.does_item_exist("incline_row"):
            dpg.configure_item("incline_row", show=getattr(params, "system", None) is SystemKind.INCLINE_HANGING)
        tones = scene.readout_tones()
        for i, (key, text) in enumerate(scene.readout().items()):
            tag = f"readout_{i}"
            if dpg.does_item_exist(tag):
                dpg.set_value(tag, f"{key}: {text}")
                dpg.configure_item(tag, color=TONE_COLORS[tones[key]])
    except Exception as e:
        log.warning("Control sync failed: %s", e)


def show_feedback(correct, message: str):
    if not dpg.does_item_exist("feedback_text"):
        return
    dpg.set_value("feedback_text", message)
    if correct is None:
        return
    color = (34, 197, 94, 255) if correct else (239, 68, 68, 255)
    dpg.configure_item("feedback_text", color=color)
