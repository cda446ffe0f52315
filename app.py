#Newton's Second Law Lab

import time
import json
import logging
import os
from enum import Enum

import dearpygui.dearpygui as dpg

from renderer import Renderer, LABEL_FONT
from scenes import ConnectedScene, SingleBodyScene
from ui import (
    build_connected_controls,
    build_single_controls,
    build_ui,
    clear_controls,
    show_feedback,
    sync_controls,
)

log = logging.getLogger(__name__)

# ---------- CONFIG ----------
WIN_W, WIN_H = 1400, 900
CANVAS_W, CANVAS_H = 1000, 700
MAX_FRAME_DT = 0.25
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

DEFAULT_SETTINGS = {
    "start_chapter": "7.1",
    "label_font_size": LABEL_FONT,
    "log_level": "INFO",
}


class Chapter(Enum):
    SINGLE = "7.1"
    CONNECTED = "7.2"

    @property
    def label(self) -> str:
        if self is Chapter.SINGLE:
            return "Part 1: Single Body"
        return "Part 2: Connected Bodies"

    @classmethod
    def from_label(cls, label: str) -> "Chapter":
        for c in cls:
            if c.label == label or c.value == label:
                return c
        raise ValueError(f"unknown chapter: {label!r}")


def setup_logging(level: str = "INFO") -> logging.Logger:
    root = logging.getLogger()
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def settings_path():
    return os.path.join(os.getcwd(), "settings.json")


def load_settings(path: str = None) -> dict:
    """View preferences merged over the defaults; simulation state is never stored."""
    data = dict(DEFAULT_SETTINGS)
    path = path or settings_path()
    if not os.path.exists(path):
        return data
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        if not isinstance(raw, dict):
            raise ValueError("settings root must be an object")
    except (OSError, ValueError) as e:
        log.warning("Ignoring settings file %s: %s", path, e)
        return data
    if raw.get("start_chapter") in [c.value for c in Chapter]:
        data["start_chapter"] = raw["start_chapter"]
    try:
        data["label_font_size"] = min(24, max(10, int(raw.get("label_font_size", data["label_font_size"]))))
    except (TypeError, ValueError):
        log.warning("Invalid label_font_size in %s", path)
    if isinstance(raw.get("log_level"), str):
        data["log_level"] = raw["log_level"]
    return data


def save_settings(data: dict, path: str = None) -> None:
    path = path or settings_path()
    try:
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)
    except OSError as e:
        log.warning("Could not save settings to %s: %s", path, e)


class App:
    chapters = list(Chapter)

    def __init__(self, settings_file: str = None) -> None:
        self.settings_file = settings_file
        self.settings = load_settings(settings_file)
        setup_logging(self.settings["log_level"])
        self.chapter = Chapter(self.settings["start_chapter"])
        self.scene = None

        dpg.create_context()
        dpg.create_viewport(title="Newton's Second Law", width=WIN_W, height=WIN_H)
        build_ui(self, CANVAS_W, CANVAS_H)
        self.R = Renderer("main_canvas", CANVAS_W, CANVAS_H)
        self.R.font_size = self.settings["label_font_size"]

        self._last = time.time()
        dpg.setup_dearpygui()
        dpg.show_viewport()
        self.open_chapter(self.chapter)

    # ---------- Chapters ----------
    def teardown_scene(self):
        """Stop the frame loop before anything it draws on goes away."""
        if self.scene is None:
            return
        self.scene.loop.dispose()
        self.R.clear()
        clear_controls()
        self.scene = None

    def open_chapter(self, chapter: Chapter):
        self.teardown_scene()
        self.chapter = chapter
        if chapter is Chapter.SINGLE:
            self.scene = SingleBodyScene(self.R)
            build_single_controls(self, self.scene)
        else:
            self.scene = ConnectedScene(self.R)
            build_connected_controls(self, self.scene)
        self.scene.loop.start()
        log.info("Opened %s", self.scene.title)

    def on_chapter_change(self, label: str):
        chapter = Chapter.from_label(label)
        if chapter is self.chapter and self.scene is not None:
            return
        self.open_chapter(chapter)
        self.settings["start_chapter"] = chapter.value
        save_settings(self.settings, self.settings_file)

    # ---------- Parameter and prediction callbacks ----------
    def on_param(self, key: str, value):
        if self.scene is None:
            return
        self.scene.update(**{key: value})
        sync_controls(self.scene)
        self.clear_prediction()

    def on_predict(self, direction):
        if self.scene is None:
            return
        correct, message = self.scene.feedback(direction)
        show_feedback(correct, message)

    def clear_prediction(self):
        show_feedback(None, "")

    # ---------- Main loop ----------
    def run(self):
        try:
            while dpg.is_dearpygui_running():
                now = time.time()
                dt = min(MAX_FRAME_DT, max(0.0, now - self._last))
                self._last = now
                if self.scene is not None:
                    self.scene.loop.tick(dt)
                dpg.render_dearpygui_frame()
        finally:
            self.teardown_scene()
            dpg.destroy_context()


def main():
    app = App()
    app.run()


# ---------- MAIN ----------
if __name__ == "__main__":
    main()
