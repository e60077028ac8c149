import logging
import time

import dearpygui.dearpygui as dpg

logger = logging.getLogger('particlefield.controls')

THEMES = ['dark', 'light']


def _make_callbacks(shared):
    def theme_cb(sender, app_data, user_data):
        if app_data in THEMES:
            shared['theme'] = app_data
    def pause_cb():
        shared['toggle_pause'] = True
    def regenerate_cb():
        shared['regenerate'] = True
    def exit_cb():
        shared['__exit__'] = True
    return theme_cb, pause_cb, regenerate_cb, exit_cb


def format_status(shared):
    try:
        state = "paused" if shared.get('paused', False) else "running"
        return f"particles={int(shared.get('particle_count', 0))}, fps={float(shared.get('fps', 0.0)):.1f}, {state}"
    except (TypeError, ValueError):
        return "status unavailable"


def run_gui(shared):
    """
    Run the DearPyGui control panel in its own process.

    Requests are written into `shared` and picked up by the main loop at the
    top of its next frame; status values flow the other way.
    """
    dpg.create_context()

    theme_cb, pause_cb, regenerate_cb, exit_cb = _make_callbacks(shared)

    with dpg.window(label="Particle Field", tag="controls_window", width=320, height=220):
        dpg.add_text("Theme")
        dpg.add_radio_button(THEMES, tag="theme_radio", default_value=shared.get('theme', 'dark'),
                             horizontal=True, callback=theme_cb)
        dpg.add_separator()
        with dpg.group(horizontal=True):
            dpg.add_button(label="Pause / Resume", callback=lambda s, a, u: pause_cb())
            dpg.add_button(label="Regenerate", callback=lambda s, a, u: regenerate_cb())
        dpg.add_button(label="Exit", callback=lambda s, a, u: exit_cb())
        dpg.add_spacer()
        dpg.add_text("Status:", tag="status_label")
        dpg.add_text("", tag="status_text")

    dpg.create_viewport(title='Particle Field Controls', width=340, height=240)
    dpg.set_primary_window("controls_window", True)
    dpg.setup_dearpygui()
    dpg.show_viewport()

    try:
        while not shared.get('__exit__', False) and dpg.is_dearpygui_running():
            dpg.set_value("status_text", format_status(shared))
            # keep the radio in sync when the main window toggles the theme
            current = shared.get('theme')
            if current in THEMES and dpg.get_value("theme_radio") != current:
                dpg.set_value("theme_radio", current)
            dpg.render_dearpygui_frame()
            time.sleep(0.01)
    except (EOFError, BrokenPipeError, ConnectionError):
        # manager went away with the main process
        logger.info("control panel lost its connection, closing")
    finally:
        dpg.destroy_context()


if __name__ == "__main__":
    from multiprocessing import Manager
    mgr = Manager()
    shared = mgr.dict()
    shared['theme'] = 'dark'
    shared['particle_count'] = 0
    shared['fps'] = 0.0
    run_gui(shared)
