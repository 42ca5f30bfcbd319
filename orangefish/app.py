# -*- coding: utf-8 -*-
"""
OrangeFish application entry point.

Wires the main window, the backend bridge and the coordinator together,
then runs the Qt event loop.
"""

import argparse
import sys

from PySide6 import QtWidgets

from orangefish import __title__, __version__
from orangefish.coordinator import ViewUpdateCoordinator
from orangefish.core import log, settings


def build_parser():
    parser = argparse.ArgumentParser(prog="orangefish", description="Desktop source-control client")
    parser.add_argument("--backend", help="backend executable (overrides the saved setting)")
    parser.add_argument(
        "--backend-arg",
        action="append",
        default=None,
        dest="backend_args",
        help="extra argument passed to the backend; may be repeated",
    )
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument(
        "--save-settings",
        action="store_true",
        help="remember the given backend and log level options for later runs",
    )
    parser.add_argument("--version", action="version", version=f"{__title__} {__version__}")
    return parser


def apply_overrides(config, args, store=None):
    """
    Apply command line options on top of the saved configuration.

    With --save-settings the result also becomes the saved configuration.
    """
    if args.backend:
        config.backend_program = args.backend
    if args.backend_args is not None:
        config.backend_args = args.backend_args
    if args.log_level:
        config.log_level = args.log_level
    if args.save_settings:
        settings.save_view_config(config, store)
    return config


def main(argv=None):
    args = build_parser().parse_args(argv)

    app = QtWidgets.QApplication(sys.argv[:1])
    app.setApplicationName(settings.APPLICATION)
    app.setOrganizationName(settings.ORGANIZATION)

    config = apply_overrides(settings.load_view_config(), args)
    log.configure(config.log_level)
    log.info(f"{__title__} {__version__} starting")

    # Imported after QApplication exists; widgets need it
    from orangefish.ui.bridge import BackendBridge
    from orangefish.ui.main_window import MainWindow

    window = MainWindow(ellipsis=config.ellipsis, step=config.truncation_step)
    bridge = BackendBridge(config.backend_program, config.backend_args, parent=window)
    coordinator = ViewUpdateCoordinator(window, bridge, config=config)
    window.set_coordinator(coordinator)

    bridge.event_received.connect(coordinator.handle)
    bridge.message_rejected.connect(coordinator.reject)
    bridge.backend_failed.connect(coordinator.backend_lost)
    app.aboutToQuit.connect(bridge.stop)

    window.show()
    bridge.start()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
