"""
Entry point for the text annotator.

Usage::

    python main.py
    python main.py --log-level DEBUG
    python main.py --config ~/my-annotator.json
"""

import argparse
import logging
import sys

from controllers.annotation_controller import AnnotationController
from GUI.keybindings import KeybindingsRegistry
from GUI.main_window import MainWindow
from GUI.surface_renderer import SurfaceRenderer
from GUI.text_metrics import default_metrics
from models.editor_config import load_config
from PyQt6.QtWidgets import QApplication

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="text-annotator",
        description="Place, move and style text boxes on a fixed-size surface.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)",
    )
    parser.add_argument("--config", help="path to an editor config JSON file")
    parser.add_argument("--keybindings", help="path to a keybindings JSON file")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")

    config = load_config(args.config)
    metrics = default_metrics()
    controller = AnnotationController(metrics.measure, config=config)
    renderer = SurfaceRenderer(metrics, padding=config.box_padding)
    window = MainWindow(controller, renderer, KeybindingsRegistry(args.keybindings))
    window.show()
    logger.info("Surface %dx%d ready", config.surface_width, config.surface_height)

    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
