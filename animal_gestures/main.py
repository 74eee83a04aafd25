"""
Webcam application for animal gesture recognition.
"""
import argparse
import logging
import sys
import time
from typing import Optional

import cv2
import numpy as np
from dotenv import load_dotenv

from .config import Cfg, CameraConfig, load_config
from .controller import GestureController
from .exceptions import ConfigError, FrameSourceUnavailableError
from .landmarks import HandsTracker
from .listeners import LoggingListener


logger = logging.getLogger(__name__)


class CameraFrameSource:
    """OpenCV webcam that can be stopped and restarted."""

    def __init__(self, cfg: CameraConfig):
        self.cfg = cfg
        self.cap: Optional[cv2.VideoCapture] = None

    @property
    def running(self) -> bool:
        return self.cap is not None

    def start(self) -> None:
        """
        Open the camera.

        Raises:
            FrameSourceUnavailableError: if the camera cannot be opened
        """
        if self.cap is not None:
            return
        cap = cv2.VideoCapture(self.cfg.index)
        if not cap.isOpened():
            cap.release()
            raise FrameSourceUnavailableError(
                f"Failed to open camera {self.cfg.index}. Please allow camera access to use gesture controls."
            )
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.cfg.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.cfg.height)
        cap.set(cv2.CAP_PROP_FPS, self.cfg.fps)
        self.cap = cap
        logger.info("📷 Camera %d started", self.cfg.index)

    def stop(self) -> None:
        if self.cap is not None:
            self.cap.release()
            self.cap = None
            logger.info("📷 Camera stopped")

    def read(self) -> Optional[np.ndarray]:
        if self.cap is None:
            return None
        ok, frame = self.cap.read()
        if not ok:
            return None
        if self.cfg.mirror:
            frame = cv2.flip(frame, 1)
        return frame


class GestureRecognitionApp:
    """Main application class: camera -> tracker -> gesture controller."""

    def __init__(self, cfg: Cfg):
        """Initialize the application with configuration."""
        self.cfg = cfg
        self.source = CameraFrameSource(cfg.camera)
        self.tracker = HandsTracker.from_config(cfg.mediapipe)
        self.controller = GestureController(cfg)
        self.controller.navigator.subscribe(LoggingListener())
        self.last_label = None

    def toggle_pause(self) -> None:
        """Stop the camera while inactive; restart it and start fresh on resume."""
        if self.controller.active:
            self.controller.pause()
            self.source.stop()
        else:
            self.source.start()
            self.controller.resume()

    def run(self) -> None:
        """
        Run the main application loop.

        Raises:
            FrameSourceUnavailableError: if the camera cannot be opened
        """
        self.source.start()
        logger.info("Starting %s", self.cfg.display.window_name)
        logger.info("Keys: h = hint, 1 = hint icon, p = pause/resume, q = quit")

        try:
            while True:
                frame = None
                if self.controller.active:
                    frame = self.source.read()
                    if frame is None:
                        logger.error("Failed to read frame from camera")
                        break
                    hands, handedness = self.tracker.process(frame)
                    result = self.controller.process_frame(hands, handedness, now=time.monotonic())
                    self.last_label = result.label
                else:
                    frame = np.zeros((self.cfg.camera.height, self.cfg.camera.width, 3), dtype=np.uint8)

                if self.cfg.display.show_status:
                    self._draw_status(frame)
                cv2.imshow(self.cfg.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('h'):
                    self.controller.hint_clicked()
                elif key == ord('1'):
                    self.controller.hint_icon_clicked()
                elif key == ord('p'):
                    self.toggle_pause()
        finally:
            self.source.stop()
            self.tracker.close()
            cv2.destroyAllWindows()

    def _draw_status(self, frame: np.ndarray) -> None:
        label = self.last_label.value if self.last_label else "-"
        paused = "" if self.controller.active else " | PAUSED"
        held = self.controller.hold.elapsed_ms()
        cv2.putText(frame, f"Screen: {self.controller.screen.value}{paused}", (10, 30),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        cv2.putText(frame, f"Gesture: {label} ({held:.0f} ms)", (10, 60),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.6, (0, 255, 0), 2)


def main(argv=None) -> int:
    """Entry point for the application."""
    load_dotenv()

    ap = argparse.ArgumentParser(description="Animal gesture recognition with a webcam.")
    ap.add_argument("--config", default=None, help="Path to a YAML config file")
    ap.add_argument("--variant", default=None, help="Classifier rule set (classic or two_hand)")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    try:
        cfg = load_config(args.config)
        if args.variant:
            cfg.classifier.variant = args.variant
        logging.getLogger().setLevel(getattr(logging, cfg.logging.level))
        app = GestureRecognitionApp(cfg)
    except (ConfigError, FileNotFoundError) as e:
        logger.error("❌ Error: %s", e)
        return 1

    try:
        app.run()
    except FrameSourceUnavailableError as e:
        logger.error("❌ %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    return 0


if __name__ == "__main__":
    sys.exit(main())
