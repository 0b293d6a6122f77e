"""
Preview Module

Pluggable sinks for the intermediate frames the pipeline emits.
"""

import cv2
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path
from typing import List, Tuple, Union

from .visualization import to_display_bgr, to_display_rgb


class PreviewSink:
    """Receives titled frames from the pipeline."""

    def show(self, title: str, image: np.ndarray) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def abort(self) -> None:
        """Release resources without waiting on the user."""
        self.close()

    def __exit__(self, exc_type, exc, tb):
        if exc_type is None:
            self.close()
        else:
            self.abort()
        return False


class NullPreview(PreviewSink):
    """Discards every frame."""

    def show(self, title: str, image: np.ndarray) -> None:
        pass


class FrameRecorder(PreviewSink):
    """Keeps a copy of every frame, in emission order."""

    def __init__(self):
        self.frames: List[Tuple[str, np.ndarray]] = []

    def show(self, title: str, image: np.ndarray) -> None:
        self.frames.append((title, image.copy()))

    @property
    def titles(self) -> List[str]:
        return [title for title, _ in self.frames]


class MontagePreview(FrameRecorder):
    """Writes all recorded frames to one summary figure on close."""

    def __init__(self, path: Union[str, Path] = 'stages.png', dpi: int = 100):
        super().__init__()
        self.path = Path(path)
        self.dpi = dpi

    def close(self) -> None:
        """Save the summary figure, if any frame was recorded."""
        if not self.frames:
            return

        n = len(self.frames)
        cols = int(np.ceil(np.sqrt(n)))
        rows = int(np.ceil(n / cols))

        fig, axes = plt.subplots(rows, cols, figsize=(5 * cols, 4 * rows), squeeze=False)

        for idx, (title, frame) in enumerate(self.frames):
            ax = axes[idx // cols, idx % cols]
            ax.imshow(to_display_rgb(frame))
            ax.set_title(f"{idx + 1}. {title}")
            ax.axis('off')

        for idx in range(n, rows * cols):
            axes[idx // cols, idx % cols].axis('off')

        plt.tight_layout()
        plt.savefig(self.path, dpi=self.dpi, bbox_inches='tight')
        plt.close(fig)
        print(f"Saved: {self.path}")


class WindowPreview(PreviewSink):
    """
    Shows each frame in its own OpenCV window.

    Windows stay open until the pipeline finishes. close() then waits until
    the user presses a key or closes any window; closing a window exits the
    process.
    """

    def __init__(self, poll_ms: int = 100):
        self.poll_ms = poll_ms
        self.titles: List[str] = []

    def show(self, title: str, image: np.ndarray) -> None:
        if title not in self.titles:
            cv2.namedWindow(title, cv2.WINDOW_AUTOSIZE)
            self.titles.append(title)
        cv2.imshow(title, to_display_bgr(image))
        cv2.waitKey(1)

    def _any_window_closed(self) -> bool:
        return any(cv2.getWindowProperty(title, cv2.WND_PROP_VISIBLE) < 1
                   for title in self.titles)

    def abort(self) -> None:
        cv2.destroyAllWindows()
        self.titles = []

    def close(self) -> None:
        if not self.titles:
            return

        closed = False
        try:
            while True:
                if cv2.waitKey(self.poll_ms) != -1:
                    break
                if self._any_window_closed():
                    closed = True
                    break
        finally:
            cv2.destroyAllWindows()
            self.titles = []

        if closed:
            raise SystemExit(0)
