"""
Live Preview: Tkinter window that polls a renderer for progress.
The renderer never calls into the window; the window's timer pulls snapshots.
"""

import tkinter as tk

from PIL import ImageTk

from render_server.base_renderer import BaseRenderer, RenderState


class LivePreview:
    """
    Usage:
        renderer.render_async()
        preview = LivePreview(renderer)
        preview.start(update_interval_ms=100)
        preview.run()   # Returns when the user closes the window
    """

    def __init__(self, renderer: BaseRenderer, title: str = "Path Tracer - Live Preview"):
        self.renderer = renderer
        self.title = title

        self.window = None
        self.canvas = None
        self.label = None
        self.photo = None
        self.update_interval_ms = 100
        self.is_finished = False

    def start(self, update_interval_ms: int = 100):
        """Create the window and schedule the first poll"""
        self.update_interval_ms = update_interval_ms

        self.window = tk.Tk()
        self.window.title(self.title)

        self.canvas = tk.Canvas(self.window, width=self.renderer.width, height=self.renderer.height)
        self.canvas.pack()

        self.label = tk.Label(self.window, text="Rendering...", font=("Courier", 10))
        self.label.pack()

        self.window.protocol("WM_DELETE_WINDOW", self.close)
        self.window.after(self.update_interval_ms, self._poll)

    def _poll(self):
        if self.window is None:
            return

        # Check completion before copying so the last poll shows the final image
        done = self.renderer.state is RenderState.COMPLETE

        self.photo = ImageTk.PhotoImage(self.renderer.copy_snapshot())
        self.canvas.create_image(0, 0, anchor=tk.NW, image=self.photo)

        if done:
            self.is_finished = True
            self.label.config(text="Rendering Complete - Close window when done")
            return

        progress = self.renderer.progress() * 100
        self.label.config(text=f"Rendering... {progress:5.1f}%")
        self.window.after(self.update_interval_ms, self._poll)

    def run(self):
        """Enter the Tk main loop until the window is closed"""
        if self.window is None:
            self.start(self.update_interval_ms)
        self.window.mainloop()

    def close(self):
        if self.window is not None:
            self.window.destroy()
            self.window = None
