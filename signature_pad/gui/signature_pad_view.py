from __future__ import annotations
import tkinter as tk
from tkinter import ttk, filedialog, messagebox
from typing import Optional

from PIL import Image, ImageTk

from ..logic.drawing_surface import ratio_from_dpi
from ..logic.signature_pad_engine import SignaturePadEngine
from ..logic.signature_sink import save_signature, suggest_file_name
from ..logic.status_presenter import role_label, status_color, status_text
from ..models.input_events import PointerEvent
from ..models.pad_events import PadEvent
from ..models.signature_enums import ImageFormat, InputKind, Role, SignatureStatus
from ..models.surface_geometry import SurfaceRect


class SignaturePadView(ttk.Frame):
    """
    Tk front end for a SignaturePadEngine:
      • role toggle, Request / Complete (only shown when legal)
      • drawing canvas bound to the engine's input handling
      • Clear, format choice and Download
      • status bar with coloured dot
      • read-only audit log window when an event log is attached

    The view holds no pad state of its own; it re-renders from engine events.
    """

    def __init__(self, parent, *, engine: SignaturePadEngine, **kwargs):
        super().__init__(parent, **kwargs)
        self._engine = engine
        self._photo: Optional[ImageTk.PhotoImage] = None
        self._refresh_pending = False
        self._format = tk.StringVar(value=engine.settings.default_format.value)
        self._ratio = self._display_ratio()
        self._make_ui()
        self._engine.subscribe(self._on_pad_event)
        self._refresh()

    def _display_ratio(self) -> float:
        settings = self._engine.settings
        if settings.detect_device_pixel_ratio:
            return ratio_from_dpi(self.winfo_fpixels("1i"))
        ratio = settings.device_pixel_ratio or 1.0
        return ratio if ratio > 0 else 1.0

    def destroy(self) -> None:
        self._engine.unsubscribe(self._on_pad_event)
        super().destroy()

    def _display_size(self) -> tuple[int, int]:
        w, h = self._engine.surface.logical_size
        return int(round(w * self._ratio)), int(round(h * self._ratio))

    # ------------------------------------------------------------------ UI
    def _make_ui(self) -> None:
        self.columnconfigure(0, weight=1)
        self.rowconfigure(1, weight=1)

        header = ttk.Frame(self)
        header.grid(row=0, column=0, sticky="ew", padx=12, pady=(10, 6))
        header.columnconfigure(0, weight=1)
        ttk.Label(header, text="Digital Signature Pad", font=("TkDefaultFont", 14, "bold"))\
            .grid(row=0, column=0, sticky="w")
        self._role_btn = ttk.Button(header, command=self._engine.toggle_role)
        self._role_btn.grid(row=0, column=1, padx=(6, 0))
        self._request_btn = ttk.Button(header, text="Request Signature", command=self._engine.request_signature)
        self._complete_btn = ttk.Button(header, text="Complete", command=self._engine.complete_signature)

        w, h = self._display_size()
        self.canvas = tk.Canvas(self, width=w, height=h, bg="white",
                                highlightthickness=1, highlightbackground="#ddd")
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=12, pady=4)
        self._image_item = self.canvas.create_image(0, 0, anchor="nw")
        self.canvas.bind("<ButtonPress-1>", lambda e: self._on_pointer(InputKind.DOWN, e))
        self.canvas.bind("<B1-Motion>", lambda e: self._on_pointer(InputKind.MOVE, e))
        self.canvas.bind("<ButtonRelease-1>", lambda e: self._on_pointer(InputKind.UP, e))
        self.canvas.bind("<Leave>", lambda e: self._on_pointer(InputKind.LEAVE, e))
        self.canvas.bind("<Configure>", self._on_configure)

        bottom = ttk.Frame(self)
        bottom.grid(row=2, column=0, sticky="ew", padx=12, pady=(4, 6))
        bottom.columnconfigure(1, weight=1)
        ttk.Button(bottom, text="Clear", command=self._engine.clear).grid(row=0, column=0, sticky="w")
        ttk.Combobox(bottom, textvariable=self._format, state="readonly", width=6,
                     values=[f.value for f in ImageFormat]).grid(row=0, column=2, padx=(0, 6))
        ttk.Button(bottom, text="Download", command=self._download).grid(row=0, column=3)
        if self._engine.event_logger is not None:
            ttk.Button(bottom, text="Audit log", command=self._show_audit_log).grid(row=0, column=4, padx=(6, 0))

        status = ttk.Frame(self)
        status.grid(row=3, column=0, sticky="ew", padx=12, pady=(0, 10))
        self._dot = tk.Canvas(status, width=10, height=10, highlightthickness=0)
        self._dot.pack(side="left", padx=(0, 6))
        self._dot_item = self._dot.create_oval(1, 1, 9, 9, outline="")
        self._status_lbl = ttk.Label(status)
        self._status_lbl.pack(side="left")

    # ------------------------------------------------------------------ Canvas handlers
    def _surface_rect(self) -> SurfaceRect:
        r = self._ratio
        return SurfaceRect(left=self.canvas.winfo_rootx() / r, top=self.canvas.winfo_rooty() / r,
                           width=self.canvas.winfo_width() / r, height=self.canvas.winfo_height() / r)

    def _on_pointer(self, kind: InputKind, e) -> None:
        # Tk reports device pixels; the engine works in logical units
        event = PointerEvent(kind, e.x_root / self._ratio, e.y_root / self._ratio)
        self._engine.handle_input(event, self._surface_rect())

    def _on_configure(self, e) -> None:
        if e.width <= 1 or e.height <= 1:
            return
        surface = self._engine.surface
        if (e.width, e.height) == surface.backing_size and surface.scale == self._ratio:
            return
        self._engine.resize(e.width / self._ratio, e.height / self._ratio, self._ratio)
        self.after_idle(self._engine.run_pending_redraws)

    # ------------------------------------------------------------------ Rendering
    def _on_pad_event(self, event: PadEvent) -> None:
        if not self._refresh_pending:
            self._refresh_pending = True
            self.after_idle(self._refresh)

    def _refresh(self) -> None:
        self._refresh_pending = False
        surface = self._engine.surface
        img = surface.image
        w, h = self._display_size()
        if img.size != (w, h):
            img = img.resize((w, h), Image.Resampling.LANCZOS)
        self._photo = ImageTk.PhotoImage(img)
        self.canvas.itemconfigure(self._image_item, image=self._photo)

        state = self._engine.state
        self._role_btn.configure(text=role_label(state.role))
        if state.role is Role.INITIATOR:
            self._request_btn.grid(row=0, column=2, padx=(6, 0))
        else:
            self._request_btn.grid_remove()
        if state.role is Role.SIGNER and state.status is SignatureStatus.REQUESTED:
            self._complete_btn.grid(row=0, column=3, padx=(6, 0))
        else:
            self._complete_btn.grid_remove()
        self._dot.itemconfigure(self._dot_item, fill=status_color(state.status))
        self._status_lbl.configure(text=status_text(state.status))

    # ------------------------------------------------------------------ Download
    def _download(self) -> None:
        fmt = ImageFormat(self._format.get())
        p = filedialog.asksaveasfilename(
            parent=self,
            title="Save signature",
            initialfile=suggest_file_name(fmt, self._engine.settings.file_stem),
            defaultextension=f".{fmt.extension}",
            filetypes=[(fmt.value.upper(), f"*.{fmt.extension}")],
        )
        if not p:
            return
        try:
            save_signature(self._engine, p, fmt)
        except OSError as ex:
            messagebox.showerror("Error", str(ex), parent=self)

    # ------------------------------------------------------------------ Audit log
    def _show_audit_log(self) -> None:
        win = tk.Toplevel(self)
        win.title("Audit log")
        win.geometry("720x320")
        columns = ("timestamp", "role", "event", "message", "log_level")
        tree = ttk.Treeview(win, columns=columns, show="headings")
        for col, text, width in zip(columns, ("Time (UTC)", "Role", "Event", "Message", "Level"),
                                    (150, 80, 140, 260, 70)):
            tree.heading(col, text=text)
            tree.column(col, width=width, anchor=tk.W)
        vsb = ttk.Scrollbar(win, orient="vertical", command=tree.yview)
        tree.configure(yscrollcommand=vsb.set)
        tree.pack(side="left", fill="both", expand=True)
        vsb.pack(side="right", fill="y")

        try:
            entries = self._engine.event_logger.fetch_logs(limit=500)
        except Exception as ex:
            messagebox.showerror("Error", f"Audit log unavailable: {ex}", parent=win)
            return
        for entry in entries:
            tree.insert("", "end", values=(
                entry.timestamp.strftime("%Y-%m-%d %H:%M:%S"),
                entry.role or "",
                entry.event,
                entry.message or "",
                entry.log_level,
            ))
