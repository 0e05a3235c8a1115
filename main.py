import logging
import tkinter as tk

from core.config.config_service import config_service
from core.event_log.logic.event_logger import event_logger_from_config
from signature_pad.gui.signature_pad_view import SignaturePadView
from signature_pad.logic.signature_pad_engine import PadSettings, SignaturePadEngine


class MainWindow(tk.Tk):
    def __init__(self):
        super().__init__()

        self.title("Digital Signature Pad")
        self.geometry("640x460")

        engine = SignaturePadEngine(
            PadSettings.from_config(config_service),
            event_logger=event_logger_from_config(config_service.logging),
        )
        self.view = SignaturePadView(self, engine=engine)
        self.view.pack(fill="both", expand=True)


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, str(config_service.logging.level).upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = MainWindow()
    app.mainloop()


if __name__ == "__main__":
    main()
