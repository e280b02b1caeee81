from ops_dashboard.app.infrastructure.logging.logger import get_logger

logger = get_logger(__name__)


class TkClipboard:
    """System clipboard through a hidden Tk root; headless hosts report failure."""

    def copy_text(self, text: str) -> bool:
        try:
            import tkinter  # noqa: PLC0415
        except ImportError:
            logger.warning("clipboard unavailable: tkinter is not installed")
            return False
        try:
            root = tkinter.Tk()
            root.withdraw()
            root.clipboard_clear()
            root.clipboard_append(text)
            root.update()
            root.destroy()
        except tkinter.TclError as error:
            logger.warning("clipboard unavailable: %s", error)
            return False
        return True
