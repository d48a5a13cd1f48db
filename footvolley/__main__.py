from PySide6.QtWidgets import QApplication

from footvolley.db.database import get_connection
from footvolley.logging_setup import configure_logging
from footvolley.settings import get_logs_dir
from footvolley.ui.main_window import MainWindow


def main() -> int:
    configure_logging(get_logs_dir())
    app = QApplication([])
    connection = get_connection()
    window = MainWindow(connection)
    window.show()
    try:
        return app.exec()
    finally:
        connection.close()


if __name__ == "__main__":
    raise SystemExit(main())
