import logging
import time

from cliptrail.detector import ChangeDetector
from cliptrail.store import HistoryStore
from cliptrail.win_pasteboard import WindowsPasteboard


def main() -> None:
    logging.basicConfig(level=logging.DEBUG, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    history = HistoryStore(max_entries=10)

    def on_text(text: str) -> None:
        entry_id = history.insert(text)
        entry = history.entry(entry_id)
        if entry is not None:
            print(f"[{len(history)}/{history.max_entries}] {entry.preview()}")

    detector = ChangeDetector(WindowsPasteboard(), on_text=on_text)
    detector.start()
    print("Polling clipboard. Press Ctrl+C to exit.")

    try:
        while True:
            time.sleep(1.0)
    except KeyboardInterrupt:
        pass
    finally:
        detector.stop()


if __name__ == "__main__":
    main()
