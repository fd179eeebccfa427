from __future__ import annotations

from signal import SIGINT, signal

from dotenv import load_dotenv

from buildsync.ui.cli import main, sigint_handler

if __name__ == "__main__":
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()
