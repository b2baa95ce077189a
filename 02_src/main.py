"""Main entry point for Message Sender."""

import sys
from pathlib import Path

from dotenv import load_dotenv

from message_sender.config import SenderSettings
from message_sender.console import ConsoleSession
from message_sender.dispatch import DispatchError
from message_sender.logging_config import get_logger, setup_logging


def main() -> int:
    """Run the interactive sender."""
    project_root = Path(__file__).resolve().parent.parent
    load_dotenv(project_root / ".env")

    setup_logging()
    logger = get_logger("message_sender")

    settings = SenderSettings.from_env()
    session = ConsoleSession(settings)

    try:
        return session.run()
    except DispatchError:
        logger.exception("Sending aborted")
        return 1
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
