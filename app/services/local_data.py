import logging

from app.services.history import CompletionHistory
from app.services.session_log import SessionLog

logger = logging.getLogger(__name__)


def clear_all_data(history: CompletionHistory, session_log: SessionLog) -> None:
    """
    Erase everything the service keeps about the user. There is no partial clear.
    """
    history.clear()
    session_log.clear()
    logger.info("Local data cleared")
