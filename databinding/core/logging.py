import sys
from typing import List, Optional
from loguru import logger
import os

CONSOLE_FORMAT = ("<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | "
                  "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")


def _binder_only(record) -> bool:
    return record["name"].startswith("databinding")


def setup_logging(debug_mode: bool = True, log_dir: Optional[str] = None,
                  trace_transfers: bool = False, binder_only: bool = False) -> List[int]:
    """
    Configures Loguru sinks for the binder.

    The library itself only emits through ``loguru.logger``; applications
    call this once at startup to choose sinks.

    Args:
        debug_mode: DEBUG on the console (bind/unbind/apply/detach), else INFO.
        log_dir: Directory for a rotating file sink; None keeps console only.
        trace_transfers: Lower the console to TRACE so every value transfer is shown.
        binder_only: Drop records emitted outside the databinding package.

    Returns:
        Handler ids, for callers that want to remove the sinks later.
    """
    # Remove default handler
    logger.remove()

    if trace_transfers:
        level = "TRACE"
    else:
        level = "DEBUG" if debug_mode else "INFO"
    record_filter = _binder_only if binder_only else None

    handler_ids = [logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT, filter=record_filter)]

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        handler_ids.append(logger.add(os.path.join(log_dir, "databinding_{time}.log"),
                                      rotation="10 MB", retention="1 week",
                                      level="TRACE" if trace_transfers else "DEBUG",
                                      filter=record_filter))

    logger.debug(f"Binder logging at {level}" + (f", files in {log_dir}" if log_dir else ""))
    return handler_ids
