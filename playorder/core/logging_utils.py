import os
import sys
import uuid
import logging
import logging.handlers
from typing import Optional

DEFAULT_LOG_DIR = os.path.join(os.path.expanduser("~"), ".playorder", "logs")


class SessionFilter(logging.Filter):
    def __init__(self, session):
        super().__init__()
        self.session = session

    def filter(self, record):
        record.session = self.session
        return True


def setup_logging(debug: bool = False, session_id: Optional[str] = None,
                  log_dir: Optional[str] = None, to_files: bool = True) -> logging.Logger:
    """
    Console + latest.log + rotating debug.log, every record tagged with the session id.
    Safe to call more than once; previous root handlers are replaced.
    """
    session = session_id or str(uuid.uuid4())[:8]
    log_level = logging.DEBUG if debug else logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for h in list(root_logger.handlers):
        root_logger.removeHandler(h)
        h.close()

    sess_filter = SessionFilter(session)
    console_fmt = logging.Formatter("[%(levelname)s] %(message)s")
    file_fmt = logging.Formatter("%(asctime)s [%(levelname)s] [%(name)s] %(module)s:%(lineno)d | %(message)s | session=%(session)s")

    sh = logging.StreamHandler(sys.stderr)
    sh.setLevel(log_level)
    sh.setFormatter(console_fmt)
    sh.addFilter(sess_filter)
    root_logger.addHandler(sh)

    if to_files:
        log_dir = log_dir or DEFAULT_LOG_DIR
        try:
            os.makedirs(log_dir, exist_ok=True)

            lh = logging.FileHandler(os.path.join(log_dir, "latest.log"), mode='w', encoding='utf-8')
            lh.setLevel(logging.DEBUG)
            lh.setFormatter(file_fmt)
            lh.addFilter(sess_filter)
            root_logger.addHandler(lh)

            rh = logging.handlers.RotatingFileHandler(os.path.join(log_dir, "debug.log"),
                                                      maxBytes=1_000_000, backupCount=5, encoding='utf-8')
            rh.setLevel(logging.DEBUG)
            rh.setFormatter(file_fmt)
            rh.addFilter(sess_filter)
            root_logger.addHandler(rh)
        except OSError as e:
            root_logger.warning("File logging disabled (%s): %s", log_dir, e)

    app_logger = logging.getLogger("playorder")
    app_logger.log(log_level, "Logger initialized | debug=%s | session=%s", debug, session)
    return app_logger
