# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20260206v1
# ---------------------------------------------------------------------------
"""
Centralised logging configuration.

Handlers, levels and formats live in etc/logging.conf.  The file refers to
the log file through a ``%(log_file)s`` placeholder which is resolved here
before the text is handed to the standard-library fileConfig loader.

Import the ready-made logger anywhere:
    from core.logger import logger
"""

import configparser
import logging
import logging.config
from pathlib import Path

# backend/core/logger.py  →  ../../  →  project root
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
_LOG_DIR = _PROJECT_ROOT / "log"
_LOG_FILE = _LOG_DIR / "app.log"
_LOGGING_CONF = _PROJECT_ROOT / "etc" / "logging.conf"

_LOG_DIR.mkdir(exist_ok=True)


def _load_config(conf_path: Path, log_file: Path) -> configparser.RawConfigParser:
    # RawConfigParser: the format strings contain %(asctime)s and friends,
    # which the interpolating ConfigParser would choke on.
    raw = conf_path.read_text(encoding="utf-8").replace("%(log_file)s", str(log_file))
    parser = configparser.RawConfigParser()
    parser.read_string(raw)
    return parser


logging.config.fileConfig(_load_config(_LOGGING_CONF, _LOG_FILE), disable_existing_loggers=False)

logger = logging.getLogger("todoapp")
