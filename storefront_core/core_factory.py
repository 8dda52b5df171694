import logging
import os
import sys
from pathlib import Path

import gconf

from .database import database
from .service import loyalty, usage_counter  # noqa: F401 (connects signal receivers)

log = logging.getLogger(__name__)

DEFAULT_CONFIG = Path(__file__).parent / "config.yml"


def init_core():
    load_config()
    configure_logging()
    database.init_database()
    log.info("Storefront core initialized")


def load_config():
    gconf.set_env_prefix("STOREFRONT")
    # Only load config if not already loaded (e.g., by test fixtures)
    try:
        gconf.get("database.filename")
        log.debug("Config already loaded, skipping config file load")
        return
    except KeyError:
        pass
    gconf.load(str(DEFAULT_CONFIG))
    if "CONFIG" in os.environ:
        for c in os.environ["CONFIG"].split(","):
            gconf.load(c)


def configure_logging():
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    for module, level in gconf.get("log.levels").items():  # type: str, str
        logger = logging.getLogger() if module == "root" else logging.getLogger(module)
        logger.setLevel(getattr(logging, level.upper()))
        log.info(f"set logger for {module} to {level.upper()}")
