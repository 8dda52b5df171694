import logging
from logging import LogRecord
from typing import List

import gconf
import pytest

from storefront_core.core_factory import load_config
from storefront_core.database import database


def pytest_configure(config):
    config.addinivalue_line(
        "markers", "config_override(overrides): override gconf values for a single test"
    )


@pytest.fixture(autouse=True, scope="session")
def setup_all():
    load_config()


@pytest.fixture(autouse=True)
def config_override(tmp_path, request):
    print(f"\nUsing temp path: {tmp_path}")
    tempfile_override = {
        "database": {"filename": f"{tmp_path}/storefront_db.json"},
    }

    # Detects the variable named *config_override* of a test module
    module_override = getattr(request.module, "config_override", {})

    # Detects the annotation named @pytest.mark.config_override of a test function
    function_override_mark = request.node.get_closest_marker("config_override")
    function_override = function_override_mark.args[0] if function_override_mark else {}

    with gconf.override_conf(tempfile_override), gconf.override_conf(
        module_override
    ), gconf.override_conf(function_override):
        database.init_database()
        yield


class MemoryLogHandler(logging.Handler):
    def __init__(self):
        super().__init__()
        self.records: List[LogRecord] = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def memory_logger():
    memory_handler = MemoryLogHandler()
    root_logger = logging.getLogger()
    root_logger.addHandler(memory_handler)
    previous_level = root_logger.level
    root_logger.setLevel(logging.DEBUG)
    yield memory_handler
    root_logger.setLevel(previous_level)
    root_logger.removeHandler(memory_handler)
