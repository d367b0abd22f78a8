import pytest

from RMDE.SMM.constants import LOG_FILENAME
from RMDE.SOM.console_log import set_file_logging, set_log_filename


@pytest.fixture(autouse=True)
def _console_only_logging():
    """Keep test runs from appending to the default log file."""
    set_file_logging(False)
    yield
    set_log_filename(LOG_FILENAME)
    set_file_logging(False)
