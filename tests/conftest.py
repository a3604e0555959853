import pytest
import structlog

from cartwidget.io.log import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging(debug=False)
    yield
    structlog.reset_defaults()
