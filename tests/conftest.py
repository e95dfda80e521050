#
# Pytest Fixtures
#

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from dotip.options import configure


# Fixtures -------------------------------------------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def default_options():
    """Every test starts and ends with the default module options."""
    configure(preset="default")
    yield
    configure(preset="default")
