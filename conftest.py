import pytest
import sys

@pytest.fixture(autouse=True)
def clean_photojax_imports():
    yield
    keys_to_delete = {key for key in sys.modules if key == "photojax" or key.startswith("photojax.")}
    for key in keys_to_delete:
        del sys.modules[key]
