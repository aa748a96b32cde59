import os.path

import pytest

ENVIRON = (
    'FAULTLINE_PROJECT',
    'FAULTLINE_API_KEY',
    'FAULTLINE_ENDPOINT',
    'FAULTLINE_TIMEOUT',
)


@pytest.fixture
def project_root():
    return os.path.dirname(os.path.abspath(__file__))


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    for name in ENVIRON:
        monkeypatch.delenv(name, raising=False)
