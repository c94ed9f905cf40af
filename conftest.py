import pytest

from emitey.composer import _ACTIVE_SESSION


def pytest_addoption(parser):
    parser.addoption(
        '--run-benchmarks',
        action='store_true', default=False, help='Run benchmarks')


def pytest_collection_modifyitems(config, items):
    if config.getoption('--run-benchmarks'):
        return
    skip_benchmark = pytest.mark.skip(
        reason='Needs --run-benchmark to run benchmarks')

    for item in items:
        if 'benchmark' in item.keywords:
            item.add_marker(skip_benchmark)


@pytest.fixture(autouse=True, scope='function')
def isolated_composition_session():
    """Layers a fresh (empty) composition session over whatever was
    there before, so that a test that deliberately leaves a session
    dangling can't make every subsequent emission in the test run
    behave as nested.
    """
    token = _ACTIVE_SESSION.set(None)
    try:
        yield
    finally:
        _ACTIVE_SESSION.reset(token)
