import pathlib
import site

import pytest
from entitymap.config.type_mapping import TypeMappingConfig
from entitymap.registry import CodecRegistry

HERE = pathlib.Path(pathlib.Path(__file__).resolve()).parent
site.addsitedir(HERE)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset shared registry and config before and after each test to ensure test isolation."""
    CodecRegistry._instance = None
    TypeMappingConfig._instance = TypeMappingConfig(config_file=HERE / 'fixtures' / 'empty.json')
    yield
    CodecRegistry._instance = None
    TypeMappingConfig._instance = None


pytest_plugins = [
    'fixtures.values',
    'fixtures.specs',
]
