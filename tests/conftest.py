import copy
import pytest
import yaml

from tower_profile.engine.loader import DEFAULT_TABLES_PATH, load_reference_tables_from_file


@pytest.fixture(scope="session")
def tables():
    """The packaged reference tables, validated once for the whole session."""
    return load_reference_tables_from_file(DEFAULT_TABLES_PATH)


@pytest.fixture(scope="session")
def _raw_tables_pristine():
    with open(DEFAULT_TABLES_PATH, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f)


@pytest.fixture
def raw_tables(_raw_tables_pristine):
    """A mutable deep copy of the packaged YAML document."""
    return copy.deepcopy(_raw_tables_pristine)


# Foundation choices that score as type 1 with the packaged weights.
REFORMER_FOUNDATION = [0, 0, 0, 1, 0, 0, 1, 0, 1]


@pytest.fixture
def reformer_selections():
    return {
        "foundation_choices": list(REFORMER_FOUNDATION),
        "building_block_choices": ["left", "left", "left", "left", "left"],
        "color_selections": [0, 0, 1, 1, 2, 2],
        "detail_selections": ["sp"] * 6 + ["so"] * 2 + ["sx"] * 2,
    }
