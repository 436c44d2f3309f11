import pytest
import yaml
from pydantic import ValidationError

from tower_profile.engine.definitions import LIFE_DOMAIN_IDS, TYPE_IDS
from tower_profile.engine.life_domains import calculate_life_domains
from tower_profile.engine.loader import (
    DEFAULT_TABLES_PATH,
    get_reference_tables,
    load_reference_tables_data,
    load_reference_tables_from_file,
)
from tower_profile.engine.models import ReferenceDataError, ReferenceTables


def test_packaged_tables_load(tables):
    assert isinstance(tables, ReferenceTables)
    assert tables.version == "1.2.0"
    assert sorted(tables.type_names) == list(TYPE_IDS)
    assert set(tables.life_domains) == set(LIFE_DOMAIN_IDS)
    assert len(tables.foundation_weights) == 9
    assert all(len(options) == 3 for options in tables.foundation_weights)


def test_packaged_wings_are_neighbours_on_the_circle(tables):
    for type_id, (left, right) in tables.wing_pairs.items():
        assert left == (type_id - 2) % 9 + 1
        assert right == type_id % 9 + 1


def test_tables_are_immutable(tables):
    with pytest.raises(ValidationError):
        tables.priority_bonus = 99


def test_missing_arrow_entry_is_rejected(raw_tables):
    del raw_tables["arrows"][5]
    with pytest.raises(ReferenceDataError, match="arrows"):
        load_reference_tables_data(raw_tables)


def test_arrow_pointing_at_itself_is_rejected(raw_tables):
    raw_tables["arrows"][3] = {"integration": 3, "disintegration": 9}
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_wing_pair_containing_the_type_is_rejected(raw_tables):
    raw_tables["wing_pairs"][1] = [1, 2]
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_wrong_number_of_foundation_sets_is_rejected(raw_tables):
    raw_tables["foundation_weights"] = raw_tables["foundation_weights"][:8]
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_non_positive_foundation_weight_is_rejected(raw_tables):
    raw_tables["foundation_weights"][0][0] = {1: 0}
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_unknown_type_in_foundation_weights_is_rejected(raw_tables):
    raw_tables["foundation_weights"][2][1] = {10: 3}
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_unknown_priority_domain_is_rejected(raw_tables):
    raw_tables["priority_domains"]["sx"] = ["intimate-relationships", "astral-travel"]
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_missing_impact_text_is_rejected(raw_tables):
    del raw_tables["domain_impacts"][4]["family-harmony"]
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_schema_errors_surface_as_reference_data_error(raw_tables):
    del raw_tables["arrows"]
    with pytest.raises(ReferenceDataError):
        load_reference_tables_data(raw_tables)


def test_sensitivity_table_is_optional(raw_tables):
    del raw_tables["domain_sensitivity"]
    tables = load_reference_tables_data(raw_tables)
    assert tables.domain_sensitivity == {}


def test_missing_file_raises():
    with pytest.raises(ReferenceDataError, match="not found"):
        load_reference_tables_from_file("does/not/exist.yml")


def test_empty_file_raises(tmp_path):
    empty = tmp_path / "empty.yml"
    empty.write_text("")
    with pytest.raises(ReferenceDataError):
        load_reference_tables_from_file(str(empty))


def test_malformed_yaml_raises(tmp_path):
    broken = tmp_path / "broken.yml"
    broken.write_text("version: [1.2\n  arrows: {")
    with pytest.raises(ReferenceDataError):
        load_reference_tables_from_file(str(broken))


def test_round_trip_through_a_custom_file(tmp_path, raw_tables):
    raw_tables["version"] = "custom"
    custom = tmp_path / "custom.yml"
    custom.write_text(yaml.safe_dump(raw_tables))
    tables = load_reference_tables_from_file(str(custom))
    assert tables.version == "custom"
    profile = calculate_life_domains(1, 50, None, tables)
    assert [d.domain_id for d in profile.domains] == list(LIFE_DOMAIN_IDS)


def test_life_domain_key_order_does_not_change_report_order(raw_tables):
    raw_tables["life_domains"] = dict(reversed(list(raw_tables["life_domains"].items())))
    tables = load_reference_tables_data(raw_tables)
    profile = calculate_life_domains(1, 50, None, tables)
    assert [d.domain_id for d in profile.domains] == list(LIFE_DOMAIN_IDS)


def test_missing_life_domain_is_rejected(raw_tables):
    del raw_tables["life_domains"]["family-harmony"]
    with pytest.raises(ReferenceDataError, match="life_domains"):
        load_reference_tables_data(raw_tables)


def test_get_reference_tables_is_cached():
    first = get_reference_tables(str(DEFAULT_TABLES_PATH))
    second = get_reference_tables(str(DEFAULT_TABLES_PATH))
    assert first is second
