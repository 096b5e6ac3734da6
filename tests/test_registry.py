import pytest

from espparttool.analysis import registry
from espparttool.analysis.registry import (
    SUBTYPE_NAMES,
    SUBTYPES,
    TYPE_NAMES,
    TYPES,
    AppSubtype,
    DataSubtype,
    PartitionType,
)


def test_types():
    assert dict(TYPES) == {"app": 0x00, "data": 0x01}
    assert dict(TYPE_NAMES) == {0x00: "app", 0x01: "data"}
    assert registry.type_code("data") == PartitionType.DATA


def test_app_subtypes():
    app = SUBTYPES["app"]
    assert app["factory"] == 0x00
    assert app["test"] == 0x20
    assert [app[f"ota_{i}"] for i in range(16)] == list(range(0x10, 0x20))
    assert len(app) == 18


def test_data_subtypes():
    assert dict(SUBTYPES["data"]) == {
        "ota": 0x00,
        "phy": 0x01,
        "nvs": 0x02,
        "coredump": 0x03,
        "nvs_keys": 0x04,
        "efuse": 0x05,
        "esphttpd": 0x80,
        "fat": 0x81,
        "spiffs": 0x82,
    }
    assert registry.subtype_code("data", "spiffs") == DataSubtype.SPIFFS


@pytest.mark.parametrize("type_name", ["app", "data"])
def test_bijection(type_name: str):
    subtypes = SUBTYPES[type_name]
    # every value is unique within the type
    assert len(set(subtypes.values())) == len(subtypes)
    for name, code in subtypes.items():
        assert registry.subtype_name(type_name, code) == name
        assert registry.subtype_code(type_name, name) == code
        assert SUBTYPE_NAMES[type_name][code] == name


def test_enums_match_mappings():
    assert {e.name.lower(): e.value for e in AppSubtype} == dict(SUBTYPES["app"])
    assert {e.name.lower(): e.value for e in DataSubtype} == dict(SUBTYPES["data"])


def test_registry_is_read_only():
    with pytest.raises(TypeError):
        TYPES["bootloader"] = 0x02
    with pytest.raises(TypeError):
        SUBTYPES["app"]["ota_16"] = 0x20
    with pytest.raises(TypeError):
        SUBTYPE_NAMES["data"][0x83] = "littlefs"


def test_unknown_codes():
    with pytest.raises(registry.UnknownTypeError):
        registry.type_name(0x02)
    with pytest.raises(registry.UnknownSubtypeError):
        registry.subtype_name("app", 0x01)
    with pytest.raises(registry.UnknownTypeError):
        registry.subtype_name("bootloader", 0x00)


def test_unknown_names():
    with pytest.raises(registry.UnknownTypeError):
        registry.type_code("bootloader")
    with pytest.raises(registry.UnknownSubtypeError):
        registry.subtype_code("data", "factory")
    with pytest.raises(registry.UnknownTypeError):
        registry.subtype_code("bootloader", "factory")
