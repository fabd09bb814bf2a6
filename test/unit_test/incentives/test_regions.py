import pytest

from tesvik_portal.incentives.regions import (
    PROVINCE_REGIONS,
    SGK_REGION_6_PROVINCES,
    canonical_province,
    is_region_6,
    province_region,
)


def test_all_81_provinces_are_mapped():
    assert len(PROVINCE_REGIONS) == 81
    assert set(PROVINCE_REGIONS.values()) == {1, 2, 3, 4, 5, 6}


@pytest.mark.parametrize(
    "province,region",
    [("İstanbul", 1), ("Gaziantep", 2), ("Rize", 3), ("Sivas", 4), ("Van", 5), ("Muş", 6)],
)
def test_default_regions(province, region):
    assert province_region(province) == region


def test_aliases_and_whitespace():
    assert canonical_province(" Mersin ") == "İçel (Mersin)"
    assert province_region("Istanbul") == 1
    assert province_region("Hakkâri") == 6


def test_unknown_province_falls_back_to_region_1():
    assert province_region("Atlantis") == 1


def test_overrides_win():
    overrides = {"Van": 6}
    assert province_region("Van", overrides) == 6
    assert is_region_6("Van", overrides)
    assert not is_region_6("Muş", {"Muş": 5})


@pytest.mark.parametrize("province", ["Erzincan", "Erzurum", "Kars", "Van"])
def test_sgk_region_6_list_extends_region_table(province):
    assert province_region(province) in (4, 5)
    assert is_region_6(province)


def test_sgk_region_6_list():
    assert len(SGK_REGION_6_PROVINCES) == 18
    assert all(is_region_6(p) for p in PROVINCE_REGIONS if PROVINCE_REGIONS[p] == 6)
    assert not is_region_6("Sivas")
    assert is_region_6("Hakkâri")
