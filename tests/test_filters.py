import pytest

from umi_inspector import AcceptAll, AllOf, ByCodeSet, ByOrigin, InspectorConfig, InvalidCodeError, load_catalog
from umi_inspector.intake.filters import build_filter

from records import CODE_A, CODE_B, CODE_C, header


def test_accept_all():
    assert AcceptAll().accept(header(CODE_A))


def test_by_code_set_exact_match():
    f = ByCodeSet([CODE_A])
    assert f.accept(header(CODE_A))
    assert not f.accept(header(CODE_C))  # same origin, different code


def test_by_code_set_rejects_bad_length_at_construction():
    with pytest.raises(InvalidCodeError):
        ByCodeSet([CODE_A, b"\xaa\xbb"])


def test_by_origin():
    assert ByOrigin(0xAA).accept(header(CODE_A))
    assert ByOrigin(0xAA).accept(header(CODE_C))
    assert not ByOrigin(0xAA).accept(header(CODE_B))


def test_by_origin_zero_is_wildcard():
    f = ByOrigin(0)
    assert f.accept(header(CODE_A)) and f.accept(header(CODE_B))


def test_by_origin_out_of_range():
    with pytest.raises(InvalidCodeError):
        ByOrigin(256)


def test_all_of():
    f = AllOf(ByOrigin(0xAA), ByCodeSet([CODE_C, CODE_B]))
    assert f.accept(header(CODE_C))
    assert not f.accept(header(CODE_A))
    assert not f.accept(header(CODE_B))


def test_load_catalog_from_text():
    codes = load_catalog("aabbccddeeff\n\n# comment\n0a0b0c0d0e0f  # trailing\n")
    assert codes == [CODE_A, CODE_B]


def test_load_catalog_from_file(tmp_path):
    path = tmp_path / "catalog.txt"
    path.write_text("AABBCCDDEEFF\n", encoding="utf-8")
    assert load_catalog(path) == [CODE_A]


def test_load_catalog_reports_line():
    with pytest.raises(InvalidCodeError) as exc:
        load_catalog("aabbccddeeff\naabb\n")
    assert str(exc.value).startswith("2:")


def test_build_filter_from_config():
    assert isinstance(build_filter(InspectorConfig()), AcceptAll)
    assert isinstance(build_filter(InspectorConfig(origin=0xAA)), ByOrigin)

    f = build_filter(InspectorConfig(codes=("AABBCCDDEEFF",), origin=0x0A))
    assert isinstance(f, AllOf)
    assert not f.accept(header(CODE_A))
