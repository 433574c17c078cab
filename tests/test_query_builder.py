import pytest
from pydantic import ValidationError

from dor_fetcher.exceptions import InvalidIdentifier, InvalidTimeRange
from dor_fetcher.models import (
    AllOfType,
    ControlledBy,
    ControllerType,
    FedoraType,
    FetchParams,
    TaggedWith,
    TimeRange,
)
from dor_fetcher.services.query_builder import (
    build_query,
    date_range_clause,
    get_rows,
    registered_only,
)

DEFAULT_DATE_CLAUSE = 'published_dttsim:["1970-01-01T00:00:00Z" TO "9999-12-31T23:59:59Z"]'
FIELD_LIST = "id,published_dttsim,objectType_ssim,dc_title_tesim,dc_title_ssi,catkey_id_ssim"


@pytest.mark.parametrize(
    "status, expected",
    [("registered", True), ("REGISTERED", True), ("Registered", True), ("accessioned", False), (None, False)],
)
def test_registered_only(status, expected):
    assert registered_only(FetchParams(status=status)) is expected


def test_registered_only_without_params():
    assert registered_only(None) is False


def test_date_range_clause():
    times = TimeRange(first="2014-01-01T00:00:00Z", last="2015-01-01T00:00:00Z")
    assert date_range_clause(times) == 'published_dttsim:["2014-01-01T00:00:00Z" TO "2015-01-01T00:00:00Z"]'
    assert date_range_clause(None) == ""


def test_all_of_type_query():
    query = build_query(FetchParams(), AllOfType(fedora_type=FedoraType.COLLECTION))
    assert query.q == f'objectType_ssim:"collection" AND {DEFAULT_DATE_CLAUSE}'
    assert query.wt == "json"
    assert query.fl == FIELD_LIST
    assert query.rows == "100000000"


def test_apo_type_uses_index_value():
    query = build_query(FetchParams(status="registered"), AllOfType(fedora_type=FedoraType.APO))
    assert query.q == 'objectType_ssim:"adminPolicy"'


def test_controlled_by_query():
    params = FetchParams(first_modified="2014-01-01", last_modified="2015-01-01")
    relation = ControlledBy(druid="druid:oo000oo0001", controller_type=ControllerType.APO)
    query = build_query(params, relation)
    assert query.q == (
        '(is_governed_by_ssim:"info:fedora/druid:oo000oo0001" OR id:"druid:oo000oo0001")'
        ' AND published_dttsim:["2014-01-01T00:00:00Z" TO "2015-01-01T00:00:00Z"]'
    )


def test_collection_controller_field():
    relation = ControlledBy(druid="oo000oo0001", controller_type=ControllerType.COLLECTION)
    query = build_query(FetchParams(status="registered"), relation)
    assert query.q == '(is_member_of_collection_ssim:"info:fedora/druid:oo000oo0001" OR id:"druid:oo000oo0001")'


def test_tagged_with_query_escapes_quotes():
    query = build_query(FetchParams(status="registered"), TaggedWith(tag='Project : "Beta"'))
    assert query.q == '(tag_ssim:"Project : \\"Beta\\"")'


@pytest.mark.parametrize(
    "first, last",
    [("junk", "junk"), ("2015-01-01", "2014-01-01"), (None, None)],
)
def test_registered_requests_never_get_a_date_clause(first, last):
    params = FetchParams(status="registered", first_modified=first, last_modified=last)
    query = build_query(params, AllOfType(fedora_type=FedoraType.ITEM))
    assert "published_dttsim" not in query.q


def test_registered_requests_ignore_given_times():
    times = TimeRange(first="2014-01-01T00:00:00Z", last="2015-01-01T00:00:00Z")
    query = build_query(FetchParams(status="registered"), AllOfType(fedora_type=FedoraType.ITEM), times)
    assert query.q == 'objectType_ssim:"item"'


def test_invalid_dates_fail():
    with pytest.raises(InvalidTimeRange):
        build_query(FetchParams(first_modified="junk"), AllOfType(fedora_type=FedoraType.ITEM))


def test_invalid_controller_druid_fails():
    relation = ControlledBy(druid="junk", controller_type=ControllerType.APO)
    with pytest.raises(InvalidIdentifier):
        build_query(FetchParams(), relation)


def test_tags_cannot_control_objects():
    with pytest.raises(ValidationError):
        ControlledBy(druid="oo000oo0001", controller_type=ControllerType.TAG)


@pytest.mark.parametrize("rows, expected", [("0", "0"), ("25", "25"), (0, "0"), (10, "10"), (None, "100000000")])
def test_rows(rows, expected):
    assert get_rows(FetchParams(rows=rows)) == expected
