import pytest

from dor_fetcher.exceptions import InvalidIdentifier, InvalidTimeRange
from dor_fetcher.models import ControllerType, FedoraType, FetchParams
from tests.factories import raw_result, solr_doc

CHANGED = "2014-05-05T10:00:00Z"


async def test_registered_collections(fetcher, fake_executor):
    fake_executor.result = raw_result([
        solr_doc("druid:bb111bb1111", "collection", [CHANGED], title="First"),
        solr_doc("druid:bb222bb2222", "collection", ["2010-01-01T00:00:00Z"], title="Second"),
    ])

    payload = await fetcher.find_all_fedora_type(FetchParams(status="registered"), FedoraType.COLLECTION)

    (query,) = fake_executor.queries
    assert query.q == 'objectType_ssim:"collection"'
    assert [record["druid"] for record in payload["collections"]] == ["druid:bb111bb1111", "druid:bb222bb2222"]
    assert payload["counts"]["collections"] == len(payload["collections"]) == 2
    assert payload["counts"]["total_count"] == payload["counts"]["collections"]


async def test_count_only(fetcher, fake_executor):
    fake_executor.result = raw_result([], num_found=42)
    params = FetchParams(rows="0", first_modified="2014-01-01", last_modified="2015-01-01")

    assert await fetcher.find_all_fedora_type(params, FedoraType.ITEM) == 42
    assert fake_executor.queries[0].rows == "0"


async def test_alt_title_is_used(fetcher, fake_executor):
    fake_executor.result = raw_result([solr_doc("druid:bb111bb1111", "collection", [CHANGED], title="", alt_title="Alt")])

    payload = await fetcher.find_all_fedora_type(FetchParams(), FedoraType.COLLECTION)

    assert payload["collections"][0]["title"] == "Alt"


async def test_find_all_under(fetcher, fake_executor):
    fake_executor.result = raw_result([
        solr_doc("druid:oo000oo0001", "adminPolicy", [CHANGED]),
        solr_doc("druid:aa111aa1111", "item", [CHANGED]),
    ])
    params = FetchParams(id="oo000oo0001", first_modified="2014-01-01")

    payload = await fetcher.find_all_under(params, ControllerType.APO)

    assert fake_executor.queries[0].q.startswith(
        '(is_governed_by_ssim:"info:fedora/druid:oo000oo0001" OR id:"druid:oo000oo0001") AND published_dttsim:['
    )
    assert payload["counts"] == {"items": 1, "adminpolicies": 1, "total_count": 2}


async def test_find_in_solr(fetcher, fake_executor):
    await fetcher.find_in_solr(FetchParams(id="Project : Revs", status="registered"))

    assert fake_executor.queries[0].q == '(tag_ssim:"Project : Revs")'


@pytest.mark.parametrize("druid", ["junk", None])
async def test_junk_identifier_never_reaches_solr(fetcher, fake_executor, druid):
    with pytest.raises(InvalidIdentifier):
        await fetcher.find_all_under(FetchParams(id=druid), ControllerType.COLLECTION)
    assert fake_executor.queries == []


async def test_bad_dates_never_reach_solr(fetcher, fake_executor):
    with pytest.raises(InvalidTimeRange):
        await fetcher.find_all_fedora_type(FetchParams(first_modified="junk"), FedoraType.APO)
    assert fake_executor.queries == []


async def test_registered_results_are_not_date_checked(fetcher, fake_executor):
    # registered objects may have been changed outside the requested dates
    fake_executor.result = raw_result([solr_doc("druid:aa111aa1111", "item", ["2020-01-01T00:00:00Z"])])
    params = FetchParams(status="registered", first_modified="2014-01-01", last_modified="2015-01-01")

    payload = await fetcher.find_all_fedora_type(params, FedoraType.ITEM)

    assert payload["items"][0]["latest_change"] == "2020-01-01T00:00:00Z"
