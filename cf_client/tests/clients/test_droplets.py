# cf_client/tests/clients/test_droplets.py
import json

import pytest
from respx import MockRouter

from cf_client.client import CFClient
from cf_client.clients.droplets import DropletAppListOptions, DropletListOptions, DropletPackageListOptions
from cf_client.exceptions import ServiceCommunicationError
from cf_client.schemas.droplet import DropletCreate, DropletUpdate
from cf_client.tests.conftest import API_URL, json_responses

pytestmark = pytest.mark.asyncio

DROPLET_GUID = "59c3d133-2b83-46f3-960e-7765a129aea4"
APP_GUID = "1cb006ee-fb05-47e1-b541-c34179ddc446"
DEST_APP_GUID = "c3b4a8d6-0f40-4c4c-8b1f-6d86f2ea5f0a"
PACKAGE_GUID = "993386e8-5f68-403c-b372-d4aba7c71dbc"


async def test_create_droplet(cf: CFClient, respx_mock: MockRouter, g):
    droplet = g.droplet(DROPLET_GUID, state="AWAITING_UPLOAD")
    route = respx_mock.post(f"{API_URL}/v3/droplets").respond(201, json=droplet)

    r = DropletCreate.for_app(APP_GUID)
    r.process_types = {"web": "./start"}
    result = await cf.droplets.create(r)

    assert json.loads(route.calls.last.request.content) == {
        "relationships": {"app": {"data": {"guid": APP_GUID}}},
        "process_types": {"web": "./start"},
    }
    assert result.state == "AWAITING_UPLOAD"


async def test_get_droplet(cf: CFClient, respx_mock: MockRouter, g):
    respx_mock.get(f"{API_URL}/v3/droplets/{DROPLET_GUID}").respond(200, json=g.droplet(DROPLET_GUID))

    result = await cf.droplets.get(DROPLET_GUID)

    assert result.guid == DROPLET_GUID
    assert result.checksum.type == "sha256"
    assert result.buildpacks[0].name == "ruby_buildpack"
    assert result.process_types["web"].startswith("bundle exec")


async def test_update_droplet(cf: CFClient, respx_mock: MockRouter, g):
    route = respx_mock.patch(f"{API_URL}/v3/droplets/{DROPLET_GUID}").respond(200, json=g.droplet(DROPLET_GUID))

    r = DropletUpdate()
    r.metadata.labels["release"] = "stable"
    await cf.droplets.update(DROPLET_GUID, r)

    assert json.loads(route.calls.last.request.content) == {
        "metadata": {"labels": {"release": "stable"}, "annotations": {}}
    }


async def test_delete_droplet(cf: CFClient, respx_mock: MockRouter):
    route = respx_mock.delete(f"{API_URL}/v3/droplets/{DROPLET_GUID}").respond(202)
    await cf.droplets.delete(DROPLET_GUID)
    assert route.call_count == 1


async def test_copy_droplet(cf: CFClient, respx_mock: MockRouter, g):
    copied = g.droplet(state="COPYING")
    route = respx_mock.post(f"{API_URL}/v3/droplets", params={"source_guid": DROPLET_GUID}).respond(
        201, json=copied
    )

    result = await cf.droplets.copy(DROPLET_GUID, DEST_APP_GUID)

    assert json.loads(route.calls.last.request.content) == {
        "relationships": {"app": {"data": {"guid": DEST_APP_GUID}}}
    }
    assert result.state == "COPYING"


async def test_download_follows_redirect(cf: CFClient, respx_mock: MockRouter):
    blob_url = "https://blobstore.example.org/droplets/abc.tgz"
    respx_mock.get(f"{API_URL}/v3/droplets/{DROPLET_GUID}/download").respond(
        302, headers={"Location": blob_url}
    )
    respx_mock.get(blob_url).respond(200, content=b"tarball-bytes")

    assert await cf.droplets.download(DROPLET_GUID) == b"tarball-bytes"


async def test_download_stream_yields_chunks(cf: CFClient, respx_mock: MockRouter):
    blob_url = "https://blobstore.example.org/droplets/abc.tgz"
    respx_mock.get(f"{API_URL}/v3/droplets/{DROPLET_GUID}/download").respond(
        302, headers={"Location": blob_url}
    )
    respx_mock.get(blob_url).respond(200, content=b"tarball-bytes")

    chunks = []
    async with cf.droplets.download_stream(DROPLET_GUID) as response:
        assert response.status_code == 200
        async for chunk in response.aiter_bytes():
            chunks.append(chunk)

    assert b"".join(chunks) == b"tarball-bytes"
    assert response.is_closed


async def test_download_stream_unexpected_status(cf: CFClient, respx_mock: MockRouter):
    respx_mock.get(f"{API_URL}/v3/droplets/{DROPLET_GUID}/download").respond(
        404, json={"errors": [{"code": 10010, "title": "CF-ResourceNotFound", "detail": "Droplet not found"}]}
    )

    with pytest.raises(ServiceCommunicationError) as exc_info:
        async with cf.droplets.download_stream(DROPLET_GUID):
            pass
    assert exc_info.value.status_code == 404
    assert exc_info.value.has_error_code("CF-ResourceNotFound")


async def test_list_droplets_with_filters(cf: CFClient, respx_mock: MockRouter, g):
    droplet = g.droplet()
    route = respx_mock.get(f"{API_URL}/v3/droplets").respond(200, json=g.paged("/v3/droplets", [droplet])[0])

    opts = DropletListOptions(guids=["a", "b", "c"], space_guids=["s1"])
    droplets, pager = await cf.droplets.list(opts)

    assert [d.guid for d in droplets] == [droplet["guid"]]
    assert pager.has_next_page() is False
    assert route.calls.last.request.url.query == b"guids=a,b,c&space_guids=s1"


async def test_list_all_droplets(cf: CFClient, respx_mock: MockRouter, g):
    d1, d2, d3, d4 = g.droplet(), g.droplet(), g.droplet(), g.droplet()
    respx_mock.get(f"{API_URL}/v3/droplets").mock(
        side_effect=json_responses(g.paged("/v3/droplets", [d1, d2], [d3, d4]))
    )

    droplets = await cf.droplets.list_all()

    assert [d.guid for d in droplets] == [d["guid"] for d in (d1, d2, d3, d4)]


async def test_list_droplets_for_app_current(cf: CFClient, respx_mock: MockRouter, g):
    base_path = f"/v3/apps/{APP_GUID}/droplets"
    route = respx_mock.get(f"{API_URL}{base_path}").respond(200, json=g.paged(base_path, [g.droplet()])[0])

    droplets, _ = await cf.droplets.list_for_app(APP_GUID, DropletAppListOptions(current=True))

    assert len(droplets) == 1
    assert route.calls.last.request.url.params["current"] == "true"


async def test_list_all_droplets_for_app(cf: CFClient, respx_mock: MockRouter, g):
    base_path = f"/v3/apps/{APP_GUID}/droplets"
    d1, d2 = g.droplet(), g.droplet()
    respx_mock.get(f"{API_URL}{base_path}").mock(side_effect=json_responses(g.paged(base_path, [d1], [d2])))

    droplets = await cf.droplets.list_for_app_all(APP_GUID)

    assert [d.guid for d in droplets] == [d1["guid"], d2["guid"]]


async def test_list_droplets_for_package(cf: CFClient, respx_mock: MockRouter, g):
    base_path = f"/v3/packages/{PACKAGE_GUID}/droplets"
    route = respx_mock.get(f"{API_URL}{base_path}").respond(200, json=g.paged(base_path, [g.droplet()])[0])

    droplets, pager = await cf.droplets.list_for_package(PACKAGE_GUID, DropletPackageListOptions(states=["STAGED"]))

    assert len(droplets) == 1
    assert pager.has_next_page() is False
    assert route.calls.last.request.url.params["states"] == "STAGED"


async def test_list_all_droplets_for_package(cf: CFClient, respx_mock: MockRouter, g):
    base_path = f"/v3/packages/{PACKAGE_GUID}/droplets"
    d1, d2, d3 = g.droplet(), g.droplet(), g.droplet()
    respx_mock.get(f"{API_URL}{base_path}").mock(
        side_effect=json_responses(g.paged(base_path, [d1], [d2], [d3]))
    )

    droplets = await cf.droplets.list_for_package_all(PACKAGE_GUID)

    assert [d.guid for d in droplets] == [d1["guid"], d2["guid"], d3["guid"]]


async def test_current_droplet_for_app(cf: CFClient, respx_mock: MockRouter, g):
    respx_mock.get(f"{API_URL}/v3/apps/{APP_GUID}/droplets/current").respond(200, json=g.droplet(DROPLET_GUID))
    respx_mock.get(f"{API_URL}/v3/apps/{APP_GUID}/relationships/current_droplet").respond(
        200,
        json={
            "data": {"guid": DROPLET_GUID},
            "links": {"self": {"href": f"{API_URL}/v3/apps/{APP_GUID}/relationships/current_droplet"}},
        },
    )

    current = await cf.droplets.get_current_for_app(APP_GUID)
    association = await cf.droplets.get_current_association_for_app(APP_GUID)

    assert current.guid == DROPLET_GUID
    assert association.data.guid == DROPLET_GUID


async def test_set_current_droplet_for_app(cf: CFClient, respx_mock: MockRouter):
    route = respx_mock.patch(f"{API_URL}/v3/apps/{APP_GUID}/relationships/current_droplet").respond(
        200, json={"data": {"guid": DROPLET_GUID}, "links": {}}
    )

    association = await cf.droplets.set_current_association_for_app(APP_GUID, DROPLET_GUID)

    assert json.loads(route.calls.last.request.content) == {"data": {"guid": DROPLET_GUID}}
    assert association.data.guid == DROPLET_GUID
