"""Tests for UnitClient."""

import pytest

from academy.api.errors import ResponseFormatError
from academy.api.resources.units import UnitClient
from academy.models.content import UnitCreate, UnitUpdate


def _unit(unit_id: str, **extra) -> dict:
    return {"id": unit_id, "name": f"Unit {unit_id}", "subjectId": "S1", **extra}


class TestUnitClient:
    """Tests for unit CRUD."""

    @pytest.mark.asyncio
    async def test_list_by_subject(self, api, backend):
        backend.add("GET", "/api/content/units", {"units": [_unit("1")], "pagination": None})

        page = await UnitClient(api).list(subject_id="S1")

        assert dict(backend.last.url.params) == {"subjectId": "S1"}
        assert page.items[0].subject_id == "S1"

    @pytest.mark.asyncio
    async def test_list_without_subject_sends_no_params(self, api, backend):
        backend.add("GET", "/api/content/units", [_unit("1"), _unit("2")])

        page = await UnitClient(api).list()

        assert backend.last.url.query == b""
        assert len(page) == 2

    @pytest.mark.asyncio
    async def test_get_wrapped_or_bare(self, api, backend):
        backend.add("GET", "/api/content/units/1", {"unit": _unit("1")})
        backend.add("GET", "/api/content/units/2", _unit("2"))

        client = UnitClient(api)

        assert (await client.get("1")).id == "1"
        assert (await client.get("2")).id == "2"

    @pytest.mark.asyncio
    async def test_create_always_sends_order(self, api, backend):
        backend.add("POST", "/api/content/units", {"unit": _unit("3", order=1)})

        await UnitClient(api).create(UnitCreate(name="New", description="d", subject_id="S1"))

        assert backend.last_json() == {
            "name": "New",
            "description": "d",
            "subjectId": "S1",
            "order": 1,
        }

    @pytest.mark.asyncio
    async def test_update_partial(self, api, backend):
        backend.add("PUT", "/api/content/units/3", _unit("3", order=5))

        unit = await UnitClient(api).update("3", UnitUpdate(order=5))

        assert backend.last_json() == {"order": 5}
        assert unit.order == 5

    @pytest.mark.asyncio
    async def test_invalid_body(self, api, backend):
        backend.add("GET", "/api/content/units/4", {})

        with pytest.raises(ResponseFormatError):
            await UnitClient(api).get("4")
