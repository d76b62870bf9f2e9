import uuid
from datetime import date
from unittest.mock import AsyncMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import ValidationError
from app.services.bulk_update_service import AssetUpdated, AssetUpdateFailed, bulk_update_assets


@pytest.mark.asyncio
async def test_bulk_update_reports_missing_asset(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    a = await make_asset()
    c = await make_asset()
    missing = str(uuid.uuid4())

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(a.id), missing, str(c.id)], "fields": {"status": "In Use"}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "updated": 2,
        "failed": 1,
        "errors": [{"id": missing, "message": "Asset not found"}],
    }

    await db_session.refresh(a)
    await db_session.refresh(c)
    assert a.status == "In Use"
    assert c.status == "In Use"


@pytest.mark.asyncio
async def test_bulk_update_rejects_empty_fields(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset(status="In Use", comments="untouched")

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {}},
        headers=auth_headers,
    )
    assert response.status_code == 400
    assert response.json()["detail"] == "At least one field must be provided"

    await db_session.refresh(asset)
    assert asset.status == "In Use"
    assert asset.comments == "untouched"


@pytest.mark.asyncio
async def test_bulk_update_applies_several_fields(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, category, location, make_asset
):
    asset = await make_asset(comments="old note")

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={
            "ids": [str(asset.id)],
            "fields": {
                "status": "Decommissioned - Damaged",
                "condition": "POOR",
                "categoryId": str(category.id),
                "locationId": str(location.id),
                "decommissionDate": "2024-05-01",
                "comments": None,
            },
        },
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json()["updated"] == 1

    await db_session.refresh(asset)
    assert asset.status == "Decommissioned - Damaged"
    assert asset.condition == "POOR"
    assert asset.category_id == category.id
    assert asset.location_id == location.id
    assert asset.decommission_date == date(2024, 5, 1)
    assert asset.comments is None


@pytest.mark.asyncio
async def test_bulk_update_does_not_infer_decommission_date(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset()

    await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"status": "Decommissioned - Stolen"}},
        headers=auth_headers,
    )

    await db_session.refresh(asset)
    assert asset.status == "Decommissioned - Stolen"
    assert asset.decommission_date is None


@pytest.mark.asyncio
async def test_bulk_update_absent_fields_untouched(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset(condition="GOOD", comments="keep me")

    await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"status": "Awaiting collection"}},
        headers=auth_headers,
    )

    await db_session.refresh(asset)
    assert asset.condition == "GOOD"
    assert asset.comments == "keep me"


@pytest.mark.asyncio
async def test_bulk_update_invalid_status_fails_each_asset(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset(status="In Use")

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id), "not-a-uuid"], "fields": {"status": "Sold"}},
        headers=auth_headers,
    )
    data = response.json()
    assert data["updated"] == 0
    assert data["failed"] == 2
    assert data["errors"][0]["id"] == str(asset.id)
    assert "Invalid status" in data["errors"][0]["message"]
    assert data["errors"][1] == {"id": "not-a-uuid", "message": "Asset not found"}

    await db_session.refresh(asset)
    assert asset.status == "In Use"


@pytest.mark.asyncio
async def test_bulk_update_unknown_category(client: AsyncClient, auth_headers: dict, make_asset):
    asset = await make_asset()

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"categoryId": str(uuid.uuid4())}},
        headers=auth_headers,
    )
    assert response.json() == {
        "updated": 0,
        "failed": 1,
        "errors": [{"id": str(asset.id), "message": "Category not found"}],
    }


@pytest.mark.asyncio
async def test_bulk_update_invalid_decommission_date_fails_each_asset(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset(status="In Use")

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"status": "Decommissioned - Damaged", "decommissionDate": "not-a-date"}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "updated": 0,
        "failed": 1,
        "errors": [{"id": str(asset.id), "message": "Invalid decommission date: 'not-a-date'"}],
    }

    await db_session.refresh(asset)
    assert asset.status == "In Use"
    assert asset.decommission_date is None


@pytest.mark.asyncio
async def test_bulk_update_blank_decommission_date_clears_it(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, make_asset
):
    asset = await make_asset(decommission_date=date(2023, 1, 2))

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"decommissionDate": ""}},
        headers=auth_headers,
    )
    assert response.json()["updated"] == 1

    await db_session.refresh(asset)
    assert asset.decommission_date is None


@pytest.mark.asyncio
async def test_bulk_update_numeric_ids_fail_per_id(client: AsyncClient, auth_headers: dict):
    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [1, 2], "fields": {"comments": "audit"}},
        headers=auth_headers,
    )
    assert response.status_code == 200
    assert response.json() == {
        "updated": 0,
        "failed": 2,
        "errors": [{"id": "1", "message": "Asset not found"}, {"id": "2", "message": "Asset not found"}],
    }


@pytest.mark.asyncio
async def test_bulk_update_blank_location_clears_it(
    client: AsyncClient, auth_headers: dict, db_session: AsyncSession, location, make_asset
):
    asset = await make_asset(location_id=location.id)

    response = await client.post(
        "/api/v1/assets/bulk-update",
        json={"ids": [str(asset.id)], "fields": {"locationId": ""}},
        headers=auth_headers,
    )
    assert response.json()["updated"] == 1

    await db_session.refresh(asset)
    assert asset.location_id is None


@pytest.mark.asyncio
async def test_bulk_update_continues_after_database_error(db_session: AsyncSession, make_asset):
    first_id = str((await make_asset()).id)
    second_id = str((await make_asset()).id)

    with patch.object(db_session, "commit", new_callable=AsyncMock, side_effect=[SQLAlchemyError("boom"), None]):
        result = await bulk_update_assets(db_session, [first_id, second_id], {"comments": "checked"})

    assert result.items == [AssetUpdateFailed(first_id, "Update failed"), AssetUpdated(second_id)]
    assert (result.updated, result.failed) == (1, 1)


@pytest.mark.asyncio
async def test_bulk_update_service_ignores_unknown_fields(db_session: AsyncSession, make_asset):
    asset = await make_asset()

    with pytest.raises(ValidationError):
        await bulk_update_assets(db_session, [str(asset.id)], {"itemNumber": "X-1"})
