import pytest

from app.core.exceptions import StorePermissionError
from app.services.tracking_service import run_tracking_batch


@pytest.fixture
def tracking_rows(backend):
    backend.tables["Tracking"] = [
        ["ChatID", "BusID", "Status"],
        ["111", "BUS101", "active"],
        ["222", "bus102", "Active"],
        ["333", "BUS101", "stopped"],
        ["444", "BUS999", "active"],
        ["555"],
    ]
    return backend.tables["Tracking"]


@pytest.mark.asyncio
async def test_sends_one_update_per_active_subscription(sheets, telegram, tracking_rows):
    result = await run_tracking_batch(sheets, telegram)

    assert result.updates_sent == 2
    assert result.skipped == 1
    recipients = [kwargs["chat_id"] for _, kwargs in telegram.calls]
    assert recipients == ["111", "222"]
    assert "BUS101" in telegram.texts[0]
    assert "Mumbai" in telegram.texts[0]
    assert "BUS102" in telegram.texts[1]


@pytest.mark.asyncio
async def test_empty_tracking_sheet_sends_nothing(sheets, telegram):
    result = await run_tracking_batch(sheets, telegram)

    assert result.updates_sent == 0
    assert telegram.calls == []


@pytest.mark.asyncio
async def test_store_errors_propagate(sheets, telegram, backend):
    backend.fail_with = 403

    with pytest.raises(StorePermissionError):
        await run_tracking_batch(sheets, telegram)
