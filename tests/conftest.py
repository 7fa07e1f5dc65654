import json
import re

import httpx
import pytest

from app.core.config import Settings
from app.flow.context import BotContext
from app.models.user import USER_COLUMNS
from app.services.sheets_service import SheetsService

SPREADSHEET_ID = "sheet-123"

A1_CELL = re.compile(r"^([A-Z]+)(\d+)$")


class SheetsBackend:
    """
    In-memory stand-in for the Sheets v4 values API, served through
    httpx.MockTransport. Records every request it receives.
    """

    def __init__(self, tables=None):
        self.tables = tables or {}
        self.requests = []
        self.fail_with = None

    @property
    def writes(self):
        return [r for r in self.requests if r.method == "POST"]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.fail_with is not None:
            return httpx.Response(self.fail_with, json={"error": {"message": "denied"}})

        prefix = f"/v4/spreadsheets/{SPREADSHEET_ID}/values"
        path = request.url.path
        assert path.startswith(prefix), path
        rest = path[len(prefix):]

        if request.method == "GET":
            sheet = rest.lstrip("/").split("!")[0]
            rows = self.tables.get(sheet, [])
            body = {"range": rest.lstrip("/")}
            if rows:
                body["values"] = [list(row) for row in rows]
            return httpx.Response(200, json=body)

        payload = json.loads(request.content)

        if rest.endswith(":append"):
            sheet = rest.lstrip("/").split("!")[0]
            self.tables.setdefault(sheet, []).extend(payload["values"])
            return httpx.Response(200, json={"updates": {"updatedRows": len(payload["values"])}})

        if rest == ":batchUpdate":
            for item in payload["data"]:
                sheet, cell = item["range"].split("!")
                column, row_number = A1_CELL.match(cell).groups()
                row = self.tables[sheet][int(row_number) - 1]
                index = ord(column) - ord("A")
                row.extend([""] * (index + 1 - len(row)))
                row[index] = item["values"][0][0]
            return httpx.Response(200, json={"totalUpdatedCells": len(payload["data"])})

        return httpx.Response(404, json={"error": {"message": "unknown route"}})


class RecordingTelegram:
    """
    Records Bot API calls in order. `fail_methods` makes a method raise.
    """

    def __init__(self):
        self.calls = []
        self.fail_methods = set()

    async def _record(self, method, **kwargs):
        self.calls.append((method, kwargs))
        if method in self.fail_methods:
            raise RuntimeError(f"{method} exploded")
        return {"success": True, "result": True}

    async def send_message(self, chat_id, text, parse_mode=None, reply_markup=None):
        return await self._record(
            "sendMessage", chat_id=chat_id, text=text, parse_mode=parse_mode, reply_markup=reply_markup
        )

    async def send_chat_action(self, chat_id, action="typing"):
        return await self._record("sendChatAction", chat_id=chat_id, action=action)

    async def answer_callback_query(self, callback_query_id):
        return await self._record("answerCallbackQuery", callback_query_id=callback_query_id)

    async def edit_message_reply_markup(self, chat_id, message_id, reply_markup=None):
        return await self._record(
            "editMessageReplyMarkup", chat_id=chat_id, message_id=message_id, reply_markup=reply_markup
        )

    @property
    def methods(self):
        return [method for method, _ in self.calls]

    @property
    def texts(self):
        return [kwargs["text"] for method, kwargs in self.calls if method == "sendMessage"]


async def fake_token():
    return "test-access-token"


@pytest.fixture
def settings():
    return Settings(
        _env_file=None,
        TELEGRAM_TOKEN="123:ABC",
        SPREADSHEET_ID=SPREADSHEET_ID,
        GOOGLE_SERVICE_ACCOUNT_JSON=None,
    )


@pytest.fixture
def users_header():
    return list(USER_COLUMNS)


@pytest.fixture
def backend(users_header):
    return SheetsBackend({
        "Users": [users_header],
        "Seats": [["BusID", "SeatNo", "Deck", "Type", "Price", "Status"]],
    })


@pytest.fixture
def sheets(settings, backend):
    client = httpx.AsyncClient(transport=httpx.MockTransport(backend.handler))
    return SheetsService(settings, http_client=client, token_provider=fake_token)


@pytest.fixture
def telegram():
    return RecordingTelegram()


@pytest.fixture
def ctx(settings, sheets, telegram):
    return BotContext(settings=settings, sheets=sheets, telegram=telegram)


def user_row(chat_id, name="", status="pending_details", role="user", aadhar=""):
    return [f"USER{chat_id}", name, str(chat_id), "", aadhar, status, role, "en", "2024-03-20T08:00:00.000Z"]
