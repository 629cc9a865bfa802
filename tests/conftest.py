# tests/conftest.py
import itertools
import json
import types

import pytest

import database
from utils import bible_api, game, interlinear, llm, strongs
from utils.rate_limit import rate_limiters

ENV_VARS = (
    "ESV_API_KEY",
    "BIBLE_API_KEY",
    "BIBLE_API_IDS",
    "UPSTREAM_TIMEOUT",
    "ANTHROPIC_API_KEY",
    "ANTHROPIC_MODEL",
    "SUPABASE_URL",
    "SUPABASE_SERVICE_KEY",
    "STRONGS_DATA_DIR",
    "INTERLINEAR_DATA_DIR",
    "QUESTIONS_FILE",
)


# ---------------------------------------------------------------------
# Isolation: no real credentials, fresh caches and limiters per test
# ---------------------------------------------------------------------
@pytest.fixture(autouse=True)
def _isolate(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    monkeypatch.setattr(bible_api, "_aggregator", None)
    monkeypatch.setattr(strongs, "_lexicon", None)
    monkeypatch.setattr(llm, "_client", None)
    monkeypatch.setattr(database, "_supabase_client_instance", None)

    for limiter in rate_limiters.values():
        limiter.reset()
    game.load_questions.cache_clear()
    interlinear._read_book_file.cache_clear()
    yield
    for limiter in rate_limiters.values():
        limiter.reset()


@pytest.fixture
def app():
    from app import app as flask_app

    flask_app.config.update(TESTING=True)
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


# ---------------------------------------------------------------------
# Fake HTTP transport for the verse providers
# ---------------------------------------------------------------------
class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload
        self._invalid_json = invalid_json

    @property
    def ok(self):
        return 200 <= self.status_code < 300

    def json(self):
        if self._invalid_json:
            raise ValueError("No JSON object could be decoded")
        return self._payload


class FakeHTTP:
    """requests-style .get() that replays a canned response (or raises)."""

    def __init__(self, response=None, error=None):
        self.response = response if response is not None else FakeResponse()
        self.error = error
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_http():
    return FakeHTTP


@pytest.fixture
def fake_response():
    return FakeResponse


def bsb_chapter_payload(verses, chapter=1, book_name="John"):
    """helloao-style chapter JSON for {verse number: text}."""
    content = [{"type": "heading", "content": ["A heading"]}]
    for number, text in verses.items():
        content.append({
            "type": "verse",
            "number": number,
            "content": [text, {"noteId": 1}],
        })
    return {
        "book": {"name": book_name},
        "chapter": {"number": chapter, "content": content},
    }


@pytest.fixture
def bsb_payload():
    return bsb_chapter_payload


# ---------------------------------------------------------------------
# Fake Supabase: in-memory tables and token check
# ---------------------------------------------------------------------
VALID_TOKEN = "good-token"
USER_ID = "user-1"


class FakeQuery:
    def __init__(self, store, table):
        self.store = store
        self.table = table
        self.action = "select"
        self.payload = None
        self.filters = []
        self.order_by = None

    def select(self, *_columns):
        return self

    def insert(self, payload):
        self.action, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.action, self.payload = "update", payload
        return self

    def delete(self):
        self.action = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        rows = self.store.tables.setdefault(self.table, [])
        if self.action == "insert":
            row = {"id": f"{self.table}-{next(self.store.ids)}", "created_at": "2024-01-01T00:00:00Z", **self.payload}
            rows.append(row)
            data = [dict(row)]
        elif self.action == "update":
            data = []
            for row in rows:
                if self._matches(row):
                    row.update(self.payload)
                    data.append(dict(row))
        elif self.action == "delete":
            data = [dict(row) for row in rows if self._matches(row)]
            self.store.tables[self.table] = [row for row in rows if not self._matches(row)]
        else:
            data = [dict(row) for row in rows if self._matches(row)]
            if self.order_by:
                column, desc = self.order_by
                data.sort(key=lambda row: row.get(column) or "", reverse=desc)
        return types.SimpleNamespace(data=data)


class FakeAuth:
    def get_user(self, token):
        if token != VALID_TOKEN:
            raise Exception("invalid JWT")
        return types.SimpleNamespace(user=types.SimpleNamespace(id=USER_ID))


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.ids = itertools.count(1)
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self, name)


@pytest.fixture
def fake_supabase(monkeypatch):
    fake = FakeSupabase()
    instance = database.SupabaseClient()
    instance._client = fake
    monkeypatch.setattr(database, "_supabase_client_instance", instance)
    return fake


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {VALID_TOKEN}"}


# ---------------------------------------------------------------------
# Fake Anthropic client
# ---------------------------------------------------------------------
class FakeMessages:
    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return types.SimpleNamespace(content=[types.SimpleNamespace(type="text", text=self.text)])


class FakeAnthropic:
    def __init__(self, text=None, error=None):
        self.messages = FakeMessages(text=text, error=error)


@pytest.fixture
def fake_anthropic(monkeypatch):
    """Install a fake Claude client; call with the reply text (or a dict/list to JSON-encode)."""
    def install(reply=None, error=None):
        text = reply if isinstance(reply, str) or reply is None else json.dumps(reply)
        fake = FakeAnthropic(text=text, error=error)
        monkeypatch.setattr(llm, "_client", fake)
        return fake
    return install
