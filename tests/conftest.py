import pytest


class FakeStore:
    """Almacén en memoria con la misma interfaz que EdgeConfigStore."""

    def __init__(self, initial=None, fail_writes=False):
        self.data = dict(initial or {})
        self.fail_writes = fail_writes
        self.reads = []
        self.writes = []

    def get(self, key):
        self.reads.append(key)
        return self.data.get(key)

    def write(self, key, value, existed):
        from inkeep_salesforce.errors import ConfigWriteError

        self.writes.append((key, value, existed))
        if self.fail_writes:
            raise ConfigWriteError(500, "boom")
        self.data[key] = value


@pytest.fixture
def fake_store():
    return FakeStore()


@pytest.fixture
def valid_body():
    return {
        "formDetails": {
            "firstName": "Ada",
            "email": "ada@example.com",
            "additionalDetails": "The widget crashes on submit",
        },
        "chatSession": {
            "chatSessionId": "chat-123",
            "messages": [
                {"role": "user", "content": "How do I reset my API key?"},
                {"role": "assistant", "content": "Open settings [^1] and click reset."},
            ],
        },
        "client": {"currentUrl": "https://docs.example.com/keys"},
    }


@pytest.fixture
def store_factory():
    return FakeStore
