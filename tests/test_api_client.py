import httpx
import pytest

from notetaker.client.api_client import NoteApiClient
from notetaker.core.errors import NoteApiError, NoteNotFoundError, NoteTransportError, NoteValidationError


@pytest.fixture
def api(client):
    return NoteApiClient(client)


async def test_round_trip_against_app(api):
    created = await api.create_note("A", "B", user="ann")
    assert created.id
    assert created.inserted_at == created.updated_at

    fetched = await api.get_note(created.id)
    assert fetched == created

    updated = await api.update_note(created.id, "A2", "B2")
    assert updated.title == "A2"
    assert updated.user is None
    assert updated.updated_at > updated.inserted_at

    assert [n.id for n in await api.list_notes()] == [created.id]
    assert (await api.delete_note(created.id)).id == created.id
    assert await api.list_notes() == []


async def test_missing_note_raises_not_found(api):
    with pytest.raises(NoteNotFoundError) as exc_info:
        await api.get_note("123")
    assert exc_info.value.note_id == "123"


async def test_validation_error_is_reported_as_api_error(api):
    with pytest.raises(NoteApiError) as exc_info:
        await api.create_note("", "B")
    assert exc_info.value.code == "VALIDATION_ERROR"
    assert not isinstance(exc_info.value, NoteValidationError)


async def test_delete_all(api):
    await api.create_note("one", "1")
    await api.create_note("two", "2")
    assert len(await api.delete_all_notes()) == 2
    assert await api.list_notes() == []


async def test_connection_failure_raises_transport_error():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    api = NoteApiClient(httpx.AsyncClient(transport=httpx.MockTransport(refuse), base_url="http://api"))
    with pytest.raises(NoteTransportError):
        await api.list_notes()
    await api.aclose()


async def test_non_json_response_raises_transport_error():
    def bad_gateway(request):
        return httpx.Response(502, text="<html>Bad Gateway</html>")

    api = NoteApiClient(httpx.AsyncClient(transport=httpx.MockTransport(bad_gateway), base_url="http://api"))
    with pytest.raises(NoteTransportError):
        await api.list_notes()
    await api.aclose()
