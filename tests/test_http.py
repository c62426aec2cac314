from __future__ import annotations

import typing

import pytest
import pyguild


class FakeRequestInfo:
    def __init__(self, method: str, url: str) -> None:
        self.method = method
        self.url = url


class FakeResponse:
    def __init__(self, method: str, url: str, status: int, body: str, content_type: str = 'application/json') -> None:
        self.status = status
        self.headers = {'content-type': content_type}
        self.request_info = FakeRequestInfo(method, url)
        self._body = body
        self.closed = False

    async def text(self, encoding: str = 'utf-8') -> str:
        return self._body

    def close(self) -> None:
        self.closed = True


class FakeTransportHTTPClient(pyguild.HTTPClient):
    __slots__ = ('sent', 'status', 'body', 'content_type')

    def __init__(self, *, state: pyguild.State, status: int, body: str, content_type: str = 'application/json') -> None:
        super().__init__('secret', state=state, session=object())  # type: ignore
        self.sent: list[dict[str, typing.Any]] = []
        self.status = status
        self.body = body
        self.content_type = content_type

    async def send_request(self, session, /, *, method, url, headers, **kwargs):
        self.sent.append({'method': method, 'url': url, 'headers': headers, **kwargs})
        return FakeResponse(method, url, self.status, self.body, self.content_type)


def _client(status: int, body: str, content_type: str = 'application/json') -> pyguild.Client:
    return pyguild.Client(
        token='secret',
        http=lambda client, state: FakeTransportHTTPClient(
            state=state, status=status, body=body, content_type=content_type
        ),
    )


@pytest.mark.asyncio
async def test_request_headers_and_body(payloads):
    client = _client(200, pyguild.utils.to_json({'message': payloads.message()}))
    http: FakeTransportHTTPClient = client.http  # type: ignore

    payload = await http.create_message('c1', {'content': 'hi'})
    assert payload['id'] == 'm1'

    (sent,) = http.sent
    assert sent['method'] == 'POST'
    assert sent['url'] == 'https://www.guilded.gg/api/v1/channels/c1/messages'
    assert sent['headers']['Authorization'] == 'Bearer secret'
    assert sent['headers']['Content-Type'] == 'application/json'
    assert sent['headers']['Accept'] == 'application/json'
    assert sent['headers']['User-Agent'].startswith('pyguild')
    assert pyguild.utils.from_json(sent['data']) == {'content': 'hi'}


@pytest.mark.asyncio
async def test_path_parameters_are_quoted():
    client = _client(200, pyguild.utils.to_json({'channel': {}}))
    http: FakeTransportHTTPClient = client.http  # type: ignore

    await http.get_channel('a/b')

    assert http.sent[0]['url'] == 'https://www.guilded.gg/api/v1/channels/a%2Fb'


@pytest.mark.parametrize(
    'status,exc',
    [
        (401, pyguild.Unauthorized),
        (403, pyguild.Forbidden),
        (404, pyguild.NotFound),
        (409, pyguild.Conflict),
        (429, pyguild.Ratelimited),
        (500, pyguild.InternalServerError),
        (502, pyguild.BadGateway),
        (418, pyguild.HTTPException),
    ],
)
@pytest.mark.asyncio
async def test_error_mapping(status: int, exc: type[pyguild.HTTPException]):
    client = _client(status, pyguild.utils.to_json({'code': 'SomeError', 'message': 'Something went wrong'}))

    with pytest.raises(exc) as info:
        await client.http.get_server('s1')

    assert info.value.status == status
    assert info.value.code == 'SomeError'
    assert info.value.message == 'Something went wrong'


@pytest.mark.asyncio
async def test_non_json_error():
    client = _client(502, '<html>Bad Gateway</html>', content_type='text/html')

    with pytest.raises(pyguild.BadGateway) as info:
        await client.http.get_server('s1')

    assert info.value.code == 'NonJSON'
    assert info.value.data == '<html>Bad Gateway</html>'


@pytest.mark.asyncio
async def test_transport_errors_propagate_from_actions(payloads):
    client = _client(403, pyguild.utils.to_json({'code': 'ForbiddenError', 'message': 'Missing permissions'}))
    message = client.state.parser.parse_message(payloads.message())

    with pytest.raises(pyguild.Forbidden):
        await message.delete()

    with pytest.raises(pyguild.Forbidden):
        await message.edit('new')


def test_with_credentials():
    client = pyguild.Client(token='one')
    client.http.with_credentials('two')
    assert client.http.token == 'two'
    assert client.http.base == 'https://www.guilded.gg/api/v1'


def test_custom_base():
    client = pyguild.Client(http_base='https://example.com/api/')
    assert client.http.base == 'https://example.com/api'
