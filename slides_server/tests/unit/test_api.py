"""HTTP surface tests through an in-process client.

Tests cover:
- Health probe and error body shape
- Presentation, theme and layout rule routes
- Media upload, serving and deletion
- AI configuration listing without credentials
- MCP message submission and event stream
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from slides_server.app.mcp.api.v1.mcp import _event_stream
from slides_server.app.mcp.protocol import METHOD_NOT_FOUND, PARSE_ERROR
from slides_server.core.conf import settings

PNG_BYTES = b'\x89PNG\r\n\x1a\n' + b'\x00' * 16


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get('/health')
        assert response.status_code == 200
        assert response.json() == {'status': 'ok'}


class TestPresentationsApi:
    @pytest.mark.asyncio
    async def test_crud(self, client):
        response = await client.post('/api/presentations', json={'title': 'Deck', 'content': '# Hi'})
        assert response.status_code == 201
        created = response.json()
        assert created['theme'] == 'default'
        assert {'createdAt', 'updatedAt', 'userId'} <= set(created)
        pk = created['id']

        response = await client.put(f'/api/presentations/{pk}', json={'title': 'Renamed'})
        assert response.status_code == 200
        assert response.json()['title'] == 'Renamed'
        assert response.json()['content'] == '# Hi'

        response = await client.get('/api/presentations')
        assert [p['id'] for p in response.json()] == [pk]

        response = await client.delete(f'/api/presentations/{pk}')
        assert response.status_code == 204

        response = await client.get(f'/api/presentations/{pk}')
        assert response.status_code == 404
        assert response.json() == {'error': f'Presentation {pk} not found'}

    @pytest.mark.asyncio
    async def test_delete_missing(self, client):
        response = await client.delete('/api/presentations/missing')
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_title_required(self, client):
        response = await client.post('/api/presentations', json={'content': 'x'})
        assert response.status_code == 400
        assert 'title' in response.json()['error']


class TestThemesApi:
    @pytest.mark.asyncio
    async def test_list_puts_default_first(self, client):
        themes = (await client.get('/api/themes')).json()
        assert [t['name'] for t in themes] == ['default', 'corporate', 'creative', 'dark', 'minimal']
        assert themes[0]['isDefault'] is True

    @pytest.mark.asyncio
    async def test_get_by_name_or_id(self, client):
        dark = (await client.get('/api/themes/dark')).json()
        assert dark['displayName']
        by_id = (await client.get(f'/api/themes/{dark["id"]}')).json()
        assert by_id['name'] == 'dark'
        assert (await client.get('/api/themes/nope')).status_code == 404

    @pytest.mark.asyncio
    async def test_user_theme_lifecycle(self, client):
        response = await client.post(
            '/api/themes', json={'name': 'ocean', 'displayName': 'Ocean', 'cssContent': '.x{}'}
        )
        assert response.status_code == 201
        theme = response.json()
        assert theme['centerContent'] is True
        assert theme['isDefault'] is False

        duplicate = await client.post('/api/themes', json={'name': 'ocean', 'displayName': 'O', 'cssContent': ''})
        assert duplicate.status_code == 400

        updated = await client.put(f'/api/themes/{theme["id"]}', json={'centerContent': False})
        assert updated.json()['centerContent'] is False
        assert updated.json()['cssContent'] == '.x{}'

        assert (await client.delete(f'/api/themes/{theme["id"]}')).status_code == 204

    @pytest.mark.asyncio
    async def test_default_themes_are_read_only(self, client):
        default = (await client.get('/api/themes/default')).json()
        response = await client.put(f'/api/themes/{default["id"]}', json={'cssContent': ''})
        assert response.status_code == 403
        assert response.json() == {'error': 'Cannot modify default themes'}
        response = await client.delete(f'/api/themes/{default["id"]}')
        assert response.status_code == 403
        assert response.json() == {'error': 'Cannot delete default themes'}


class TestLayoutRulesApi:
    @pytest.mark.asyncio
    async def test_list_in_priority_order(self, client):
        rules = (await client.get('/api/layout-rules')).json()
        assert [r['priority'] for r in rules] == [10, 20, 30, 40, 50]
        assert rules[0]['conditions'] == {'h3Count': {'gte': 2}, 'imageCount': {'eq': 0}, 'hasCards': False}

    @pytest.mark.asyncio
    async def test_match_from_html(self, client):
        html = '<h2>Title</h2>\n<p>Body</p>\n<p><img src="/a.png" alt="a"></p>'
        result = (await client.post('/api/layout-rules/match', json={'html': html})).json()
        assert result['features']['imageCount'] == 1
        assert result['rule']['name'] == 'text-image'

    @pytest.mark.asyncio
    async def test_match_from_features(self, client):
        features = {'hasHeading': True, 'imageCount': 3}
        result = (await client.post('/api/layout-rules/match', json={'features': features})).json()
        assert result['rule']['name'] == 'image-grid'

    @pytest.mark.asyncio
    async def test_match_requires_input(self, client):
        response = await client.post('/api/layout-rules/match', json={})
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_user_rule_lifecycle(self, client):
        body = {
            'name': 'quote',
            'displayName': 'Quote',
            'priority': 5,
            'conditions': {'hasBlockquote': True},
            'transform': {'type': 'wrap', 'options': {'className': 'layout-quote'}},
        }
        response = await client.post('/api/layout-rules', json=body)
        assert response.status_code == 201
        rule = response.json()
        assert rule['enabled'] is True
        assert rule['cssContent'] == ''

        result = (await client.post('/api/layout-rules/match', json={'html': '<blockquote><p>q</p></blockquote>'})).json()
        assert result['rule']['name'] == 'quote'

        response = await client.put(f'/api/layout-rules/{rule["id"]}', json={'enabled': False})
        assert response.json()['enabled'] is False
        result = (await client.post('/api/layout-rules/match', json={'html': '<blockquote><p>q</p></blockquote>'})).json()
        assert result['rule'] is None

        assert (await client.delete(f'/api/layout-rules/{rule["id"]}')).status_code == 204
        assert (await client.get(f'/api/layout-rules/{rule["id"]}')).status_code == 404

    @pytest.mark.asyncio
    async def test_invalid_transform_is_rejected(self, client):
        body = {
            'name': 'bad',
            'displayName': 'Bad',
            'conditions': {},
            'transform': {'type': 'spiral', 'options': {}},
        }
        assert (await client.post('/api/layout-rules', json=body)).status_code == 400

    @pytest.mark.asyncio
    async def test_default_rules_are_read_only(self, client):
        rule = (await client.get('/api/layout-rules')).json()[0]
        response = await client.delete(f'/api/layout-rules/{rule["id"]}')
        assert response.status_code == 403
        assert response.json() == {'error': 'Cannot delete default layout rules'}


class TestMediaApi:
    @pytest.mark.asyncio
    async def test_upload_serve_delete(self, client, context):
        response = await client.post('/api/media', files={'file': ('photo.png', PNG_BYTES, 'image/png')})
        assert response.status_code == 201
        media = response.json()
        assert media['originalName'] == 'photo.png'
        assert media['size'] == len(PNG_BYTES)
        assert media['filename'].endswith('.png')
        assert media['url'] == f'/api/uploads/{media["filename"]}'
        assert (context.uploads_dir / media['filename']).read_bytes() == PNG_BYTES

        served = await client.get(media['url'])
        assert served.status_code == 200
        assert served.content == PNG_BYTES
        assert served.headers['content-type'] == 'image/png'
        assert served.headers['cache-control'] == 'public, max-age=31536000'

        listed = (await client.get('/api/media')).json()
        assert [m['id'] for m in listed] == [media['id']]

        assert (await client.delete(f'/api/media/{media["id"]}')).status_code == 204
        assert not (context.uploads_dir / media['filename']).exists()
        assert (await client.get(media['url'])).status_code == 404
        assert (await client.delete(f'/api/media/{media["id"]}')).status_code == 404

    @pytest.mark.asyncio
    async def test_rejects_other_mime_types(self, client):
        response = await client.post('/api/media', files={'file': ('notes.txt', b'hello', 'text/plain')})
        assert response.status_code == 415
        assert response.json() == {'error': 'Only image, video, and audio files are allowed'}

    @pytest.mark.asyncio
    async def test_requires_a_file(self, client):
        response = await client.post('/api/media', files={'other': ('a.png', PNG_BYTES, 'image/png')})
        assert response.status_code == 400
        assert response.json() == {'error': 'No file provided'}

    @pytest.mark.asyncio
    async def test_missing_upload(self, client):
        assert (await client.get('/api/uploads/missing.png')).status_code == 404


class TestAiConfigApi:
    @pytest.mark.asyncio
    async def test_list_never_exposes_key(self, client):
        response = await client.post('/api/ai-config', json={'providerName': 'openai', 'apiKey': 'sk-secret'})
        assert response.status_code == 200

        configs = (await client.get('/api/ai-config')).json()
        assert configs == [
            {'id': configs[0]['id'], 'providerName': 'openai', 'model': None, 'baseUrl': None, 'hasKey': True}
        ]
        assert 'sk-secret' not in response.text

    @pytest.mark.asyncio
    async def test_key_or_base_url_required(self, client):
        response = await client.post('/api/ai-config', json={'providerName': 'openai'})
        assert response.status_code == 400
        assert response.json() == {'error': 'apiKey or baseUrl required'}

    @pytest.mark.asyncio
    async def test_delete_missing_is_no_content(self, client):
        assert (await client.delete('/api/ai-config/missing')).status_code == 204

    @pytest.mark.asyncio
    async def test_ai_route_without_configuration(self, client):
        response = await client.post('/api/ai/generate', json={'prompt': 'x', 'provider': 'anthropic'})
        assert response.status_code == 400
        assert response.json() == {'error': 'No anthropic configuration found. Add your API key in settings.'}

    @pytest.mark.asyncio
    async def test_ai_route_with_configured_provider(self, client, context, monkeypatch):
        provider = AsyncMock()
        provider.generate_content.return_value = 'Speak slowly'
        factory = MagicMock()
        factory.create_provider.return_value = provider
        monkeypatch.setattr(context, 'providers', factory)

        await client.post('/api/ai-config', json={'providerName': 'gemini', 'apiKey': 'g-key'})
        response = await client.post(
            '/api/ai/speaker-notes', json={'slideContent': '# Intro', 'provider': 'gemini'}
        )

        assert response.status_code == 200
        assert response.json() == {'notes': 'Speak slowly'}
        factory.create_provider.assert_called_once_with('gemini', 'g-key', None, None)


class TestMcpApi:
    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        body = {'jsonrpc': '2.0', 'id': 1, 'method': 'ping'}
        response = await client.post('/mcp/message', params={'sessionId': 'nope'}, json=body)
        assert response.status_code == 404
        assert response.json() == {'error': 'Session not found'}

    @pytest.mark.asyncio
    async def test_missing_session_id(self, client):
        response = await client.post('/mcp/message', json={'jsonrpc': '2.0', 'id': 1, 'method': 'ping'})
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_reply_is_queued_on_the_session(self, client, context):
        token, channel = await context.sessions.open()
        body = {'jsonrpc': '2.0', 'id': 9, 'method': 'no/such'}
        response = await client.post('/mcp/message', params={'sessionId': token}, json=body)

        assert response.status_code == 202
        assert response.text == 'Accepted'
        reply = await channel.receive(timeout=1)
        assert reply['id'] == 9
        assert reply['error']['code'] == METHOD_NOT_FOUND

    @pytest.mark.asyncio
    async def test_parse_error_is_queued(self, client, context):
        token, channel = await context.sessions.open()
        response = await client.post(
            '/mcp/message',
            params={'sessionId': token},
            content=b'{not json',
            headers={'content-type': 'application/json'},
        )
        assert response.status_code == 202
        reply = await channel.receive(timeout=1)
        assert reply['id'] is None
        assert reply['error']['code'] == PARSE_ERROR

    @pytest.mark.asyncio
    async def test_notification_queues_nothing(self, client, context):
        token, channel = await context.sessions.open()
        body = {'jsonrpc': '2.0', 'method': 'notifications/initialized'}
        response = await client.post('/mcp/message', params={'sessionId': token}, json=body)
        assert response.status_code == 202
        assert await channel.receive(timeout=0.01) is None

    @pytest.mark.asyncio
    async def test_closed_channel(self, client, context):
        token, channel = await context.sessions.open()
        channel.close()
        body = {'jsonrpc': '2.0', 'id': 1, 'method': 'ping'}
        response = await client.post('/mcp/message', params={'sessionId': token}, json=body)
        assert response.status_code == 500
        assert response.json() == {'error': 'Session channel closed'}


class TestMcpEventStream:
    @staticmethod
    def connected_request() -> MagicMock:
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=False)
        return request

    @pytest.mark.asyncio
    async def test_endpoint_then_messages_then_close(self, context):
        token, channel = await context.sessions.open()
        stream = _event_stream(self.connected_request(), context, token, channel)

        assert await stream.__anext__() == f'event: endpoint\ndata: /mcp/message?sessionId={token}\n\n'

        await channel.send({'jsonrpc': '2.0', 'id': 1, 'result': {}})
        assert await stream.__anext__() == 'event: message\ndata: {"jsonrpc": "2.0", "id": 1, "result": {}}\n\n'

        channel.close()
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
        assert await context.sessions.get(token) is None

    @pytest.mark.asyncio
    async def test_heartbeat_when_idle(self, context, monkeypatch):
        monkeypatch.setattr(settings, 'MCP_HEARTBEAT_SECONDS', 0.01)
        token, channel = await context.sessions.open()
        stream = _event_stream(self.connected_request(), context, token, channel)

        await stream.__anext__()
        assert await stream.__anext__() == ': ping\n\n'
        await stream.aclose()
        assert await context.sessions.get(token) is None

    @pytest.mark.asyncio
    async def test_disconnect_closes_session(self, context):
        token, channel = await context.sessions.open()
        request = MagicMock()
        request.is_disconnected = AsyncMock(return_value=True)
        stream = _event_stream(request, context, token, channel)

        await stream.__anext__()
        with pytest.raises(StopAsyncIteration):
            await stream.__anext__()
        assert channel.closed
