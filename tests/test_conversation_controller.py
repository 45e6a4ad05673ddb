import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select, text

from pulse.models import Conversation, Message, User


async def _count_messages(session_factory, conversation_id) -> int:
    async with session_factory() as session:
        query = select(func.count(Message.id)).where(Message.conversation_id == conversation_id)
        return (await session.execute(query)).scalar_one()


class TestConversationController:
    """Test cases for conversation endpoints."""

    @pytest.mark.asyncio
    async def test_create_conversation(
        self, async_client: AsyncClient, test_user: User, test_user_2: User, auth_headers: dict
    ):
        """Test starting a conversation with another user."""
        response = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(test_user_2.id)]},
            headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        participant_ids = {participant["id"] for participant in data["participants"]}
        assert participant_ids == {str(test_user.id), str(test_user_2.id)}
        assert data["last_message"] is None

    @pytest.mark.asyncio
    async def test_create_conversation_reuses_existing(
        self, async_client: AsyncClient, test_user: User, test_conversation: Conversation,
        auth_headers_2: dict
    ):
        """Test that a two-party conversation is not duplicated."""
        response = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(test_user.id)]},
            headers=auth_headers_2
        )

        assert response.status_code == 201
        assert response.json()["id"] == str(test_conversation.id)

    @pytest.mark.asyncio
    async def test_create_group_conversation(
        self, async_client: AsyncClient, test_user_2: User, test_user_3: User,
        test_conversation: Conversation, auth_headers: dict
    ):
        """Test that a group conversation is created next to an existing pair."""
        response = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(test_user_2.id), str(test_user_3.id), str(test_user_2.id)]},
            headers=auth_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] != str(test_conversation.id)
        assert len(data["participants"]) == 3

    @pytest.mark.asyncio
    async def test_create_conversation_with_self_only(
        self, async_client: AsyncClient, test_user: User, auth_headers: dict
    ):
        """Test that a conversation needs somebody else."""
        response = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(test_user.id)]},
            headers=auth_headers
        )

        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_conversation_unknown_user(self, async_client: AsyncClient, auth_headers: dict):
        """Test starting a conversation with a user that does not exist."""
        response = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(uuid.uuid4())]},
            headers=auth_headers
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_send_and_read_messages(
        self, async_client: AsyncClient, test_user: User, test_conversation: Conversation,
        auth_headers: dict, auth_headers_2: dict
    ):
        """Test that a sent message shows up for the other participant."""
        response = await async_client.post(
            f"/api/v1/conversations/{test_conversation.id}/messages",
            json={"content": "hi"},
            headers=auth_headers
        )

        assert response.status_code == 201
        sent = response.json()
        assert sent["content"] == "hi"
        assert sent["sender"]["id"] == str(test_user.id)
        assert sent["conversation_id"] == str(test_conversation.id)

        await async_client.post(
            f"/api/v1/conversations/{test_conversation.id}/messages",
            json={"content": "hey Alice"},
            headers=auth_headers_2
        )

        response = await async_client.get(
            f"/api/v1/conversations/{test_conversation.id}/messages", headers=auth_headers_2
        )

        assert response.status_code == 200
        assert [message["content"] for message in response.json()] == ["hi", "hey Alice"]

        conversations = (await async_client.get("/api/v1/conversations", headers=auth_headers_2)).json()
        assert len(conversations) == 1
        assert conversations[0]["last_message"]["content"] == "hey Alice"

    @pytest.mark.asyncio
    async def test_send_message_non_participant(
        self, async_client: AsyncClient, test_conversation: Conversation,
        auth_headers_3: dict, session_factory
    ):
        """Test that outsiders cannot post into a conversation."""
        response = await async_client.post(
            f"/api/v1/conversations/{test_conversation.id}/messages",
            json={"content": "let me in"},
            headers=auth_headers_3
        )

        assert response.status_code == 403
        assert await _count_messages(session_factory, test_conversation.id) == 0

    @pytest.mark.asyncio
    async def test_read_messages_non_participant(
        self, async_client: AsyncClient, test_conversation: Conversation, auth_headers_3: dict
    ):
        """Test that outsiders cannot read a conversation."""
        response = await async_client.get(
            f"/api/v1/conversations/{test_conversation.id}/messages", headers=auth_headers_3
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_unknown_conversation(self, async_client: AsyncClient, auth_headers: dict):
        """Test that an unknown conversation looks the same as a foreign one."""
        response = await async_client.get(
            f"/api/v1/conversations/{uuid.uuid4()}/messages", headers=auth_headers
        )

        assert response.status_code == 403

    @pytest.mark.asyncio
    async def test_send_empty_message(
        self, async_client: AsyncClient, test_conversation: Conversation,
        auth_headers: dict, session_factory
    ):
        """Test that an empty message is rejected."""
        response = await async_client.post(
            f"/api/v1/conversations/{test_conversation.id}/messages",
            json={"content": "   "},
            headers=auth_headers
        )

        assert response.status_code == 400
        assert await _count_messages(session_factory, test_conversation.id) == 0

    @pytest.mark.asyncio
    async def test_conversations_ordered_by_activity(
        self, async_client: AsyncClient, test_user_2: User, test_user_3: User,
        test_conversation: Conversation, auth_headers: dict
    ):
        """Test that the conversation with the latest message comes first."""
        created = await async_client.post(
            "/api/v1/conversations",
            json={"participant_ids": [str(test_user_3.id)]},
            headers=auth_headers
        )
        newer_id = created.json()["id"]

        conversations = (await async_client.get("/api/v1/conversations", headers=auth_headers)).json()
        assert [c["id"] for c in conversations] == [newer_id, str(test_conversation.id)]

        await async_client.post(
            f"/api/v1/conversations/{test_conversation.id}/messages",
            json={"content": "bump"},
            headers=auth_headers
        )

        conversations = (await async_client.get("/api/v1/conversations", headers=auth_headers)).json()
        assert [c["id"] for c in conversations] == [str(test_conversation.id), newer_id]

    @pytest.mark.asyncio
    async def test_list_hides_database_error(
        self, async_client: AsyncClient, engine, test_conversation: Conversation, auth_headers: dict
    ):
        """Test that a storage failure does not leak query details."""
        async with engine.begin() as conn:
            await conn.execute(text("DROP TABLE messages"))

        response = await async_client.get("/api/v1/conversations", headers=auth_headers)

        assert response.status_code == 500
        body = response.json()["detail"]
        assert body == {"detail": "Error getting conversations", "type": "internal_error"}
        assert "sqlite3" not in response.text
