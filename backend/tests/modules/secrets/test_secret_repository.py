"""Tests for SecretRepository against a mocked Supabase client."""

import pytest
from unittest.mock import MagicMock

from modules.secrets.repository import SecretRepository


SECRET_ROW = {
    "secret_id": "5b0f7d0e-3a8e-4a51-bd0e-2b7c1b9f6d10",
    "user_id": "user-1",
    "secret": "I like cats",
    "created_at": "2024-01-01T00:00:00+00:00",
}


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def repo(mock_db):
    return SecretRepository(mock_db)


@pytest.mark.asyncio
async def test_list_filters_by_owner_newest_first(repo, mock_db):
    select = mock_db.table.return_value.select.return_value
    select.eq.return_value.order.return_value.execute.return_value.data = [SECRET_ROW]

    secrets = await repo.list_for_owner("user-1")

    mock_db.table.assert_called_once_with("secrets")
    select.eq.assert_called_once_with("user_id", "user-1")
    select.eq.return_value.order.assert_called_once_with("created_at", desc=True)
    assert len(secrets) == 1
    assert secrets[0].content == "I like cats"
    assert secrets[0].owner_id == "user-1"


@pytest.mark.asyncio
async def test_insert(repo, mock_db):
    insert = mock_db.table.return_value.insert
    insert.return_value.execute.return_value.data = [SECRET_ROW]

    secret = await repo.insert("user-1", "I like cats")

    insert.assert_called_once_with({"user_id": "user-1", "secret": "I like cats"})
    assert secret.secret_id == SECRET_ROW["secret_id"]


@pytest.mark.asyncio
async def test_update_is_scoped_to_owner(repo, mock_db):
    update = mock_db.table.return_value.update
    by_id = update.return_value.eq
    by_owner = by_id.return_value.eq
    by_owner.return_value.execute.return_value.data = [dict(SECRET_ROW, secret="new")]

    secret = await repo.update_content("user-1", SECRET_ROW["secret_id"], "new")

    update.assert_called_once_with({"secret": "new"})
    by_id.assert_called_once_with("secret_id", SECRET_ROW["secret_id"])
    by_owner.assert_called_once_with("user_id", "user-1")
    assert secret.content == "new"


@pytest.mark.asyncio
async def test_update_no_match(repo, mock_db):
    update = mock_db.table.return_value.update
    update.return_value.eq.return_value.eq.return_value.execute.return_value.data = []

    assert await repo.update_content("user-2", SECRET_ROW["secret_id"], "new") is None


@pytest.mark.asyncio
async def test_delete_is_scoped_to_owner(repo, mock_db):
    delete = mock_db.table.return_value.delete.return_value
    delete.eq.return_value.eq.return_value.execute.return_value.data = [SECRET_ROW]

    assert await repo.delete("user-1", SECRET_ROW["secret_id"]) is True

    delete.eq.assert_called_once_with("secret_id", SECRET_ROW["secret_id"])
    delete.eq.return_value.eq.assert_called_once_with("user_id", "user-1")


@pytest.mark.asyncio
async def test_delete_no_match(repo, mock_db):
    delete = mock_db.table.return_value.delete.return_value
    delete.eq.return_value.eq.return_value.execute.return_value.data = []

    assert await repo.delete("user-2", SECRET_ROW["secret_id"]) is False
