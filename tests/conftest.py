"""Test configuration and fixtures."""

from uuid import uuid4

import logfire
import pytest

from remark.domain.value import PostId, UserId

# Keep test output quiet and offline
logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def post_id() -> PostId:
    return PostId(uuid4())


@pytest.fixture
def author_id() -> UserId:
    return UserId(uuid4())


@pytest.fixture
def other_user_id() -> UserId:
    return UserId(uuid4())
