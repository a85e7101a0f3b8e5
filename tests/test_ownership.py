import uuid
from types import SimpleNamespace

import pytest

from videohub.core.errors import ForbiddenError, NotFoundError, ValidationError
from videohub.core.identity import canonical_id
from videohub.domains.shared.ownership import authorize, ensure_owner, is_owner


def test_owner_comparison_ignores_representation():
    owner = uuid.uuid4()

    assert is_owner(owner, str(owner))
    assert is_owner(str(owner).upper(), owner)
    assert is_owner(owner.hex, str(owner))


def test_different_actor_is_not_owner():
    assert not is_owner(uuid.uuid4(), uuid.uuid4())
    assert not is_owner(None, uuid.uuid4())


def test_authorize_raises_forbidden():
    with pytest.raises(ForbiddenError) as exc:
        authorize(uuid.uuid4(), uuid.uuid4(), "delete this video")

    assert exc.value.status_code == 403
    assert "delete this video" in exc.value.message


def test_ensure_owner_checks_existence_first():
    with pytest.raises(NotFoundError):
        ensure_owner(None, uuid.uuid4(), "Video")


def test_ensure_owner_returns_resource():
    owner = uuid.uuid4()
    resource = SimpleNamespace(owner_id=owner)

    assert ensure_owner(resource, str(owner), "Video") is resource


def test_canonical_id_rejects_garbage():
    with pytest.raises(ValidationError) as exc:
        canonical_id("not-a-uuid", "videoId")

    assert exc.value.errors == [{"field": "videoId", "value": "not-a-uuid"}]
