import jwt

from app.core.config import settings
from app.core.security import create_token, decode_token, hash_password, verify_password
from app.models.access_token import AccessToken
from app.models.user import User
from app.services import token_service


def _user(db_session, email="tok@mail.com"):
    user = User(name="Token Owner", email=email, hashed_password=hash_password("password123"))
    db_session.add(user)
    db_session.commit()
    return user


def test_password_hash_round_trip():
    hashed = hash_password("password123")
    assert hashed != "password123"
    assert verify_password("password123", hashed)
    assert not verify_password("password124", hashed)


def test_tokens_do_not_expire_by_default():
    payload = decode_token(create_token("1", "abc"))
    assert payload["sub"] == "1"
    assert payload["jti"] == "abc"
    assert "exp" not in payload


def test_expiry_is_added_when_configured():
    payload = decode_token(create_token("1", "abc", expires_minutes=5))
    assert payload["exp"] > payload["iat"]


def test_expired_or_foreign_tokens_do_not_decode():
    assert decode_token(create_token("1", "abc", expires_minutes=-1)) is None
    forged = jwt.encode({"sub": "1", "jti": "abc", "type": "access"}, "other-key", algorithm="HS256")
    assert decode_token(forged) is None
    assert decode_token("not-a-jwt") is None


def test_issue_resolve_and_revoke(db_session):
    user = _user(db_session)
    raw = token_service.issue_token(db_session, user)

    resolved = token_service.resolve_token(db_session, raw)
    assert resolved is not None
    resolved_user, row = resolved
    assert resolved_user.id == user.id
    assert row.name == "auth_token"

    assert token_service.revoke_all(db_session, user) == 1
    assert token_service.resolve_token(db_session, raw) is None
    assert db_session.query(AccessToken).count() == 0


def test_token_for_another_subject_is_rejected(db_session):
    owner = _user(db_session)
    other = _user(db_session, email="other@mail.com")
    raw = token_service.issue_token(db_session, owner)
    jti = decode_token(raw)["jti"]

    tampered = create_token(str(other.id), jti)
    assert token_service.resolve_token(db_session, tampered) is None


def test_issue_token_uses_configured_expiry(db_session, monkeypatch):
    monkeypatch.setattr(settings, "access_token_expire_minutes", 10)
    raw = token_service.issue_token(db_session, _user(db_session))
    assert "exp" in decode_token(raw)
