import pytest

from gitcred.core.errors import InvalidKeyError, InvalidValueError
from gitcred.core.models.credential import KNOWN_KEYS, Credential


@pytest.mark.ut
def test_empty_credential_has_nothing_set():
    cred = Credential()

    for key in KNOWN_KEYS:
        assert getattr(cred, key) is None
        assert key not in cred
    assert cred.extra == {}
    assert cred.is_empty()


@pytest.mark.ut
def test_empty_value_is_present():
    cred = Credential(password="")

    assert "password" in cred
    assert cred["password"] == ""
    assert cred != Credential()


@pytest.mark.ut
def test_item_access_routes_known_keys_to_attributes():
    cred = Credential()
    cred["host"] = "example.com"
    cred["wwwauth[]"] = "Basic realm=x"

    assert cred.host == "example.com"
    assert cred.extra == {"wwwauth[]": "Basic realm=x"}
    assert cred["wwwauth[]"] == "Basic realm=x"


@pytest.mark.ut
def test_missing_key_raises_key_error():
    cred = Credential()

    with pytest.raises(KeyError):
        _ = cred["username"]
    with pytest.raises(KeyError):
        _ = cred["custom"]
    assert cred.get("username") is None
    assert cred.get("custom", "dflt") == "dflt"


@pytest.mark.ut
def test_delete_known_and_extra():
    cred = Credential(username="me", extra={"custom": "v"})

    del cred["username"]
    del cred["custom"]

    assert cred.username is None
    assert cred.is_empty()
    with pytest.raises(KeyError):
        del cred["username"]


@pytest.mark.ut
@pytest.mark.parametrize("key", ["", "a=b", "a\nb"])
def test_setitem_rejects_bad_keys(key):
    cred = Credential()

    with pytest.raises(InvalidKeyError):
        cred[key] = "value"
    with pytest.raises(ValueError):
        cred[key] = "value"
    assert cred.is_empty()


@pytest.mark.ut
def test_items_in_wire_order():
    cred = Credential(
        url="https://example.com/x.git",
        username="me",
        protocol="https",
        extra={"zeta": "1", "alpha": "2"},
    )

    assert list(cred.items()) == [
        ("protocol", "https"),
        ("username", "me"),
        ("url", "https://example.com/x.git"),
        ("zeta", "1"),
        ("alpha", "2"),
    ]
    assert list(cred.to_dict()) == ["protocol", "username", "url", "zeta", "alpha"]


@pytest.mark.ut
def test_equality_depends_on_extra_order():
    a = Credential(extra={"x": "1", "y": "2"})
    b = Credential(extra={"y": "2", "x": "1"})

    assert a != b
    assert a == Credential(extra={"x": "1", "y": "2"})
    assert a != object()


@pytest.mark.ut
def test_copy_is_independent():
    cred = Credential(host="a", extra={"k": "v"})
    dup = cred.copy()

    dup.host = "b"
    dup.extra["k"] = "w"

    assert cred.host == "a"
    assert cred.extra == {"k": "v"}
    assert dup == Credential(host="b", extra={"k": "w"})


@pytest.mark.ut
def test_value_is_not_checked_on_assignment():
    cred = Credential()
    cred["password"] = "a\nb"

    with pytest.raises(InvalidValueError) as exc:
        cred.validate()
    assert exc.value.key == "password"


@pytest.mark.ut
def test_validate_rejects_reserved_extra_key():
    cred = Credential()
    cred.extra["host"] = "sneaky"

    with pytest.raises(InvalidKeyError):
        cred.validate()


@pytest.mark.ut
def test_validate_accepts_clean_credential():
    Credential(protocol="https", password="", extra={"k": "a=b"}).validate()
