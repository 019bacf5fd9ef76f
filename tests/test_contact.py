# tests/test_contact.py
import pytest

from sdk.contact import CONFIRMATION, ContactFormError, submit_contact


def test_valid_contact_request():
    assert submit_contact({"email": "alice@example.com", "message": "Hello"}) == CONFIRMATION


def test_message_at_limit_is_accepted():
    assert submit_contact({"email": "a@b.fr", "message": "x" * 300}) == CONFIRMATION


@pytest.mark.parametrize("data, field", [
    ({"email": "not-an-email", "message": "Hello"}, "email"),
    ({"email": "", "message": "Hello"}, "email"),
    ({"message": "Hello"}, "email"),
    ({"email": "alice@example.com", "message": ""}, "message"),
    ({"email": "alice@example.com", "message": "x" * 301}, "message"),
    ({"email": "alice@example.com"}, "message"),
])
def test_invalid_contact_request(data, field):
    with pytest.raises(ContactFormError) as exc:
        submit_contact(data)
    assert [e["loc"][0] for e in exc.value.errors] == [field]
