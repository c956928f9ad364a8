"""Tests for SecretBuffer: zeroing and redaction."""
from pdnd_voucher.sensitive import SecretBuffer


def test_str_is_utf8_encoded():
    assert SecretBuffer("pässword").reveal() == "pässword".encode("utf-8")


def test_empty_and_none_are_falsy():
    assert not SecretBuffer()
    assert not SecretBuffer("")
    assert SecretBuffer("x")


def test_clear_zeroes_and_empties():
    s = SecretBuffer(b"secret")
    s.clear()
    assert s.cleared
    assert len(s) == 0
    assert s.reveal() == b""


def test_context_manager_clears_on_exception():
    s = SecretBuffer("secret")
    try:
        with s:
            raise RuntimeError("boom")
    except RuntimeError:
        pass
    assert s.cleared


def test_copy_is_independent():
    original = SecretBuffer("secret")
    copy = SecretBuffer(original)
    copy.clear()
    assert original.reveal() == b"secret"


def test_repr_hides_value():
    assert "secret" not in repr(SecretBuffer("secret"))
    assert repr(SecretBuffer()) == "SecretBuffer()"
