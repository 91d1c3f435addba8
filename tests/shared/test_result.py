"""Tests for shared/result.py."""

import pytest

from shared.exceptions import NotFoundError
from shared.result import Ok, Err


class TestOk:
    def test_ok_flags(self):
        """Ok should report success."""
        result = Ok(42)
        assert result.is_ok() is True
        assert result.is_err() is False

    def test_ok_unwrap(self):
        """Ok.unwrap should return the value."""
        assert Ok("value").unwrap() == "value"
        assert Ok("value").unwrap_or("default") == "value"

    def test_ok_equality(self):
        """Ok values with equal payloads should be equal."""
        assert Ok(1) == Ok(1)
        assert Ok(1) != Ok(2)


class TestErr:
    def test_err_flags(self):
        """Err should report failure."""
        result = Err(NotFoundError("missing"))
        assert result.is_ok() is False
        assert result.is_err() is True

    def test_err_unwrap_raises_error(self):
        """Err.unwrap should raise the carried error."""
        error = NotFoundError("missing")
        with pytest.raises(NotFoundError) as exc_info:
            Err(error).unwrap()
        assert exc_info.value is error

    def test_err_unwrap_or(self):
        """Err.unwrap_or should return the default."""
        assert Err(NotFoundError("missing")).unwrap_or("default") == "default"
