"""Tests for utils module"""

import math
from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest

from fieldform.utils import (
    format_number,
    format_timestamp,
    normalize_number,
    parse_number,
    retry,
    sanitize,
)


class TestSanitize:
    """Tests for sanitize function"""

    def test_sanitize_long_string(self):
        assert sanitize("sk-abc123def456xyz789") == "sk***89"

    def test_sanitize_custom_keep_chars(self):
        assert sanitize("my_secret_password", keep_chars=3) == "my_***ord"

    def test_sanitize_empty_values(self):
        assert sanitize(None) == "***"
        assert sanitize("") == "***"

    def test_sanitize_short_string(self):
        assert sanitize("abcd") == "***"
        assert sanitize("abcde") == "ab***de"


class TestRetry:
    """Tests for retry decorator"""

    def test_returns_on_first_success(self):
        func = Mock(return_value="ok")
        wrapped = retry(times=3)(func)

        assert wrapped() == "ok"
        assert func.call_count == 1

    def test_retries_then_succeeds(self):
        func = Mock(side_effect=[ConnectionError("down"), "ok"])
        wrapped = retry(times=3, initial_delay=1)(func)

        with patch("fieldform.utils.time.sleep") as mock_sleep:
            assert wrapped() == "ok"

        assert func.call_count == 2
        mock_sleep.assert_called_once_with(1)

    def test_exponential_backoff(self):
        func = Mock(side_effect=[ValueError("a"), ValueError("b"), "ok"])
        wrapped = retry(times=3, initial_delay=2)(func)

        with patch("fieldform.utils.time.sleep") as mock_sleep:
            wrapped()

        assert [c.args[0] for c in mock_sleep.call_args_list] == [2, 4]

    def test_fixed_backoff(self):
        func = Mock(side_effect=[ValueError("a"), ValueError("b"), "ok"])
        wrapped = retry(times=3, initial_delay=2, backoff="fixed")(func)

        with patch("fieldform.utils.time.sleep") as mock_sleep:
            wrapped()

        assert [c.args[0] for c in mock_sleep.call_args_list] == [2, 2]

    def test_raises_after_max_retries(self):
        func = Mock(side_effect=ConnectionError("down"))
        wrapped = retry(times=3)(func)

        with patch("fieldform.utils.time.sleep"):
            with pytest.raises(ConnectionError):
                wrapped()

        assert func.call_count == 3

    def test_unlisted_exception_is_not_retried(self):
        func = Mock(side_effect=KeyError("nope"))
        wrapped = retry(times=3, exceptions=(ConnectionError,))(func)

        with pytest.raises(KeyError):
            wrapped()

        assert func.call_count == 1

    def test_on_retry_callback(self):
        func = Mock(side_effect=[ValueError("a"), "ok"])
        on_retry = Mock()
        wrapped = retry(times=2, on_retry=on_retry)(func)

        with patch("fieldform.utils.time.sleep"):
            wrapped("arg", key="value")

        on_retry.assert_called_once()
        args, kwargs, error, attempt = on_retry.call_args.args
        assert args == ("arg",)
        assert kwargs == {"key": "value"}
        assert isinstance(error, ValueError)
        assert attempt == 1


class TestParseNumber:
    @pytest.mark.parametrize(
        "value, expected",
        [
            (450, 450.0),
            (12.5, 12.5),
            ("42", 42.0),
            ("  3.5", 3.5),
            ("-4", -4.0),
            ("+7", 7.0),
            ("12abc", 12.0),
            ("12.5 kV", 12.5),
            ("1e3", 1000.0),
            ("1e", 1.0),
            (".5", 0.5),
            ("5.", 5.0),
        ],
    )
    def test_parses_leading_number(self, value, expected):
        assert parse_number(value) == expected

    def test_infinity(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf

    @pytest.mark.parametrize("value", ["abc", "", "   ", "kV 12", True, False, None, [1], {"a": 1}])
    def test_not_a_number(self, value):
        assert math.isnan(parse_number(value))


class TestFormatNumber:
    def test_integral_float_drops_decimals(self):
        assert format_number(450.0) == "450"
        assert format_number(-3.0) == "-3"

    def test_fraction(self):
        assert format_number(0.5) == "0.5"
        assert format_number(7.25) == "7.25"

    def test_int(self):
        assert format_number(1000) == "1000"

    def test_special_values(self):
        assert format_number(math.nan) == "NaN"
        assert format_number(math.inf) == "Infinity"
        assert format_number(-math.inf) == "-Infinity"


def test_normalize_number():
    assert normalize_number(450.0) == 450
    assert isinstance(normalize_number(450.0), int)
    assert normalize_number(7.5) == 7.5
    assert normalize_number(3) == 3
    assert math.isinf(normalize_number(math.inf))


def test_format_timestamp():
    dt = datetime(2024, 3, 15, 10, 30, tzinfo=timezone.utc)
    assert format_timestamp(dt) == "2024-03-15T10:30:00+00:00"
    assert format_timestamp("2024-03-15 10:30:00+00:00") == "2024-03-15 10:30:00+00:00"
    assert format_timestamp(None) is None
