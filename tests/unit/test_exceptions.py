"""
Parse error hierarchy tests: attributes, messages, serialization and the
structured log entry each error emits.
"""

import pytest
from structlog.testing import capture_logs

from interpay.utils.exceptions import (
    REDACTED, ErrorSeverity, InvalidValueError, MissingFieldError, ParseError,
    safe_str
)

pytestmark = pytest.mark.unit


class TestMissingFieldError:

    def test_attributes(self):
        error = MissingFieldError('Sku')

        assert error.key == 'Sku'
        assert error.error_code == 'MISSING_FIELD'
        assert error.severity == ErrorSeverity.MEDIUM
        assert error.context == {'field': 'Sku'}

    def test_message(self):
        error = MissingFieldError('ConsumerDuty')

        assert str(error) == 'Missing required field: ConsumerDuty'
        assert error.message == str(error)

    def test_is_parse_error(self):
        with pytest.raises(ParseError):
            raise MissingFieldError('Name')


class TestInvalidValueError:

    def test_attributes(self):
        error = InvalidValueError('us', 'ISO 3166-1-alpha-2 country code')

        assert error.value == 'us'
        assert error.expected == 'ISO 3166-1-alpha-2 country code'
        assert error.error_code == 'INVALID_VALUE'
        assert error.context == {'expected': 'ISO 3166-1-alpha-2 country code', 'value': "'us'"}

    def test_message_names_expected_and_value(self):
        error = InvalidValueError('13', 'Month')

        assert str(error) == "Invalid value for Month: '13'"

    def test_none_value(self):
        error = InvalidValueError(None, 'array for Items')

        assert error.value is None
        assert str(error) == 'Invalid value for array for Items: None'

    def test_redacted_value(self):
        error = InvalidValueError(REDACTED, 'card number')

        assert error.value == REDACTED
        assert "'REDACTED'" in str(error)

    def test_long_value_truncated_in_context(self):
        value = 'x' * 500
        error = InvalidValueError(value, 'decimal value')

        assert error.value == value
        assert error.context['value'].endswith('... [TRUNCATED]')
        assert len(error.context['value']) < len(value)
        assert len(error.message) < len(value)

    def test_to_dict(self):
        error = InvalidValueError('abc', 'number')
        result = error.to_dict()

        assert result['error']['code'] == 'INVALID_VALUE'
        assert result['error']['message'] == "Invalid value for number: 'abc'"
        assert result['error']['severity'] == 'medium'
        assert result['error']['context'] == {'expected': 'number', 'value': "'abc'"}
        assert result['error']['timestamp'] == error.timestamp.isoformat()


class TestErrorLogging:
    """Each parse error emits one structured warning."""

    def test_missing_field_logged(self):
        with capture_logs() as logs:
            MissingFieldError('Sku')

        assert len(logs) == 1
        entry = logs[0]
        assert entry['event'] == 'Missing required field: Sku'
        assert entry['log_level'] == 'warning'
        assert entry['event_type'] == 'parse_error'
        assert entry['exception_class'] == 'MissingFieldError'
        assert entry['error_code'] == 'MISSING_FIELD'
        assert entry['context'] == {'field': 'Sku'}

    def test_severity_selects_level(self):
        with capture_logs() as logs:
            ParseError('boom', 'TEST', severity=ErrorSeverity.HIGH)
            ParseError('note', 'TEST', severity=ErrorSeverity.LOW)

        assert [entry['log_level'] for entry in logs] == ['error', 'info']


class TestSafeStr:

    def test_strings_are_quoted(self):
        assert safe_str('abc') == "'abc'"

    def test_non_strings(self):
        assert safe_str(12) == '12'
        assert safe_str(None) == 'None'
        assert safe_str(['a']) == "['a']"

    def test_truncation(self):
        result = safe_str('y' * 200, max_length=20)

        assert result == "'" + 'y' * 19 + '... [TRUNCATED]'

    def test_unconvertible_value(self):
        class Broken:
            def __str__(self):
                raise RuntimeError('no')

        assert safe_str(Broken()) == '<unable to convert to string>'
