"""
Tests for the scalar codecs.
"""
import datetime
import json
import logging

import numpy as np
import pytest
from entitymap import codecs
from entitymap.codecs import ARRAY_TYPE, BOOLEAN_TYPE, DATE_TYPE, OBJECT_TYPE
from entitymap.codecs import DatetimeCodec, PassthroughCodec, StringCodec

UTC = datetime.timezone.utc


class TestPassthroughCodec:
    """Default codec stores and returns values untouched"""

    @pytest.fixture
    def codec(self):
        return PassthroughCodec()

    def test_encode(self, codec, value_dict):
        for value in value_dict.values():
            mapped = codec.encode(value)
            assert mapped.value is value
            assert mapped.get('type') is None

    def test_decode_ignores_hint(self, codec):
        assert codec.decode('true', BOOLEAN_TYPE) == 'true'
        assert codec.decode(42) == 42
        assert codec.decode(None) is None


class TestStringCodecEncode:
    """Shape detection when writing to character columns"""

    @pytest.fixture
    def codec(self):
        return StringCodec()

    def test_boolean(self, codec, value_dict):
        assert codec.encode(value_dict['bool_true']) == {'value': 'true', 'type': BOOLEAN_TYPE}
        assert codec.encode(value_dict['bool_false']) == {'value': 'false', 'type': BOOLEAN_TYPE}
        assert codec.encode(value_dict['numpy_bool']) == {'value': 'true', 'type': BOOLEAN_TYPE}

    def test_date(self, codec, value_dict):
        mapped = codec.encode(value_dict['aware_datetime'])
        assert mapped.value == '2020-01-02T03:04:05.678Z'
        assert mapped.type == DATE_TYPE

        assert codec.encode(value_dict['date_value']).value == '2023-05-15T00:00:00.000Z'
        assert codec.encode(value_dict['datetime_value']).value == '2023-05-15T14:30:45.000Z'
        assert codec.encode(value_dict['pandas_timestamp']).value == '2020-01-02T03:04:05.678Z'
        assert codec.encode(value_dict['numpy_datetime']).value == '2020-01-02T03:04:05.678Z'

    def test_missing_date_is_null(self, codec):
        mapped = codec.encode(np.datetime64('NaT'))
        assert mapped.value is None
        assert mapped.get('type') is None

    def test_array(self, codec, value_dict):
        assert codec.encode(value_dict['list_value']) == {'value': '[1,2,3]', 'type': ARRAY_TYPE}
        assert codec.encode(value_dict['tuple_value']) == {'value': '["a","b"]', 'type': ARRAY_TYPE}
        assert codec.encode(value_dict['numpy_array']) == {'value': '[1,2,3]', 'type': ARRAY_TYPE}
        assert codec.encode([]) == {'value': '[]', 'type': ARRAY_TYPE}

    def test_object(self, codec, value_dict):
        assert codec.encode(value_dict['dict_value']) == {'value': '{"x":1}', 'type': OBJECT_TYPE}
        mapped = codec.encode(value_dict['nested_value'])
        assert mapped.type == OBJECT_TYPE
        assert json.loads(mapped.value) == value_dict['nested_value']

    def test_object_with_embedded_values(self, codec):
        """Dates and NumPy scalars inside containers serialize as JSON values"""
        mapped = codec.encode({'when': datetime.date(2023, 5, 15), 'n': np.int64(3), 'f': np.float32(0.5)})
        assert json.loads(mapped.value) == {'when': '2023-05-15T00:00:00.000Z', 'n': 3, 'f': 0.5}

    def test_scalars_unchanged(self, codec, value_dict):
        for key in ('string_value', 'int_value', 'float_value', 'decimal_value', 'null_value'):
            mapped = codec.encode(value_dict[key])
            assert mapped.value is value_dict[key]
            assert 'type' not in mapped

    def test_unserializable_is_logged(self, codec, caplog):
        """Containers JSON cannot represent fall back to their text form"""
        value = [object()]
        with caplog.at_level(logging.ERROR, logger='entitymap.codecs'):
            mapped = codec.encode(value)
        assert mapped.value == str(value)
        assert 'type' not in mapped
        assert 'Error serializing list' in caplog.text


class TestStringCodecDecode:
    """Rebuilding values from character columns"""

    @pytest.fixture
    def codec(self):
        return StringCodec()

    @pytest.mark.parametrize('value', [True, False, [1, 2, 3], {'x': 1}, {'a': [1, {'b': None}]}, []])
    def test_round_trip(self, codec, value):
        mapped = codec.encode(value)
        assert codec.decode(mapped.value, mapped.type) == value

    def test_date_round_trip(self, codec, value_dict):
        original = value_dict['aware_datetime']
        mapped = codec.encode(original)
        decoded = codec.decode(mapped.value, mapped.type)
        assert isinstance(decoded, datetime.datetime)
        assert decoded == original

    def test_no_hint(self, codec):
        assert codec.decode('[1,2,3]') == '[1,2,3]'
        assert codec.decode('true', None) == 'true'

    def test_unknown_hint(self, codec):
        assert codec.decode('{"x":1}', 'z') == '{"x":1}'

    @pytest.mark.parametrize(('value', 'hint', 'label'), [
        ('{bad json', OBJECT_TYPE, 'OBJECT'),
        ('[1,2', ARRAY_TYPE, 'ARRAY'),
        ('yes', BOOLEAN_TYPE, 'BOOLEAN'),
        ('someday', DATE_TYPE, 'DATE'),
    ])
    def test_malformed_returns_raw(self, codec, caplog, value, hint, label):
        """Parse failures are logged and the stored text comes back unchanged"""
        with caplog.at_level(logging.ERROR, logger='entitymap.codecs'):
            assert codec.decode(value, hint) == value
        assert f'Error parsing {label}: {value}' in caplog.text

    def test_non_text_with_hint(self, codec):
        assert codec.decode(None, OBJECT_TYPE) is None
        assert codec.decode(True, BOOLEAN_TYPE) is True


class TestDatetimeCodecs:
    """Fixed-pattern datetime columns"""

    def test_timestamp(self):
        mapped = codecs.TIMESTAMP.encode('2020-01-02T03:04:05.678Z')
        assert mapped == {'value': '2020-01-02 03:04:05.678'}
        assert codecs.TIMESTAMP.decode('2020-01-02 03:04:05.678') == '2020-01-02 03:04:05.678'

    def test_seconddate(self, value_dict):
        assert codecs.SECONDDATE.encode(value_dict['aware_datetime']).value == '2020-01-02 03:04:05'
        assert codecs.SECONDDATE.decode('2020-01-02 03:04:05') == '2020-01-02 03:04:05'

    def test_date(self, value_dict):
        assert codecs.DATE.encode(value_dict['date_value']).value == '2023-05-15'
        assert codecs.DATE.decode('2023-05-15') == '2023-05-15'

    def test_time(self, value_dict):
        assert codecs.TIME.encode(value_dict['datetime_value']).value == '14:30:45'
        assert codecs.TIME.encode(datetime.time(6, 7, 8)).value == '06:07:08'
        assert codecs.TIME.decode('14:30:45') == '14:30:45'

    def test_utc_normalization(self):
        """DATE, SECONDDATE and TIMESTAMP convert to UTC"""
        value = '2020-01-02T23:30:00-02:00'
        assert codecs.DATE.encode(value).value == '2020-01-03'
        assert codecs.SECONDDATE.encode(value).value == '2020-01-03 01:30:00'
        assert codecs.TIMESTAMP.encode(value).value == '2020-01-03 01:30:00.000'

    def test_time_keeps_wall_clock(self):
        """TIME does not convert to UTC"""
        assert codecs.TIME.encode('2020-01-02T23:30:00-02:00').value == '23:30:00'

    def test_epoch_millis(self):
        assert codecs.TIMESTAMP.encode(1577934245000).value == '2020-01-02 03:04:05.000'

    def test_decode_ignores_hint(self):
        assert codecs.TIMESTAMP.decode('2020-01-02 03:04:05.678', DATE_TYPE) == '2020-01-02 03:04:05.678'

    def test_decode_returns_string(self):
        """A native datetime from the driver comes back formatted"""
        value = datetime.datetime(2020, 1, 2, 3, 4, 5, 678000)
        assert codecs.TIMESTAMP.decode(value) == '2020-01-02 03:04:05.678'

    @pytest.mark.parametrize('codec', [codecs.TIMESTAMP, codecs.SECONDDATE, codecs.DATE, codecs.TIME])
    @pytest.mark.parametrize('value', [None, '', 0, False, True, 'not a date', [1, 2], b'\xff\xfe'])
    def test_invalid_is_null(self, codec, value):
        """Missing or unreadable values are stored and read as None"""
        assert codec.encode(value) == {'value': None}
        assert codec.decode(value) is None

    def test_custom_pattern(self):
        codec = DatetimeCodec('LONGDATE', 'YYYY-MM-DD HH:mm:ss.SSS')
        assert codec.encode('2020-01-02').value == '2020-01-02 00:00:00.000'
        assert repr(codec) == "DatetimeCodec('LONGDATE')"


class TestOutOfRangeDates:
    """Aware values that fall before year 1 in UTC never escape a codec"""

    @pytest.fixture
    def early(self):
        return datetime.datetime(1, 1, 1, 0, 30, tzinfo=datetime.timezone(datetime.timedelta(hours=1)))

    def test_datetime_codec_is_null(self, early):
        assert codecs.TIMESTAMP.encode(early) == {'value': None}
        assert codecs.DATE.decode(early) is None

    def test_string_codec_falls_back_to_text(self, early, caplog):
        with caplog.at_level(logging.ERROR, logger='entitymap.codecs'):
            mapped = codecs.STRING.encode(early)
        assert mapped.value == str(early)
        assert 'type' not in mapped
        assert 'Error serializing datetime' in caplog.text
