import logging

import pytest

from hls_parser import attributes
from hls_parser.parser_configuration import ParserConfig

MODULE = "hls_parser.attributes"


@pytest.fixture
def config():
    return ParserConfig()


class TestConvert:
    @pytest.mark.parametrize(
        "text,expected",
        [
            ("3", 3),
            ("-7", -7),
            ("+7", 7),
            ("10.5", 10.5),
            (".5", 0.5),
            ("1e3", 1000.0),
            ("123456789", 123456789),
        ],
    )
    def test_numbers(self, text, expected):
        value = attributes.convert(text)

        assert value == expected
        assert type(value) is type(expected)

    def test_yes_and_no_are_bools(self):
        assert attributes.convert("YES") is True
        assert attributes.convert("NO") is False

    @pytest.mark.parametrize(
        "text", ["yes", "No", "VOD", "0x1234", "1.2.3", "nan", "inf", "", " 1"]
    )
    def test_other_text_is_unchanged(self, text):
        assert attributes.convert(text) == text

    @pytest.mark.parametrize(
        "text", ["\u0663", "\uff16\uff14\uff10", "1\u0660", "1e\u0663"]
    )
    def test_non_ascii_digits_are_not_numbers(self, text):
        assert attributes.convert(text) == text

    def test_trailing_newline_is_not_a_number(self):
        assert attributes.convert("5\n") == "5\n"

    def test_long_text_is_never_coerced(self):
        assert attributes.convert("1234567890") == "1234567890"
        assert attributes.convert("YES" + " " * 7) == "YES       "


class TestStructured:
    def test_extinf(self):
        assert attributes.parse_structured("EXTINF", "6,a, b") == {
            "duration": 6,
            "title": "a, b",
        }

    def test_extinf_empty_title_is_left_out(self):
        assert attributes.parse_structured("EXTINF", "6.0,") == {"duration": 6.0}

    def test_extinf_without_comma_gives_nothing(self, caplog):
        caplog.set_level(logging.DEBUG, logger=MODULE)

        assert attributes.parse_structured("EXTINF", "6.0") is None
        assert "does not match its grammar" in caplog.text

    @pytest.mark.parametrize("name", ["EXT-X-BYTERANGE", "BYTERANGE"])
    def test_byterange(self, name):
        assert attributes.parse_structured(name, "100@20") == {
            "length": 100,
            "start": 20,
        }
        assert attributes.parse_structured(name, "100") == {"length": 100}

    @pytest.mark.parametrize(
        "value", ["", "@20", "a@b", "100@20@3", "\u0661\u0660@0", "100\n"]
    )
    def test_bad_byterange_gives_nothing(self, value):
        assert attributes.parse_structured("BYTERANGE", value) is None

    def test_resolution(self):
        assert attributes.parse_structured("RESOLUTION", "1920x1080") == {
            "width": 1920,
            "height": 1080,
        }

    @pytest.mark.parametrize(
        "value",
        ["1920", "1920x", "x1080", "1920X1080", "\uff16\uff14\uff10x360", "640x360\n"],
    )
    def test_bad_resolution_gives_nothing(self, value):
        assert attributes.parse_structured("RESOLUTION", value) is None

    def test_unknown_name_gives_nothing(self):
        assert attributes.parse_structured("EXT-X-KEY", "METHOD=NONE") is None


class TestAttributeList:
    def test_quoted_values_keep_commas(self, config):
        payload = 'CODECS="avc1.64001f,mp4a.40.2",BANDWIDTH=800000'

        assert attributes.parse_attribute_list(payload, config) == {
            "codecs": "avc1.64001f,mp4a.40.2",
            "bandwidth": 800000,
        }

    def test_quoted_numbers_are_coerced(self, config):
        assert attributes.parse_attribute_list('CHANNELS="2"', config) == {
            "channels": 2,
        }

    def test_bad_structured_value_is_a_scalar(self, config):
        assert attributes.parse_attribute_list("RESOLUTION=hd", config) == {
            "resolution": "hd",
        }

    def test_text_without_pairs_is_skipped(self, config):
        assert attributes.parse_attribute_list("junk,A=1,more junk", config) == {
            "a": 1,
        }

    def test_no_pairs(self, config):
        assert attributes.parse_attribute_list("VOD", config) == {}


class TestParsePayload:
    def test_empty_payload_is_a_flag(self, config):
        assert attributes.parse_payload("EXT-X-ENDLIST", "", config) is True

    def test_structured_tag(self, config):
        assert attributes.parse_payload("EXTINF", "4,", config) == {"duration": 4}

    def test_attribute_list_tag(self, config):
        assert attributes.parse_payload(
            "EXT-X-START", "TIME-OFFSET=-4.5,PRECISE=YES", config
        ) == {"time_offset": -4.5, "precise": True}

    def test_scalar_tag(self, config):
        assert attributes.parse_payload("EXT-X-VERSION", "7", config) == 7
        assert (
            attributes.parse_payload(
                "EXT-X-PROGRAM-DATE-TIME", "2010-02-19T14:54:23.031+08:00", config
            )
            == "2010-02-19T14:54:23.031+08:00"
        )
