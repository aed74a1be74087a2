# ABOUTME: Tests for JSON/XML document decoding and format detection
# ABOUTME: Includes the XML element-to-mapping conventions and malformed input handling

import pytest

from hotel_converter.core.exceptions import DocumentDecodeError, HotelValidationError
from hotel_converter.extraction.decoding import DocumentFormat, decode_document


class TestDocumentFormat:
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("1-giata.json", DocumentFormat.JSON),
            ("1-giata.xml", DocumentFormat.XML),
            ("1-coah.JSON", DocumentFormat.JSON),
            ("1-coah.Xml", DocumentFormat.XML),
        ],
    )
    def test_extension_is_case_insensitive(self, filename, expected):
        assert DocumentFormat.from_filename(filename) is expected

    def test_unsupported_extension(self):
        with pytest.raises(HotelValidationError, match="Unsupported file type: csv"):
            DocumentFormat.from_filename("1-giata.csv")

    def test_missing_extension(self):
        with pytest.raises(HotelValidationError, match="Unsupported file type"):
            DocumentFormat.from_filename("1-giata")


class TestDecodeJson:
    def test_object(self):
        assert decode_document(b'{"name": "Hotel", "stars": 4}', DocumentFormat.JSON) == {"name": "Hotel", "stars": 4}

    def test_top_level_array(self):
        assert decode_document(b"[1, 2]", DocumentFormat.JSON) == [1, 2]

    @pytest.mark.parametrize("content", [b"{not json", b"", b"\xff\xfe"])
    def test_malformed(self, content):
        with pytest.raises(DocumentDecodeError):
            decode_document(content, DocumentFormat.JSON)


class TestDecodeXml:
    def test_root_children_become_mapping(self):
        content = b"<hotel><name>Grand</name><city>Berlin</city></hotel>"

        assert decode_document(content, DocumentFormat.XML) == {"name": "Grand", "city": "Berlin"}

    def test_repeated_elements_become_lists(self):
        content = b"""
            <hotel>
              <image><url>http://x/a.jpg</url></image>
              <image><url>http://x/b.jpg</url></image>
              <image><url>http://x/c.jpg</url></image>
            </hotel>
        """

        assert decode_document(content, DocumentFormat.XML) == {
            "image": [{"url": "http://x/a.jpg"}, {"url": "http://x/b.jpg"}, {"url": "http://x/c.jpg"}]
        }

    def test_attributes_and_text(self):
        content = b'<hotel id="7"><name lang="en">Grand</name><empty/></hotel>'

        assert decode_document(content, DocumentFormat.XML) == {
            "id": "7",
            "name": {"lang": "en", "": "Grand"},
            "empty": "",
        }

    def test_namespaces_use_local_names(self):
        content = b'<h:hotel xmlns:h="urn:hotel"><h:name>Grand</h:name></h:hotel>'

        assert decode_document(content, DocumentFormat.XML) == {"name": "Grand"}

    def test_comments_are_ignored(self):
        content = b"<hotel><!-- note --><name>Grand</name></hotel>"

        assert decode_document(content, DocumentFormat.XML) == {"name": "Grand"}

    @pytest.mark.parametrize("content", [b"<hotel><name>Grand</hotel>", b"", b"not xml"])
    def test_malformed(self, content):
        with pytest.raises(DocumentDecodeError):
            decode_document(content, DocumentFormat.XML)
