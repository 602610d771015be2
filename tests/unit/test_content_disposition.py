import pytest

from mtender_docs.documents.content_disposition import parse_content_disposition_filename


class TestExtendedFilename:
    def test_percent_decodes_utf8_value(self) -> None:
        header = "attachment; filename*=utf-8''report%20final.pdf"
        assert parse_content_disposition_filename(header) == "report final.pdf"

    def test_prefers_extended_over_plain(self) -> None:
        header = "attachment; filename=\"fallback.pdf\"; filename*=utf-8''report%20final.pdf"
        assert parse_content_disposition_filename(header) == "report final.pdf"

    def test_decodes_non_ascii_characters(self) -> None:
        header = "attachment; filename*=UTF-8''Caiet%20de%20sarcini%20%C8%99i%20anexe.docx"
        assert parse_content_disposition_filename(header) == "Caiet de sarcini și anexe.docx"

    def test_stops_at_next_parameter(self) -> None:
        header = "attachment; filename*=utf-8''a.pdf; size=10"
        assert parse_content_disposition_filename(header) == "a.pdf"

    def test_honours_declared_latin1_charset(self) -> None:
        header = "attachment; filename*=iso-8859-1''caf%E9.pdf"
        assert parse_content_disposition_filename(header) == "café.pdf"

    def test_unknown_charset_falls_back_to_utf8(self) -> None:
        header = "attachment; filename*=x-unknown''a%20b.pdf"
        assert parse_content_disposition_filename(header) == "a b.pdf"


class TestPlainFilename:
    def test_quoted_value(self) -> None:
        header = 'attachment; filename="anunt de participare.pdf"'
        assert parse_content_disposition_filename(header) == "anunt de participare.pdf"

    def test_unquoted_value(self) -> None:
        assert parse_content_disposition_filename("inline; filename=spec.doc") == "spec.doc"

    def test_escaped_quote(self) -> None:
        header = 'attachment; filename="the \\"final\\" one.pdf"'
        assert parse_content_disposition_filename(header) == 'the "final" one.pdf'


class TestMissingFilename:
    @pytest.mark.parametrize("header", [None, "", "attachment", "inline; size=10"])
    def test_returns_none(self, header: str | None) -> None:
        assert parse_content_disposition_filename(header) is None
