"""
Unit Tests for the file URL builder
"""

from urllib.parse import parse_qs, urlsplit

from bandvault.domain.file_access.url_builder import build_file_url, encode_uri_component


class TestEncodeUriComponent:
    def test_slashes_and_spaces_are_encoded(self):
        assert encode_uri_component("bands/a b/c") == "bands%2Fa%20b%2Fc"

    def test_unreserved_marks_are_kept(self):
        assert encode_uri_component("a-b_c.d!e~f*g'h(i)") == "a-b_c.d!e~f*g'h(i)"

    def test_reserved_query_characters_are_encoded(self):
        assert encode_uri_component("a&b=c?d#e+f") == "a%26b%3Dc%3Fd%23e%2Bf"


class TestBuildFileUrl:
    def test_exact_format(self):
        url = build_file_url(
            "https://project.supabase.co",
            "bands/band-a/charts/song-1/file.pdf",
            "tok-123",
        )
        assert url == (
            "https://project.supabase.co/functions/v1/serve-file-inline"
            "?path=bands%2Fband-a%2Fcharts%2Fsong-1%2Ffile.pdf&token=tok-123"
        )

    def test_trailing_slash_on_base_is_ignored(self):
        assert build_file_url("https://h/", "p", "t") == build_file_url("https://h", "p", "t")

    def test_query_decodes_back_to_inputs(self):
        path = "bands/b&1/charts/s 1/f=1.pdf"
        query = parse_qs(urlsplit(build_file_url("https://h", path, "t k")).query)
        assert query["path"] == [path]
        assert query["token"] == ["t k"]
