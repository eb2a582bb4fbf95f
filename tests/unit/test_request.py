"""
Unit tests for request descriptors.
"""

from helloserver.http.request import make_request


class TestMakeRequest:
    """Tests for building descriptors by hand."""

    def test_defaults(self):
        """Test the default descriptor."""
        request = make_request()

        assert request["method"] == "GET"
        assert request["path"] == "/"
        assert request["query_string"] == ""
        assert request["version"] == "HTTP/1.1"
        assert request["headers"] == {}
        assert request["body"] == b""

    def test_normalizes_method_and_headers(self):
        """Test that method is uppercased and header names lowercased."""
        request = make_request("post", "/x", headers={"Content-Type": "text/plain"})

        assert request["method"] == "POST"
        assert request["headers"] == {"content-type": "text/plain"}

    def test_path_untouched(self):
        """Test that the path is stored exactly as given."""
        assert make_request("GET", "/Potato/")["path"] == "/Potato/"

    def test_fresh_dict_each_call(self):
        """Test that descriptors never share header dicts."""
        headers = {"Host": "localhost"}
        first = make_request(headers=headers)
        second = make_request(headers=headers)

        first["headers"]["x-extra"] = "1"

        assert "x-extra" not in second["headers"]
        assert headers == {"Host": "localhost"}
