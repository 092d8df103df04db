import http.client
import json
import threading
import urllib.request

import pytest

from nekosys.servx import HELLO, location_message, make_server


@pytest.fixture
def base_url(tmp_path):
    (tmp_path / "index.html").write_text("<h1>index</h1>", encoding="utf-8")
    public = tmp_path / "public"
    (public / "sub").mkdir(parents=True)
    (public / "style.css").write_text("body {}", encoding="utf-8")
    (public / "sub" / "index.html").write_text("<p>sub</p>", encoding="utf-8")
    server = make_server(tmp_path, "127.0.0.1", 0)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    host, port = server.server_address[:2]
    yield f"http://{host}:{port}"
    server.shutdown()
    server.server_close()


def _get(url):
    with urllib.request.urlopen(url, timeout=10) as response:
        return response.status, response.headers.get("Content-Type"), response.read()


def _raw_get(base_url, path):
    host_port = base_url.removeprefix("http://")
    connection = http.client.HTTPConnection(host_port, timeout=10)
    connection.request("GET", path)
    response = connection.getresponse()
    body = response.read()
    connection.close()
    return response.status, body


def test_location_message_is_json():
    message = location_message("192.168.1.5", 4989)
    assert json.loads(message) == {"location": "http://192.168.1.5:4989"}
    assert " " not in message


def test_api_hello(base_url):
    status, _, body = _get(base_url + "/api/hello")
    assert status == 200
    assert body.decode() == HELLO


def test_root_serves_index(base_url):
    status, content_type, body = _get(base_url + "/")
    assert status == 200
    assert body == b"<h1>index</h1>"
    assert content_type.startswith("text/html")


def test_public_file(base_url):
    status, content_type, body = _get(base_url + "/public/style.css")
    assert status == 200
    assert body == b"body {}"
    assert content_type.startswith("text/css")


def test_public_directory_serves_its_index(base_url):
    _, _, body = _get(base_url + "/public/sub/")
    assert body == b"<p>sub</p>"


def test_unknown_path_is_not_found(base_url):
    status, body = _raw_get(base_url, "/nothing")
    assert status == 404
    assert body != HELLO.encode()
    assert _raw_get(base_url, "/api/hello") == (200, HELLO.encode())


def test_parent_traversal_is_refused(base_url):
    status, _ = _raw_get(base_url, "/public/../index.html")
    assert status == 404