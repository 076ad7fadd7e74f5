import pytest

from rcckit.web_assets import get_web_index_html


def test_page_is_html_document():
    html = get_web_index_html()
    assert html.lstrip().startswith("<!DOCTYPE html>")
    assert html.rstrip().endswith("</html>")


def test_page_title():
    assert "<title>Silvus Mock Web UI</title>" in get_web_index_html()


def test_page_uses_server_routes():
    html = get_web_index_html()
    assert "fetch('/status')" in html
    assert "'/streamscape_api'" in html


def test_page_triggers_rpc_methods():
    html = get_web_index_html()
    for method in ("freq", "power_dBm", "zeroize", "radio_reset", "factory_reset"):
        assert f"'{method}'" in html


@pytest.mark.parametrize(
    "element",
    [
        "frequency",
        "power",
        "available",
        "blackout",
        "profiles",
        "log",
        "freq-input",
        "power-input",
        "set-freq",
        "set-power",
        "refresh-status",
        "zeroize",
        "radio-reset",
        "factory-reset",
    ],
)
def test_each_element_id_appears_once(element):
    assert get_web_index_html().count(f'id="{element}"') == 1


def test_power_input_limits():
    html = get_web_index_html()
    assert 'min="0" max="39" value="30"' in html


def test_default_frequency_input():
    assert 'id="freq-input" type="text" value="4700.0"' in get_web_index_html()