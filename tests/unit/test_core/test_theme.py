from core.theme import CATEGORY_COLORS, build_css, category_rgb, get_page_config, plotly_template


def test_category_rgb():
    assert category_rgb("safe") == [5, 150, 105]
    assert category_rgb("hazardous") == [220, 38, 38]


def test_every_category_has_color():
    assert set(CATEGORY_COLORS) == {"safe", "moderate", "hazardous"}


def test_build_css():
    assert "#0f172a" in build_css(dark=True)
    assert "#f8fafc" in build_css(dark=False)
    assert "#0369a1" in build_css()


def test_page_config():
    config = get_page_config("Calculator")
    assert config["page_title"] == "Calculator | HMPI Analyzer"
    assert plotly_template(True) == "plotly_dark"
