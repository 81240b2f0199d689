from capitalflow.render.page import render_page
from capitalflow.render.sinks import PageSinks


class TestRenderPage:
    def test_sink_contents_land_in_their_elements(self):
        sinks = PageSinks()
        sinks.gainers.append("<tr><td>AAA</td></tr>")
        sinks.breadth.append("<p>81%</p>")
        html = render_page(sinks, title="T & Co")
        assert "<tbody><tr><td>AAA</td></tr></tbody>" in html
        assert '<div id="breadthWidget" class="grid grid-cols-3"><p>81%</p></div>' in html
        assert "<title>T &amp; Co</title>" in html

    def test_mobile_menu_is_wired(self):
        html = render_page(PageSinks())
        assert 'id="mobile-menu-button" aria-expanded="false"' in html
        assert 'getElementById("mobile-menu-button")' in html
        assert 'button.addEventListener("click"' in html
        assert 'menu.style.display = open ? "block" : "none"' in html
