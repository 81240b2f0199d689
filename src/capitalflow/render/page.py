from html import escape

from capitalflow.render.sinks import PageSinks

CHART_JS_CDN = "https://cdn.jsdelivr.net/npm/chart.js"

PAGE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{title}</title>
<script src="{chart_js}"></script>
</head>
<body class="bg-gray-50">
<nav class="flex items-center justify-between px-6 py-4">
<a href="/" class="text-xl font-bold">{title}</a>
<button id="mobile-menu-button" aria-expanded="false" aria-controls="mobile-menu">
<span class="hamburger">&#9776;</span><span class="close-icon" style="display:none">&times;</span>
</button>
<div id="mobile-menu" style="display:none">
<a href="#markets">Markets</a> <a href="#insights">Insights</a>
</div>
</nav>
<main>
<section id="markets">
<div class="card reveal">
<h3>Top Gainers</h3>
<table id="gainersTable"><thead><tr><th>Symbol</th><th>Price</th><th>Change</th></tr></thead>
<tbody>{gainers}</tbody></table>
</div>
<div class="card reveal">
<h3>Top Losers</h3>
<table id="losersTable"><thead><tr><th>Symbol</th><th>Price</th><th>Change</th></tr></thead>
<tbody>{losers}</tbody></table>
</div>
<div class="card reveal">
<h3>Market Breadth</h3>
<div id="breadthWidget" class="grid grid-cols-3">{breadth}</div>
</div>
<div class="card reveal">
<h3>Market Performance</h3>
<div class="chart-container">{chart}</div>
</div>
</section>
<section id="insights">
<div class="card reveal">
<h3>Latest News</h3>
<ul id="newsFeedList">{news}</ul>
</div>
<div class="card reveal">
<h3>From the Blog</h3>
<div id="blogsContainer">{blogs}</div>
</div>
</section>
</main>
<script>
(function () {{
  var cfg = document.getElementById("marketChartConfig");
  var canvas = document.getElementById("marketChart");
  if (cfg && canvas && window.Chart) {{ new Chart(canvas, JSON.parse(cfg.textContent)); }}

  var button = document.getElementById("mobile-menu-button");
  var menu = document.getElementById("mobile-menu");
  if (button && menu) {{
    button.addEventListener("click", function () {{
      var open = button.getAttribute("aria-expanded") !== "true";
      button.setAttribute("aria-expanded", String(open));
      menu.style.display = open ? "block" : "none";
      button.querySelector(".hamburger").style.display = open ? "none" : "inline";
      button.querySelector(".close-icon").style.display = open ? "inline" : "none";
    }});
  }}
}})();
</script>
</body>
</html>
"""


def render_page(sinks: PageSinks, title: str = "Capital Flow Advisory") -> str:
    """Compose the dashboard document from already rendered sinks."""
    return PAGE_TEMPLATE.format(
        title=escape(title),
        chart_js=CHART_JS_CDN,
        gainers=sinks.gainers.html,
        losers=sinks.losers.html,
        breadth=sinks.breadth.html,
        chart=sinks.chart.html,
        news=sinks.news.html,
        blogs=sinks.blogs.html,
    )
