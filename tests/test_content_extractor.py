from bs4 import BeautifulSoup

from docs_loader.parser.content_extractor import extract_content

PAGE = """
<html>
  <head><title>Docs</title><style>body { color: red; }</style></head>
  <body>
    <header><h1>Site header</h1></header>
    <nav><a href="/x">Nav link</a><p>menu entry</p></nav>
    <div class="sidebar"><p>sidebar entry</p></div>
    <main>
      <h1>Getting started</h1>
      <p>Intro   text.</p>
      <h2>Install</h2>
      <ul><li>Step one</li><li>   </li></ul>
      <pre><code>npm install</code></pre>
      <script>console.log("x")</script>
    </main>
    <footer><p>Copyright</p></footer>
  </body>
</html>
"""


def soup_of(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def test_extracts_structured_text():
    assert extract_content(soup_of(PAGE)) == (
        "# Getting started\n\n"
        "## Install\n\n"
        "Intro text.\n\n"
        "- Step one\n"
        "`npm install`\n\n"
    )


def test_boilerplate_is_dropped():
    text = extract_content(soup_of(PAGE))
    for fragment in ("Site header", "menu entry", "sidebar entry", "Copyright", "console.log", "color"):
        assert fragment not in text


def test_input_tree_is_not_modified():
    soup = soup_of(PAGE)
    extract_content(soup)
    assert soup.find("nav") is not None
    assert soup.find("a", href="/x") is not None


def test_title_falls_back_to_document_title():
    text = extract_content(soup_of("<html><head><title>Reference</title></head><body><p>Body</p></body></html>"))
    assert text == "# Reference\n\nBody\n\n"


def test_duplicate_headings_are_emitted_once():
    markup = """
    <body><article>
      <h1>API</h1>
      <h2>Overview</h2>
      <section><h3>Overview</h3><p>Details</p></section>
    </article></body>
    """
    text = extract_content(soup_of(markup))
    assert text.count("Overview") == 1
    assert "## Overview\n\n" in text
    assert "### Overview" not in text


def test_heading_marker_matches_level():
    markup = "<body><h1>T</h1><h2>Two</h2><h4>Four</h4><h6>Six</h6></body>"
    text = extract_content(soup_of(markup))
    assert text.splitlines()[::2] == ["# T", "## Two", "#### Four", "###### Six"]


def test_main_region_is_preferred_over_body():
    markup = "<body><p>outside</p><article><h1>Inside</h1><p>inside</p></article></body>"
    text = extract_content(soup_of(markup))
    assert "inside" in text
    assert "outside" not in text


def test_inline_code_and_preformatted_text():
    markup = "<body><p>Run <code>make</code></p><pre>line 1\n  line 2\n</pre></body>"
    text = extract_content(soup_of(markup))
    assert text == "Run make\n\n`make`\n\n`line 1\n  line 2`\n\n"


def test_empty_document_gives_empty_text():
    assert extract_content(soup_of("")) == ""
    assert extract_content(soup_of("<body><p> </p><li></li></body>")) == ""


def test_output_is_deterministic():
    assert extract_content(soup_of(PAGE)) == extract_content(soup_of(PAGE))
