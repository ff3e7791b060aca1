from concurrent.futures import ThreadPoolExecutor

from docs_loader.crawler.frontier import CrawlFrontier
from docs_loader.crawler.models import CrawlState

ORIGIN = "https://docs.example"


def make_frontier(max_depth: int = 2, max_pages=None) -> CrawlFrontier:
    return CrawlFrontier(CrawlState(origin=ORIGIN, max_depth=max_depth, max_pages=max_pages))


def test_admits_url_once():
    frontier = make_frontier()
    assert frontier.admit(f"{ORIGIN}/a", 0) is True
    assert frontier.admit(f"{ORIGIN}/a", 0) is False
    assert frontier.admit(f"{ORIGIN}/a", 1) is False
    assert len(frontier) == 1


def test_depth_bound_is_inclusive():
    frontier = make_frontier(max_depth=2)
    assert frontier.admit(f"{ORIGIN}/two", 2) is True
    assert frontier.admit(f"{ORIGIN}/three", 3) is False
    # refused URLs are not recorded
    assert not frontier.is_visited(f"{ORIGIN}/three")
    assert frontier.admit(f"{ORIGIN}/three", 1) is True


def test_refuses_other_origins():
    frontier = make_frontier()
    assert frontier.admit("https://other.example/a", 0) is False
    assert frontier.admit("ftp://docs.example/a", 0) is False
    assert len(frontier) == 0


def test_normalized_duplicates_are_refused():
    frontier = make_frontier()
    assert frontier.admit("https://DOCS.example", 0) is True
    assert frontier.admit("https://docs.example/", 0) is False
    assert frontier.is_visited("https://docs.example")


def test_page_limit():
    frontier = make_frontier(max_pages=2)
    assert frontier.admit(f"{ORIGIN}/1", 0)
    assert frontier.admit(f"{ORIGIN}/2", 0)
    assert not frontier.admit(f"{ORIGIN}/3", 0)


def test_admit_is_atomic_across_threads():
    frontier = make_frontier()
    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda _: frontier.admit(f"{ORIGIN}/race", 0), range(200)))
    assert results.count(True) == 1


def test_default_port_is_the_same_url():
    frontier = make_frontier()
    assert frontier.admit("https://docs.example:443/x", 0) is True
    assert frontier.admit("https://docs.example/x", 0) is False
    assert frontier.admit("https://docs.example:8443/x", 0) is False
