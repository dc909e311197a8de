"""Same-origin crawler that fetches rendered Sphinx pages as markup text."""

import logging
import re
from collections import deque
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urldefrag, urljoin, urlparse

import requests
from bs4 import BeautifulSoup, Tag

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "mcp-sphinx-docs/1.0.0"

# Main content containers of common Sphinx themes, most specific first
CONTENT_SELECTORS = [
    ".document .body",
    ".document .documentwrapper .bodywrapper .body",
    ".rst-content",
    "main",
    ".content",
]

HEADING_UNDERLINES = {"h1": "=", "h2": "-", "h3": "~", "h4": "^", "h5": '"', "h6": "'"}
BLOCK_TAGS = ["h1", "h2", "h3", "h4", "h5", "h6", "p", "pre", "ul", "ol"]


@dataclass
class CrawlerConfig:
    """Configuration for site crawling."""

    max_pages: int = 50
    max_depth: int = 3
    timeout: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT


@dataclass
class CrawledPage:
    """A fetched page reduced to markup text."""

    url: str
    title: str
    content: str
    path: str


class HtmlContentParser:
    """Turns rendered Sphinx HTML back into a markup approximation."""

    def clean_text(self, text: str) -> str:
        """Collapse whitespace and drop permalink markers."""
        if not text:
            return ""
        text = text.replace("¶", "")
        text = re.sub(r"\s+", " ", text)
        return text.strip()

    def extract_title(self, soup: BeautifulSoup) -> str:
        heading = soup.find("h1")
        if heading and self.clean_text(heading.get_text()):
            return self.clean_text(heading.get_text())
        if soup.title and self.clean_text(soup.title.get_text()):
            return self.clean_text(soup.title.get_text())
        return "Untitled"

    def extract_markup(self, soup: BeautifulSoup) -> str:
        """
        Rebuild markup text from the page's main content.

        Headings become underlined titles, ``pre`` blocks become literal
        blocks and list items become bullet or enumerated items.
        """
        container = None
        for selector in CONTENT_SELECTORS:
            container = soup.select_one(selector)
            if container is not None:
                break
        if container is None:
            container = soup.body or soup

        blocks = []
        for element in container.find_all(BLOCK_TAGS):
            if self._inside_handled_block(element, container):
                continue
            block = self._process_element(element)
            if block:
                blocks.append(block)

        return "\n\n".join(blocks) + "\n" if blocks else ""

    def _inside_handled_block(self, element: Tag, container: Tag) -> bool:
        """True when an ancestor below the container is itself emitted whole."""
        for parent in element.parents:
            if parent is container:
                return False
            if parent.name in ("pre", "ul", "ol"):
                return True
        return False

    def _process_element(self, element: Tag) -> str:
        if element.name in HEADING_UNDERLINES:
            title = self.clean_text(element.get_text())
            return f"{title}\n{HEADING_UNDERLINES[element.name] * len(title)}" if title else ""
        if element.name == "pre":
            return self._process_code_block(element)
        if element.name in ("ul", "ol"):
            return self._process_list(element)
        return self.clean_text(element.get_text())

    def _process_code_block(self, element: Tag) -> str:
        code = element.get_text().strip("\n")
        if not code.strip():
            return ""
        indented = "\n".join(f"    {line}" if line.strip() else "" for line in code.split("\n"))
        return f"::\n\n{indented}"

    def _process_list(self, element: Tag) -> str:
        prefix = "* " if element.name == "ul" else "#. "
        items = []
        for item in element.find_all("li", recursive=False):
            text = self.clean_text(item.get_text())
            if text:
                items.append(f"{prefix}{text}")
        return "\n".join(items)


class SphinxCrawler:
    """Breadth-first crawler restricted to the documentation's origin and path."""

    def __init__(self, config: CrawlerConfig = None):
        self.config = config or CrawlerConfig()
        self.parser = HtmlContentParser()
        self.headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        }

    def crawl(self, base_url: str) -> List[CrawledPage]:
        """
        Crawl a documentation site starting at base_url.

        Args:
            base_url: Entry page of the documentation

        Returns:
            Pages in visit order, at most ``max_pages`` of them
        """
        pages: List[CrawledPage] = []
        visited = set()
        queue = deque([(urldefrag(base_url)[0], 0)])

        while queue and len(pages) < self.config.max_pages:
            url, depth = queue.popleft()
            if url in visited or depth > self.config.max_depth:
                continue
            visited.add(url)

            logger.info(f"📖 Crawling: {url} (depth: {depth})")
            soup = self._fetch(url)
            if soup is None:
                continue

            pages.append(
                CrawledPage(
                    url=url,
                    title=self.parser.extract_title(soup),
                    content=self.parser.extract_markup(soup),
                    path=self.page_path(url),
                )
            )

            if depth < self.config.max_depth:
                for link in self.extract_links(soup, url, base_url):
                    if link not in visited:
                        queue.append((link, depth + 1))

        logger.info(f"Crawled {len(pages)} pages from {base_url}")
        return pages

    def _fetch(self, url: str) -> Optional[BeautifulSoup]:
        try:
            response = requests.get(url, headers=self.headers, timeout=self.config.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.warning(f"⚠️  Failed to crawl {url}: {e}")
            return None
        return BeautifulSoup(response.text, "html.parser")

    def extract_links(self, soup: BeautifulSoup, page_url: str, base_url: str) -> List[str]:
        """Links on the page that stay on the same origin below the base path."""
        base = urlparse(base_url)
        base_dir = base.path[: base.path.rfind("/") + 1] or "/"

        links = []
        for anchor in soup.find_all("a", href=True):
            link = urldefrag(urljoin(page_url, anchor["href"]))[0]
            if link == page_url:
                continue
            parsed = urlparse(link)
            if parsed.scheme not in ("http", "https"):
                continue
            if parsed.netloc != base.netloc or not parsed.path.startswith(base_dir):
                continue
            last_segment = parsed.path.rsplit("/", 1)[-1]
            if last_segment.endswith(".html") or "." not in last_segment:
                if link not in links:
                    links.append(link)
        return links

    def page_path(self, url: str) -> str:
        """URL path without leading slash and .html suffix."""
        path = re.sub(r"\.html?$", "", urlparse(url).path).strip("/")
        return path or "index"
