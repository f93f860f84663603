"""
HTML conversion utilities for NewsRank.
"""
import datetime
import html as html_lib
from typing import Optional
import mistune
import logging

# Configure logging
logger = logging.getLogger(__name__)

DEFAULT_CSS = """
        body {
            font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
            max-width: 1200px;
            margin: 0 auto;
            padding: 20px;
            line-height: 1.6;
            color: #333;
        }

        h1, h2, h3 {
            color: #1a1a1a;
            margin-top: 1.5em;
            margin-bottom: 0.5em;
        }

        a {
            color: #0066cc;
            text-decoration: none;
        }

        a:hover {
            text-decoration: underline;
        }

        table {
            border-collapse: collapse;
            width: 100%;
        }

        th, td {
            border-bottom: 1px solid #e9ecef;
            padding: 8px 12px;
            text-align: left;
        }

        hr {
            border: none;
            border-top: 1px solid #e9ecef;
            margin: 30px 0;
        }
"""

class HtmlConverter:
    """
    Converts Markdown reports to standalone HTML pages.
    """
    def __init__(self, css_file: Optional[str] = None):
        """
        Initialize the HtmlConverter.

        Args:
            css_file: Path to a CSS file to use instead of the built-in style
        """
        self.css_file = css_file
        self.css_content = self._load_css()
        self.markdown = mistune.create_markdown(escape=True, plugins=['table'])

    def _load_css(self) -> str:
        """
        Load CSS content from file.

        Returns:
            CSS content as string
        """
        if not self.css_file:
            return DEFAULT_CSS
        try:
            with open(self.css_file, 'r', encoding='utf-8') as f:
                return f.read()
        except FileNotFoundError:
            logger.warning(f"CSS file {self.css_file} not found, using default styles")
            return DEFAULT_CSS

    def convert(self, markdown_text: str, title: str = "NewsRank") -> str:
        """
        Convert Markdown text to a complete HTML document.

        Args:
            markdown_text: Markdown report
            title: Page title

        Returns:
            HTML document as a string
        """
        body = self.markdown(markdown_text)
        return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="generator" content="NewsRank">
    <meta name="date" content="{datetime.datetime.now().strftime('%Y-%m-%d')}">
    <title>{html_lib.escape(title)}</title>
    <style>
{self.css_content}
    </style>
</head>
<body>
{body}
</body>
</html>"""

