from .renderer import render_preview_html, render_preview_page

__all__ = ["render_preview_html", "render_preview_page"]
