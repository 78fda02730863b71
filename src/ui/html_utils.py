"""Utilities for preparing HTML snippets before rendering in Streamlit."""
from html import escape
from textwrap import dedent


def html_block(template: str) -> str:
    """
    Normalize multi-line HTML so Streamlit doesn't treat it as Markdown code.

    Lines indented by four or more spaces would otherwise render as code
    blocks, so every line is dedented and left-stripped.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def section_header_html(title: str, subtitle: str = "") -> str:
    """Page section header with an optional subtitle line."""
    subtitle_html = f'<div class="section-subtitle">{escape(subtitle)}</div>' if subtitle else ""
    return html_block(
        f"""
        <div class="section-header">
            <h2 class="section-title">{escape(title)}</h2>
            {subtitle_html}
        </div>
        """
    )


def stat_card_html(label: str, value: int) -> str:
    """Stat card shown above the participant table."""
    return html_block(
        f"""
        <div class="stat-card" style="
            background: linear-gradient(135deg, #667eea 0%, #764ba2 100%);
            border-radius: 12px;
            padding: 16px 20px;
            color: white;
        ">
            <div class="stat-value" style="font-size: 2rem; font-weight: 700;">{int(value)}</div>
            <div class="stat-label" style="opacity: 0.85;">{escape(label)}</div>
        </div>
        """
    )
