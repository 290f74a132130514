"""Helpers for HTML snippets rendered through st.markdown."""
import html
from textwrap import dedent


def html_block(template: str) -> str:
    """
    Flatten multi-line HTML for st.markdown.

    Lines indented four or more spaces are Markdown code blocks, so every
    line is left-stripped after dedenting.
    """
    lines = dedent(template).splitlines()
    return "\n".join(line.lstrip() for line in lines).strip()


def pill(text: str, background: str, color: str) -> str:
    """Small rounded label; ``text`` is escaped."""
    return html_block(f"""
        <span style="display: inline-block; padding: 4px 12px; border-radius: 9999px;
                     background: {background}; color: {color}; font-size: 0.75rem; font-weight: 600;">
            {html.escape(text)}
        </span>
    """)
