"""Utilities for applying a shared visual identity to the field builder page."""

from __future__ import annotations

from contextlib import contextmanager
from html import escape as html_escape
from typing import Any, Iterator, Optional, Sequence

import streamlit as st


_THEME_CSS = """
<style>
:root {
    --app-accent: #3B82F6;
    --app-accent-dark: #2563EB;
    --app-accent-soft: #DBEAFE;
    --app-surface: rgba(255, 255, 255, 0.92);
    --app-border: rgba(59, 130, 246, 0.25);
    --app-shadow: 0 18px 40px rgba(15, 23, 42, 0.08);
    --app-text: #1F2933;
    --app-muted: #52606D;
    --app-success: #059669;
    --app-error: #DC2626;
}

html, body {
    font-family: "Inter", "Segoe UI", system-ui, -apple-system, sans-serif;
    color: var(--app-text);
}

.block-container {
    padding-top: 2.5rem;
    padding-bottom: 4rem;
    max-width: 48rem;
}

.app-header {
    display: flex;
    align-items: center;
    gap: 1.5rem;
    padding: 1.5rem 2rem;
    background: var(--app-accent-soft);
    border-radius: 1.25rem;
    border: 1px solid var(--app-border);
    box-shadow: var(--app-shadow);
    margin-bottom: 2rem;
}

.app-header__icon {
    font-size: 2.5rem;
    line-height: 1;
}

.app-header__title {
    margin: 0;
    font-size: 2rem;
    font-weight: 700;
    color: var(--app-accent-dark);
}

.app-header__subtitle {
    margin: 0.25rem 0 0 0;
    font-size: 1.05rem;
    color: var(--app-muted);
}

.app-section-card {
    padding: 1.5rem;
    border-radius: 1.5rem;
    border: 1px solid rgba(59, 130, 246, 0.12);
    background: var(--app-surface);
    box-shadow: 0 18px 38px rgba(15, 23, 42, 0.08);
    margin-bottom: 1.5rem;
}

.app-section-card > h3 {
    margin-top: 0;
    margin-bottom: 0.85rem;
    font-size: 1.15rem;
}

.app-section-card__description {
    margin-top: -0.35rem;
    margin-bottom: 1.2rem;
    color: var(--app-muted);
}

.app-field-error {
    margin: 0.25rem 0 0.75rem 0;
    font-size: 0.875rem;
    color: var(--app-error);
    text-align: right;
}

.app-chips {
    display: flex;
    flex-wrap: wrap;
    gap: 0.5rem;
    margin-top: 0.75rem;
}

.app-chip {
    display: inline-flex;
    align-items: center;
    padding: 0.25rem 0.65rem;
    border-radius: 999px;
    background: var(--app-accent-soft);
    color: #1E40AF;
    font-size: 0.8rem;
    font-weight: 500;
}

.app-muted {
    color: var(--app-muted);
    font-style: italic;
}
</style>
"""


def apply_app_theme(page_title: str, page_icon: Optional[str] = None) -> None:
    """Set up consistent page configuration and inject the shared CSS theme."""

    st.set_page_config(
        page_title=page_title,
        page_icon=page_icon,
        layout="centered",
    )
    st.markdown(_THEME_CSS, unsafe_allow_html=True)


def page_header(
    title: str,
    subtitle: Optional[str] = None,
    icon: Optional[str] = None,
    *,
    container: Optional[Any] = None,
) -> None:
    """Render a hero-style header with a title, subtitle, and optional icon."""

    icon_markup = f"<span class='app-header__icon'>{icon}</span>" if icon else ""
    subtitle_markup = (
        f"<p class='app-header__subtitle'>{subtitle}</p>" if subtitle else ""
    )
    target = container.markdown if container is not None else st.markdown
    target(
        f"""
        <div class="app-header">
            {icon_markup}
            <div>
                <h1 class="app-header__title">{title}</h1>
                {subtitle_markup}
            </div>
        </div>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def section_card(
    title: Optional[str] = None,
    description: Optional[str] = None,
) -> Iterator[Any]:
    """Render a styled container with optional title and description."""

    container = st.container()
    container.markdown("<div class='app-section-card'>", unsafe_allow_html=True)
    if title:
        container.markdown(f"<h3>{title}</h3>", unsafe_allow_html=True)
    if description:
        container.markdown(
            f"<p class='app-section-card__description'>{description}</p>",
            unsafe_allow_html=True,
        )
    try:
        yield container
    finally:
        container.markdown("</div>", unsafe_allow_html=True)


def field_error(message: Optional[str]) -> None:
    """Render an inline validation message under a field, if any."""

    if not message:
        return
    st.markdown(
        f"<p class='app-field-error'>{html_escape(message)}</p>",
        unsafe_allow_html=True,
    )


def chips_markup(values: Sequence[str]) -> str:
    """Return HTML for a row of pill-shaped chips."""

    chips = "".join(f"<span class='app-chip'>{html_escape(value)}</span>" for value in values)
    return f"<div class='app-chips'>{chips}</div>"
