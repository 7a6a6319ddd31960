"""Structural rewrites of rendered slide HTML."""

import re

from dataclasses import dataclass
from typing import Sequence

from slides_server.app.slides.layout.analyzer import analyze_content
from slides_server.app.slides.layout.matcher import select_rule
from slides_server.app.slides.layout.types import (
    GroupByHeadingTransform,
    LayoutConditions,
    LayoutTransform,
    SplitTopBottomTransform,
    SplitTwoTransform,
    WrapTransform,
)

_BLOCK_TAGS = r'(?:h[1-6]|p|div|ul|ol|blockquote|pre|figure|table)'
TOP_LEVEL_RE = re.compile(rf'<{_BLOCK_TAGS}[^>]*>[\s\S]*?</{_BLOCK_TAGS}>')
IMG_RE = re.compile(r'<img [^>]+>')
FIGURE_RE = re.compile(r'<figure[^>]*>')
IMAGE_PARAGRAPH_RE = re.compile(r'<p(?:\s[^>]*)?>\s*<img ')

MANUAL_COLUMNS_CLASS = 'slide-columns'
MANUAL_COLUMNS_LAYOUT = 'Columns (manual)'


@dataclass
class LayoutRuleInput:
    """A decoded rule ready for matching"""

    id: str
    name: str
    display_name: str
    priority: int
    enabled: bool
    conditions: LayoutConditions | None
    transform: LayoutTransform | None


@dataclass
class LayoutResult:
    html: str
    applied_layout: str | None = None


def split_top_level(html: str) -> list[str]:
    """Chunk HTML into its block-level elements, or the whole input if none are found"""
    parts = TOP_LEVEL_RE.findall(html)
    return parts or [html]


def _is_media(part: str) -> bool:
    return bool(FIGURE_RE.search(part) or IMAGE_PARAGRAPH_RE.search(part))


def _split_two(html: str, transform: SplitTwoTransform) -> str:
    opts = transform.options
    left: list[str] = []
    right: list[str] = []

    for part in split_top_level(html):
        if opts.left_selector == 'cards':
            # Loose media goes right, images inside cards stay put
            if (IMG_RE.search(part) and 'slide-card' not in part) or FIGURE_RE.search(part):
                right.append(part)
            else:
                left.append(part)
        elif not right and _is_media(part):
            right.append(part)
        else:
            left.append(part)

    if not left or not right:
        return html
    left_html = '\n'.join(left)
    right_html = '\n'.join(right)
    return (
        f'<div class="{opts.class_name}">'
        f'<div class="{opts.left_class_name}">{left_html}</div>'
        f'<div class="{opts.right_class_name}">{right_html}</div>'
        '</div>'
    )


def _split_top_bottom(html: str, transform: SplitTopBottomTransform) -> str:
    top: list[str] = []
    grid: list[str] = []
    for part in split_top_level(html):
        (grid if _is_media(part) else top).append(part)

    if len(grid) < 2:
        return html
    return '\n'.join(top) + f'\n<div class="{transform.options.class_name}">' + '\n'.join(grid) + '</div>'


def _group_by_heading(html: str, transform: GroupByHeadingTransform) -> str:
    opts = transform.options
    heading_re = re.compile(rf'<h{opts.heading_level}[^>]*>')
    header: list[str] = []
    sections: list[list[str]] = []

    for part in split_top_level(html):
        if heading_re.search(part):
            sections.append([part])
        elif sections:
            sections[-1].append(part)
        else:
            header.append(part)

    if len(sections) < 2:
        return html
    columns = '\n'.join(f'<div class="{opts.column_class_name}">' + '\n'.join(s) + '</div>' for s in sections)
    return '\n'.join(header) + f'\n<div class="{opts.container_class_name}">{columns}</div>'


def apply_transform(html: str, transform: LayoutTransform) -> str:
    """
    Rewrite slide HTML with a single transform

    Split and grouping transforms fall back to the unchanged input when the
    content does not have the shape they need.

    :param html: rendered slide HTML
    :param transform: decoded transform
    :return:
    """
    if isinstance(transform, WrapTransform):
        return f'<div class="{transform.options.class_name}">{html}</div>'
    if isinstance(transform, SplitTwoTransform):
        return _split_two(html, transform)
    if isinstance(transform, SplitTopBottomTransform):
        return _split_top_bottom(html, transform)
    if isinstance(transform, GroupByHeadingTransform):
        return _group_by_heading(html, transform)
    return html


def apply_layout(html: str, rules: Sequence[LayoutRuleInput]) -> LayoutResult:
    """
    Analyze a slide, pick the first matching rule and apply its transform

    A matching rule whose transform could not be decoded still wins; the slide
    keeps its HTML under that rule's name.
    """
    if MANUAL_COLUMNS_CLASS in html:
        return LayoutResult(html=html, applied_layout=MANUAL_COLUMNS_LAYOUT)

    rule = select_rule(analyze_content(html), rules)
    if rule is None:
        return LayoutResult(html=html)
    if rule.transform is None:
        return LayoutResult(html=html, applied_layout=rule.display_name)
    return LayoutResult(html=apply_transform(html, rule.transform), applied_layout=rule.display_name)
