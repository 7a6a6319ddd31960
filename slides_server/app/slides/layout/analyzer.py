import re

from slides_server.app.slides.layout.types import ContentFeatures

HEADING_RE = re.compile(r'<h[1-3][^>]*>')
H3_RE = re.compile(r'<h3[^>]*>')
IMAGE_RE = re.compile(r'<img [^>]+>')
FIGURE_RE = re.compile(r'<figure[^>]*>')
LIST_RE = re.compile(r'<[uo]l[^>]*>')
CODE_BLOCK_RE = re.compile(r'<pre[^>]*>')
PARAGRAPH_RE = re.compile(r'<p(?:\s[^>]*)?>[\s\S]*?</p>')
IMAGE_PARAGRAPH_RE = re.compile(r'<p(?:\s[^>]*)?>\s*<img ')
CAPTION_PARAGRAPH_RE = re.compile(r'<p(?:\s[^>]*)?>\s*<em>[^<]+</em>\s*</p>')

CARD_GRID_CLASS = 'slide-card-grid'


def analyze_content(html: str) -> ContentFeatures:
    """
    Summarize the structure of one rendered slide

    Image-only paragraphs and italic captions do not count as text paragraphs;
    lists rendered as a card grid count as cards, not as a list.

    :param html: rendered slide HTML
    :return:
    """
    has_cards = CARD_GRID_CLASS in html
    text_paragraphs = [
        p
        for p in PARAGRAPH_RE.findall(html)
        if not IMAGE_PARAGRAPH_RE.search(p) and not CAPTION_PARAGRAPH_RE.search(p)
    ]
    return ContentFeatures(
        has_heading=bool(HEADING_RE.search(html)),
        image_count=len(IMAGE_RE.findall(html)),
        figure_count=len(FIGURE_RE.findall(html)),
        h3_count=len(H3_RE.findall(html)),
        text_paragraph_count=len(text_paragraphs),
        has_cards=has_cards,
        has_list=bool(LIST_RE.search(html)) and not has_cards,
        has_code_block=bool(CODE_BLOCK_RE.search(html)),
        has_blockquote='<blockquote' in html,
    )
