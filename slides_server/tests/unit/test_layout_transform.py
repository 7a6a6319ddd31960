"""Tests for layout transforms applied to rendered slide HTML."""

from slides_server.app.slides.layout.transform import (
    MANUAL_COLUMNS_LAYOUT,
    LayoutRuleInput,
    apply_layout,
    apply_transform,
    split_top_level,
)
from slides_server.app.slides.layout.types import (
    GroupByHeadingOptions,
    GroupByHeadingTransform,
    LayoutConditions,
    NumericCondition,
    SplitTopBottomOptions,
    SplitTopBottomTransform,
    SplitTwoOptions,
    SplitTwoTransform,
    WrapOptions,
    WrapTransform,
)

TEXT_IMAGE = SplitTwoTransform(
    options=SplitTwoOptions(
        class_name='c', left_selector='text', right_selector='media', left_class_name='l', right_class_name='r'
    )
)
CARDS_IMAGE = SplitTwoTransform(
    options=SplitTwoOptions(
        class_name='c', left_selector='cards', right_selector='media', left_class_name='l', right_class_name='r'
    )
)
IMAGE_GRID = SplitTopBottomTransform(options=SplitTopBottomOptions(class_name='g'))
SECTIONS = GroupByHeadingTransform(
    options=GroupByHeadingOptions(heading_level=3, container_class_name='s', column_class_name='col')
)


class TestSplitTopLevel:
    def test_block_elements(self):
        html = '<h1>T</h1>\n<p>a</p>\n<ul><li>x</li></ul>'
        assert split_top_level(html) == ['<h1>T</h1>', '<p>a</p>', '<ul><li>x</li></ul>']

    def test_no_blocks_returns_whole_input(self):
        assert split_top_level('plain text') == ['plain text']


class TestApplyTransform:
    def test_wrap(self):
        transform = WrapTransform(options=WrapOptions(class_name='layout-hero'))
        assert apply_transform('<h1>T</h1>', transform) == '<div class="layout-hero"><h1>T</h1></div>'

    def test_split_two_text_moves_first_image_right(self):
        html = '<h2>Title</h2>\n<p>Body</p>\n<p><img src="a.png"></p>'
        assert apply_transform(html, TEXT_IMAGE) == (
            '<div class="c">'
            '<div class="l"><h2>Title</h2>\n<p>Body</p></div>'
            '<div class="r"><p><img src="a.png"></p></div>'
            '</div>'
        )

    def test_split_two_without_media_is_unchanged(self):
        html = '<h2>Title</h2>\n<p>Body</p>'
        assert apply_transform(html, TEXT_IMAGE) == html

    def test_split_two_cards_moves_loose_images_right(self):
        cards = '<ul class="slide-card-grid"><li class="slide-card"><strong>A</strong></li></ul>'
        image = '<p><img src="x.png"></p>'
        assert apply_transform(f'{cards}\n{image}', CARDS_IMAGE) == (
            f'<div class="c"><div class="l">{cards}</div><div class="r">{image}</div></div>'
        )

    def test_split_top_bottom_needs_two_media_blocks(self):
        one = '<h2>Gallery</h2>\n<figure><img src="a.png"></figure>'
        assert apply_transform(one, IMAGE_GRID) == one

        two = '<h2>Gallery</h2>\n<figure><img src="a.png"></figure>\n<figure><img src="b.png"></figure>'
        assert apply_transform(two, IMAGE_GRID) == (
            '<h2>Gallery</h2>\n<div class="g"><figure><img src="a.png"></figure>\n<figure><img src="b.png"></figure></div>'
        )

    def test_group_by_heading(self):
        html = '<h2>Compare</h2>\n<h3>A</h3>\n<p>a</p>\n<h3>B</h3>\n<p>b</p>'
        assert apply_transform(html, SECTIONS) == (
            '<h2>Compare</h2>\n<div class="s">'
            '<div class="col"><h3>A</h3>\n<p>a</p></div>\n'
            '<div class="col"><h3>B</h3>\n<p>b</p></div>'
            '</div>'
        )

    def test_group_by_heading_needs_two_sections(self):
        html = '<h3>Only</h3>\n<p>one</p>'
        assert apply_transform(html, SECTIONS) == html


class TestApplyLayout:
    hero = LayoutRuleInput(
        id='1',
        name='hero',
        display_name='Hero',
        priority=20,
        enabled=True,
        conditions=LayoutConditions(has_heading=True, image_count=NumericCondition(eq=0)),
        transform=WrapTransform(options=WrapOptions(class_name='layout-hero')),
    )

    def test_applies_first_matching_rule(self):
        result = apply_layout('<h1>Welcome</h1>', [self.hero])
        assert result.applied_layout == 'Hero'
        assert result.html == '<div class="layout-hero"><h1>Welcome</h1></div>'

    def test_no_match_leaves_html(self):
        html = '<p><img src="a.png"></p>'
        result = apply_layout(html, [self.hero])
        assert result.applied_layout is None
        assert result.html == html

    def test_rule_without_transform_keeps_html(self):
        broken = LayoutRuleInput(
            id='0',
            name='broken',
            display_name='Broken',
            priority=10,
            enabled=True,
            conditions=LayoutConditions(),
            transform=None,
        )
        result = apply_layout('<h1>T</h1>', [self.hero, broken])
        assert result.applied_layout == 'Broken'
        assert result.html == '<h1>T</h1>'

    def test_manual_columns_are_kept(self):
        html = '<div class="slide-columns"><h1>T</h1></div>'
        result = apply_layout(html, [self.hero])
        assert result.applied_layout == MANUAL_COLUMNS_LAYOUT
        assert result.html == html
