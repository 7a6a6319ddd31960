"""Built-in themes and layout rules, inserted into empty tables at startup."""

from sqlalchemy.ext.asyncio import AsyncSession

from slides_server.app.slides.crud.crud_layout_rule import layout_rule_dao
from slides_server.app.slides.crud.crud_theme import theme_dao
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
    encode_conditions,
    encode_transform,
)
from slides_server.app.slides.model import LayoutRule, Theme
from slides_server.common.log import log

DEFAULT_THEMES = [
    {
        'name': 'default',
        'display_name': 'Default',
        'is_default': True,
        'css_content': """
.slide-content[data-theme="default"], [data-theme="default"] .slide-content, [data-theme="default"] .slide {
  --slide-bg: #ffffff; --slide-text: #333333; --slide-heading: #1a1a1a; --slide-accent: #0066cc;
  background: var(--slide-bg); color: var(--slide-text); font-family: 'Inter', sans-serif;
}
[data-theme="default"] h1, [data-theme="default"] h2, [data-theme="default"] h3 {
  font-family: 'Poppins', sans-serif; color: var(--slide-heading);
}
[data-theme="default"] code { background: #f5f5f5; padding: 0.2em 0.4em; border-radius: 3px; }
[data-theme="default"] a { color: var(--slide-accent); }
""",
    },
    {
        'name': 'dark',
        'display_name': 'Dark Mode',
        'is_default': False,
        'css_content': """
.slide-content[data-theme="dark"], [data-theme="dark"] .slide-content, [data-theme="dark"] .slide {
  --slide-bg: #1e1e2e; --slide-text: #cdd6f4; --slide-heading: #cba6f7; --slide-accent: #89b4fa;
  background: var(--slide-bg); color: var(--slide-text); font-family: 'Inter', sans-serif;
}
[data-theme="dark"] h1, [data-theme="dark"] h2, [data-theme="dark"] h3 {
  font-family: 'Poppins', sans-serif; color: var(--slide-heading);
}
[data-theme="dark"] code { background: #313244; padding: 0.2em 0.4em; border-radius: 3px; color: #a6e3a1; }
[data-theme="dark"] a { color: var(--slide-accent); }
""",
    },
    {
        'name': 'minimal',
        'display_name': 'Minimal',
        'is_default': False,
        'css_content': """
.slide-content[data-theme="minimal"], [data-theme="minimal"] .slide-content, [data-theme="minimal"] .slide {
  --slide-bg: #fafafa; --slide-text: #222; --slide-heading: #000; --slide-accent: #555;
  background: var(--slide-bg); color: var(--slide-text); font-family: 'Inter', sans-serif; padding: 4rem;
}
[data-theme="minimal"] h1 { font-size: 3rem; font-weight: 300; letter-spacing: -0.02em; }
[data-theme="minimal"] h2 { font-size: 2rem; font-weight: 300; }
[data-theme="minimal"] code { background: #eee; padding: 0.2em 0.4em; border-radius: 3px; }
""",
    },
    {
        'name': 'corporate',
        'display_name': 'Corporate',
        'is_default': False,
        'css_content': """
.slide-content[data-theme="corporate"], [data-theme="corporate"] .slide-content, [data-theme="corporate"] .slide {
  --slide-bg: #ffffff; --slide-text: #2c3e50; --slide-heading: #1a365d; --slide-accent: #2b6cb0;
  background: var(--slide-bg); color: var(--slide-text); font-family: 'Inter', sans-serif;
  border-top: 4px solid var(--slide-accent);
}
[data-theme="corporate"] h1, [data-theme="corporate"] h2 {
  font-family: 'Poppins', sans-serif; color: var(--slide-heading); border-bottom: 2px solid #e2e8f0; padding-bottom: 0.5rem;
}
[data-theme="corporate"] code { background: #edf2f7; padding: 0.2em 0.4em; border-radius: 3px; }
""",
    },
    {
        'name': 'creative',
        'display_name': 'Creative',
        'is_default': False,
        'css_content': """
.slide-content[data-theme="creative"], [data-theme="creative"] .slide-content, [data-theme="creative"] .slide {
  --slide-bg: #0f0c29; --slide-text: #e0e0e0; --slide-heading: #f857a6; --slide-accent: #ff5858;
  background: linear-gradient(135deg, #0f0c29, #302b63, #24243e); color: var(--slide-text); font-family: 'Inter', sans-serif;
}
[data-theme="creative"] h1, [data-theme="creative"] h2 {
  font-family: 'Poppins', sans-serif; color: var(--slide-heading);
  background: linear-gradient(90deg, #f857a6, #ff5858); -webkit-background-clip: text; -webkit-text-fill-color: transparent;
}
[data-theme="creative"] code { background: rgba(255,255,255,0.1); padding: 0.2em 0.4em; border-radius: 3px; }
[data-theme="creative"] a { color: var(--slide-accent); }
""",
    },
]

DEFAULT_LAYOUT_RULES = [
    {
        'name': 'sections',
        'display_name': 'Sections',
        'description': 'Groups content by h3 headings into equal columns',
        'priority': 10,
        'conditions': LayoutConditions(
            h3_count=NumericCondition(gte=2),
            image_count=NumericCondition(eq=0),
            has_cards=False,
        ),
        'transform': GroupByHeadingTransform(
            options=GroupByHeadingOptions(
                heading_level=3,
                container_class_name='layout-sections',
                column_class_name='layout-section-col',
            )
        ),
        'css_content': """
.slide-content .layout-sections {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(0, 1fr));
  gap: 2rem;
  flex: 1;
  min-height: 0;
}
.slide-content .layout-section-col h3 {
  margin-top: 0;
}
.slide-content .layout-section-col ul,
.slide-content .layout-section-col ol {
  padding-left: 1.2em;
}
""",
    },
    {
        'name': 'hero',
        'display_name': 'Hero',
        'description': 'Centered title slide with optional subtitle',
        'priority': 20,
        'conditions': LayoutConditions(
            has_heading=True,
            image_count=NumericCondition(eq=0),
            has_cards=False,
            has_list=False,
            has_code_block=False,
            has_blockquote=False,
            text_paragraph_count=NumericCondition(lte=1),
        ),
        'transform': WrapTransform(options=WrapOptions(class_name='layout-hero')),
        'css_content': """
.slide-content .layout-hero {
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  text-align: center;
  height: 100%;
}
.slide-content .layout-hero h1 { font-size: 3rem; }
.slide-content .layout-hero h2 { font-size: 2.2rem; }
""",
    },
    {
        'name': 'cards-image',
        'display_name': 'Cards + Image',
        'description': 'Card grid on the left, image on the right',
        'priority': 30,
        'conditions': LayoutConditions(has_cards=True, image_count=NumericCondition(gt=0)),
        'transform': SplitTwoTransform(
            options=SplitTwoOptions(
                class_name='layout-cards-image',
                left_selector='cards',
                right_selector='media',
                left_class_name='layout-cards-side',
                right_class_name='layout-media-side',
            )
        ),
        'css_content': """
.slide-content .layout-cards-image {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 2rem;
  align-items: start;
  height: 100%;
}
.slide-content .layout-media-side img,
.slide-content .layout-media-side figure img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
""",
    },
    {
        'name': 'image-grid',
        'display_name': 'Image Grid',
        'description': 'Text on top, multiple images in a grid below',
        'priority': 40,
        'conditions': LayoutConditions(has_heading=True, image_count=NumericCondition(gte=2)),
        'transform': SplitTopBottomTransform(
            options=SplitTopBottomOptions(class_name='layout-image-grid', bottom_selector='media')
        ),
        'css_content': """
.slide-content .layout-image-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
  gap: 1.5rem;
  margin: 1rem 0;
}
.slide-content .layout-image-grid img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
.slide-content .layout-image-grid figure {
  margin: 0;
}
""",
    },
    {
        'name': 'text-image',
        'display_name': 'Text + Image',
        'description': 'Text on the left, single image on the right',
        'priority': 50,
        'conditions': LayoutConditions(has_heading=True, image_count=NumericCondition(eq=1)),
        'transform': SplitTwoTransform(
            options=SplitTwoOptions(
                class_name='layout-text-image',
                left_selector='text',
                right_selector='media',
                left_class_name='layout-body',
                right_class_name='layout-media',
            )
        ),
        'css_content': """
.slide-content .layout-text-image {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 2rem;
  align-items: center;
  height: 100%;
}
.slide-content .layout-media img,
.slide-content .layout-media figure img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
""",
    },
]


async def seed_themes(db: AsyncSession) -> int:
    if await theme_dao.total(db) > 0:
        return 0
    db.add_all(Theme(center_content=True, user_id=None, **theme) for theme in DEFAULT_THEMES)
    await db.commit()
    return len(DEFAULT_THEMES)


async def seed_layout_rules(db: AsyncSession) -> int:
    if await layout_rule_dao.total(db) > 0:
        return 0
    db.add_all(
        LayoutRule(
            name=rule['name'],
            display_name=rule['display_name'],
            description=rule['description'],
            priority=rule['priority'],
            enabled=True,
            is_default=True,
            user_id=None,
            conditions=encode_conditions(rule['conditions']),
            transform=encode_transform(rule['transform']),
            css_content=rule['css_content'],
        )
        for rule in DEFAULT_LAYOUT_RULES
    )
    await db.commit()
    return len(DEFAULT_LAYOUT_RULES)


async def seed_defaults(db: AsyncSession) -> None:
    """Insert built-in themes and layout rules into tables that are still empty"""
    themes = await seed_themes(db)
    rules = await seed_layout_rules(db)
    if themes or rules:
        log.info(f'Seeded {themes} theme(s) and {rules} layout rule(s)')
